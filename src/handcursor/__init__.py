from .config import CursorStyle, TrackingConfig
from .cursor import CursorDeriver, depth_to_size
from .mapping import CoordinateMapper
from .selector import HandSelector, select_hand
from .tracker import CursorTracker, FrameState
from .trail import Trail, TrailSegment, taper
from .types import Cursor, Hand, Keypoint, Keypoint3D, ScreenPoint

__all__ = [
    "CoordinateMapper",
    "Cursor",
    "CursorDeriver",
    "CursorStyle",
    "CursorTracker",
    "FrameState",
    "Hand",
    "HandSelector",
    "Keypoint",
    "Keypoint3D",
    "ScreenPoint",
    "TrackingConfig",
    "Trail",
    "TrailSegment",
    "depth_to_size",
    "select_hand",
    "taper",
]
