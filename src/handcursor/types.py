from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class Keypoint:
    """A 2D hand keypoint in source-frame pixels."""

    x: float
    y: float
    name: Optional[str] = None


@dataclass(frozen=True)
class Keypoint3D:
    """A 3D hand keypoint in model units (negative z is closer to the camera)."""

    x: float
    y: float
    z: float
    name: Optional[str] = None


@dataclass(frozen=True)
class Hand:
    """One detected hand for a single frame."""

    keypoints: Sequence[Keypoint]  # length 21
    keypoints3d: Optional[Sequence[Keypoint3D]] = None
    handedness: Optional[str] = None  # "Left" / "Right" (may be None)
    score: Optional[float] = None


@dataclass(frozen=True)
class ScreenPoint:
    """A position in display coordinates, optionally carrying depth."""

    x: float
    y: float
    z: Optional[float] = None

    @property
    def xy(self) -> Point2:
        return (self.x, self.y)


@dataclass(frozen=True)
class Cursor:
    """The tracked point for the current frame."""

    point: ScreenPoint
    depth_size: float
