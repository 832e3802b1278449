from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .landmarks import NUM_KEYPOINTS


HAND_POLICIES = ("Left", "Right", "First")


@dataclass(frozen=True)
class TrackingConfig:
    """
    Static settings for hand selection, cursor sizing and the motion trail.

    Validated on construction so a bad value fails at startup instead of
    silently producing no cursor every frame.
    """

    tracked_hand: str = "Left"
    keypoint_index: int = 8
    trail_capacity: int = 20
    depth_range: Tuple[float, float] = (-0.1, 0.1)
    size_range: Tuple[float, float] = (50.0, 20.0)
    size_limits: Tuple[float, float] = (15.0, 60.0)
    cursor_size: float = 30.0

    def __post_init__(self) -> None:
        if self.tracked_hand not in HAND_POLICIES:
            raise ValueError(f"Unknown tracked hand '{self.tracked_hand}'. Available: {list(HAND_POLICIES)}")
        if not (0 <= self.keypoint_index < NUM_KEYPOINTS):
            raise ValueError(
                f"Keypoint index {self.keypoint_index} is out of range (expected 0..{NUM_KEYPOINTS - 1})"
            )
        if self.trail_capacity < 1:
            raise ValueError(f"Trail capacity must be positive, got {self.trail_capacity}")
        z_lo, z_hi = self.depth_range
        if z_lo == z_hi:
            raise ValueError(f"Depth range must not be empty, got {self.depth_range}")
        lo, hi = self.size_limits
        if lo > hi:
            raise ValueError(f"Size limits must be (min, max), got {self.size_limits}")


@dataclass(frozen=True)
class CursorStyle:
    """Colours (BGR) and sizes used when drawing hands and the cursor."""

    cursor_color: Tuple[int, int, int] = (50, 50, 255)
    keypoint_size: int = 3
    left_color: Tuple[int, int, int] = (255, 150, 100)
    right_color: Tuple[int, int, int] = (100, 150, 255)
    unknown_color: Tuple[int, int, int] = (150, 150, 150)
    background: Tuple[int, int, int] = (40, 40, 40)
    cursor_scale: float = 0.7
