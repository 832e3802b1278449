from __future__ import annotations

import logging
from typing import Optional

from .config import TrackingConfig
from .mapping import CoordinateMapper
from .types import Cursor, Hand, ScreenPoint
from .utils import clamp, map_range

logger = logging.getLogger(__name__)


def depth_to_size(z: float, config: TrackingConfig) -> float:
    """
    Map keypoint depth to a cursor size: closer (more negative z) is bigger.

    Real depth values routinely leave the calibration range, so the mapped
    size is clamped to `config.size_limits`.
    """

    z_lo, z_hi = config.depth_range
    s_near, s_far = config.size_range
    size = map_range(z, z_lo, z_hi, s_near, s_far)
    lo, hi = config.size_limits
    return clamp(size, lo, hi)


class CursorDeriver:
    """Turns the selected hand's tracked keypoint into an on-screen cursor."""

    def __init__(self, config: TrackingConfig, mapper: CoordinateMapper) -> None:
        self._config = config
        self._mapper = mapper

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    def derive(self, hand: Optional[Hand]) -> Optional[Cursor]:
        # Missing 3D data suppresses the cursor entirely; there is no 2D-only fallback.
        if hand is None or not hand.keypoints or not hand.keypoints3d:
            return None

        idx = self._config.keypoint_index
        if idx >= len(hand.keypoints) or idx >= len(hand.keypoints3d):
            logger.debug(
                "Hand has %d/%d keypoints, cannot read index %d",
                len(hand.keypoints),
                len(hand.keypoints3d),
                idx,
            )
            return None

        mapped = self._mapper.map_keypoint(hand.keypoints[idx])
        z = getattr(hand.keypoints3d[idx], "z", None)
        if z is None:
            size = self._config.cursor_size
        else:
            z = float(z)
            size = depth_to_size(z, self._config)

        return Cursor(point=ScreenPoint(mapped.x, mapped.y, z), depth_size=size)
