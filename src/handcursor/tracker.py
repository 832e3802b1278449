from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import TrackingConfig
from .cursor import CursorDeriver
from .mapping import CoordinateMapper
from .selector import HandSelector
from .trail import Trail
from .types import Cursor, Hand, Point2, ScreenPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Everything the renderer needs for one frame."""

    hands: Tuple[Hand, ...]
    mapped_hands: Tuple[Tuple[ScreenPoint, ...], ...]  # parallel to `hands`
    selected: Optional[Hand]
    cursor: Optional[Cursor]
    trail: Tuple[Point2, ...]


class CursorTracker:
    """
    Per-frame pipeline: select a hand, derive the cursor, extend the trail.

    The trail is the only state carried between frames. The cursor is
    recomputed every frame and is `None` whenever no cursor was produced.
    """

    def __init__(self, config: TrackingConfig, mapper: CoordinateMapper) -> None:
        self.config = config
        self.selector = HandSelector(config)
        self.deriver = CursorDeriver(config, mapper)
        self.trail = Trail(config.trail_capacity)
        self._cursor: Optional[Cursor] = None

    @property
    def cursor(self) -> Optional[Cursor]:
        return self._cursor

    @property
    def mapper(self) -> CoordinateMapper:
        return self.deriver.mapper

    def update(self, hands: Sequence[Hand]) -> FrameState:
        selected = self.selector.select(hands)
        cursor = self.deriver.derive(selected)

        if (cursor is None) != (self._cursor is None):
            if cursor is None:
                logger.info("Lost %s hand", self.config.tracked_hand)
            else:
                logger.info("Tracking %s hand", self.config.tracked_hand)

        self._cursor = cursor
        if cursor is not None:
            self.trail.append(cursor.point.xy)
            logger.debug(
                "cursor x=%.1f y=%.1f z=%s size=%.1f trail=%d",
                cursor.point.x,
                cursor.point.y,
                cursor.point.z,
                cursor.depth_size,
                len(self.trail),
            )

        return FrameState(
            hands=tuple(hands),
            mapped_hands=tuple(tuple(self.mapper.map_keypoints(h.keypoints or ())) for h in hands),
            selected=selected,
            cursor=cursor,
            trail=tuple(self.trail.points()),
        )
