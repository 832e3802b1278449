from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Sequence, Tuple

from .types import Point2
from .utils import map_range


ALPHA_RANGE: Tuple[float, float] = (50.0, 255.0)
WIDTH_RANGE: Tuple[float, float] = (1.0, 8.0)


@dataclass(frozen=True)
class TrailSegment:
    start: Point2
    end: Point2
    alpha: float  # 0..255
    width: float


def taper(index: int, n_segments: int) -> Tuple[float, float]:
    """
    Alpha and stroke width for segment `index` out of `n_segments`.

    Segment 0 (oldest) is faint and thin, the last segment is opaque and thick.
    A lone segment gets the oldest style.
    """

    if n_segments <= 1:
        return (ALPHA_RANGE[0], WIDTH_RANGE[0])
    last = n_segments - 1
    alpha = map_range(index, 0, last, ALPHA_RANGE[0], ALPHA_RANGE[1])
    width = map_range(index, 0, last, WIDTH_RANGE[0], WIDTH_RANGE[1])
    return (alpha, width)


def trail_segments(points: Sequence[Point2]) -> Iterator[TrailSegment]:
    """Yield tapered segments between each adjacent pair of `points`, oldest first."""

    n_segments = len(points) - 1
    for i in range(n_segments):
        alpha, width = taper(i, n_segments)
        yield TrailSegment(start=points[i], end=points[i + 1], alpha=alpha, width=width)


class Trail:
    """
    Fixed-capacity history of recent cursor positions, oldest first.

    Appending past capacity evicts the oldest point. Points only age out this
    way; the trail is never cleared when the hand is lost.
    """

    def __init__(self, capacity: int = 20) -> None:
        if capacity < 1:
            raise ValueError(f"Trail capacity must be positive, got {capacity}")
        self._points: Deque[Point2] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen or 0

    def append(self, point: Point2) -> None:
        x, y = point
        self._points.append((float(x), float(y)))

    def points(self) -> List[Point2]:
        return list(self._points)

    def segments(self) -> Iterator[TrailSegment]:
        return trail_segments(self.points())

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point2]:
        return iter(self.points())
