from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import cv2
import numpy as np

from .types import ScreenPoint


FIT_MODES = ("fitHeight", "fitWidth", "contain", "cover", "stretch")


@dataclass(frozen=True)
class CoordinateMapper:
    """
    Maps source-frame pixels to display pixels.

    The video is scaled into the display according to `fit` and centred on the
    axis it does not fill. With `mirror` the image (and every mapped point) is
    flipped horizontally.
    """

    source_size: Tuple[int, int]  # (width, height)
    display_size: Tuple[int, int]  # (width, height)
    fit: str = "fitHeight"
    mirror: bool = False
    _scale: Tuple[float, float] = field(init=False, repr=False)
    _offset: Tuple[float, float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.fit not in FIT_MODES:
            raise ValueError(f"Unknown fit mode '{self.fit}'. Available: {list(FIT_MODES)}")
        sw, sh = self.source_size
        dw, dh = self.display_size
        if sw <= 0 or sh <= 0 or dw <= 0 or dh <= 0:
            raise ValueError(f"Sizes must be positive, got source={self.source_size} display={self.display_size}")

        if self.fit == "stretch":
            sx, sy = dw / sw, dh / sh
        else:
            if self.fit == "fitHeight":
                s = dh / sh
            elif self.fit == "fitWidth":
                s = dw / sw
            elif self.fit == "contain":
                s = min(dw / sw, dh / sh)
            else:
                s = max(dw / sw, dh / sh)
            sx = sy = s

        # Frozen dataclass: derived geometry is set once here.
        object.__setattr__(self, "_scale", (sx, sy))
        object.__setattr__(self, "_offset", ((dw - sw * sx) / 2.0, (dh - sh * sy) / 2.0))

    @property
    def scale(self) -> Tuple[float, float]:
        return self._scale

    @property
    def offset(self) -> Tuple[float, float]:
        return self._offset

    def map_xy(self, x: float, y: float) -> Tuple[float, float]:
        sx, sy = self._scale
        ox, oy = self._offset
        if self.mirror:
            x = self.source_size[0] - x
        return (ox + x * sx, oy + y * sy)

    def map_keypoint(self, keypoint) -> ScreenPoint:
        x, y = self.map_xy(float(keypoint.x), float(keypoint.y))
        return ScreenPoint(x, y)

    def map_keypoints(self, keypoints: Iterable) -> List[ScreenPoint]:
        return [self.map_keypoint(kp) for kp in keypoints]

    def place_frame(self, frame_bgr: np.ndarray, canvas_bgr: np.ndarray) -> np.ndarray:
        """Draw `frame_bgr` into `canvas_bgr` using the same geometry as the point mapping."""

        sx, sy = self._scale
        ox, oy = self._offset
        sw, sh = self.source_size
        tw = max(1, int(round(sw * sx)))
        th = max(1, int(round(sh * sy)))

        scaled = cv2.resize(frame_bgr, (tw, th), interpolation=cv2.INTER_LINEAR)
        if self.mirror:
            scaled = cv2.flip(scaled, 1)

        x0 = int(round(ox))
        y0 = int(round(oy))
        ch, cw = canvas_bgr.shape[:2]

        # Clip to the canvas; "cover" and "fitHeight" can overflow on one axis.
        dst_x0, dst_y0 = max(0, x0), max(0, y0)
        dst_x1, dst_y1 = min(cw, x0 + tw), min(ch, y0 + th)
        if dst_x1 <= dst_x0 or dst_y1 <= dst_y0:
            return canvas_bgr
        src_x0, src_y0 = dst_x0 - x0, dst_y0 - y0
        canvas_bgr[dst_y0:dst_y1, dst_x0:dst_x1] = scaled[
            src_y0 : src_y0 + (dst_y1 - dst_y0), src_x0 : src_x0 + (dst_x1 - dst_x0)
        ]
        return canvas_bgr
