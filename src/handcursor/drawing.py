from __future__ import annotations

from typing import Sequence, Tuple

import cv2
import numpy as np

from .utils import to_pixel


FONT = cv2.FONT_HERSHEY_SIMPLEX
# Pixel height of FONT at scale 1.0, used to size text by pixel height.
_FONT_PX = 22.0


def font_scale(px: float) -> float:
    return px / _FONT_PX


def draw_text(
    frame,
    text: str,
    org: Tuple[float, float],
    color=(255, 255, 255),
    size_px: float = 14,
    align: str = "left",
    valign: str = "baseline",
    outline=(0, 0, 0),
    outline_px: int = 2,
):
    """
    Draw `text` with an outline. `align` is left/center, `valign` is baseline/top/bottom.
    """

    scale = font_scale(size_px)
    thickness = 1 if size_px < 16 else 2
    (tw, th), baseline = cv2.getTextSize(text, FONT, scale, thickness)
    x, y = org
    if align == "center":
        x -= tw / 2.0
    if valign == "top":
        y += th
    elif valign == "bottom":
        y -= baseline
    pt = to_pixel(x, y)
    if outline is not None and outline_px > 0:
        cv2.putText(frame, text, pt, FONT, scale, outline, thickness + outline_px, cv2.LINE_AA)
    cv2.putText(frame, text, pt, FONT, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_point(frame, pt: Tuple[float, float], color=(0, 0, 255), radius: float = 5):
    cv2.circle(frame, to_pixel(*pt), max(1, int(round(radius))), color, -1, lineType=cv2.LINE_AA)
    return frame


def _blend_roi(frame, roi: Tuple[int, int, int, int], alpha: float, draw) -> None:
    x0, y0, x1, y1 = roi
    h, w = frame.shape[:2]
    x0, y0 = max(0, x0), max(0, y0)
    x1, y1 = min(w, x1), min(h, y1)
    if x1 <= x0 or y1 <= y0:
        return
    region = frame[y0:y1, x0:x1]
    overlay = region.copy()
    draw(overlay, (x0, y0))
    cv2.addWeighted(overlay, alpha, region, 1.0 - alpha, 0, dst=region)


def draw_line_alpha(frame, p0, p1, color, alpha: float = 255, thickness: float = 1):
    """Draw a line blended onto `frame`; `alpha` is 0..255."""

    a = max(0.0, min(1.0, alpha / 255.0))
    t = max(1, int(round(thickness)))
    (x0, y0), (x1, y1) = to_pixel(*p0), to_pixel(*p1)
    pad = t + 2
    roi = (min(x0, x1) - pad, min(y0, y1) - pad, max(x0, x1) + pad + 1, max(y0, y1) + pad + 1)

    def _draw(img, origin):
        ox, oy = origin
        cv2.line(img, (x0 - ox, y0 - oy), (x1 - ox, y1 - oy), color, t, cv2.LINE_AA)

    _blend_roi(frame, roi, a, _draw)
    return frame


def draw_points_alpha(frame, points: Sequence[Tuple[float, float]], color, alpha: float = 255, radius: float = 3):
    """Draw filled dots blended onto `frame` in a single pass."""

    if not points:
        return frame
    pts = np.array([to_pixel(x, y) for x, y in points], dtype=np.int32)
    r = max(1, int(round(radius)))
    pad = r + 2
    roi = (
        int(pts[:, 0].min()) - pad,
        int(pts[:, 1].min()) - pad,
        int(pts[:, 0].max()) + pad + 1,
        int(pts[:, 1].max()) + pad + 1,
    )

    def _draw(img, origin):
        ox, oy = origin
        for x, y in pts:
            cv2.circle(img, (int(x) - ox, int(y) - oy), r, color, -1, lineType=cv2.LINE_AA)

    _blend_roi(frame, roi, max(0.0, min(1.0, alpha / 255.0)), _draw)
    return frame
