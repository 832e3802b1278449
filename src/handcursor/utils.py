from __future__ import annotations

from typing import Tuple


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def map_range(v: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float) -> float:
    """
    Linearly re-map `v` from [in_lo, in_hi] to [out_lo, out_hi].

    The result is not clamped, so values outside the input range extrapolate.
    """

    return out_lo + (v - in_lo) * (out_hi - out_lo) / (in_hi - in_lo)


def to_pixel(x: float, y: float) -> Tuple[int, int]:
    return (int(round(x)), int(round(y)))
