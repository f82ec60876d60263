"""Piecewise-linear interpolation on sorted pillars."""

from __future__ import annotations

from bisect import bisect_left
from typing import Sequence


def linear_interp(x: float, xs: Sequence[float], ys: Sequence[float]) -> float:
    """Linear between pillars, flat beyond the first and last one."""

    if not xs:
        raise ValueError("no interpolation pillars")
    if len(xs) != len(ys):
        raise ValueError(f"{len(xs)} pillars but {len(ys)} values")
    if x <= xs[0]:
        return ys[0]
    if x >= xs[-1]:
        return ys[-1]
    hi = bisect_left(xs, x)
    lo = hi - 1
    w = (x - xs[lo]) / (xs[hi] - xs[lo])
    return ys[lo] + w * (ys[hi] - ys[lo])
