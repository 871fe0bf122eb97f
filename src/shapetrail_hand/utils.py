from __future__ import annotations

import math
from typing import Iterable, Tuple

from .types import Landmark


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def planar_distance(a: Landmark, b: Landmark) -> float:
    """Distance in the image plane, ignoring z."""
    return math.hypot(a.x - b.x, a.y - b.y)


def spatial_distance(a: Landmark, b: Landmark) -> float:
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)


def mean_point(points: Iterable[Landmark]) -> Tuple[float, float]:
    xs = []
    ys = []
    for p in points:
        xs.append(p.x)
        ys.append(p.y)
    if not xs:
        return (0.0, 0.0)
    return (sum(xs) / len(xs), sum(ys) / len(ys))


def to_pixels(x_norm: float, y_norm: float, width: int, height: int) -> Tuple[float, float]:
    return (x_norm * width, y_norm * height)
