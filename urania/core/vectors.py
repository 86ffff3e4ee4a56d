# urania/core/vectors.py
"""3-vector helpers and the angle projections shared by the ephemeris and house code."""
from __future__ import annotations

from typing import Tuple
import math

__all__ = ["Vec3", "add", "negate", "atan2_deg", "longitude", "latitude", "distance"]

Vec3 = Tuple[float, float, float]

_RAD2DEG = 180.0 / math.pi


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def negate(v: Vec3) -> Vec3:
    return (-v[0], -v[1], -v[2])


def atan2_deg(y: float, x: float) -> float:
    """
    Direction of (x, y) in degrees, [0, 360).

    Evaluated as atan2(-y, -x) + 180° so the result needs no modulo. The
    endpoints (y == ±0.0 with x > 0, plus rounding at ±π) fold to 0.
    """
    deg = math.atan2(-y, -x) * _RAD2DEG + 180.0
    if deg < 0.0 or deg >= 360.0:
        return 0.0
    return deg


def longitude(v: Vec3) -> float:
    return atan2_deg(v[1], v[0])


def latitude(v: Vec3) -> float:
    return math.atan2(v[2], math.hypot(v[0], v[1])) * _RAD2DEG


def distance(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
