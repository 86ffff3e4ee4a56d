# -*- coding: utf-8 -*-
"""
Urania: body names, zodiac labels & small angle helpers

Purpose
-------
Single source of truth for:
- the bodies the ephemeris reports (stable output order)
- the angle points the house code reports
- zodiac sign labels
- tiny angle helpers (wrap/Δ/sign position)

Pure-Python, no external dependencies; safe to import from any module.
"""

from __future__ import annotations
from typing import Tuple
import math

__all__ = [
    "BODIES", "ANGLE_POINTS", "ZODIAC_SIGNS",
    "wrap_deg", "delta_deg", "sign_position",
]

# ── canonical bodies ─────────────────────────────────────────────────────────
BODIES: Tuple[str, ...] = (
    "sun", "moon", "mercury", "venus", "mars", "jupiter", "saturn",
)

ANGLE_POINTS: Tuple[str, ...] = ("ascendant", "midheaven")

ZODIAC_SIGNS: Tuple[str, ...] = (
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)


# ── tiny angle helpers ───────────────────────────────────────────────────────
def wrap_deg(x: float) -> float:
    """
    Wrap any angle to [0, 360).
    """
    x = math.fmod(float(x), 360.0)
    if x < 0.0:
        x += 360.0
    return 0.0 if x >= 360.0 else x

def delta_deg(a: float, b: float) -> float:
    """
    Shortest signed difference b - a in degrees, range (-180, 180].
    """
    d = wrap_deg(b) - wrap_deg(a)
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return d

def sign_position(lon_deg: float) -> Tuple[str, float]:
    """(sign name, degrees within the sign) for an ecliptic longitude."""
    lon = wrap_deg(lon_deg)
    idx = min(int(lon // 30.0), 11)
    return ZODIAC_SIGNS[idx], lon - 30.0 * idx
