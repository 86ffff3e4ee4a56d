# urania/core/houses.py
from __future__ import annotations

"""
Ascendant & midheaven from local sidereal time.

    LST = 4.8949613 + 6.3003880989482·d + λ        (rad; d = days since J2000.0)
          https://aa.usno.navy.mil/faq/GAST
    ε   = 0.409093 − 0.000000007·d                  (rad; mean obliquity)

    ASC = atan2°(cos LST, −(sin ε·tan φ + cos ε·sin LST))
          https://radixpro.com/a4a-start/the-ascendant/
    MC  = atan2°(sin LST, cos LST·cos ε)
          https://radixpro.com/a4a-start/medium-coeli/

atan2° is urania.core.vectors.atan2_deg, so both angles land in [0, 360).
Latitudes approaching ±90° send tan φ toward infinity; the ascendant then
degenerates numerically but is still returned (no policy at this layer).
"""

from typing import Dict
import math

from urania.core.constants import ANGLE_POINTS
from urania.core.timescales import j2000_days
from urania.core.vectors import atan2_deg

__all__ = ["local_sidereal_time", "obliquity", "ascendant", "midheaven", "angles"]

_DEG2RAD = math.pi / 180.0


def local_sidereal_time(days: float, lon_deg: float) -> float:
    """Local sidereal time in radians (not range-reduced)."""
    return 4.8949613 + 6.3003880989482 * days + lon_deg * _DEG2RAD


def obliquity(days: float) -> float:
    return 0.409093 - 0.000000007 * days


def ascendant(lst: float, eps: float, lat_deg: float) -> float:
    return atan2_deg(
        math.cos(lst),
        -(math.sin(eps) * math.tan(lat_deg * _DEG2RAD) + math.cos(eps) * math.sin(lst)),
    )


def midheaven(lst: float, eps: float) -> float:
    return atan2_deg(math.sin(lst), math.cos(lst) * math.cos(eps))


def angles(unix_ms: float, lat: float, lon: float) -> Dict[str, float]:
    """{'ascendant', 'midheaven'} in degrees for an observer at (lat, lon) degrees east."""
    d = j2000_days(unix_ms)
    lst = local_sidereal_time(d, lon)
    eps = obliquity(d)
    return dict(zip(ANGLE_POINTS, (ascendant(lst, eps, lat), midheaven(lst, eps))))
