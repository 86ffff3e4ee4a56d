# urania/core/timescales.py
# -----------------------------------------------------------------------------
# Epoch normalization for the low-precision series.
#
# Public API:
#   j2000_days(unix_ms)       -> float   days since 2000-01-01T12:00:00 UTC
#   j2000_centuries(unix_ms)  -> float   Julian centuries since J2000.0
#   epoch_times(unix_ms)      -> EpochTimes
#
# Civil helpers (HTTP edge only; the core takes Unix milliseconds):
#   unix_ms_from_datetime(dt)
#   unix_ms_from_civil(date_str, time_str, tz_name)
#
# Guarantees:
#   • Pure and total over all real inputs. No range checks: epochs far from
#     J2000 are valid inputs with degraded downstream accuracy.
#   • UTC is treated as uniform (no leap seconds, no ΔT); the series absorb it.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import re

__all__ = [
    "J2000_UNIX_MS",
    "MS_PER_DAY",
    "DAYS_PER_CENTURY",
    "EpochTimes",
    "j2000_days",
    "j2000_centuries",
    "epoch_times",
    "unix_ms_from_datetime",
    "unix_ms_from_civil",
]

# 2000-01-01T12:00:00Z
J2000_UNIX_MS = 946728000000
MS_PER_DAY = 86400000
DAYS_PER_CENTURY = 36525

# ───────────────────────────── Dataclass ─────────────────────────────

@dataclass(frozen=True)
class EpochTimes:
    unix_ms: float
    days: float            # days since J2000.0
    centuries: float       # Julian centuries since J2000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Core conversions ─────────────────────────────

def j2000_days(unix_ms: float) -> float:
    return (unix_ms - J2000_UNIX_MS) / MS_PER_DAY


def j2000_centuries(unix_ms: float) -> float:
    return j2000_days(unix_ms) / DAYS_PER_CENTURY


def epoch_times(unix_ms: float) -> EpochTimes:
    days = j2000_days(unix_ms)
    return EpochTimes(unix_ms=unix_ms, days=days, centuries=days / DAYS_PER_CENTURY)

# ───────────────────────────── Civil helpers ─────────────────────────────

_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})\s*$")
_TIME_RE = re.compile(r"^\s*(?P<h>\d{1,2}):(?P<m>\d{2})(?::(?P<s>\d{2})(?:\.(?P<f>\d+))?)?\s*$")


def _parse_date(date_str: str) -> Tuple[int, int, int]:
    m = _DATE_RE.match(date_str or "")
    if not m:
        raise ValueError(f"Invalid date_str '{date_str}': expected YYYY-MM-DD")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _parse_time(time_str: str) -> Tuple[int, int, int, int]:
    """Parse HH:MM[:SS[.frac]] into (h, m, s, microseconds)."""
    m = _TIME_RE.match(time_str or "")
    if not m:
        raise ValueError(f"Invalid time_str '{time_str}': expected HH:MM[:SS[.frac]]")
    h, mi = int(m.group("h")), int(m.group("m"))
    s = int(m.group("s") or 0)
    if not (0 <= h <= 23 and 0 <= mi <= 59 and 0 <= s <= 59):
        raise ValueError(f"Invalid time fields: hh={h}, mm={mi}, ss={s}")
    frac = (m.group("f") or "")[:6].ljust(6, "0")
    return h, mi, s, int(frac)


def unix_ms_from_datetime(dt: datetime) -> float:
    """Milliseconds since the Unix epoch for a timezone-aware datetime."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    try:
        delta = dt.astimezone(timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    except OverflowError as e:
        raise ValueError(f"datetime {dt.isoformat()} is out of range in UTC") from e
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds / 1000.0


def unix_ms_from_civil(date_str: str, time_str: str, tz_name: str) -> float:
    """
    Convert local civil date/time in an IANA zone to Unix milliseconds.
    Ambiguous wall times (DST fall-back) resolve to the first occurrence (fold=0).
    """
    y, mo, d = _parse_date(date_str)
    h, mi, s, us = _parse_time(time_str)
    try:
        z = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone '{tz_name}'") from e
    local = datetime(y, mo, d, h, mi, s, us, tzinfo=z, fold=0)
    return unix_ms_from_datetime(local)
