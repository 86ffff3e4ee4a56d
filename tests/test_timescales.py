# tests/test_timescales.py
from __future__ import annotations

import pytest
from datetime import datetime, timedelta, timezone
from hypothesis import given, strategies as st

from urania.core.timescales import (
    J2000_UNIX_MS,
    epoch_times,
    j2000_centuries,
    j2000_days,
    unix_ms_from_civil,
    unix_ms_from_datetime,
)


# ─────────────────────────────────────────────────────────────────────────────
# Unit tests
# ─────────────────────────────────────────────────────────────────────────────

def test_j2000_is_origin() -> None:
    assert J2000_UNIX_MS == 946728000000
    assert j2000_days(946728000000) == 0.0
    assert j2000_centuries(946728000000) == 0.0

def test_one_day_and_one_century() -> None:
    assert j2000_days(J2000_UNIX_MS + 86400000) == 1.0
    assert j2000_days(J2000_UNIX_MS - 43200000) == -0.5
    assert j2000_centuries(J2000_UNIX_MS + 36525 * 86400000) == 1.0

def test_epoch_times_shape() -> None:
    ep = epoch_times(J2000_UNIX_MS + 3 * 86400000)
    assert ep.days == 3.0
    assert ep.centuries == 3.0 / 36525
    assert ep.to_dict() == {"unix_ms": J2000_UNIX_MS + 3 * 86400000, "days": 3.0, "centuries": 3.0 / 36525}

def test_datetime_matches_j2000_constant() -> None:
    dt = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert unix_ms_from_datetime(dt) == J2000_UNIX_MS

def test_naive_datetime_rejected() -> None:
    with pytest.raises(ValueError):
        unix_ms_from_datetime(datetime(2000, 1, 1, 12))

def test_civil_utc_and_offset_zone() -> None:
    assert unix_ms_from_civil("2000-01-01", "12:00", "UTC") == J2000_UNIX_MS
    # IST is UTC+05:30
    assert unix_ms_from_civil("2000-01-01", "17:30:00", "Asia/Kolkata") == J2000_UNIX_MS

def test_civil_fractional_seconds() -> None:
    assert unix_ms_from_civil("2000-01-01", "12:00:00.250", "UTC") == J2000_UNIX_MS + 250

@pytest.mark.parametrize(
    "date_s,time_s,tz",
    [
        ("2000-13-01", "12:00", "UTC"),
        ("2000/01/01", "12:00", "UTC"),
        ("2000-01-01", "25:00", "UTC"),
        ("2000-01-01", "noon", "UTC"),
        ("2000-01-01", "12:00", "Mars/Olympus_Mons"),
        ("0001-01-01", "00:00", "Asia/Tokyo"),       # before datetime.min in UTC
    ],
)
def test_civil_rejects_bad_input(date_s: str, time_s: str, tz: str) -> None:
    with pytest.raises(ValueError):
        unix_ms_from_civil(date_s, time_s, tz)


# ─────────────────────────────────────────────────────────────────────────────
# Property tests (Hypothesis)
# ─────────────────────────────────────────────────────────────────────────────

@given(st.integers(min_value=-10**13, max_value=10**13))
def test_centuries_are_days_over_36525(ms: int) -> None:
    assert j2000_centuries(ms) == j2000_days(ms) / 36525

@given(
    st.datetimes(
        min_value=datetime(1800, 1, 1),
        max_value=datetime(2200, 1, 1),
        timezones=st.just(timezone.utc),
    )
)
def test_datetime_days_agree_with_timedelta(dt: datetime) -> None:
    expected = (dt - datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) / timedelta(days=1)
    assert abs(j2000_days(unix_ms_from_datetime(dt)) - expected) < 1e-9
