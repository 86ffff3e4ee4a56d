# tests/test_vectors.py
from __future__ import annotations

import math
import pytest
from hypothesis import given, strategies as st

from urania.core.vectors import add, atan2_deg, distance, latitude, longitude, negate

finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
vec3 = st.tuples(finite, finite, finite)


@given(a=vec3, b=vec3)
def test_add_then_subtract_round_trips(a, b) -> None:
    back = add(add(a, b), negate(b))
    for x, y in zip(back, a):
        assert math.isclose(x, y, rel_tol=1e-9, abs_tol=1e-6)

@given(v=vec3)
def test_longitude_in_range(v) -> None:
    lon = longitude(v)
    assert 0.0 <= lon < 360.0

@given(y=st.floats(allow_nan=False), x=st.floats(allow_nan=False))
def test_atan2_deg_in_range_for_any_finite_or_infinite_input(y: float, x: float) -> None:
    assert 0.0 <= atan2_deg(y, x) < 360.0

@pytest.mark.parametrize(
    "v,expected",
    [
        ((1.0, 0.0, 0.0), 0.0),
        ((0.0, 1.0, 0.0), 90.0),
        ((-1.0, 0.0, 0.0), 180.0),
        ((0.0, -1.0, 0.0), 270.0),
        ((1.0, 1.0, 5.0), 45.0),
        ((-1.0, -1.0, 0.0), 225.0),
    ],
)
def test_longitude_quadrants(v, expected: float) -> None:
    assert math.isclose(longitude(v), expected, abs_tol=1e-12)

def test_negative_zero_y_does_not_return_360() -> None:
    assert longitude((1.0, -0.0, 0.0)) == 0.0
    assert atan2_deg(-0.0, 2.0) == 0.0

def test_latitude_and_distance() -> None:
    v = (3.0, 0.0, 4.0)
    assert distance(v) == 5.0
    assert math.isclose(latitude(v), math.degrees(math.atan2(4.0, 3.0)))
    assert math.isclose(latitude((0.0, 0.0, -2.0)), -90.0)
