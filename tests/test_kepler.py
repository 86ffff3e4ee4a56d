# tests/test_kepler.py
from __future__ import annotations

import math
import pytest
from hypothesis import given, strategies as st

from urania.core import kepler as kp
from urania.core.kepler import (
    AstronomyError,
    KeplerConvergenceError,
    OrbitalElements,
    kepler,
    position,
    solve_kepler,
)
from urania.core.vectors import distance

eccentricities = st.floats(min_value=0.0, max_value=0.9, allow_nan=False)
anomalies = st.floats(min_value=-50.0, max_value=50.0, allow_nan=False)
angles_rad = st.floats(min_value=-2 * math.pi, max_value=2 * math.pi, allow_nan=False)


# ─────────────────────────────────────────────────────────────────────────────
# Solver
# ─────────────────────────────────────────────────────────────────────────────

@given(M=anomalies, e=eccentricities)
def test_kepler_equation_residual(M: float, e: float) -> None:
    E, n = solve_kepler(M, e)
    assert abs(M - (E - e * math.sin(E))) < 1e-7
    assert 1 <= n <= kp.MAX_ITERATIONS

def test_circular_orbit_converges_in_one_step() -> None:
    for M in (-7.0, -1.0, 0.0, 0.3, 2.5, 100.0):
        E, n = solve_kepler(M, 0.0)
        assert E == M
        assert n == 1

def test_moderate_eccentricity_is_fast() -> None:
    _, n = solve_kepler(1.0, 0.2056)  # Mercury-like
    assert n <= 6

@pytest.mark.parametrize("e", [-1.0, -1.5, 1.0, 1.5, float("nan"), float("inf")])
def test_eccentricity_out_of_range_rejected(e: float) -> None:
    with pytest.raises(AstronomyError) as ei:
        solve_kepler(0.5, e)
    assert ei.value.code == "eccentricity_out_of_range"

@pytest.mark.parametrize("e", [-0.0004, -0.05, -0.5])
def test_negative_eccentricity_below_one_is_solved(e: float) -> None:
    # far-epoch element series dip just below zero
    for M in (-3.0, 0.2, 2.9, 40.0):
        E, _ = solve_kepler(M, e)
        assert abs(M - (E - e * math.sin(E))) < 1e-7

def test_iteration_cap_raises(monkeypatch) -> None:
    monkeypatch.setattr(kp, "MAX_ITERATIONS", 1)
    with pytest.raises(KeplerConvergenceError) as ei:
        solve_kepler(0.1, 0.9)
    assert ei.value.code == "kepler_no_convergence"
    assert ei.value.iterations == 1
    assert isinstance(ei.value, ValueError)


# ─────────────────────────────────────────────────────────────────────────────
# Elements → Cartesian
# ─────────────────────────────────────────────────────────────────────────────

@given(a=st.floats(min_value=0.1, max_value=30.0), M=anomalies, I=angles_rad, w1=angles_rad, N=angles_rad)
def test_circular_orbit_sits_at_distance_a(a: float, M: float, I: float, w1: float, N: float) -> None:
    v = kepler(a, 0.0, I, w1 + M, w1, N)
    assert math.isclose(distance(v), a, rel_tol=1e-12)

@given(a=st.floats(min_value=0.1, max_value=30.0), e=eccentricities, L=anomalies, w1=angles_rad, N=angles_rad)
def test_uninclined_orbit_stays_in_ecliptic(a: float, e: float, L: float, w1: float, N: float) -> None:
    v = kepler(a, e, 0.0, L, w1, N)
    assert v[2] == 0.0
    r = distance(v)
    assert a * (1 - e) * (1 - 1e-9) <= r <= a * (1 + e) * (1 + 1e-9)

def test_perihelion_direction() -> None:
    # M = 0 puts the body at perihelion, along the longitude of perihelion.
    w1 = math.radians(40.0)
    v = kepler(2.0, 0.3, 0.0, w1, w1, 0.0)
    assert math.isclose(distance(v), 1.4, rel_tol=1e-12)
    assert math.isclose(math.degrees(math.atan2(v[1], v[0])), 40.0, abs_tol=1e-9)

def test_inclined_orbit_reaches_max_height_at_argument_90() -> None:
    I = math.radians(10.0)
    N = math.radians(30.0)
    # circular orbit, argument of latitude 90° from the node
    v = kepler(1.0, 0.0, I, N + math.pi / 2, N, N)
    assert math.isclose(v[2], math.sin(I), rel_tol=1e-12)

def test_position_unpacks_elements() -> None:
    el = OrbitalElements(a=1.5, e=0.09, I=0.03, L=6.2, w1=5.86, N=0.86)
    assert position(el) == kepler(1.5, 0.09, 0.03, 6.2, 5.86, 0.86)
