# -*- coding: utf-8 -*-
"""
Keplerian elements → ecliptic Cartesian coordinates.

Follows the JPL "approximate positions of the planets" recipe:
  1. ω = ϖ − Ω (argument of perihelion), M = L − ϖ (mean anomaly).
     Neither is range-reduced; the trig functions take any real value.
  2. Solve M = E − e·sin E by Newton–Raphson from E0 = M + e·sin M,
     stopping once |ΔE| ≤ 2e-8 rad.
  3. Orbital-plane coordinates u = a(cos E − e), v = a·√(1 − e²)·sin E.
  4. Rotate by ω, I, Ω into the ecliptic frame.

Contract:
  • |e| < 1. Anything else (or a non-finite e) raises
    AstronomyError("eccentricity_out_of_range"). Linear element series drift
    slightly below zero far from J2000 (Venus past T ≈ +142, Jupiter before
    T ≈ −297); such values are accepted and solved as given.
  • The solver is capped at MAX_ITERATIONS; exceeding it raises
    KeplerConvergenceError instead of looping forever.

Public API:
    solve_kepler(M, e) -> (E, iterations)
    kepler(a, e, I, L, w1, N) -> Vec3
    position(elements) -> Vec3
"""
from __future__ import annotations

from typing import NamedTuple, Tuple
import math

from urania.core.vectors import Vec3

__all__ = [
    "AstronomyError",
    "KeplerConvergenceError",
    "OrbitalElements",
    "TOLERANCE_RAD",
    "MAX_ITERATIONS",
    "solve_kepler",
    "kepler",
    "position",
]

TOLERANCE_RAD = 2e-8
MAX_ITERATIONS = 50


# ───────────────────────────── Exceptions ─────────────────────────────
class AstronomyError(ValueError):
    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(f"{code}: {message}")


class KeplerConvergenceError(AstronomyError):
    def __init__(self, M: float, e: float, iterations: int):
        self.M = M
        self.e = e
        self.iterations = iterations
        super().__init__(
            "kepler_no_convergence",
            f"no convergence after {iterations} iterations (M={M!r}, e={e!r})",
        )


# ───────────────────────────── Elements ─────────────────────────────
class OrbitalElements(NamedTuple):
    a: float    # semi-major axis [AU]
    e: float    # eccentricity
    I: float    # inclination [rad]
    L: float    # mean longitude [rad]
    w1: float   # longitude of perihelion [rad]
    N: float    # longitude of ascending node [rad]


# ───────────────────────────── Solver ─────────────────────────────
def _check_eccentricity(e: float) -> None:
    if not (math.isfinite(e) and -1.0 < e < 1.0):
        raise AstronomyError("eccentricity_out_of_range", f"e must satisfy |e| < 1, got {e!r}")


def solve_kepler(M: float, e: float) -> Tuple[float, int]:
    """Eccentric anomaly E for mean anomaly M (radians) and the number of Newton steps taken."""
    _check_eccentricity(e)
    E = M + e * math.sin(M)
    for n in range(1, MAX_ITERATIONS + 1):
        dM = M - (E - e * math.sin(E))
        dE = dM / (1 - e * math.cos(E))
        E += dE
        if abs(dE) <= TOLERANCE_RAD:
            return E, n
    raise KeplerConvergenceError(M, e, MAX_ITERATIONS)


def kepler(a: float, e: float, I: float, L: float, w1: float, N: float) -> Vec3:
    w = w1 - N
    M = L - w1

    E, _ = solve_kepler(M, e)

    u = a * (math.cos(E) - e)
    v = a * math.sqrt(1 - e * e) * math.sin(E)

    sin_I, cos_I = math.sin(I), math.cos(I)
    sin_N, cos_N = math.sin(N), math.cos(N)
    sin_w, cos_w = math.sin(w), math.cos(w)
    return (
        u * (cos_w * cos_N - sin_w * sin_N * cos_I) - v * (sin_w * cos_N + cos_w * sin_N * cos_I),
        u * (cos_w * sin_N + sin_w * cos_N * cos_I) - v * (sin_w * sin_N - cos_w * cos_N * cos_I),
        u * sin_w * sin_I + v * cos_w * sin_I,
    )


def position(elements: OrbitalElements) -> Vec3:
    return kepler(*elements)
