# -*- coding: utf-8 -*-
"""
Low-precision geocentric ephemeris for the Sun, Moon and the five classical planets.

Mean elements and lunar periodic terms:
    J. L. Simon et al., "Numerical expressions for precession formulae and
    mean elements for the Moon and the planets", A&A 282 (1994) 663–683.

Every element is `base + rate·T` (T in Julian centuries since J2000.0). The
Moon's elements additionally carry periodic terms in the auxiliary angles
    D  mean elongation of the Moon
    F  Moon's argument of latitude
    l  mean anomaly of the Moon
    M  mean anomaly of the Sun
each term being `amplitude · sin|cos(d·D + f·F + l·l + m·M)`.

Geometry:
- The Sun's table describes the Sun as seen from the Earth (I = Ω = 0).
- The Moon's table is geocentric.
- Planet tables are heliocentric; adding the Sun's geocentric vector gives the
  planet's geocentric vector.

Public API:
    planets(unix_ms) -> {body: longitude_deg}
    positions(unix_ms) -> {body: BodyPosition}
    elements_at(table, T, args=None) -> OrbitalElements
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple
import math

from urania.core.constants import BODIES
from urania.core.kepler import OrbitalElements, position
from urania.core.timescales import j2000_centuries
from urania.core.vectors import Vec3, add, distance, latitude, longitude

__all__ = [
    "PeriodicTerm", "Element", "BodyTable", "LunarArguments", "BodyPosition",
    "SUN", "MOON", "MERCURY", "VENUS", "MARS", "JUPITER", "SATURN",
    "PLANET_TABLES", "LUNAR_ARGUMENTS",
    "lunar_arguments", "evaluate_periodic", "elements_at",
    "geocentric_vectors", "planets", "positions",
]


# ───────────────────────────── Table types ─────────────────────────────
class PeriodicTerm(NamedTuple):
    amplitude: float
    func: str           # "sin" | "cos"
    d: int = 0
    f: int = 0
    l: int = 0
    m: int = 0


class Element(NamedTuple):
    base: float
    rate: float = 0.0
    terms: Tuple[PeriodicTerm, ...] = ()


class BodyTable(NamedTuple):
    a: Element
    e: Element
    I: Element
    L: Element
    w1: Element
    N: Element


class LunarArguments(NamedTuple):
    D: float
    F: float
    l: float
    M: float


@dataclass(frozen=True)
class BodyPosition:
    longitude: float        # [0, 360)
    latitude: float         # [-90, 90]
    distance_au: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _cos(amplitude: float, d: int = 0, f: int = 0, l: int = 0, m: int = 0) -> PeriodicTerm:
    return PeriodicTerm(amplitude, "cos", d, f, l, m)


def _sin(amplitude: float, d: int = 0, f: int = 0, l: int = 0, m: int = 0) -> PeriodicTerm:
    return PeriodicTerm(amplitude, "sin", d, f, l, m)


# ───────────────────────────── Coefficients ─────────────────────────────
SUN = BodyTable(
    a=Element(1.0000010178),
    e=Element(0.0167086342, -0.00004203654),
    I=Element(0.0),
    L=Element(4.8950631131, 628.33196540650),
    w1=Element(4.9381883009, 0.03001023491),
    N=Element(0.0),
)

LUNAR_ARGUMENTS: Mapping[str, Element] = MappingProxyType({
    "D": Element(5.1984665887, 7771.37714559371),
    "F": Element(1.6279050815, 8433.46615691637),
    "l": Element(2.3555557435, 8328.69142571909),
    "M": Element(6.2400601269, 628.30195517140),
})

MOON = BodyTable(
    a=Element(0.0025628558, 0.00000000003, (
        _cos(22730e-9, d=2),
        _cos(-4249e-9, d=2, l=-1),
        _cos(-1575e-9, l=1),
        _cos(1458e-9, d=2, m=-1),
        _cos(1210e-9, d=2, l=1),
    )),
    e=Element(0.055545526, -0.000000016, (
        _cos(14216e-6, d=2, l=-1),
        _cos(8551e-6, d=2, l=-2),
        _cos(-1383e-6, l=1),
        _cos(1356e-6, d=2, l=1),
        _cos(-1147e-6, d=4, l=-3),
        _cos(-914e-6, d=4, l=-2),
        _cos(869e-6, d=2, l=-1, m=-1),
        _cos(-627e-6, d=2),
        _cos(-394e-6, d=4, l=-4),
        _cos(282e-6, d=2, l=-2, m=-1),
        _cos(-279e-6, d=1, l=-1),
        _cos(-236e-6, l=2),
        _cos(231e-6, d=4),
        _cos(229e-6, d=6, l=-4),
        _cos(-201e-6, f=-2, l=2),
    )),
    I=Element(0.0900012160, -0.00000000039, (
        _cos(23575e-7, d=2, f=-2),
        _cos(-1946e-7, d=2),
        _cos(1818e-7, f=2),
        _cos(1247e-7, f=-2, l=2),
        _cos(968e-7, d=2, f=-2, m=-1),
    )),
    L=Element(3.8103442782, 8399.70911096274, (
        _sin(-16158e-6, d=2),
        _sin(5805e-6, d=2, l=-1),
        _sin(-3212e-6, m=1),
        _sin(1921e-6, l=1),
        _sin(-1057e-6, d=2, m=-1),
    )),
    w1=Element(1.4547885347, 71.01768524366, (
        _sin(-26960e-5, d=2, l=-1),
        _sin(-16828e-5, d=2, l=-2),
        _sin(-4747e-5, l=1),
        _sin(4550e-5, d=4, l=-3),
        _sin(3639e-5, d=4, l=-2),
        _sin(2578e-5, d=2, l=1),
        _sin(1689e-5, d=4, l=-4),
        _sin(-1657e-5, d=2, l=-1, m=-1),
        _sin(-1227e-5, d=6, l=-4),
        _sin(-1152e-5, d=2),
        _sin(-1006e-5, d=2, l=-3),
        _sin(-913e-5, l=2),
        _sin(-842e-5, d=6, l=-5),
        _sin(788e-5, m=1),
        _sin(-664e-5, d=6, l=-3),
    )),
    N=Element(2.1824391966, -33.75704595363, (
        _sin(-2614e-5, d=2, f=-2),
        _sin(-262e-5, m=1),
        _sin(-214e-5, d=2),
        _sin(205e-5, f=2),
        _sin(-140e-5, f=-2, l=2),
    )),
)

MERCURY = BodyTable(
    a=Element(0.3870983098),
    e=Element(0.2056317526, 0.00002040653),
    I=Element(0.1222600741, 0.00003179069),
    L=Element(4.4026088425, 2608.81470576909),
    w1=Element(1.3518643031, 0.02716431730),
    N=Element(0.8435332140, 0.02070155118),
)

VENUS = BodyTable(
    a=Element(0.7233298200),
    e=Element(0.0067719164, -0.00004776521),
    I=Element(0.0592480270, 0.00001751758),
    L=Element(3.1761466970, 1021.35294171618),
    w1=Element(2.2962197935, 0.02447216844),
    N=Element(1.3383170775, 0.01572618080),
)

MARS = BodyTable(
    a=Element(1.5236793419, 0.00000000003),
    e=Element(0.0934006477, 0.00009048438),
    I=Element(0.0322838173, -0.00001049081),
    L=Element(6.2034761129, 334.08562607873),
    w1=Element(5.8653575674, 0.03213095395),
    N=Element(0.8649518975, 0.01347427507),
)

JUPITER = BodyTable(
    a=Element(5.2026032092, 0.00000019132),
    e=Element(0.0484979255, 0.00016322542),
    I=Element(0.0227462998, -0.00009593223),
    L=Element(0.5995471051, 52.99348050854),
    w1=Element(0.2501267457, 0.02814579341),
    N=Element(1.7534346836, 0.01781941774),
)

SATURN = BodyTable(
    a=Element(9.5549091915, -0.00000213896),
    e=Element(0.0555481426, -0.00034664062),
    I=Element(0.0434391294, -0.00006520932),
    L=Element(0.8740162840, 21.35429658204),
    w1=Element(1.6241551868, 0.03427410072),
    N=Element(1.9838372649, 0.01579288747),
)

PLANET_TABLES: Mapping[str, BodyTable] = MappingProxyType({
    "mercury": MERCURY,
    "venus": VENUS,
    "mars": MARS,
    "jupiter": JUPITER,
    "saturn": SATURN,
})

_TRIG = {"sin": math.sin, "cos": math.cos}


# ───────────────────────────── Evaluation ─────────────────────────────
def lunar_arguments(T: float) -> LunarArguments:
    return LunarArguments(**{name: arg.base + arg.rate * T for name, arg in LUNAR_ARGUMENTS.items()})


def evaluate_periodic(terms: Tuple[PeriodicTerm, ...], args: LunarArguments) -> float:
    total = 0.0
    for term in terms:
        angle = term.d * args.D + term.f * args.F + term.l * args.l + term.m * args.M
        total += term.amplitude * _TRIG[term.func](angle)
    return total


def _element_at(el: Element, T: float, args: Optional[LunarArguments]) -> float:
    value = el.base + el.rate * T
    if el.terms:
        if args is None:
            raise ValueError("periodic terms need lunar arguments")
        value += evaluate_periodic(el.terms, args)
    return value


def elements_at(table: BodyTable, T: float, args: Optional[LunarArguments] = None) -> OrbitalElements:
    """Evaluate a body's six elements at T (Julian centuries since J2000.0)."""
    return OrbitalElements(*(_element_at(el, T, args) for el in table))


def geocentric_vectors(unix_ms: float) -> Dict[str, Vec3]:
    """Geocentric ecliptic vectors [AU] keyed in BODIES order."""
    T = j2000_centuries(unix_ms)

    sun = position(elements_at(SUN, T))
    out: Dict[str, Vec3] = {
        "sun": sun,
        "moon": position(elements_at(MOON, T, lunar_arguments(T))),
    }
    for name, table in PLANET_TABLES.items():
        out[name] = add(sun, position(elements_at(table, T)))
    return {name: out[name] for name in BODIES}


def planets(unix_ms: float) -> Dict[str, float]:
    """Ecliptic longitude [deg, 0..360) of sun, moon, mercury, venus, mars, jupiter, saturn."""
    return {name: longitude(v) for name, v in geocentric_vectors(unix_ms).items()}


def positions(unix_ms: float) -> Dict[str, BodyPosition]:
    return {
        name: BodyPosition(longitude=longitude(v), latitude=latitude(v), distance_au=distance(v))
        for name, v in geocentric_vectors(unix_ms).items()
    }
