# urania/api/routes.py
"""
Urania: API routes
- Planets (Sun, Moon, Mercury … Saturn ecliptic longitudes)
- Angles (ascendant, midheaven)
- Chart (both at once)
- Ops: /api/health, /api/config, /__debug/routes

Time input is either `date_ms` (Unix milliseconds) or civil `date` + `time` + `tz`.
AstronomyError propagates to the app-level handler in urania.main (422).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request

from urania.version import VERSION
from urania.utils.config import load_config
from urania.utils.ratelimit import rate_limit
from urania.core.constants import sign_position
from urania.core.ephemeris import planets, positions
from urania.core.houses import angles
from urania.core.timescales import epoch_times
from urania.core.validators import (
    ValidationError,
    parse_angles_payload,
    parse_chart_payload,
    parse_planets_payload,
)

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)

# Read once at import: decorators bind their limits here.
_CFG = load_config()
_RL = _CFG.rate_limits_per_minute
W_EPOCH_RANGE = "epoch_outside_series_range"


# ───────────────────────── helpers ─────────────────────────
def _json_error(code: str, details: Any = None, http: int = 400):
    out: Dict[str, Any] = {"ok": False, "error": code}
    if details is not None:
        out["details"] = details
    return jsonify(out), http


def _body():
    return request.get_json(force=True, silent=True)


def _epoch_block(date_ms: float, warnings: List[str]) -> Dict[str, Any]:
    ep = epoch_times(date_ms)
    limit = float(_CFG.series_range_centuries)
    if abs(ep.centuries) > limit:
        log.warning("epoch %.3f centuries from J2000 is outside the series range (±%s)", ep.centuries, limit)
        warnings.append(W_EPOCH_RANGE)
    return ep.to_dict()


def _planets_block(date_ms: float, detail: bool) -> Dict[str, Any]:
    if not detail:
        return planets(date_ms)
    out: Dict[str, Any] = {}
    for name, pos in positions(date_ms).items():
        sign, deg_in_sign = sign_position(pos.longitude)
        out[name] = {**pos.to_dict(), "sign": sign, "sign_deg": deg_in_sign}
    return out


# ───────────────────────── health / ops ─────────────────────────
@api.get("/api/health")
def health():
    return jsonify({"ok": True, "status": "up", "version": VERSION}), 200


@api.get("/api/config")
@rate_limit(_RL.debug)
def config_info():
    cfg = getattr(current_app, "cfg", None) or _CFG
    return jsonify({
        "ok": True,
        "version": VERSION,
        "series_range_centuries": cfg.series_range_centuries,
        "rate_limits_per_minute": dict(cfg.rate_limits_per_minute),
        "cors_allow_origin": cfg.cors_allow_origin,
    }), 200


@api.get("/__debug/routes")
@rate_limit(_RL.debug)
def debug_routes():
    rules = []
    for r in current_app.url_map.iter_rules():
        if r.endpoint == "static":
            continue
        methods = sorted(m for m in r.methods if m not in {"HEAD", "OPTIONS"})
        rules.append({"rule": str(r), "methods": methods, "endpoint": r.endpoint})
    rules.sort(key=lambda x: x["rule"])
    return jsonify({"ok": True, "routes": rules}), 200


# ───────────────────────── ephemeris ─────────────────────────
@api.post("/api/planets")
@rate_limit(_RL.planets)
def planets_endpoint():
    try:
        payload = parse_planets_payload(_body())
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)

    warnings: List[str] = []
    epoch = _epoch_block(payload["date_ms"], warnings)
    bodies = _planets_block(payload["date_ms"], payload["detail"])
    return jsonify({"ok": True, "epoch": epoch, "planets": bodies, "warnings": warnings}), 200


@api.post("/api/angles")
@rate_limit(_RL.angles)
def angles_endpoint():
    try:
        payload = parse_angles_payload(_body())
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)

    warnings: List[str] = []
    epoch = _epoch_block(payload["date_ms"], warnings)
    out = angles(payload["date_ms"], payload["latitude"], payload["longitude"])
    return jsonify({"ok": True, "epoch": epoch, "angles": out, "warnings": warnings}), 200


@api.post("/api/chart")
@rate_limit(_RL.chart)
def chart_endpoint():
    try:
        payload = parse_chart_payload(_body())
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)

    ms = payload["date_ms"]
    warnings: List[str] = []
    epoch = _epoch_block(ms, warnings)
    bodies = _planets_block(ms, payload["detail"])
    return jsonify({
        "ok": True,
        "epoch": epoch,
        "location": {"latitude": payload["latitude"], "longitude": payload["longitude"]},
        "planets": bodies,
        "angles": angles(ms, payload["latitude"], payload["longitude"]),
        "warnings": warnings,
    }), 200
