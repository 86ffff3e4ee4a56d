# urania/core/validators.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union

from urania.core.timescales import unix_ms_from_civil

__all__ = [
    "ValidationError",
    "parse_epoch",
    "parse_latlon",
    "parse_planets_payload",
    "parse_angles_payload",
    "parse_chart_payload",
]

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Request validation error; `.errors()` returns pydantic-style detail dicts."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", "validation_error"))
        else:
            self._details = list(details)
            super().__init__(self._details[0]["msg"] if self._details else "validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


# ───────────────────────── helpers ─────────────────────────

def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}

def _as_float(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        x = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    return x if math.isfinite(x) else None

def _truthy(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in {"1", "true", "t", "yes", "y", "on"}


# ───────────────────────── atomic parsers ─────────────────────────

def parse_epoch(body: Dict[str, Any]) -> float:
    """
    Resolve the request instant to Unix milliseconds.

    Accepts either `date_ms` (number) or civil `date` + `time` (+ `tz`, default UTC).
    """
    if "date_ms" in body:
        ms = _as_float(body.get("date_ms"))
        if ms is None:
            raise ValidationError(_err("date_ms", "must be a finite number (ms since Unix epoch)", "type_error.float"))
        return ms

    date_s = body.get("date")
    time_s = body.get("time", "12:00")
    tz = body.get("tz") or body.get("timezone") or "UTC"
    if not isinstance(date_s, str) or not date_s.strip():
        raise ValidationError(_err("date", "provide 'date_ms' or civil 'date' (YYYY-MM-DD)", "value_error.missing"))
    if not isinstance(time_s, str):
        raise ValidationError(_err("time", "must be 'HH:MM[:SS[.frac]]'", "type_error.str"))
    if not isinstance(tz, str):
        raise ValidationError(_err("tz", "must be an IANA zone name", "type_error.str"))
    try:
        return unix_ms_from_civil(date_s, time_s, tz.strip())
    except ValueError as e:
        raise ValidationError(_err(["date", "time", "tz"], str(e), "value_error.datetime")) from e

def parse_latlon(lat: Any, lon: Any, lat_key="latitude", lon_key="longitude") -> Tuple[float, float]:
    lat_f = _as_float(lat); lon_f = _as_float(lon)
    if lat_f is None or lon_f is None:
        raise ValidationError(_err([lat_key, lon_key], "latitude/longitude must be finite numbers", "type_error.float"))
    if not (-90.0 <= lat_f <= 90.0):
        raise ValidationError(_err(lat_key, "latitude must be between -90 and 90"))
    if not (-180.0 <= lon_f <= 180.0):
        raise ValidationError(_err(lon_key, "longitude must be between -180 and 180"))
    return lat_f, lon_f


# ───────────────────────── payloads ─────────────────────────

class PlanetsPayload(TypedDict):
    date_ms: float
    detail: bool

class AnglesPayload(TypedDict):
    date_ms: float
    latitude: float
    longitude: float

class ChartPayload(TypedDict):
    date_ms: float
    latitude: float
    longitude: float
    detail: bool

def _require_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationError("payload must be an object")
    return body

def _coords(body: Dict[str, Any]) -> Tuple[float, float]:
    lat = body.get("latitude") if "latitude" in body else body.get("lat")
    lon = body.get("longitude") if "longitude" in body else body.get("lon")
    return parse_latlon(lat, lon)

def parse_planets_payload(body: Any) -> PlanetsPayload:
    body = _require_object(body)
    return {"date_ms": parse_epoch(body), "detail": _truthy(body.get("detail", False))}

def parse_angles_payload(body: Any) -> AnglesPayload:
    body = _require_object(body)
    ms = parse_epoch(body)
    lat, lon = _coords(body)
    return {"date_ms": ms, "latitude": lat, "longitude": lon}

def parse_chart_payload(body: Any) -> ChartPayload:
    body = _require_object(body)
    ms = parse_epoch(body)
    lat, lon = _coords(body)
    return {"date_ms": ms, "latitude": lat, "longitude": lon, "detail": _truthy(body.get("detail", False))}
