# urania/utils/ratelimit.py
from __future__ import annotations

"""
Per-client token-bucket rate limiter for Flask views.

- Buckets keyed by client (X-API-Key, bearer token, else first X-Forwarded-For / remote IP) + endpoint
- Thread-safe (per-process) via RLock
- X-RateLimit-* headers on every limited response, Retry-After on 429
- Env toggles (read per request):
    URANIA_RL_DISABLE     -> disable limiter entirely
    URANIA_RL_ALLOWLIST   -> comma-separated client ids/IPs to skip
"""

import math
import os
import time
from dataclasses import dataclass
from functools import wraps
from threading import RLock
from typing import Dict, Set

from flask import jsonify, make_response, request

__all__ = ["rate_limit", "client_key", "reset_buckets"]

_buckets: Dict[str, "Bucket"] = {}
_lock = RLock()


def _disabled() -> bool:
    return os.getenv("URANIA_RL_DISABLE", "0").lower() in ("1", "true", "yes", "on")


def _allowlist() -> Set[str]:
    return {s.strip() for s in os.getenv("URANIA_RL_ALLOWLIST", "").split(",") if s.strip()}


def client_key(req) -> str:
    """API credential if present, else client IP; scoped to the endpoint."""
    ident = (req.headers.get("X-API-Key") or "").strip()
    if not ident:
        auth = (req.headers.get("Authorization") or "").strip()
        if auth.lower().startswith("bearer "):
            ident = auth.split(None, 1)[1]
    if not ident:
        xff = req.headers.get("X-Forwarded-For", "")
        ident = (xff.split(",")[0].strip() if xff else "") or (req.remote_addr or "anon")
    return f"{ident}:{(req.endpoint or req.path) or '*'}"


@dataclass
class Bucket:
    tokens: float
    capacity: float
    rate: float         # tokens per second
    ts: float           # last refill (monotonic)

    def refill(self, now: float) -> None:
        if now > self.ts:
            self.tokens = min(self.capacity, self.tokens + (now - self.ts) * self.rate)
            self.ts = now


def reset_buckets() -> None:
    with _lock:
        _buckets.clear()


def rate_limit(max_per_minute: int):
    """
    Allow `max_per_minute` calls per client bucket, with the same burst capacity.
    Over the limit the view is not called and a 429 JSON body is returned:
        {"ok": False, "error": "rate_limited", "details": {"retry_after_seconds": N}}
    """
    if max_per_minute <= 0:
        raise ValueError("max_per_minute must be > 0")

    limit = int(max_per_minute)
    capacity = float(limit)
    rate = limit / 60.0
    policy = f"{limit};w=60;burst={int(capacity)}"

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if _disabled() or request.method in ("HEAD", "OPTIONS"):
                return f(*args, **kwargs)

            key = client_key(request)
            if key in _allowlist() or key.split(":", 1)[0] in _allowlist():
                return f(*args, **kwargs)

            now = time.monotonic()
            with _lock:
                b = _buckets.get(key)
                if b is None:
                    b = _buckets[key] = Bucket(tokens=capacity, capacity=capacity, rate=rate, ts=now)
                else:
                    b.refill(now)

                if b.tokens < 1.0:
                    retry_after = max(1, math.ceil((1.0 - b.tokens) / b.rate))
                    resp = make_response(jsonify({
                        "ok": False,
                        "error": "rate_limited",
                        "details": {"retry_after_seconds": retry_after},
                    }), 429)
                    resp.headers["Retry-After"] = str(retry_after)
                    resp.headers["X-RateLimit-Limit"] = str(limit)
                    resp.headers["X-RateLimit-Remaining"] = "0"
                    resp.headers["X-RateLimit-Policy"] = policy
                    return resp

                b.tokens -= 1.0
                remaining = max(0, int(b.tokens))

            resp = make_response(f(*args, **kwargs))
            resp.headers.setdefault("X-RateLimit-Limit", str(limit))
            resp.headers["X-RateLimit-Remaining"] = str(remaining)
            resp.headers.setdefault("X-RateLimit-Policy", policy)
            return resp

        return wrapper

    return decorator
