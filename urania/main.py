# urania/main.py
from __future__ import annotations

import logging
import os
import traceback
from time import perf_counter
from typing import Final

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Gauge, Histogram, generate_latest
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from urania.api.routes import api as _api_bp
from urania.core.kepler import AstronomyError
from urania.utils.config import load_config
from urania.version import VERSION

# ───────────────────────── Prometheus ─────────────────────────
MET_REQUESTS: Final = Counter("urania_api_requests_total", "API requests", ["route"])
MET_ERRORS: Final = Counter("urania_api_errors_total", "API error responses", ["kind"])
GAUGE_APP_UP: Final = Gauge("urania_app_up", "1 if app is running")
REQ_LATENCY: Final = Histogram("urania_request_seconds", "API request latency", ["route"])

_TRACKED_ROUTES = ("/", "/health", "/healthz", "/api/planets", "/api/angles", "/api/chart", "/api/health", "/api/config")


# ───────────────────────── helpers: logging & errors ─────────────────────────
def _configure_logging(app: Flask, level: str) -> None:
    gerr = logging.getLogger("gunicorn.error")
    if gerr.handlers:
        app.logger.handlers = gerr.handlers
        app.logger.setLevel(gerr.level)
    else:
        logging.basicConfig(level=os.environ.get("LOG_LEVEL", level))

def _register_errors(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        app.logger.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        MET_ERRORS.labels(kind="http").inc()
        return jsonify(
            ok=False,
            error="http_error",
            code=e.code,
            name=e.name,
            message=e.description,
            path=request.path,
        ), e.code

    @app.errorhandler(AstronomyError)
    def _astro(e: AstronomyError):
        app.logger.warning("astronomy error at %s %s: %s", request.method, request.path, e)
        MET_ERRORS.labels(kind="astronomy").inc()
        return jsonify(ok=False, error=e.code, message=str(e), path=request.path), 422

    @app.errorhandler(Exception)
    def _any(e: Exception):
        tb = traceback.format_exc()
        app.logger.error("UNHANDLED %s at %s %s\n%s", type(e).__name__, request.method, request.path, tb)
        MET_ERRORS.labels(kind="internal").inc()
        return jsonify(
            ok=False,
            error="internal_error",
            type=type(e).__name__,
            message=str(e),
            path=request.path,
        ), 500

# ───────────────────────── health & metrics ─────────────────────────
def _register_health(app: Flask) -> None:
    @app.route("/", methods=["GET"])
    def root():
        return jsonify(ok=True, service="urania", version=VERSION, health="/health"), 200

    @app.route("/health", methods=["GET"])
    @app.route("/healthz", methods=["GET"])
    def health():
        return jsonify(ok=True, status="ok"), 200

def _metrics_auth_ok() -> bool:
    auth = request.authorization
    user = os.getenv("URANIA_METRICS_USER", "")
    pw = os.getenv("URANIA_METRICS_PASS", "")
    return bool(
        auth and auth.type == "basic" and auth.username == user and auth.password == pw and user and pw
    )

def _register_metrics(app: Flask) -> None:
    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        if not _metrics_auth_ok():
            return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="metrics"'})
        GAUGE_APP_UP.set(1.0)
        return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def _before():
        p = request.path or ""
        if p in _TRACKED_ROUTES:
            MET_REQUESTS.labels(route=p).inc()
            request._t0 = perf_counter()

    @app.after_request
    def _after(resp):
        p = request.path or ""
        t0 = getattr(request, "_t0", None)
        if p in _TRACKED_ROUTES and t0 is not None:
            REQ_LATENCY.labels(route=p).observe(perf_counter() - t0)
        return resp

# ───────────────────────── app factory ─────────────────────────
def create_app() -> Flask:
    app = Flask(__name__)
    app.json.sort_keys = False
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    cfg = load_config()
    app.cfg = cfg  # type: ignore[attr-defined]
    _configure_logging(app, cfg.log_level)

    for route in _TRACKED_ROUTES:
        MET_REQUESTS.labels(route=route).inc(0)
    GAUGE_APP_UP.set(1.0)

    _register_health(app)
    _register_errors(app)
    _register_metrics(app)
    app.register_blueprint(_api_bp)

    CORS(
        app,
        resources={r"/.*": {"origins": cfg.cors_allow_origin}},
        supports_credentials=False,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key"],
        max_age=600,
    )

    app.logger.info("Urania %s initialized; series_range=±%s centuries", VERSION, cfg.series_range_centuries)
    return app

# ───────────────────────── app instance ─────────────────────────
app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
