# urania/utils/config.py
import copy
import os

import yaml

DEFAULT_CONFIG_PATH = "config/defaults.yaml"

DEFAULTS = {
    "log_level": "INFO",
    "cors_allow_origin": "*",
    "series_range_centuries": 10.0,
    "rate_limits_per_minute": {
        "planets": 60,
        "angles": 60,
        "chart": 30,
        "debug": 6,
    },
}

# env var -> (config key, parser)
_ENV_OVERRIDES = {
    "URANIA_LOG_LEVEL": ("log_level", str),
    "URANIA_CORS_ALLOW_ORIGIN": ("cors_allow_origin", str),
    "URANIA_SERIES_RANGE_CENTURIES": ("series_range_centuries", float),
}


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.log_level and cfg['log_level'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def _merge(base, override):
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config(path=None):
    """
    Load YAML config from `path` (default: $URANIA_CONFIG or config/defaults.yaml)
    on top of the built-in DEFAULTS. A missing file yields the defaults; a
    malformed one raises.
    Env overrides (applied last):
      - URANIA_LOG_LEVEL
      - URANIA_CORS_ALLOW_ORIGIN
      - URANIA_SERIES_RANGE_CENTURIES
      - URANIA_RL_<ROUTE>_PER_MIN   (e.g. URANIA_RL_CHART_PER_MIN=10)
    Returns an AttrDict for convenient access.
    """
    path = path or os.getenv("URANIA_CONFIG", DEFAULT_CONFIG_PATH)
    data = copy.deepcopy(DEFAULTS)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = _merge(data, yaml.safe_load(f) or {})

    for env_key, (cfg_key, parse) in _ENV_OVERRIDES.items():
        raw = os.getenv(env_key)
        if raw:
            data[cfg_key] = parse(raw)

    limits = data.setdefault("rate_limits_per_minute", {})
    for route in list(limits):
        raw = os.getenv(f"URANIA_RL_{route.upper()}_PER_MIN")
        if raw:
            limits[route] = int(raw)

    return _to_attr(data)
