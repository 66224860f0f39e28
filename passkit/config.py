# passkit/config.py
"""
Service settings for passkit.
Defaults, overlaid by an optional JSON file (path argument or $PASSKIT_CONFIG),
overlaid by PASSKIT_* environment variables.
"""

import os
import json
import logging
from typing import Dict, Any, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8000,
    "debug": False,
    "cors_origins": "*",
    "log_level": "INFO",
}

ENV_PREFIX = "PASSKIT_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def _coerce(key: str, value: Any) -> Any:
    default = DEFAULTS[key]
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if isinstance(default, int):
        return int(value)
    return value


def _read_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.debug("config file %s not found, using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config file %s: top level must be an object", path)
        return {}
    return data


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    path = path or environ.get(ENV_PREFIX + "CONFIG")

    out = DEFAULTS.copy()
    layers = [_read_file(path) if path else {}]
    layers.append({
        key: environ[ENV_PREFIX + key.upper()]
        for key in DEFAULTS
        if ENV_PREFIX + key.upper() in environ
    })
    for layer in layers:
        for key, value in layer.items():
            if key not in DEFAULTS:
                logger.debug("unknown config key %r ignored", key)
                continue
            try:
                out[key] = _coerce(key, value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"invalid value for config key {key!r}: {value!r}") from e
    return out
