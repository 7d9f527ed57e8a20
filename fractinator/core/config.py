from __future__ import annotations

import copy
import json
import logging
import os
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "FRACTINATOR_CONFIG"

DEFAULTS = dict(
    branching=dict(interval_ms=140, max_iterations=4, line_length=70, rainbow=False, stroke_width=3,
                   background="#0066FF"),
    triangle=dict(spin_phase=3, interval_phase=2, equilateral=True, fill=True, stroke_width=1,
                  background="#1E90FF"),
    window=dict(width=1080, height=720, mode="menu"),
    audio=dict(track_dir="tracks", volume=0.047),
    logging=dict(level="INFO"),
)

MODES = ("menu", "branching", "triangle")


def _merge(base: dict, override: dict, path: str = "") -> None:
    for key, value in override.items():
        where = f"{path}.{key}" if path else key
        if key not in base:
            raise ConfigError(f"unknown config key: {where}")
        if isinstance(base[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"{where} must be an object")
            _merge(base[key], value, where)
        else:
            if isinstance(base[key], bool) and not isinstance(value, bool):
                raise ConfigError(f"{where} must be true or false")
            if isinstance(base[key], (int, float)) and not isinstance(base[key], bool):
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(f"{where} must be a number")
            base[key] = value


def load_config(path: Optional[str] = None) -> dict:
    """Defaults, overlaid with a JSON file from ``path`` or $FRACTINATOR_CONFIG."""
    cfg = copy.deepcopy(DEFAULTS)
    path = path or os.environ.get(CONFIG_ENV)
    if not path:
        return cfg
    try:
        with open(path, "r", encoding="utf-8") as f:
            override = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})")
    if not isinstance(override, dict):
        raise ConfigError(f"{path}: top level must be an object")
    _merge(cfg, override)
    if cfg["window"]["mode"] not in MODES:
        raise ConfigError(f"window.mode must be one of {', '.join(MODES)}")
    logger.info("config: loaded overrides from %s", path)
    return cfg
