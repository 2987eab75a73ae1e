from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "WARNING",
    "paint": {
        "width": 600,
        "height": 600,
        "background": [225, 225, 225],
        "ui_zone_top": 340,
        "initial_color": [0, 0, 0],
        "brush_size": 8,
        "fps": 60,
        "palette": [
            {"label": "RED", "color": [255, 0, 0]},
            {"label": "BLUE", "color": [0, 0, 255]},
            {"label": "GREEN", "color": [0, 255, 0]},
            {"label": "BLACK", "color": [0, 0, 0]},
        ],
    },
}


def _merge_over_defaults(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        # A bare `paint:` parses as None; keep the default section then.
        if value is None:
            continue
        default = merged.get(key)
        if isinstance(default, dict):
            if isinstance(value, dict):
                merged[key] = _merge_over_defaults(default, value)
            else:
                logger.warning("Ignoring config section %r: expected a mapping, got %r", key, value)
            continue
        merged[key] = value
    return merged


def _config_search_path() -> list[Path]:
    paths = [Path("config.yaml"), Path("~/.config/paintbox/config.yaml").expanduser()]
    env_path = os.environ.get("PAINTBOX_CONFIG")
    if env_path:
        paths.insert(0, Path(env_path))
    return paths


def _read_overrides(path: Path) -> Dict[str, Any]:
    logger.debug("Loading config from %s", path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def load_config() -> Dict[str, Any]:
    path = next((candidate for candidate in _config_search_path() if candidate.exists()), None)
    if path is None:
        return dict(DEFAULT_CONFIG)
    return _merge_over_defaults(DEFAULT_CONFIG, _read_overrides(path))


def coerce_int(value: object, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def coerce_color(value: object, default: Tuple[int, ...]) -> Tuple[int, ...]:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        return default
    try:
        channels = [int(channel) for channel in value]
    except (TypeError, ValueError):
        return default
    return tuple(max(0, min(255, channel)) for channel in channels)
