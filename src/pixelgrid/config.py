from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_root": "~/.local/share/pixelgrid",
    "grid": {
        "size": 30,
        "cell_size": 1.0,
        # Cells are drawn slightly smaller than their pitch so a grid line shows.
        "cell_fill": 0.96,
        "empty_color": [42, 45, 47],
        "background": [17, 17, 17],
        "line_color": [51, 51, 51],
    },
    "palette": [
        {"name": "red", "color": [239, 68, 68]},
        {"name": "green", "color": [34, 197, 94]},
        {"name": "blue", "color": [59, 130, 246]},
        {"name": "yellow", "color": [234, 179, 8]},
        {"name": "purple", "color": [168, 85, 247]},
    ],
    "window": {
        "fullscreen": False,
        "size": [1024, 768],
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _candidate_config_paths() -> list[Path]:
    env_path = os.environ.get("PIXELGRID_CONFIG")
    paths = []
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        Path("config.yaml"),
        Path("~/.config/pixelgrid/config.yaml").expanduser(),
    ])
    return paths


def load_config() -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    for path in _candidate_config_paths():
        if path.exists():
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            if isinstance(data, dict):
                config = _deep_merge(config, data)
            break
    return config


def coerce_int(value: object, default: int, *, minimum: int = 1) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    return number


def coerce_float(value: object, default: float, *, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not low < number <= high:
        return default
    return number


def coerce_color(value: object, default: Tuple[int, int, int]) -> Tuple[int, int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return default
    try:
        channels = [int(channel) for channel in value]
    except (TypeError, ValueError):
        return default
    if not all(0 <= channel <= 255 for channel in channels):
        return default
    return (channels[0], channels[1], channels[2])


def grid_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    defaults = DEFAULT_CONFIG["grid"]
    grid = config.get("grid", {}) or {}
    return {
        "size": coerce_int(grid.get("size"), defaults["size"]),
        "cell_size": coerce_float(grid.get("cell_size"), defaults["cell_size"], low=0.0, high=1e6),
        "cell_fill": coerce_float(grid.get("cell_fill"), defaults["cell_fill"], low=0.0, high=1.0),
        "empty_color": coerce_color(grid.get("empty_color"), tuple(defaults["empty_color"])),
        "background": coerce_color(grid.get("background"), tuple(defaults["background"])),
        "line_color": coerce_color(grid.get("line_color"), tuple(defaults["line_color"])),
    }


def window_size(config: Dict[str, Any]) -> Tuple[int, int]:
    default = tuple(DEFAULT_CONFIG["window"]["size"])
    window = config.get("window", {}) or {}
    value = window.get("size")
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return default
    return (coerce_int(value[0], default[0]), coerce_int(value[1], default[1]))


def palette_entries(config: Dict[str, Any]) -> List[Dict[str, Any]]:
    entries = config.get("palette")
    if not isinstance(entries, list) or not entries:
        return list(DEFAULT_CONFIG["palette"])
    return entries
