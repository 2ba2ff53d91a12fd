# shadowcast/config.py
"""Loading and validation of the YAML demo-map configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from typing import Dict as PyDict

import structlog
import yaml

log = structlog.get_logger(__name__)

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DemoConfig:
    width: int
    height: int
    origin: tuple[int, int]
    walls: list[tuple[int, int]] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL


def load_yaml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a generic YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        raise ValueError(f"{config_name} config must be a mapping: {config_path}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def _point(value: Any, what: str) -> tuple[int, int]:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise ValueError(f"{what} must be a pair of integers, got {value!r}")
    return int(value[0]), int(value[1])


def parse_demo_config(data: PyDict[str, Any]) -> DemoConfig:
    """Validate a raw config mapping and build a :class:`DemoConfig`."""
    map_cfg = data.get("map")
    if not isinstance(map_cfg, dict):
        raise ValueError("config requires a 'map' section")

    width = map_cfg.get("width")
    height = map_cfg.get("height")
    for name, value in (("map.width", width), ("map.height", height)):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def inside(point: tuple[int, int]) -> bool:
        return 0 <= point[0] < width and 0 <= point[1] < height

    walls = [_point(w, "wall") for w in map_cfg.get("walls") or []]
    for wall in walls:
        if not inside(wall):
            raise ValueError(f"wall {wall} lies outside the {width}x{height} map")

    origin = _point(data.get("origin", (width // 2, height // 2)), "origin")
    if not inside(origin):
        raise ValueError(f"origin {origin} lies outside the {width}x{height} map")

    log_level = str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {log_level!r}")
    return DemoConfig(
        width=width, height=height, origin=origin, walls=walls, log_level=log_level
    )


def load_demo_config(config_path: Path) -> DemoConfig:
    return parse_demo_config(load_yaml_config(config_path, "Demo map"))
