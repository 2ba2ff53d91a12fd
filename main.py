# main.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import structlog
import yaml

from shadowcast.config import DemoConfig, load_demo_config
from shadowcast.logging_utils import parse_log_level, setup_logging
from shadowcast.render import render_text
from shadowcast.terrain import TerrainMap

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute and print the field of view on a demo map."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"YAML map configuration (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--origin",
        type=int,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Override the viewer position from the config.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: from config)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def build_map(config: DemoConfig) -> TerrainMap:
    """Creates the terrain map described by ``config``."""
    terrain_map = TerrainMap(config.width, config.height)
    for x, y in config.walls:
        terrain_map.add_wall(x, y)
    log.info(
        "Demo map built",
        width=config.width,
        height=config.height,
        walls=len(config.walls),
    )
    return terrain_map


def run(config: DemoConfig, origin: tuple[int, int] | None = None) -> list[str]:
    """Computes FOV for the demo map and returns the rendered lines."""
    origin = config.origin if origin is None else origin
    terrain_map = build_map(config)
    visible = terrain_map.compute_fov(*origin)
    log.info("FOV computed", origin=origin, visible_count=int(visible.sum()))
    return render_text(terrain_map.grid, origin=origin)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        cli_level = logging.DEBUG
    elif args.log_level:
        cli_level = parse_log_level(args.log_level)
    else:
        cli_level = None
    setup_logging(cli_level if cli_level is not None else logging.INFO)

    try:
        config = load_demo_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        log.error("Failed to load demo map configuration", error=str(e))
        return 1

    if cli_level is None:
        setup_logging(parse_log_level(config.log_level))

    origin = tuple(args.origin) if args.origin is not None else None
    try:
        lines = run(config, origin)
    except ValueError as e:
        log.error("FOV computation failed", error=str(e))
        return 1

    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
