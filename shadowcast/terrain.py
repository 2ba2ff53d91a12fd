# shadowcast/terrain.py
from typing import Final, NamedTuple, Set, Tuple

import numpy as np
import structlog

from shadowcast.fov import compute_visibility
from shadowcast.grid import Grid

log = structlog.get_logger()


class Terrain(NamedTuple):
    transparent: bool
    visible: bool
    glyph: str


FLOOR: Final[Terrain] = Terrain(transparent=True, visible=False, glyph=".")
WALL: Final[Terrain] = Terrain(transparent=False, visible=False, glyph="#")


def terrain_transparency(terrain: Terrain) -> bool:
    return terrain.transparent


def with_visibility(terrain: Terrain, visible: bool) -> Terrain:
    return terrain._replace(visible=bool(visible))


class TerrainMap:
    def __init__(self, width: int, height: int):
        """
        Initializes a map of the given size with every tile set to floor.
        """
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self.grid: Grid = Grid(width, height, fill_value=FLOOR)
        log.debug("TerrainMap initialized", width=width, height=height)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return self.grid.in_bounds(x, y)

    def set_terrain(self, x: int, y: int, terrain: Terrain) -> None:
        self.grid.set(x, y, terrain)

    def add_wall(self, x: int, y: int) -> None:
        self.grid.set(x, y, WALL)

    def is_transparent(self, x: int, y: int) -> bool:
        """Checks if the tile at (x, y) is transparent (for FOV)."""
        if not self.in_bounds(x, y):
            # Treat out of bounds as non-transparent for FOV calculations
            return False
        return self.grid.get(x, y).transparent

    def transparency_map(self) -> np.ndarray:
        return self.grid.extract_attributes(terrain_transparency, dtype=bool)

    def visibility_map(self) -> np.ndarray:
        return self.grid.extract_attributes(lambda t: t.visible, dtype=bool)

    def compute_fov(self, x: int, y: int) -> np.ndarray:
        """Calculate field of view from ``(x, y)`` and flag visible tiles."""
        if not self.in_bounds(x, y):
            log.warning("FOV origin out of bounds in TerrainMap.compute_fov", origin=(x, y))
            raise ValueError(f"FOV origin ({x}, {y}) is outside the map.")
        visible = compute_visibility(self.transparency_map(), (x, y))
        self.grid.fill_attributes(visible, with_visibility)
        return visible

    def update_fov_with_tracking(self, x: int, y: int) -> Set[Tuple[int, int]]:
        """
        Updates FOV and returns a set of (x, y) coordinates where
        visibility changed (either became visible or hidden).
        """
        previous_visible = self.visibility_map()
        current_visible = self.compute_fov(x, y)
        changed_positions = set()
        diff_indices = np.argwhere(previous_visible != current_visible)
        for y_idx, x_idx in diff_indices:
            changed_positions.add((int(x_idx), int(y_idx)))  # Store as (x, y)

        if changed_positions:
            log.debug("Visibility changed", changed_count=len(changed_positions))
        return changed_positions

    def visible_positions(self) -> list[Tuple[int, int]]:
        """All visible tiles as ``(x, y)``, in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.visibility_map())]
