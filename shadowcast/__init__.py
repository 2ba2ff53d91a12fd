"""Symmetric shadowcasting field of view for tile maps."""

from shadowcast.fov import compute_visibility, compute_visibility_many
from shadowcast.grid import Grid
from shadowcast.terrain import FLOOR, WALL, Terrain, TerrainMap

__all__ = [
    "FLOOR",
    "WALL",
    "Grid",
    "Terrain",
    "TerrainMap",
    "compute_visibility",
    "compute_visibility_many",
]
