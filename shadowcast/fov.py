# shadowcast/fov.py
"""
Field of View (FOV) calculation using symmetric shadowcasting.

Each of the four cardinal quadrants is scanned row by row outward from the
origin. A row is a band of tiles at a fixed depth bounded by two slopes;
walls narrow the slope interval of deeper rows and floor-to-wall transitions
spawn child rows. Slopes are exact ``Fraction`` values so the tie-breaking
rules in :meth:`Row.tiles` and :func:`is_symmetric` never drift.
"""

from __future__ import annotations

import math
import os
import time
from dataclasses import dataclass
from enum import IntEnum
from fractions import Fraction
from typing import Iterator, NamedTuple, Sequence, TypeAlias

import numpy as np
import structlog
from joblib import Parallel, delayed

# --- Type Aliases ---
Point: TypeAlias = tuple[int, int]

# --- Logging Setup ---
log = structlog.get_logger(__name__)

HALF: Fraction = Fraction(1, 2)


def _job_count() -> int:
    """Half of available cores, or 1 if ``os.cpu_count()`` is unavailable."""
    cpu_count = os.cpu_count()
    return max(1, cpu_count // 2) if cpu_count else 1


N_JOBS: int = _job_count()


class Direction(IntEnum):
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3


class Tile(NamedTuple):
    """A tile relative to a quadrant: ``col`` across, ``depth`` outward."""

    col: int
    depth: int


def round_ties_up(n: Fraction) -> int:
    """Round to nearest, x.5 going towards positive infinity."""
    return math.floor(n + HALF)


def round_ties_down(n: Fraction) -> int:
    """Round to nearest, x.5 going towards negative infinity."""
    return math.ceil(n - HALF)


@dataclass
class Row:
    depth: int
    start_slope: Fraction
    end_slope: Fraction

    def tiles(self) -> Iterator[Tile]:
        min_col = round_ties_up(self.depth * self.start_slope)
        max_col = round_ties_down(self.depth * self.end_slope)
        for col in range(min_col, max_col + 1):
            yield Tile(col, self.depth)

    def next(self) -> Row:
        return Row(self.depth + 1, self.start_slope, self.end_slope)


def slope(tile: Tile) -> Fraction:
    """Slope of the near edge of ``tile`` as seen from the origin."""
    return Fraction(2 * tile.col - 1, 2 * tile.depth)


def is_symmetric(row: Row, tile: Tile) -> bool:
    """Check whether the centre of a floor tile lies inside the row's cone."""
    col = tile.col
    return (
        col >= row.depth * row.start_slope and col <= row.depth * row.end_slope
    )


class Quadrant:
    """Maps quadrant-relative tiles to absolute map coordinates."""

    def __init__(self, direction: Direction, origin: Point) -> None:
        self.direction = direction
        self.ox, self.oy = origin

    def transform(self, tile: Tile) -> Point:
        col, depth = tile
        if self.direction == Direction.NORTH:
            return self.ox + col, self.oy - depth
        if self.direction == Direction.SOUTH:
            return self.ox + col, self.oy + depth
        if self.direction == Direction.EAST:
            return self.ox + depth, self.oy + col
        if self.direction == Direction.WEST:
            return self.ox - depth, self.oy + col
        raise ValueError(f"invalid quadrant direction: {self.direction!r}")

    def max_depth(self, width: int, height: int) -> int:
        """Deepest row that still lies on a ``width`` x ``height`` map."""
        if self.direction == Direction.NORTH:
            return self.oy
        if self.direction == Direction.SOUTH:
            return height - 1 - self.oy
        if self.direction == Direction.EAST:
            return width - 1 - self.ox
        if self.direction == Direction.WEST:
            return self.ox
        raise ValueError(f"invalid quadrant direction: {self.direction!r}")


# --- Transparency Query ---
def in_bounds(transparency: np.ndarray, x: int, y: int) -> bool:
    height, width = transparency.shape
    return 0 <= x < width and 0 <= y < height


def is_transparent(transparency: np.ndarray, x: int, y: int) -> bool:
    """``True`` for an in-bounds floor tile. Off-map tiles block sight."""
    return in_bounds(transparency, x, y) and bool(transparency[y, x])


def _as_transparency_map(transparency) -> np.ndarray:
    try:
        grid = np.asarray(transparency, dtype=bool)
    except (TypeError, ValueError) as e:
        raise ValueError(f"transparency map must be rectangular: {e}") from e
    if grid.ndim != 2:
        raise ValueError(
            f"transparency map must be 2D, got {grid.ndim} dimension(s)"
        )
    return grid


def _scan_quadrant(
    quadrant: Quadrant, transparency: np.ndarray, visible: np.ndarray
) -> None:
    """Scan every row of one quadrant.

    Rows are processed from an explicit LIFO stack rather than by recursion.
    A child row copies its slopes when it is spawned and visibility writes
    only ever set ``True``, so the result matches the recursive scan.
    """
    height, width = transparency.shape
    max_depth = quadrant.max_depth(width, height)

    def is_wall(tile: Tile | None) -> bool:
        if tile is None:
            return False
        x, y = quadrant.transform(tile)
        return not is_transparent(transparency, x, y)

    def is_floor(tile: Tile | None) -> bool:
        if tile is None:
            return False
        x, y = quadrant.transform(tile)
        return is_transparent(transparency, x, y)

    def reveal(tile: Tile) -> None:
        x, y = quadrant.transform(tile)
        if in_bounds(transparency, x, y):
            visible[y, x] = True

    rows: list[Row] = [Row(1, Fraction(-1), Fraction(1))]
    while rows:
        row = rows.pop()
        if row.depth > max_depth:
            # No more map in this direction.
            continue

        prev_tile: Tile | None = None
        for tile in row.tiles():
            if is_wall(tile) or is_symmetric(row, tile):
                reveal(tile)
            if is_wall(prev_tile) and is_floor(tile):
                row.start_slope = slope(tile)
            if is_floor(prev_tile) and is_wall(tile):
                next_row = row.next()
                next_row.end_slope = slope(tile)
                rows.append(next_row)
            prev_tile = tile
        if is_floor(prev_tile):
            rows.append(row.next())


def compute_visibility(transparency, origin: Point) -> np.ndarray:
    """
    Compute the tiles visible from ``origin``.

    Args:
        transparency: Rectangular grid indexed ``[y][x]``; truthy cells are
            transparent. Anything ``np.asarray`` accepts as 2D is fine. The
            input is never modified.
        origin: ``(x, y)`` of the viewer. Must lie inside the map.

    Returns:
        Boolean array with the same shape as ``transparency``. The origin is
        always visible, whatever its own transparency.

    Raises:
        ValueError: If the map is not a rectangular 2D grid or the origin
            lies outside it.
    """
    grid = _as_transparency_map(transparency)
    height, width = grid.shape
    ox, oy = origin
    func_log = log.bind(origin=(ox, oy), grid_shape=grid.shape)

    if not (0 <= ox < width and 0 <= oy < height):
        func_log.error("FOV origin out of bounds")
        raise ValueError(
            f"Origin coordinates {origin} out of bounds for {width}x{height} map"
        )

    func_log.debug("Starting FOV computation")
    start_time = time.perf_counter()

    visible = np.zeros((height, width), dtype=bool)
    visible[oy, ox] = True
    for direction in Direction:
        _scan_quadrant(Quadrant(direction, (ox, oy)), grid, visible)

    duration_ms = (time.perf_counter() - start_time) * 1000
    func_log.debug(
        "FOV computation finished",
        duration_ms=f"{duration_ms:.2f}",
        visible_count=int(np.sum(visible)),
    )
    return visible


def compute_visibility_many(
    transparency,
    origins: Sequence[Point],
    n_jobs: int | None = None,
    backend: str = "loky",
) -> list[np.ndarray]:
    """Compute FOV for several origins over one transparency snapshot.

    Each origin is an independent computation, so they run in parallel with
    Joblib. Results are returned in the order of ``origins``.
    """
    grid = _as_transparency_map(transparency)
    if len(origins) == 0:
        return []
    jobs = N_JOBS if n_jobs is None else n_jobs
    log.debug("Batch FOV computation", origins=len(origins), n_jobs=jobs)
    return Parallel(n_jobs=jobs, backend=backend)(
        delayed(compute_visibility)(grid, tuple(origin)) for origin in origins
    )


__all__ = [
    "Direction",
    "Point",
    "Quadrant",
    "Row",
    "Tile",
    "compute_visibility",
    "compute_visibility_many",
    "in_bounds",
    "is_symmetric",
    "is_transparent",
    "round_ties_down",
    "round_ties_up",
    "slope",
]
