# shadowcast/grid.py
"""
Dense 2D grid container backed by a row-major NumPy array.

Cells are addressed as ``(x, y)`` while storage is indexed ``[y, x]``, the
same layout the FOV code expects for transparency and visibility maps. The
default ``object`` dtype lets a grid hold any cell type (tuples, dataclasses);
numeric or boolean grids can pass a concrete dtype instead.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
import structlog

log = structlog.get_logger(__name__)


class Grid:
    def __init__(
        self,
        width: int,
        height: int,
        fill_value: Any = None,
        dtype: Any = object,
    ) -> None:
        if width < 0 or height < 0:
            log.error("Invalid grid dimensions", width=width, height=height)
            raise ValueError("Grid dimensions cannot be negative.")
        self._width = width
        self._height = height
        self._data: np.ndarray = np.empty((height, width), dtype=dtype, order="C")
        if fill_value is None and self._data.dtype != object:
            fill_value = 0
        # ndarray.fill stores tuples as single objects instead of broadcasting them
        self._data.fill(fill_value)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """``(height, width)``, matching the backing array."""
        return self._data.shape

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the backing array."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def set_data(self, data: np.ndarray) -> None:
        """Replace the backing array with a copy of ``data``."""
        data = np.asarray(data)
        if data.shape != self._data.shape:
            raise ValueError(
                f"Data shape {data.shape} does not match grid shape {self._data.shape}"
            )
        self._data = data.astype(self._data.dtype, copy=True)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Cell ({x}, {y}) outside {self._width}x{self._height} grid"
            )

    def get(self, x: int, y: int) -> Any:
        self._check_bounds(x, y)
        return self._data[y, x]

    def set(self, x: int, y: int, value: Any) -> None:
        self._check_bounds(x, y)
        self._data[y, x] = value

    def fill(
        self,
        element: Any,
        x: int = 0,
        y: int = 0,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        """Fill a rectangle with copies of ``element``, clipped to the grid.

        With no region given the whole grid is filled.
        """
        x_end = self._width if width is None else x + width
        y_end = self._height if height is None else y + height
        x_start, y_start = max(0, x), max(0, y)
        x_end, y_end = min(self._width, x_end), min(self._height, y_end)
        if x_start >= x_end or y_start >= y_end:
            return
        self._data[y_start:y_end, x_start:x_end].fill(element)

    def extract_attributes(
        self, extract: Callable[[Any], Any], dtype: Any = object
    ) -> np.ndarray:
        """Project every cell through ``extract`` into a parallel array."""
        result = np.empty(self._data.size, dtype=dtype)
        # Element-wise so tuple-valued projections stay one object per cell
        for i, cell in enumerate(self._data.flat):
            result[i] = extract(cell)
        return result.reshape(self._height, self._width)

    def fill_attributes(
        self, attributes: np.ndarray, combine: Callable[[Any, Any], Any]
    ) -> None:
        """Write a parallel array back: ``cell = combine(cell, attribute)``."""
        attributes = np.asarray(attributes)
        if attributes.shape != self._data.shape:
            raise ValueError(
                f"Attribute shape {attributes.shape} does not match "
                f"grid shape {self._data.shape}"
            )
        for y in range(self._height):
            for x in range(self._width):
                self._data[y, x] = combine(self._data[y, x], attributes[y, x])

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, dtype={self._data.dtype})"
