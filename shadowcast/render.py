# shadowcast/render.py
"""Helpers for turning terrain cells into displayable glyphs and text."""

from typing import Final, NamedTuple

from shadowcast.grid import Grid
from shadowcast.terrain import Terrain

Color = tuple[int, int, int]

WHITE: Final[Color] = (255, 255, 255)
BLACK: Final[Color] = (0, 0, 0)
ORIGIN_GLYPH: Final[str] = "@"


class RenderTile(NamedTuple):
    glyph: str
    fg: Color
    bg: Color


def render_tile(terrain: Terrain) -> RenderTile:
    """Hidden tiles keep their glyph but draw black on black."""
    fg = WHITE if terrain.visible else BLACK
    return RenderTile(glyph=terrain.glyph, fg=fg, bg=BLACK)


def render_text(
    grid: Grid,
    origin: tuple[int, int] | None = None,
    hidden: str = " ",
) -> list[str]:
    """Render a terrain grid as lines of text, one per map row."""
    lines = []
    for y in range(grid.height):
        chars = []
        for x in range(grid.width):
            if origin is not None and (x, y) == tuple(origin):
                chars.append(ORIGIN_GLYPH)
                continue
            terrain = grid.get(x, y)
            chars.append(render_tile(terrain).glyph if terrain.visible else hidden)
        lines.append("".join(chars))
    return lines
