"""Paint banner glyphs onto a display surface."""
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Protocol

from .banner import Banner
from .font_sheet import GlyphTable
from .glyphs import HALF_WIDTH_GLYPH_WIDTH, Glyph
from .layout import Layout, compute_layout
from .sjis import EncodedLine

LOGGER = logging.getLogger(__name__)


class SurfaceEvent(Enum):
    """Input notifications delivered by :meth:`DisplaySurface.poll_event`."""

    RESIZE = auto()
    QUIT = auto()
    KEY = auto()


class DisplaySurface(Protocol):
    """Terminal-like grid of cells the banner is painted onto."""

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""

    def clear(self) -> None:
        ...

    def paint_cell(self, x: int, y: int) -> None:
        """Fill cell ``(x, y)`` with the banner colour; ignore cells off the surface."""

    def show(self) -> None:
        ...

    def sync(self) -> None:
        ...

    def poll_event(self) -> SurfaceEvent:
        ...

    def close(self) -> None:
        ...


class ScaledCanvas:
    """Map logical glyph pixels onto blocks of surface cells."""

    def __init__(self, surface: DisplaySurface, square_width: int, square_height: int) -> None:
        if square_width <= 0 or square_height <= 0:
            raise ValueError("square dimensions must be positive")
        self.surface = surface
        self.square_width = square_width
        self.square_height = square_height

    def fill_square(self, x: int, y: int) -> None:
        left = x * self.square_width
        top = y * self.square_height
        for dy in range(self.square_height):
            for dx in range(self.square_width):
                self.surface.paint_cell(left + dx, top + dy)


def paint_glyph(canvas: ScaledCanvas, glyph: Glyph, x: int, y: int) -> None:
    """Fill one square per ink pixel of ``glyph`` with its top-left at ``(x, y)``."""

    for dx, dy in glyph.iter_ink():
        canvas.fill_square(x + dx, y + dy)


def paint_line(
    canvas: ScaledCanvas, line: EncodedLine, table: GlyphTable, x: int, y: int
) -> None:
    for unit in line.code_units():
        paint_glyph(canvas, table.resolve(unit), x + unit.offset * HALF_WIDTH_GLYPH_WIDTH, y)


def render_banner(surface: DisplaySurface, banner: Banner, table: GlyphTable) -> Layout:
    """Clear ``surface`` and paint every line of ``banner``; the caller flushes."""

    surface.clear()
    columns, rows = surface.size()
    layout = compute_layout(columns, rows, banner.grid_widths())
    LOGGER.debug(
        "layout for %dx%d surface: square %dx%d, offsets %s/%d",
        columns,
        rows,
        layout.square_width,
        layout.square_height,
        layout.x_offsets,
        layout.y_offset,
    )
    canvas = ScaledCanvas(surface, layout.square_width, layout.square_height)
    for index, line in enumerate(banner):
        x, y = layout.line_origin(index)
        paint_line(canvas, line, table, x, y)
    return layout


__all__ = [
    "DisplaySurface",
    "ScaledCanvas",
    "SurfaceEvent",
    "paint_glyph",
    "paint_line",
    "render_banner",
]
