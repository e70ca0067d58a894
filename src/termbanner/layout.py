"""Fit a banner's pixel grid onto a terminal surface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from .glyphs import GLYPH_HEIGHT

# Cap on the width scale relative to the height scale.
MAX_ASPECT_STRETCH: Final[int] = 8


class LayoutError(ValueError):
    """Raised when a banner cannot be laid out on the surface."""


@dataclass(frozen=True, slots=True)
class Layout:
    """Scale and placement of one repaint, in grid units."""

    square_width: int
    square_height: int
    x_offsets: tuple[int, ...]
    y_offset: int
    line_widths: tuple[int, ...]

    @property
    def grid_height(self) -> int:
        return GLYPH_HEIGHT * len(self.line_widths)

    def line_origin(self, index: int) -> tuple[int, int]:
        """Return the top-left grid cell of line ``index``."""

        return self.x_offsets[index], self.y_offset + index * GLYPH_HEIGHT


def compute_layout(
    surface_width: int, surface_height: int, line_widths: Sequence[int]
) -> Layout:
    """Compute a uniform scale and centring offsets for ``line_widths``.

    ``line_widths`` are per-line grid widths in glyph pixels.  Lines are
    centred independently; the block of lines is centred vertically.
    """

    if surface_width <= 0 or surface_height <= 0:
        raise LayoutError(f"surface has no area: {surface_width}x{surface_height}")
    widths = tuple(int(width) for width in line_widths)
    if not widths:
        raise LayoutError("banner has no lines")
    grid_width = max(widths)
    if grid_width <= 0:
        raise LayoutError("banner has no visible columns")
    grid_height = GLYPH_HEIGHT * len(widths)

    square_width = surface_width // grid_width
    square_height = surface_height // grid_height
    if square_width > square_height * MAX_ASPECT_STRETCH:
        square_width = square_height * MAX_ASPECT_STRETCH
    if square_height > square_width:
        square_height = square_width
    # A surface smaller than the grid clips the banner rather than vanishing.
    square_width = max(1, square_width)
    square_height = max(1, square_height)

    columns = surface_width // square_width
    rows = surface_height // square_height
    return Layout(
        square_width=square_width,
        square_height=square_height,
        x_offsets=tuple((columns - width) // 2 for width in widths),
        y_offset=(rows - grid_height) // 2,
        line_widths=widths,
    )


__all__ = ["Layout", "LayoutError", "MAX_ASPECT_STRETCH", "compute_layout"]
