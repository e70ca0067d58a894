"""Decode rasterized Misaki font sheets into glyph tables.

Half-width sheets are a 16x16 grid of 4x8 cells indexed by byte value.
Full-width sheets hold one JIS row of 94 8x8 cells per sheet row.  Two JIS
rows share a Shift_JIS lead byte, so each pair of sheet rows is folded into
one logical row of 189 columns: the odd JIS row occupies columns 0-93 and the
even row columns 95-188, matching :func:`termbanner.sjis.trail_column`.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Final, Mapping, Protocol, Sequence

from PIL import Image, UnidentifiedImageError

from .fonts import FontVariant
from .glyphs import (
    BLANK_FULL_WIDTH,
    FULL_WIDTH_GLYPH_HEIGHT,
    FULL_WIDTH_GLYPH_WIDTH,
    HALF_WIDTH_GLYPH_HEIGHT,
    HALF_WIDTH_GLYPH_WIDTH,
    Glyph,
    bit_index,
)
from .sjis import (
    EVEN_ROW_TRAIL_START,
    FULL_WIDTH_1_LEAD,
    FULL_WIDTH_2_LEAD,
    TRAIL_START,
    CharClass,
    CodeUnit,
    trail_column,
)

LOGGER = logging.getLogger(__name__)

HALFWIDTH_GRID: Final[tuple[int, int]] = (16, 16)
SHEET_COLUMNS: Final[int] = 94
LOGICAL_COLUMNS: Final[int] = (EVEN_ROW_TRAIL_START - TRAIL_START) + SHEET_COLUMNS
FULL_WIDTH_1_ROWS: Final[int] = len(FULL_WIDTH_1_LEAD)
FULL_WIDTH_2_ROWS: Final[int] = len(FULL_WIDTH_2_LEAD)
FULLWIDTH_SHEET_ROWS: Final[int] = 2 * (FULL_WIDTH_1_ROWS + FULL_WIDTH_2_ROWS)

_INK: Final[bytes] = bytes(3)

GlyphGrid = tuple[tuple[Glyph, ...], ...]


class FontAssetError(RuntimeError):
    """Raised when a font sheet is missing, unreadable or too small."""


class AssetSource(Protocol):
    """Opens bundled font assets by logical name."""

    def open(self, name: str) -> BinaryIO:
        ...


class PackageAssetSource:
    """Read sheets shipped in the ``termbanner/assets`` package directory."""

    def __init__(self, package: str = "termbanner", directory: str = "assets") -> None:
        self._root = resources.files(package).joinpath(directory)

    def open(self, name: str) -> BinaryIO:
        return self._root.joinpath(name).open("rb")


class DirectoryAssetSource:
    """Read sheets from a directory on disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def open(self, name: str) -> BinaryIO:
        return (self.root / name).open("rb")


class MemoryAssetSource:
    """Serve sheets from in-memory PNG payloads."""

    def __init__(self, payloads: Mapping[str, bytes]) -> None:
        self._payloads = dict(payloads)

    def open(self, name: str) -> BinaryIO:
        try:
            return io.BytesIO(self._payloads[name])
        except KeyError:
            raise FileNotFoundError(name) from None


class _InkMap:
    """Pure-black pixel lookup over an RGB rendition of a sheet."""

    def __init__(self, image: Image.Image) -> None:
        rgb = image.convert("RGB")
        self.width, self.height = rgb.size
        self._pixels = rgb.tobytes()

    def require(self, width: int, height: int, label: str) -> None:
        if self.width < width or self.height < height:
            raise FontAssetError(
                f"{label} sheet is {self.width}x{self.height}, "
                f"expected at least {width}x{height}"
            )

    def glyph_at(self, left: int, top: int, width: int, height: int) -> Glyph:
        bits = 0
        for y in range(height):
            row_start = ((top + y) * self.width + left) * 3
            for x in range(width):
                offset = row_start + x * 3
                if self._pixels[offset : offset + 3] == _INK:
                    bits |= 1 << bit_index(x, y, width)
        return Glyph(width, height, bits)


def build_halfwidth_table(image: Image.Image) -> tuple[Glyph, ...]:
    """Return the 256 half-width glyphs indexed by byte value."""

    columns, rows = HALFWIDTH_GRID
    ink = _InkMap(image)
    ink.require(
        columns * HALF_WIDTH_GLYPH_WIDTH, rows * HALF_WIDTH_GLYPH_HEIGHT, "half-width"
    )
    return tuple(
        ink.glyph_at(
            (code % columns) * HALF_WIDTH_GLYPH_WIDTH,
            (code // columns) * HALF_WIDTH_GLYPH_HEIGHT,
            HALF_WIDTH_GLYPH_WIDTH,
            HALF_WIDTH_GLYPH_HEIGHT,
        )
        for code in range(columns * rows)
    )


def _build_fullwidth_block(ink: _InkMap, first_sheet_row: int, logical_rows: int) -> GlyphGrid:
    table = [[BLANK_FULL_WIDTH] * LOGICAL_COLUMNS for _ in range(logical_rows)]
    column_shift = EVEN_ROW_TRAIL_START - TRAIL_START
    for sheet_row in range(logical_rows * 2):
        row = table[sheet_row // 2]
        top = (first_sheet_row + sheet_row) * FULL_WIDTH_GLYPH_HEIGHT
        for sheet_column in range(SHEET_COLUMNS):
            row[sheet_column + column_shift * (sheet_row % 2)] = ink.glyph_at(
                sheet_column * FULL_WIDTH_GLYPH_WIDTH,
                top,
                FULL_WIDTH_GLYPH_WIDTH,
                FULL_WIDTH_GLYPH_HEIGHT,
            )
    return tuple(tuple(row) for row in table)


def build_fullwidth_tables(image: Image.Image) -> tuple[GlyphGrid, GlyphGrid]:
    """Return the class-1 and class-2 full-width tables from one sheet."""

    ink = _InkMap(image)
    ink.require(
        SHEET_COLUMNS * FULL_WIDTH_GLYPH_WIDTH,
        FULLWIDTH_SHEET_ROWS * FULL_WIDTH_GLYPH_HEIGHT,
        "full-width",
    )
    first = _build_fullwidth_block(ink, 0, FULL_WIDTH_1_ROWS)
    second = _build_fullwidth_block(ink, FULL_WIDTH_1_ROWS * 2, FULL_WIDTH_2_ROWS)
    return first, second


@dataclass(frozen=True)
class GlyphTable:
    """Read-only glyph lookup for every Shift_JIS code unit the font covers."""

    halfwidth: Sequence[Glyph]
    fullwidth_1: GlyphGrid
    fullwidth_2: GlyphGrid

    def resolve(self, unit: CodeUnit) -> Glyph:
        """Return the glyph drawn for ``unit``."""

        if unit.char_class is CharClass.HALF_WIDTH:
            return self.halfwidth[unit.lead]
        if unit.char_class is CharClass.FULL_WIDTH_1:
            grid, row = self.fullwidth_1, unit.lead - FULL_WIDTH_1_LEAD.start
        else:
            grid, row = self.fullwidth_2, unit.lead - FULL_WIDTH_2_LEAD.start
        column = trail_column(unit.trail) if unit.trail is not None else None
        if column is None:
            return BLANK_FULL_WIDTH
        return grid[row][column]


def _open_sheet(source: AssetSource, name: str) -> Image.Image:
    try:
        with source.open(name) as stream:
            image = Image.open(stream)
            image.load()
    except (OSError, UnidentifiedImageError) as exc:
        raise FontAssetError(f"unable to load font sheet {name!r}: {exc}") from exc
    LOGGER.debug("decoded font sheet %s (%dx%d, mode %s)", name, *image.size, image.mode)
    return image


def load_glyph_table(source: AssetSource, variant: FontVariant) -> GlyphTable:
    """Decode both sheets of ``variant`` from ``source`` into a :class:`GlyphTable`."""

    halfwidth = build_halfwidth_table(_open_sheet(source, variant.halfwidth_asset))
    fullwidth_1, fullwidth_2 = build_fullwidth_tables(
        _open_sheet(source, variant.fullwidth_asset)
    )
    LOGGER.info("loaded %s font", variant.name)
    return GlyphTable(halfwidth, fullwidth_1, fullwidth_2)


__all__ = [
    "AssetSource",
    "DirectoryAssetSource",
    "FontAssetError",
    "GlyphTable",
    "LOGICAL_COLUMNS",
    "MemoryAssetSource",
    "PackageAssetSource",
    "build_fullwidth_tables",
    "build_halfwidth_table",
    "load_glyph_table",
]
