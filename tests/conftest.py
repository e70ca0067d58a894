"""Pytest configuration and synthetic Misaki font sheets."""
from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Iterable

import pytest
from PIL import Image

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

import sitecustomize  # noqa: F401,E402  # Ensure src/ is on sys.path via sitecustomize hook.

from termbanner.font_sheet import GlyphTable, MemoryAssetSource, load_glyph_table  # noqa: E402
from termbanner.fonts import FONT_VARIANTS  # noqa: E402

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

HALFWIDTH_SHEET_SIZE = (64, 128)
FULLWIDTH_SHEET_SIZE = (752, 752)

# 3x7 bar leaving a one pixel gutter on the right and bottom of each 4x8 cell.
HALFWIDTH_BAR = [(x, y) for y in range(7) for x in range(3)]
# Hollow 8x8 square used for full-width glyphs.
FULLWIDTH_RING = [
    (x, y) for y in range(8) for x in range(8) if x in (0, 7) or y in (0, 7)
]
# か (0x82A9): logical row 1, trail column 105, i.e. sheet row 3, column 10.
KA_SHEET_CELL = (3, 10)


def blank_sheet(size: tuple[int, int]) -> Image.Image:
    return Image.new("RGB", size, WHITE)


def draw_cell(
    image: Image.Image,
    column: int,
    row: int,
    cell_size: tuple[int, int],
    pixels: Iterable[tuple[int, int]],
    colour: tuple[int, int, int] = BLACK,
) -> None:
    width, height = cell_size
    for x, y in pixels:
        image.putpixel((column * width + x, row * height + y), colour)


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def halfwidth_sheet(codes: Iterable[int]) -> Image.Image:
    """Return a half-width sheet with :data:`HALFWIDTH_BAR` drawn for ``codes``."""

    image = blank_sheet(HALFWIDTH_SHEET_SIZE)
    for code in codes:
        draw_cell(image, code % 16, code // 16, (4, 8), HALFWIDTH_BAR)
    return image


def fullwidth_sheet(cells: Iterable[tuple[int, int]]) -> Image.Image:
    """Return a full-width sheet with :data:`FULLWIDTH_RING` at ``(sheet_row, column)`` cells."""

    image = blank_sheet(FULLWIDTH_SHEET_SIZE)
    for row, column in cells:
        draw_cell(image, column, row, (8, 8), FULLWIDTH_RING)
    return image


@pytest.fixture(scope="session")
def synthetic_payloads() -> dict[str, bytes]:
    """PNG payloads for every bundled asset name.

    Printable ASCII and the SUB fallback byte get a bar, か gets a ring.  The
    mincho sheet omits か so tests can tell the two variants apart.
    """

    barred = [0x1A, *range(0x21, 0x7F)]
    gothic = fullwidth_sheet([KA_SHEET_CELL])
    mincho = fullwidth_sheet([])
    halfwidth_name = FONT_VARIANTS["gothic"].halfwidth_asset
    return {
        halfwidth_name: png_bytes(halfwidth_sheet(barred)),
        FONT_VARIANTS["gothic"].fullwidth_asset: png_bytes(gothic),
        FONT_VARIANTS["mincho"].fullwidth_asset: png_bytes(mincho),
    }


@pytest.fixture
def synthetic_assets(synthetic_payloads: dict[str, bytes]) -> MemoryAssetSource:
    return MemoryAssetSource(synthetic_payloads)


@pytest.fixture(scope="session")
def gothic_table(synthetic_payloads: dict[str, bytes]) -> GlyphTable:
    return load_glyph_table(MemoryAssetSource(synthetic_payloads), FONT_VARIANTS["gothic"])
