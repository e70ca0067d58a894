from __future__ import annotations

import warnings
from importlib import resources
from pathlib import Path

import pytest
from PIL import Image

from conftest import (
    FULLWIDTH_RING,
    FULLWIDTH_SHEET_SIZE,
    HALFWIDTH_SHEET_SIZE,
    blank_sheet,
    draw_cell,
    png_bytes,
)
from termbanner.font_sheet import (
    LOGICAL_COLUMNS,
    DirectoryAssetSource,
    FontAssetError,
    GlyphTable,
    MemoryAssetSource,
    PackageAssetSource,
    build_fullwidth_tables,
    build_halfwidth_table,
    load_glyph_table,
)
from termbanner.fonts import FONT_VARIANTS
from termbanner.glyphs import BLANK_FULL_WIDTH, Glyph, bit_index
from termbanner.sjis import CharClass, CodeUnit, encode_line


def _single_pixel_fullwidth_sheet() -> Image.Image:
    image = blank_sheet(FULLWIDTH_SHEET_SIZE)
    # First block, odd JIS row: sheet row 2, column 5, pixel (6, 1).
    draw_cell(image, 5, 2, (8, 8), [(6, 1)])
    # First block, even JIS row: sheet row 3, column 0, pixel (0, 7).
    draw_cell(image, 0, 3, (8, 8), [(0, 7)])
    # First block, odd row beyond the 0x7F gap: sheet row 0, column 63.
    draw_cell(image, 63, 0, (8, 8), [(3, 3)])
    # Second block begins directly below the first: sheet row 62, column 0.
    draw_cell(image, 0, 62, (8, 8), [(7, 0)])
    # Same position in the first block carries a different glyph.
    draw_cell(image, 0, 0, (8, 8), FULLWIDTH_RING)
    return image


@pytest.fixture(scope="module")
def fullwidth_tables():
    return build_fullwidth_tables(_single_pixel_fullwidth_sheet())


def test_halfwidth_cell_maps_to_byte_value() -> None:
    image = blank_sheet(HALFWIDTH_SHEET_SIZE)
    draw_cell(image, 1, 4, (4, 8), [(2, 5)])

    table = build_halfwidth_table(image)

    assert len(table) == 256
    assert table[0x41] == Glyph(4, 8, 1 << bit_index(2, 5, 4))
    assert all(glyph.is_blank for code, glyph in enumerate(table) if code != 0x41)


def test_only_pure_black_counts_as_ink() -> None:
    image = blank_sheet(HALFWIDTH_SHEET_SIZE)
    draw_cell(image, 0, 0, (4, 8), [(0, 0)], colour=(1, 1, 1))
    draw_cell(image, 1, 0, (4, 8), [(0, 0)], colour=(0, 0, 0))

    table = build_halfwidth_table(image)

    assert table[0x00].is_blank
    assert table[0x01].pixel(0, 0)


def test_palette_and_greyscale_sheets_are_accepted() -> None:
    image = blank_sheet(HALFWIDTH_SHEET_SIZE)
    draw_cell(image, 15, 15, (4, 8), [(3, 7)])

    for mode in ("L", "P", "1"):
        table = build_halfwidth_table(image.convert(mode))
        assert table[0xFF] == Glyph(4, 8, 1 << 31), mode


def test_fullwidth_row_pairs_fold_into_logical_rows(fullwidth_tables) -> None:
    first, second = fullwidth_tables

    assert len(first) == 31
    assert len(second) == 16
    assert all(len(row) == LOGICAL_COLUMNS == 189 for row in first + second)
    assert first[1][5] == Glyph(8, 8, 1 << bit_index(6, 1, 8))
    assert first[1][95] == Glyph(8, 8, 1 << bit_index(0, 7, 8))
    assert first[0][63].pixel(3, 3)
    assert second[0][0] == Glyph(8, 8, 1 << bit_index(7, 0, 8))
    assert first[0][0] == Glyph.from_pixels(8, 8, FULLWIDTH_RING)
    assert first[0][94] is BLANK_FULL_WIDTH


def test_resolve_selects_table_by_lead_range(fullwidth_tables) -> None:
    first, second = fullwidth_tables
    table = GlyphTable(build_halfwidth_table(blank_sheet(HALFWIDTH_SHEET_SIZE)), first, second)

    # 0x82 0x45 lives on sheet row 2; 0x82 0x9F starts sheet row 3.
    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_1, 0x82, 0x45, 0)).pixel(6, 1)
    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_1, 0x82, 0x9F, 0)).pixel(0, 7)
    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_1, 0x81, 0x80, 0)).pixel(3, 3)
    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_2, 0xE0, 0x40, 0)) == second[0][0]
    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_1, 0x81, 0x40, 0)) == first[0][0]
    assert second[0][0] != first[0][0]


def test_resolve_invalid_trail_is_blank(fullwidth_tables) -> None:
    first, second = fullwidth_tables
    table = GlyphTable(build_halfwidth_table(blank_sheet(HALFWIDTH_SHEET_SIZE)), first, second)

    assert table.resolve(CodeUnit(CharClass.FULL_WIDTH_1, 0x81, 0x7F, 0)) is BLANK_FULL_WIDTH


def test_undersized_sheets_are_rejected() -> None:
    with pytest.raises(FontAssetError):
        build_halfwidth_table(blank_sheet((63, 128)))
    with pytest.raises(FontAssetError):
        build_fullwidth_tables(blank_sheet((752, 744)))


def test_load_glyph_table_resolves_encoded_text(synthetic_assets) -> None:
    table = load_glyph_table(synthetic_assets, FONT_VARIANTS["gothic"])

    units = list(encode_line("Aか").code_units())
    assert table.resolve(units[0]).pixel(0, 0)
    assert table.resolve(units[1]) == Glyph.from_pixels(8, 8, FULLWIDTH_RING)


def test_variants_use_their_own_fullwidth_sheet(synthetic_assets) -> None:
    gothic = load_glyph_table(synthetic_assets, FONT_VARIANTS["gothic"])
    mincho = load_glyph_table(synthetic_assets, FONT_VARIANTS["mincho"])

    (ka,) = encode_line("か").code_units()
    assert not gothic.resolve(ka).is_blank
    assert mincho.resolve(ka).is_blank


def test_missing_asset_aborts_loading() -> None:
    source = MemoryAssetSource({})

    with pytest.raises(FontAssetError, match="misaki_gothic_2nd_4x8.png"):
        load_glyph_table(source, FONT_VARIANTS["gothic"])


def test_undecodable_asset_aborts_loading(synthetic_payloads) -> None:
    payloads = dict(synthetic_payloads)
    payloads[FONT_VARIANTS["mincho"].fullwidth_asset] = b"not a png"

    with pytest.raises(FontAssetError):
        load_glyph_table(MemoryAssetSource(payloads), FONT_VARIANTS["mincho"])


def test_directory_source_reads_sheets_from_disk(tmp_path: Path) -> None:
    image = blank_sheet(HALFWIDTH_SHEET_SIZE)
    draw_cell(image, 0, 2, (4, 8), [(1, 1)])
    (tmp_path / "sheet.png").write_bytes(png_bytes(image))

    with DirectoryAssetSource(tmp_path).open("sheet.png") as stream:
        table = build_halfwidth_table(Image.open(stream))

    assert table[0x20].pixel(1, 1)


def test_decoding_sheets_raises_no_warnings(synthetic_assets) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        table = load_glyph_table(synthetic_assets, FONT_VARIANTS["gothic"])

    assert not table.resolve(CodeUnit(CharClass.HALF_WIDTH, 0x41, None, 0)).is_blank


def _bundled_sheets_present() -> bool:
    root = resources.files("termbanner").joinpath("assets")
    return all(
        root.joinpath(name).is_file()
        for variant in FONT_VARIANTS.values()
        for name in (variant.halfwidth_asset, variant.fullwidth_asset)
    )


def test_package_source_reads_sheets_from_package_data(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, synthetic_payloads
) -> None:
    assets = tmp_path / "bannerfonts_pkgdata" / "assets"
    assets.mkdir(parents=True)
    (assets.parent / "__init__.py").write_text("", encoding="utf-8")
    for name, payload in synthetic_payloads.items():
        (assets / name).write_bytes(payload)
    monkeypatch.syspath_prepend(str(tmp_path))

    source = PackageAssetSource("bannerfonts_pkgdata")
    for variant in FONT_VARIANTS.values():
        table = load_glyph_table(source, variant)
        assert not table.resolve(CodeUnit(CharClass.HALF_WIDTH, 0x41, None, 0)).is_blank


@pytest.mark.skipif(not _bundled_sheets_present(), reason="Misaki sheets not installed")
@pytest.mark.parametrize("font", sorted(FONT_VARIANTS))
def test_bundled_sheets_load_for_every_variant(font: str) -> None:
    table = load_glyph_table(PackageAssetSource(), FONT_VARIANTS[font])

    units = list(encode_line("Aあ").code_units())
    assert all(not table.resolve(unit).is_blank for unit in units)
