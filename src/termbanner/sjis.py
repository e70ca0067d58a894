"""Shift_JIS (cp932) encoding and width classification for banner text."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterator, NamedTuple

from .glyphs import HALF_WIDTH_GLYPH_WIDTH

LOGGER = logging.getLogger(__name__)

ENCODING: Final[str] = "cp932"

FULL_WIDTH_1_LEAD: Final[range] = range(0x81, 0x9F + 1)
FULL_WIDTH_2_LEAD: Final[range] = range(0xE0, 0xEF + 1)
TRAIL_START: Final[int] = 0x40
TRAIL_END: Final[int] = 0xFC
# Trail bytes for even JIS rows start here; odd rows stop one byte earlier.
EVEN_ROW_TRAIL_START: Final[int] = 0x9F

# ASCII SUB, the replacement byte Shift_JIS encoders emit for unsupported characters.
FALLBACK_CHAR: Final[str] = "\x1a"
FALLBACK_BYTES: Final[bytes] = FALLBACK_CHAR.encode(ENCODING)

# NEC-selected IBM extensions (JIS rows 89-92); the font sheets leave these rows empty.
NO_GLYPH_LEAD: Final[range] = range(0xED, 0xEE + 1)


class CharClass(Enum):
    """Width class of a Shift_JIS code unit."""

    HALF_WIDTH = auto()
    FULL_WIDTH_1 = auto()
    FULL_WIDTH_2 = auto()

    @property
    def is_full_width(self) -> bool:
        return self is not CharClass.HALF_WIDTH

    @property
    def byte_length(self) -> int:
        return 2 if self.is_full_width else 1

    @property
    def grid_columns(self) -> int:
        return 2 if self.is_full_width else 1


_CLASS_BY_BYTE: Final[tuple[CharClass, ...]] = tuple(
    CharClass.FULL_WIDTH_1
    if value in FULL_WIDTH_1_LEAD
    else CharClass.FULL_WIDTH_2
    if value in FULL_WIDTH_2_LEAD
    else CharClass.HALF_WIDTH
    for value in range(256)
)


def classify_byte(value: int) -> CharClass:
    """Return the :class:`CharClass` for a unit starting with ``value``."""

    return _CLASS_BY_BYTE[int(value) & 0xFF]


def trail_column(trail: int) -> int | None:
    """Map a trail byte onto the 189-wide logical column space of the glyph tables.

    Odd JIS rows use trail bytes ``0x40-0x7E`` and ``0x80-0x9E`` (``0x7F`` is
    never a trail byte), even rows use ``0x9F-0xFC``.  Returns ``None`` for
    bytes that cannot appear as a trail.
    """

    if TRAIL_START <= trail <= 0x7E:
        return trail - TRAIL_START
    if 0x80 <= trail < EVEN_ROW_TRAIL_START:
        return trail - TRAIL_START - 1
    if EVEN_ROW_TRAIL_START <= trail <= TRAIL_END:
        return trail - TRAIL_START
    return None


class CodeUnit(NamedTuple):
    """One character of an encoded line: a single byte or a lead/trail pair."""

    char_class: CharClass
    lead: int
    trail: int | None
    offset: int


def iter_code_units(data: bytes) -> Iterator[CodeUnit]:
    """Scan ``data`` left to right, pairing each full-width lead with its trail."""

    index = 0
    length = len(data)
    while index < length:
        lead = data[index]
        char_class = classify_byte(lead)
        if not char_class.is_full_width:
            yield CodeUnit(char_class, lead, None, index)
            index += 1
            continue
        if index + 1 >= length:
            raise ValueError(
                f"lead byte {lead:#04x} at offset {index} has no trail byte"
            )
        yield CodeUnit(char_class, lead, data[index + 1], index)
        index += 2


def grid_columns(data: bytes) -> int:
    """Return the number of half-width columns ``data`` occupies."""

    return sum(unit.char_class.grid_columns for unit in iter_code_units(data))


def grid_width(data: bytes) -> int:
    """Return the width of ``data`` in glyph pixels."""

    return grid_columns(data) * HALF_WIDTH_GLYPH_WIDTH


def _encode_char(char: str) -> bytes | None:
    try:
        encoded = char.encode(ENCODING)
    except UnicodeEncodeError:
        return None
    if classify_byte(encoded[0]).byte_length != len(encoded):
        # User-defined and IBM extension rows (lead 0xF0-0xFC) classify as half-width.
        return None
    if encoded[0] in NO_GLYPH_LEAD:
        return None
    return encoded


@dataclass(frozen=True, slots=True)
class EncodedLine:
    """A line of banner text in cp932 together with its substitution count."""

    text: str
    data: bytes
    substitutions: int = 0

    @property
    def grid_columns(self) -> int:
        return grid_columns(self.data)

    @property
    def grid_width(self) -> int:
        return grid_width(self.data)

    def code_units(self) -> Iterator[CodeUnit]:
        return iter_code_units(self.data)


def encode_line(text: str) -> EncodedLine:
    """Encode ``text`` for the glyph tables, substituting unsupported characters."""

    chunks: list[bytes] = []
    substitutions = 0
    for char in text:
        encoded = _encode_char(char)
        if encoded is None:
            LOGGER.debug("substituting %r (U+%04X) with %r", char, ord(char), FALLBACK_BYTES)
            encoded = FALLBACK_BYTES
            substitutions += 1
        chunks.append(encoded)
    return EncodedLine(text=text, data=b"".join(chunks), substitutions=substitutions)


__all__ = [
    "CharClass",
    "CodeUnit",
    "ENCODING",
    "EncodedLine",
    "FALLBACK_BYTES",
    "FALLBACK_CHAR",
    "FULL_WIDTH_1_LEAD",
    "FULL_WIDTH_2_LEAD",
    "NO_GLYPH_LEAD",
    "classify_byte",
    "encode_line",
    "grid_columns",
    "grid_width",
    "iter_code_units",
    "trail_column",
]
