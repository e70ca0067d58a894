"""Fixed-size bitmap glyphs shared by the font loader and the paint driver."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator


HALF_WIDTH_GLYPH_WIDTH: Final[int] = 4
HALF_WIDTH_GLYPH_HEIGHT: Final[int] = 8
FULL_WIDTH_GLYPH_WIDTH: Final[int] = 8
FULL_WIDTH_GLYPH_HEIGHT: Final[int] = 8

# Every line of the banner is one glyph tall regardless of width class.
GLYPH_HEIGHT: Final[int] = FULL_WIDTH_GLYPH_HEIGHT


def bit_index(x: int, y: int, width: int) -> int:
    """Return the bit holding pixel ``(x, y)`` in a glyph ``width`` pixels wide."""

    return y * width + x


def bit_coords(index: int, width: int) -> tuple[int, int]:
    """Inverse of :func:`bit_index`."""

    y, x = divmod(index, width)
    return x, y


@dataclass(frozen=True, slots=True)
class Glyph:
    """Ink pattern for one character cell, packed row-major into ``bits``."""

    width: int
    height: int
    bits: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("glyph dimensions must be positive")
        if self.bits < 0 or self.bits >> (self.width * self.height):
            raise ValueError(
                f"bits do not fit a {self.width}x{self.height} glyph: {self.bits:#x}"
            )

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: Iterable[tuple[int, int]]
    ) -> "Glyph":
        """Build a glyph with ink at each ``(x, y)`` in ``pixels``."""

        bits = 0
        for x, y in pixels:
            if not (0 <= x < width and 0 <= y < height):
                raise ValueError(f"pixel ({x}, {y}) outside {width}x{height} glyph")
            bits |= 1 << bit_index(x, y, width)
        return cls(width, height, bits)

    @classmethod
    def from_rows(cls, *rows: str) -> "Glyph":
        """Build a glyph from text rows where ``#`` or ``█`` marks ink."""

        if not rows:
            raise ValueError("glyph definitions must supply at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("each glyph row must contain the same number of cells")
        return cls.from_pixels(
            width,
            len(rows),
            (
                (x, y)
                for y, row in enumerate(rows)
                for x, char in enumerate(row)
                if char in {"#", "█"}
            ),
        )

    @property
    def is_blank(self) -> bool:
        return self.bits == 0

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} glyph")
        return bool(self.bits >> bit_index(x, y, self.width) & 1)

    def iter_ink(self) -> Iterator[tuple[int, int]]:
        """Yield ``(x, y)`` for every set bit in row-major order."""

        bits = self.bits
        index = 0
        while bits:
            if bits & 1:
                yield bit_coords(index, self.width)
            bits >>= 1
            index += 1

    def to_rows(self) -> tuple[str, ...]:
        return tuple(
            "".join("#" if self.pixel(x, y) else "." for x in range(self.width))
            for y in range(self.height)
        )


BLANK_HALF_WIDTH: Final[Glyph] = Glyph(HALF_WIDTH_GLYPH_WIDTH, HALF_WIDTH_GLYPH_HEIGHT)
BLANK_FULL_WIDTH: Final[Glyph] = Glyph(FULL_WIDTH_GLYPH_WIDTH, FULL_WIDTH_GLYPH_HEIGHT)


__all__ = [
    "BLANK_FULL_WIDTH",
    "BLANK_HALF_WIDTH",
    "FULL_WIDTH_GLYPH_HEIGHT",
    "FULL_WIDTH_GLYPH_WIDTH",
    "GLYPH_HEIGHT",
    "Glyph",
    "HALF_WIDTH_GLYPH_HEIGHT",
    "HALF_WIDTH_GLYPH_WIDTH",
    "bit_coords",
    "bit_index",
]
