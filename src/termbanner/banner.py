"""Banner text prepared for layout and painting."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .sjis import EncodedLine, encode_line


@dataclass(frozen=True)
class Banner:
    """Ordered, immutable sequence of encoded banner lines."""

    lines: tuple[EncodedLine, ...]

    @classmethod
    def from_text(cls, lines: Iterable[str]) -> "Banner":
        return cls(tuple(encode_line(line) for line in lines))

    def __iter__(self) -> Iterator[EncodedLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def substitutions(self) -> int:
        return sum(line.substitutions for line in self.lines)

    def grid_widths(self) -> tuple[int, ...]:
        return tuple(line.grid_width for line in self.lines)


__all__ = ["Banner"]
