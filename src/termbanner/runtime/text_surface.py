"""In-memory display surface that renders the banner as block characters."""
from __future__ import annotations

from collections import deque
from typing import Iterable

from ..paint import SurfaceEvent

INK_CHAR = "█"
BACKGROUND_CHAR = " "


class TextSurface:
    """Fixed-size character grid used for plain console output."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        events: Iterable[SurfaceEvent] = (SurfaceEvent.QUIT,),
        ink: str = INK_CHAR,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.ink = ink
        self._events = deque(events)
        self._cells = [[BACKGROUND_CHAR] * self.width for _ in range(self.height)]
        self.painted = 0
        self.flushes = 0
        self.closed = False

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.clear()

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def clear(self) -> None:
        self._cells = [[BACKGROUND_CHAR] * self.width for _ in range(self.height)]

    def paint_cell(self, x: int, y: int) -> None:
        self.painted += 1
        if 0 <= x < self.width and 0 <= y < self.height:
            self._cells[y][x] = self.ink

    def is_filled(self, x: int, y: int) -> bool:
        return self._cells[y][x] == self.ink

    def show(self) -> None:
        self.flushes += 1

    def sync(self) -> None:
        self.flushes += 1

    def poll_event(self) -> SurfaceEvent:
        if not self._events:
            return SurfaceEvent.QUIT
        return self._events.popleft()

    def close(self) -> None:
        self.closed = True

    def render_text(self) -> str:
        """Return the grid as text, trimming trailing spaces and blank rows above and below."""

        lines = ["".join(row).rstrip() for row in self._cells]
        while lines and not lines[-1]:
            lines.pop()
        while lines and not lines[0]:
            lines.pop(0)
        return "\n".join(lines)


__all__ = ["BACKGROUND_CHAR", "INK_CHAR", "TextSurface"]
