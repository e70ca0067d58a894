"""Curses-based display surface for the interactive banner."""

from __future__ import annotations

import curses
from typing import Callable, Final, Mapping, TypeVar

from ..paint import SurfaceEvent


__all__ = ["COLOUR_CODES", "CursesSurface", "run_curses"]

T = TypeVar("T")

COLOUR_CODES: Final[Mapping[str, int]] = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}


class CursesSurface:
    """Paint banner squares into a curses window."""

    _BANNER_PAIR = 1
    _ESCAPE_KEY = 27
    _INTERRUPT_KEY = 3  # Ctrl+C while in raw mode
    _QUIT_KEYS = frozenset({_ESCAPE_KEY, _INTERRUPT_KEY, ord("q")})

    def __init__(
        self,
        stdscr: "curses._CursesWindow",
        *,
        foreground: str = "white",
        background: str = "yellow",
    ) -> None:
        self.stdscr = stdscr
        self._closed = False
        curses.curs_set(0)
        curses.raw()
        stdscr.keypad(True)
        stdscr.nodelay(False)
        self._attrs = self._init_colours(foreground, background)

    def _init_colours(self, foreground: str, background: str) -> int:
        if not curses.has_colors():
            return curses.A_REVERSE
        curses.start_color()
        try:
            curses.use_default_colors()
            has_default = True
        except curses.error:
            has_default = False
        fg = COLOUR_CODES[foreground]
        bg = COLOUR_CODES[background]
        if not has_default:
            fg = curses.COLOR_WHITE if fg < 0 else fg
            bg = curses.COLOR_BLACK if bg < 0 else bg
        curses.init_pair(self._BANNER_PAIR, fg, bg)
        return curses.color_pair(self._BANNER_PAIR)

    def size(self) -> tuple[int, int]:
        rows, columns = self.stdscr.getmaxyx()
        return columns, rows

    def clear(self) -> None:
        self.stdscr.erase()

    def paint_cell(self, x: int, y: int) -> None:
        columns, rows = self.size()
        if not (0 <= x < columns and 0 <= y < rows):
            return
        try:
            self.stdscr.addch(y, x, " ", self._attrs)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off-screen.
            return

    def show(self) -> None:
        self.stdscr.refresh()

    def sync(self) -> None:
        self.stdscr.redrawwin()
        self.stdscr.refresh()

    def poll_event(self) -> SurfaceEvent:
        try:
            key = self.stdscr.getch()
        except KeyboardInterrupt:
            return SurfaceEvent.QUIT
        if key == curses.KEY_RESIZE:
            curses.update_lines_cols()
            return SurfaceEvent.RESIZE
        if key in self._QUIT_KEYS:
            return SurfaceEvent.QUIT
        return SurfaceEvent.KEY

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        curses.noraw()
        self.stdscr.keypad(False)


def run_curses(
    callback: Callable[[CursesSurface], T],
    *,
    foreground: str = "white",
    background: str = "yellow",
) -> T:
    """Run ``callback`` with a :class:`CursesSurface`; the terminal is restored afterwards."""

    def _main(stdscr: "curses._CursesWindow") -> T:
        surface = CursesSurface(stdscr, foreground=foreground, background=background)
        try:
            return callback(surface)
        finally:
            surface.close()

    return curses.wrapper(_main)
