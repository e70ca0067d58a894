"""Event loop that keeps a banner painted on a display surface."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Mapping

from ..banner import Banner
from ..font_sheet import GlyphTable
from ..layout import Layout
from ..paint import DisplaySurface, SurfaceEvent, render_banner

LOGGER = logging.getLogger(__name__)


class AppState(Enum):
    """Phases of :class:`BannerApp`."""

    RENDERING = auto()
    IDLE = auto()
    RESIZED = auto()
    TERMINATED = auto()


@dataclass
class BannerApp:
    """State machine that repaints on resize and stops on a quit key."""

    surface: DisplaySurface
    banner: Banner
    table: GlyphTable
    state: AppState = field(init=False, default=AppState.RENDERING)
    layout: Layout | None = field(init=False, default=None)
    repaints: int = field(init=False, default=0)

    _TRANSITIONS: ClassVar[Mapping[SurfaceEvent, AppState]] = {
        SurfaceEvent.RESIZE: AppState.RESIZED,
        SurfaceEvent.QUIT: AppState.TERMINATED,
        SurfaceEvent.KEY: AppState.IDLE,
    }

    def render(self) -> Layout:
        """Repaint from scratch and flush; leaves the app idle."""

        self.layout = render_banner(self.surface, self.banner, self.table)
        self.repaints += 1
        self.surface.show()
        self.state = AppState.IDLE
        return self.layout

    def handle_event(self, event: SurfaceEvent) -> AppState:
        if self.state is AppState.TERMINATED:
            return self.state
        self.state = self._TRANSITIONS[event]
        if self.state is AppState.RESIZED:
            LOGGER.debug("surface resized to %dx%d", *self.surface.size())
            self.state = AppState.RENDERING
            self.render()
            self.surface.sync()
        return self.state

    def run(self) -> AppState:
        """Paint the banner and process events until a quit key arrives."""

        if self.state is AppState.RENDERING:
            self.render()
        while self.state is not AppState.TERMINATED:
            self.handle_event(self.surface.poll_event())
        return self.state


__all__ = ["AppState", "BannerApp"]
