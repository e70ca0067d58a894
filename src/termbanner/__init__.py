"""Pixel banners for the terminal rendered from the Misaki bitmap fonts."""
from __future__ import annotations

from . import banner as _banner
from . import config as _config
from . import font_sheet as _font_sheet
from . import fonts as _fonts
from . import glyphs as _glyphs
from . import layout as _layout
from . import paint as _paint
from . import sjis as _sjis

__version__ = "0.1.0"

_modules = [_banner, _config, _font_sheet, _fonts, _glyphs, _layout, _paint, _sjis]

__all__: list[str] = ["__version__"]
for _module in _modules:
    for _name in _module.__all__:
        if _name not in __all__:
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)
