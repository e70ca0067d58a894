"""Runtime modules exposed by the termbanner package."""
from __future__ import annotations

from . import app as _app
from . import cli as _cli
from . import console_ui as _console_ui
from . import text_surface as _text_surface

_modules = [_app, _cli, _console_ui, _text_surface]

__all__: list[str] = []
_seen: set[str] = set()
for _module in _modules:
    for _name in _module.__all__:
        if _name not in _seen:
            _seen.add(_name)
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)


def __dir__() -> list[str]:
    return sorted(__all__)
