"""Banner configuration loaded from TOML."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final, Mapping

import tomllib

from .fonts import DEFAULT_FONT, FONT_VARIANTS


COLOUR_NAMES: Final[frozenset[str]] = frozenset(
    {"default", "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"}
)
DEFAULT_FOREGROUND: Final[str] = "white"
DEFAULT_BACKGROUND: Final[str] = "yellow"

_KNOWN_KEYS: Final[frozenset[str]] = frozenset({"font", "foreground", "background"})


class BannerConfigError(ValueError):
    """Raised when a banner configuration file fails validation."""


@dataclass(frozen=True)
class BannerConfig:
    """Font selection and banner colours."""

    font: str = DEFAULT_FONT
    foreground: str = DEFAULT_FOREGROUND
    background: str = DEFAULT_BACKGROUND

    def with_overrides(self, **overrides: str | None) -> "BannerConfig":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def load_banner_config(config_path: Path) -> BannerConfig:
    """Parse and validate the banner configuration at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except OSError as exc:
        raise BannerConfigError(f"unable to read {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise BannerConfigError(f"{config_path} is not valid TOML: {exc}") from exc

    return parse_banner_config(raw_data)


def parse_banner_config(data: Mapping[str, Any]) -> BannerConfig:
    section = data.get("banner", {})
    if not isinstance(section, Mapping):
        raise BannerConfigError("[banner] section must be a mapping")
    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise BannerConfigError(
            f"unknown [banner] keys: {', '.join(sorted(unknown))}"
        )

    font = _require_string(section, "font", DEFAULT_FONT)
    if font not in FONT_VARIANTS:
        raise BannerConfigError(
            f"font must be one of {', '.join(sorted(FONT_VARIANTS))}, received {font!r}"
        )
    foreground = _parse_colour(section, "foreground", DEFAULT_FOREGROUND)
    background = _parse_colour(section, "background", DEFAULT_BACKGROUND)
    return BannerConfig(font=font, foreground=foreground, background=background)


def _require_string(section: Mapping[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise BannerConfigError(f"{key} must be a string, received {type(value)!r}")
    return value


def _parse_colour(section: Mapping[str, Any], key: str, default: str) -> str:
    value = _require_string(section, key, default).lower()
    if value not in COLOUR_NAMES:
        raise BannerConfigError(
            f"{key} must be one of {', '.join(sorted(COLOUR_NAMES))}, received {value!r}"
        )
    return value


__all__ = [
    "BannerConfig",
    "BannerConfigError",
    "COLOUR_NAMES",
    "DEFAULT_BACKGROUND",
    "DEFAULT_FOREGROUND",
    "load_banner_config",
    "parse_banner_config",
]
