"""Bundled Misaki font variants selectable from the command line."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping


class FontSelectionError(ValueError):
    """Raised when a font name does not match a bundled variant."""


@dataclass(frozen=True)
class FontVariant:
    """Asset names for the half-width and full-width sheets of one font."""

    name: str
    halfwidth_asset: str
    fullwidth_asset: str


_HALFWIDTH_SHEET: Final[str] = "misaki_gothic_2nd_4x8.png"

FONT_VARIANTS: Final[Mapping[str, FontVariant]] = {
    "mincho": FontVariant("mincho", _HALFWIDTH_SHEET, "misaki_mincho.png"),
    "gothic": FontVariant("gothic", _HALFWIDTH_SHEET, "misaki_gothic_2nd.png"),
}

DEFAULT_FONT: Final[str] = "mincho"


def resolve_font_variant(name: str) -> FontVariant:
    """Return the :class:`FontVariant` registered under ``name``."""

    variant = FONT_VARIANTS.get(name)
    if variant is None:
        choices = ", ".join(sorted(FONT_VARIANTS))
        raise FontSelectionError(f"unknown font {name!r} (expected one of: {choices})")
    return variant


__all__ = [
    "DEFAULT_FONT",
    "FONT_VARIANTS",
    "FontSelectionError",
    "FontVariant",
    "resolve_font_variant",
]
