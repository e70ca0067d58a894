"""Display text as a giant pixel banner in the terminal."""

from __future__ import annotations

import argparse
import curses
import logging
import shutil
import sys
from pathlib import Path
from typing import IO, Sequence

from ..banner import Banner
from ..config import (
    COLOUR_NAMES,
    BannerConfig,
    BannerConfigError,
    load_banner_config,
)
from ..font_sheet import (
    AssetSource,
    DirectoryAssetSource,
    FontAssetError,
    GlyphTable,
    PackageAssetSource,
    load_glyph_table,
)
from ..fonts import FONT_VARIANTS, FontSelectionError, resolve_font_variant
from ..layout import LayoutError
from .app import AppState, BannerApp
from .console_ui import CursesSurface, run_curses
from .text_surface import TextSurface

LOGGER = logging.getLogger(__name__)

_INSTALL_HINT = "tools/install_misaki_assets.py"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the banner CLI."""

    parser = argparse.ArgumentParser(prog="term-banner", description=__doc__)
    parser.add_argument("lines", nargs="*", help="Banner lines, one per argument")
    parser.add_argument(
        "-f",
        "--font",
        choices=sorted(FONT_VARIANTS),
        default=None,
        help="Font used for full-width characters (default: mincho)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file with a [banner] table",
    )
    parser.add_argument(
        "--font-dir",
        type=Path,
        default=None,
        help="Load font sheets from this directory instead of the bundled assets",
    )
    parser.add_argument(
        "--foreground",
        choices=sorted(COLOUR_NAMES),
        default=None,
        help="Text colour of the banner squares",
    )
    parser.add_argument(
        "--background",
        choices=sorted(COLOUR_NAMES),
        default=None,
        help="Fill colour of the banner squares",
    )
    ui_group = parser.add_mutually_exclusive_group()
    ui_group.add_argument(
        "--curses-ui",
        dest="curses_ui",
        action="store_true",
        help="Show the banner full screen until Esc, Ctrl+C or q is pressed",
    )
    ui_group.add_argument(
        "--console-ui",
        dest="curses_ui",
        action="store_false",
        help="Print the banner to standard output and exit",
    )
    parser.set_defaults(curses_ui=True)
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Columns available to --console-ui (default: terminal width)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Rows available to --console-ui (default: terminal height)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> BannerConfig:
    """Merge the optional config file with command-line overrides."""

    config = BannerConfig()
    if args.config is not None:
        config = load_banner_config(args.config)
    return config.with_overrides(
        font=args.font, foreground=args.foreground, background=args.background
    )


def _asset_source(args: argparse.Namespace) -> AssetSource:
    if args.font_dir is not None:
        return DirectoryAssetSource(args.font_dir)
    return PackageAssetSource()


def run_console(
    banner: Banner,
    table: GlyphTable,
    *,
    width: int | None = None,
    height: int | None = None,
    output_stream: IO[str] = sys.stdout,
) -> AppState:
    """Render ``banner`` once into a text grid and write it to ``output_stream``."""

    fallback = shutil.get_terminal_size()
    surface = TextSurface(width or fallback.columns, height or fallback.lines)
    try:
        state = BannerApp(surface, banner, table).run()
    finally:
        surface.close()
    output_stream.write(surface.render_text() + "\n")
    return state


def run_interactive(banner: Banner, table: GlyphTable, config: BannerConfig) -> AppState:
    """Hold the terminal with the banner until a quit key is pressed."""

    def _run(surface: CursesSurface) -> AppState:
        return BannerApp(surface, banner, table).run()

    return run_curses(_run, foreground=config.foreground, background=config.background)


def main(
    argv: Sequence[str] | None = None,
    *,
    asset_source: AssetSource | None = None,
    output_stream: IO[str] = sys.stdout,
) -> int:
    """Entry point for the ``term-banner`` command."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = resolve_config(args)
        variant = resolve_font_variant(config.font)
    except (BannerConfigError, FontSelectionError) as exc:
        raise SystemExit(f"term-banner: {exc}") from exc

    if not args.lines:
        return 0

    source = asset_source if asset_source is not None else _asset_source(args)
    try:
        table = load_glyph_table(source, variant)
    except FontAssetError as exc:
        hint = ""
        if isinstance(source, PackageAssetSource):
            hint = f" (install the sheets with {_INSTALL_HINT} or pass --font-dir)"
        raise SystemExit(f"term-banner: {exc}{hint}") from exc

    banner = Banner.from_text(args.lines)
    if banner.substitutions:
        LOGGER.info("%d unsupported characters replaced", banner.substitutions)

    try:
        if args.curses_ui:
            run_interactive(banner, table, config)
        else:
            run_console(
                banner,
                table,
                width=args.width,
                height=args.height,
                output_stream=output_stream,
            )
    except LayoutError as exc:
        raise SystemExit(f"term-banner: {exc}") from exc
    except curses.error as exc:
        raise SystemExit(f"term-banner: terminal error: {exc}") from exc
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = ["main", "parse_args", "resolve_config", "run_console", "run_interactive"]
