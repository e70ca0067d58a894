#!/usr/bin/env python3
"""Copy the Misaki font sheets out of a downloaded archive into the package assets."""
from __future__ import annotations

import argparse
import sys
import zipfile
from pathlib import Path, PurePosixPath
from typing import Sequence

# Ensure the termbanner package is importable when running the script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from termbanner.font_sheet import (  # noqa: E402  (import after sys.path tweak)
    FontAssetError,
    MemoryAssetSource,
    load_glyph_table,
)
from termbanner.fonts import FONT_VARIANTS  # noqa: E402

DEFAULT_TARGET = SRC_PATH / "termbanner" / "assets"


def required_assets() -> list[str]:
    names: set[str] = set()
    for variant in FONT_VARIANTS.values():
        names.update((variant.halfwidth_asset, variant.fullwidth_asset))
    return sorted(names)


def extract_assets(archive: Path) -> dict[str, bytes]:
    """Return the required sheets found anywhere inside ``archive``."""

    wanted = set(required_assets())
    found: dict[str, bytes] = {}
    with zipfile.ZipFile(archive) as bundle:
        for member in bundle.namelist():
            name = PurePosixPath(member).name
            if name in wanted and name not in found:
                found[name] = bundle.read(member)
    missing = wanted - set(found)
    if missing:
        raise FontAssetError(f"{archive} lacks {', '.join(sorted(missing))}")
    return found


def _parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("archive", type=Path, help="Misaki PNG font archive (.zip)")
    parser.add_argument(
        "--target",
        type=Path,
        default=DEFAULT_TARGET,
        help="Directory receiving the PNG sheets",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_arguments(argv if argv is not None else sys.argv[1:])
    try:
        payloads = extract_assets(args.archive)
        source = MemoryAssetSource(payloads)
        for variant in FONT_VARIANTS.values():
            load_glyph_table(source, variant)
    except (FontAssetError, zipfile.BadZipFile, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    args.target.mkdir(parents=True, exist_ok=True)
    for name, payload in sorted(payloads.items()):
        (args.target / name).write_bytes(payload)
        print(f"installed {args.target / name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
