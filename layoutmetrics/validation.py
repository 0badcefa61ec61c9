"""Argument validation and request resolution."""

import argparse
import math
from pathlib import Path

from . import config
from . import console as cs
from .errors import ArgumentError, FontFormatError
from .font_io import is_supported_font_path
from .models import LayoutRequest

console = cs.get_console()


def load_source(path: str) -> str:
    p = Path(path)
    if not p.is_file():
        raise ArgumentError(f"could not identify src - no such file: {path}")
    with open(p, "r", encoding="utf-8") as f:
        return f.read()


def validate_font_size(size: float) -> float:
    if not math.isfinite(size) or size <= 0:
        raise ArgumentError(f"font size must be a positive number, got {size}")
    return float(size)


def validate_font_path(path: str) -> str:
    if not is_supported_font_path(path):
        raise FontFormatError(
            f"wrong font file format: {path} (expected "
            f"{' or '.join(config.SUPPORTED_EXTENSIONS)})"
        )
    if not Path(path).is_file():
        raise ArgumentError(f"could not identify font - no such file: {path}")
    return path


def resolve_request(args: argparse.Namespace) -> LayoutRequest:
    """Turn parsed arguments into an immutable LayoutRequest."""
    if args.src is None:
        raise ArgumentError("unparsable arguments - could not identify src")
    if args.font is None:
        raise ArgumentError("unparsable arguments - could not identify font")

    text = load_source(args.src) if args.file else args.src
    font_size = validate_font_size(
        config.DEFAULT_FONT_SIZE if args.fontsize is None else args.fontsize
    )
    font_path = validate_font_path(args.font)
    return LayoutRequest(
        source_text=text,
        font_path=font_path,
        font_size=font_size,
        output_target=args.out or "stdout",
        source_is_file=bool(args.file),
    )


def warn_unusual(args: argparse.Namespace) -> None:
    unknown = [
        tag for tag in (args.enable_feature or []) if tag not in config.DISABLED_FEATURES
    ]
    if unknown:
        cs.StatusIndicator("warning").add_message(
            f"--enable-feature {', '.join(unknown)}: not in the default disabled set"
        ).emit(console)
    if args.enable_feature:
        cs.StatusIndicator("warning").add_message(
            "Enabled shaping features may merge or reorder glyphs"
        ).add_item("Segment text can then differ from the source text").emit(console)
