"""CLI parsing and main orchestration."""

import argparse
import sys
import time
from typing import List, Optional

from rich.markup import escape

from . import config
from . import console as cs
from . import font_io
from . import report
from . import segmentation
from . import shaping
from . import validation
from .errors import ArgumentError, LayoutMetricsError
from .models import LayoutRequest, MetricsReport

console = cs.get_console()
Verbosity = cs.Verbosity

USAGE = """\
layout-metrics [-f] <src> <font> [<fontsize>] [<out>]

    <src> ......... src string
    <font> ........ path to font file [.ttf or .otf]
    <fontsize> .... fontsize in pt [defaults to 12pt]
    <out> ......... file to write to [if none stdout]
    -f ............ interprets <src> as path to file if present
    -- ............ ends options, for a <src> that starts with "-"
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        cs.StatusIndicator("error").add_message(escape(message)).emit(console)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="layout-metrics",
        usage=USAGE,
        description="Measure line, word and glyph widths of text shaped with a font",
        epilog="Supported formats: TTF, OTF",
    )
    parser.add_argument("src", help="Source string, or path to a file with -f")
    parser.add_argument("font", help="Path to a .ttf or .otf font")
    parser.add_argument(
        "fontsize",
        nargs="?",
        type=float,
        default=None,
        help="Font size in pt (default: 12)",
    )
    parser.add_argument(
        "out", nargs="?", default=None, help="Output file (default: stdout)"
    )
    parser.add_argument(
        "-f",
        "--file",
        action="store_true",
        help="Interpret <src> as a path to a file holding the source text",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--glyphs",
        action="store_true",
        help="Include glyph ids and per-glyph widths for every line and word",
    )
    output.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="Pretty-print JSON with N spaces (default: compact)",
    )

    shaping_opts = parser.add_argument_group("shaping")
    shaping_opts.add_argument(
        "--decode",
        choices=config.DECODE_MODES,
        default=config.DECODE_HEX,
        help="How a multi-codepoint glyph becomes text: 'hex' reads the joined "
        "hex digits as one code point, 'chars' joins each character (default: hex)",
    )
    shaping_opts.add_argument(
        "--enable-feature",
        action="append",
        metavar="TAG",
        help="Re-enable a disabled OpenType feature (e.g. kern). Can be used multiple times.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity level. Use -v for VERBOSE, -vv for DEBUG level output",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def layout_config(args: argparse.Namespace) -> config.LayoutConfig:
    return config.LayoutConfig(
        shaping=config.ShapingConfig().with_enabled(args.enable_feature or []),
        decode_mode=args.decode,
        indent=args.indent,
        include_glyphs=args.glyphs,
    )


def run(
    request: LayoutRequest,
    cfg: Optional[config.LayoutConfig] = None,
    verbosity: Verbosity = Verbosity.BRIEF,
) -> MetricsReport:
    """Load, shape, segment and assemble the report for one request."""
    cfg = cfg or config.LayoutConfig()
    with font_io.open_font(request.font_path) as font:
        shaped = shaping.shape(font, request.source_text, cfg.shaping)
        size_scale = request.font_size / 1000.0
        lines, words = segmentation.segment(shaped, font, size_scale, cfg.decode_mode)
        if verbosity >= Verbosity.DEBUG:
            cs.StatusIndicator("debug").add_message(
                f"{cs.fmt_count(len(shaped))} glyph(s), {cs.fmt_count(len(lines))} line(s), "
                f"{cs.fmt_count(len(words))} word(s)"
            ).emit(console)
        return report.build_report(
            font,
            request.source_text,
            shaped,
            lines,
            words,
            request.font_size,
            include_glyphs=cfg.include_glyphs,
        )


def main(argv: Optional[List[str]] = None) -> None:
    start_time = time.time()
    args = parse_args(argv)
    verbosity = Verbosity.from_count(args.verbose)
    validation.warn_unusual(args)

    try:
        request = validation.resolve_request(args)
        if verbosity >= Verbosity.VERBOSE:
            source = f"file {args.src}" if request.source_is_file else repr(request.source_text)
            cs.StatusIndicator("info").add_file(request.font_path).add_item(
                f"size: {request.font_size:g}pt"
            ).add_item(f"out: {escape(request.output_target)}").add_item(
                f"src: {escape(source)}"
            ).emit(console)
        cfg = layout_config(args)
        metrics_report = run(request, cfg, verbosity)
    except LayoutMetricsError as e:
        if isinstance(e, ArgumentError):
            cs.emit(escape(USAGE), console=console)
        cs.StatusIndicator("error").add_message(escape(str(e))).emit(console)
        sys.exit(1)

    report.write_report(metrics_report, request.output_target, indent=cfg.indent)
    if not request.to_stdout:
        cs.StatusIndicator("info").add_message("Report written to").add_file(
            request.output_target
        ).emit(console)
    cs.StatusIndicator("success").add_message("Job done").add_item(
        f"[dim]Total time: [bold]{time.time() - start_time:.1f}[/bold]s[/dim]"
    ).emit(console)
