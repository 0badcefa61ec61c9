"""Report assembly and JSON output."""

import json
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .font_io import FontHandle
from .models import MetricsReport, Segment, SegmentMetric, ShapedRun


def build_report(
    font: FontHandle,
    text: str,
    run: ShapedRun,
    lines: List[Segment],
    words: List[Segment],
    font_size: float,
    include_glyphs: bool = False,
) -> MetricsReport:
    """Combine font metrics, run width and segments into one report.

    Vertical metrics stay in 1000-unit space; only widths and line height
    depend on font_size.
    """
    metrics = font.font_metrics()
    size_scale = font_size / 1000.0
    return MetricsReport(
        name=font.postscript_name,
        text=text,
        total_width=run.advance_width * size_scale,
        line_gap=metrics.line_gap,
        ascender=metrics.ascender,
        descender=metrics.descender,
        x_height=metrics.x_height,
        cap_height=metrics.cap_height,
        units_per_em=font.units_per_em,
        font_size=font_size,
        line_height=metrics.line_height(font_size),
        lines=tuple(SegmentMetric.from_segment(s, include_glyphs) for s in lines),
        words=tuple(SegmentMetric.from_segment(s, include_glyphs) for s in words),
    )


def to_json(report: MetricsReport, indent: Optional[int] = None) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)


def write_report(
    report: MetricsReport,
    target: str = "stdout",
    indent: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the report to stdout (no trailing newline) or overwrite a file."""
    payload = to_json(report, indent)
    if target == "stdout":
        out = stream or sys.stdout
        out.write(payload)
        out.flush()
        return
    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(payload)
