"""Text shaping through HarfBuzz with a fixed feature configuration."""

from typing import Dict, List, Sequence, Tuple

import uharfbuzz as hb

from .config import ShapingConfig
from .font_io import FontHandle
from .models import Glyph, Position, ShapedRun


def _hb_font(font: FontHandle) -> hb.Font:
    blob = hb.Blob.from_file_path(str(font.path))
    face = hb.Face(blob)
    hb_font = hb.Font(face)
    # Positions come back in design units
    hb_font.scale = (font.units_per_em, font.units_per_em)
    return hb_font


def _cluster_codepoints(
    clusters: Sequence[int], codepoints: Sequence[int]
) -> List[Tuple[int, ...]]:
    """Source codepoints for each glyph, given its cluster index.

    A cluster's codepoints go to its first glyph; further glyphs in the
    same cluster get an empty sequence.
    """
    starts = sorted(set(clusters))
    ends: Dict[int, int] = {}
    for i, start in enumerate(starts):
        ends[start] = starts[i + 1] if i + 1 < len(starts) else len(codepoints)

    seen = set()
    result: List[Tuple[int, ...]] = []
    for cluster in clusters:
        if cluster in seen:
            result.append(())
            continue
        seen.add(cluster)
        result.append(tuple(codepoints[cluster : ends[cluster]]))
    return result


def shape(font: FontHandle, text: str, shaping: ShapingConfig) -> ShapedRun:
    """Shape text and rescale every position to the 1000-unit em."""
    codepoints = [ord(c) for c in text]
    if not codepoints:
        return ShapedRun([], [], 0.0)

    buf = hb.Buffer()
    buf.add_codepoints(codepoints)
    buf.guess_segment_properties()
    # One cluster per input character, so marks keep their own codepoint
    buf.cluster_level = hb.BufferClusterLevel.MONOTONE_CHARACTERS
    buf.direction = shaping.direction

    hb.shape(_hb_font(font), buf, dict(shaping.features))

    infos = buf.glyph_infos
    cluster_cps = _cluster_codepoints([info.cluster for info in infos], codepoints)

    scale = font.scale
    glyphs: List[Glyph] = []
    positions: List[Position] = []
    for info, pos, cps in zip(infos, buf.glyph_positions, cluster_cps):
        glyph_id = info.codepoint  # holds the glyph id after shaping
        glyphs.append(Glyph(glyph_id, cps))
        positions.append(
            Position(
                x_advance=pos.x_advance * scale,
                y_advance=pos.y_advance * scale,
                x_offset=pos.x_offset * scale,
                y_offset=pos.y_offset * scale,
                advance_width=font.advance_width(glyph_id) * scale,
            )
        )

    advance_width = sum(p.x_advance for p in positions)
    return ShapedRun(glyphs, positions, advance_width)
