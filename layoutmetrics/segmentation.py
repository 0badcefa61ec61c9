"""Split a shaped run into line and word segments.

One left-to-right pass keeps two accumulators, the current line and the
current word. A line-feed glyph closes the line; a line-feed or space glyph
closes the word. Separator glyphs are never added to a segment. The open
accumulators are closed after the pass, so there is always at least one
line and one word, and doubled separators yield empty segments.
"""

from typing import Iterator, List, Sequence, Tuple

from . import config
from .errors import DecodeError
from .font_io import FontHandle
from .models import Glyph, Segment, ShapedRun

LINE = "line"
WORD = "word"


def reconstruct_text(codepoints: Sequence[int], mode: str = config.DECODE_HEX) -> str:
    """Display text for one glyph's codepoint sequence.

    In hex mode the hex digits of every codepoint are concatenated and read
    as a single scalar value, so [0x66, 0x69] becomes U+6669 rather than
    "fi". Chars mode joins the character of each codepoint.
    """
    if mode == config.DECODE_CHARS:
        return "".join(chr(cp) for cp in codepoints)
    if mode != config.DECODE_HEX:
        raise ValueError(f"unknown decode mode: {mode}")
    if not codepoints:
        return ""
    value = int("".join(format(cp, "x") for cp in codepoints), 16)
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        raise DecodeError(
            f"codepoints {[hex(cp) for cp in codepoints]} combine to invalid "
            f"code point {value:#x}"
        )
    return chr(value)


class SeparatorMatcher:
    """Decides whether a glyph is the font's glyph for a separator codepoint."""

    def __init__(self, font: FontHandle, codepoint: int):
        self.codepoint = codepoint
        self.glyph_id = font.glyph_for_codepoint(codepoint)
        self.mapped = font.is_mapped(codepoint)

    def __call__(self, glyph: Glyph) -> bool:
        if glyph.id != self.glyph_id:
            return False
        # An unmapped separator shares .notdef with every missing character
        return self.mapped or glyph.codepoints == (self.codepoint,)


def iter_segments(
    run: ShapedRun,
    is_newline,
    is_space,
    size_scale: float,
    decode_mode: str = config.DECODE_HEX,
) -> Iterator[Tuple[str, Segment]]:
    """Yield ("line" | "word", segment) pairs in the order they close."""
    line = Segment()
    word = Segment()
    for glyph, position in run:
        text = reconstruct_text(glyph.codepoints, decode_mode)
        width = position.advance_width * size_scale
        newline = is_newline(glyph)

        if newline:
            yield LINE, line
            line = Segment()
        else:
            line.append(glyph.id, width, text)

        if newline or is_space(glyph):
            yield WORD, word
            word = Segment()
        else:
            word.append(glyph.id, width, text)

    yield LINE, line
    yield WORD, word


def segment(
    run: ShapedRun,
    font: FontHandle,
    size_scale: float,
    decode_mode: str = config.DECODE_HEX,
) -> Tuple[List[Segment], List[Segment]]:
    """Return (lines, words) for a shaped run at the given point-size scale."""
    lines: List[Segment] = []
    words: List[Segment] = []
    is_newline = SeparatorMatcher(font, config.LINE_FEED)
    is_space = SeparatorMatcher(font, config.SPACE)
    for kind, seg in iter_segments(run, is_newline, is_space, size_scale, decode_mode):
        (lines if kind == LINE else words).append(seg)
    return lines, words
