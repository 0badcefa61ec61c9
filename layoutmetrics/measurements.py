"""Vertical metric measurement with glyph-outline fallbacks."""

from typing import TYPE_CHECKING

from . import config
from . import font_io

if TYPE_CHECKING:
    from fontTools.ttLib import TTFont

CAP_HEIGHT_GLYPHS = config.CAP_HEIGHT_GLYPHS
U_LOWER_X = config.U_LOWER_X

_codepoint_bounds = font_io._codepoint_bounds


def _os2_value(font: "TTFont", attr: str) -> int:
    if "OS/2" not in font:
        return 0
    return int(getattr(font["OS/2"], attr, 0) or 0)


def cap_height(font: "TTFont", ascent: int) -> int:
    # Prefer OS/2.sCapHeight
    cap = _os2_value(font, "sCapHeight")
    if cap > 0:
        return cap
    # Fallback measure from 'H' or 'I'
    for cp in CAP_HEIGHT_GLYPHS:
        b = _codepoint_bounds(font, cp)
        if b:
            _, _, _, yMax = b
            return int(round(yMax))
    # Last resort: fonts without capitals report the ascent
    return ascent


def x_height(font: "TTFont") -> int:
    # Prefer OS/2.sxHeight
    xh = _os2_value(font, "sxHeight")
    if xh > 0:
        return xh
    # Fallback: measure 'x'
    b = _codepoint_bounds(font, U_LOWER_X)
    if b:
        return int(round(b[3]))
    return 0
