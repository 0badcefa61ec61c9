from typing import Dict, Optional

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

UPM = 2048

# advance, outline height (design units)
GLYPHS: Dict[str, tuple] = {
    ".notdef": (1024, 1408),
    "space": (512, 0),
    "uni000A": (0, 0),
    "H": (1024, 1408),
    "a": (1024, 1024),
    "b": (1024, 1536),
    "d": (1024, 1536),
    "e": (1024, 1024),
    "h": (1024, 1536),
    "i": (512, 1408),
    "l": (512, 1536),
    "o": (1024, 1024),
    "r": (1024, 1024),
    "t": (512, 1280),
    "w": (1536, 1024),
    "x": (1024, 1024),
}


def _rect(width: int, height: int):
    pen = TTGlyphPen(None)
    if width and height:
        pen.moveTo((0, 0))
        pen.lineTo((0, height))
        pen.lineTo((width, height))
        pen.lineTo((width, 0))
        pen.closePath()
    return pen.glyph()


def build_font(
    path,
    map_line_feed: bool = True,
    os2_heights: bool = True,
    ps_name: str = "LayoutTest-Regular",
) -> str:
    glyph_order = list(GLYPHS)
    cmap: Dict[int, str] = {0x20: "space"}
    if map_line_feed:
        cmap[0x0A] = "uni000A"
    for name in glyph_order:
        if len(name) == 1:
            cmap[ord(name)] = name

    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf({name: _rect(w, h) for name, (w, h) in GLYPHS.items()})
    fb.setupMaxp()
    fb.setupHorizontalMetrics({name: (w, 0) for name, (w, _h) in GLYPHS.items()})
    fb.setupHorizontalHeader(ascent=1536, descent=-512, lineGap=256)
    fb.setupNameTable(
        {"familyName": "Layout Test", "styleName": "Regular", "psName": ps_name}
    )
    os2: Dict[str, int] = dict(
        sTypoAscender=1536, sTypoDescender=-512, usWinAscent=1536, usWinDescent=512
    )
    if os2_heights:
        os2.update(sxHeight=1024, sCapHeight=1408)
    else:
        os2.update(sxHeight=0, sCapHeight=0)
    fb.setupOS2(**os2)
    fb.setupPost()
    fb.save(str(path))
    return str(path)


@pytest.fixture(scope="session")
def font_path(tmp_path_factory) -> str:
    return build_font(tmp_path_factory.mktemp("fonts") / "LayoutTest.ttf")


@pytest.fixture(scope="session")
def font_path_no_lf(tmp_path_factory) -> str:
    return build_font(
        tmp_path_factory.mktemp("fonts") / "NoLineFeed.ttf", map_line_feed=False
    )


@pytest.fixture(scope="session")
def font_path_no_heights(tmp_path_factory) -> str:
    return build_font(
        tmp_path_factory.mktemp("fonts") / "NoHeights.otf", os2_heights=False
    )


class FakeFont:
    """Minimal stand-in exposing the cmap lookups segmentation uses."""

    def __init__(self, cmap: Optional[Dict[int, int]] = None):
        self.cmap = {0x0A: 1, 0x20: 2} if cmap is None else cmap

    def is_mapped(self, codepoint: int) -> bool:
        return codepoint in self.cmap

    def glyph_for_codepoint(self, codepoint: int) -> int:
        return self.cmap.get(codepoint, 0)
