"""Font I/O helper functions for reading font files."""

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from . import config
from .errors import FontFormatError, FontLoadError

if TYPE_CHECKING:
    from fontTools.ttLib import TTFont


def _read_ttfont(path: str):
    from fontTools.ttLib import TTFont

    return TTFont(path)


def _get_upm(font: "TTFont") -> int:
    return int(font["head"].unitsPerEm)


def _get_best_cmap(font: "TTFont") -> Dict[int, str]:
    try:
        cmap = font.getBestCmap()
        if cmap:
            return dict(cmap)
    except Exception:
        pass
    # fallback: merge all subtables
    mapping: Dict[int, str] = {}
    if "cmap" in font:
        for st in font["cmap"].tables:
            if getattr(st, "cmap", None):
                mapping.update(st.cmap)
    return mapping


def _glyph_bounds(
    font: "TTFont", glyph_name: str
) -> Optional[Tuple[float, float, float, float]]:
    glyph_set = font.getGlyphSet()
    if glyph_name not in glyph_set:
        return None
    from fontTools.pens.boundsPen import BoundsPen

    pen = BoundsPen(glyph_set)
    glyph_set[glyph_name].draw(pen)
    if pen.bounds is None:
        return None
    xMin, yMin, xMax, yMax = pen.bounds
    return float(xMin), float(yMin), float(xMax), float(yMax)


def _codepoint_bounds(
    font: "TTFont", codepoint: int
) -> Optional[Tuple[float, float, float, float]]:
    name = _get_best_cmap(font).get(codepoint)
    if not name:
        return None
    return _glyph_bounds(font, name)


def _postscript_name(font: "TTFont") -> str:
    if "name" not in font:
        return "Unknown"
    return font["name"].getDebugName(6) or "Unknown"


def is_supported_font_path(path: str) -> bool:
    return Path(path).suffix.lower() in config.SUPPORTED_EXTENSIONS


class FontHandle:
    """Read-only view of a loaded font: metrics, cmap and advances."""

    def __init__(self, path: str, font: "TTFont"):
        from . import measurements

        self.path = path
        self.font = font
        self.units_per_em = _get_upm(font)
        self._cmap = _get_best_cmap(font)

        hhea = font["hhea"]
        self.ascent = int(hhea.ascent)
        self.descent = int(hhea.descent)
        self.line_gap = int(hhea.lineGap)
        self.x_height = measurements.x_height(font)
        self.cap_height = measurements.cap_height(font, self.ascent)

        head = font["head"]
        self.bbox = (int(head.xMin), int(head.yMin), int(head.xMax), int(head.yMax))
        self.postscript_name = _postscript_name(font)

    @property
    def scale(self) -> float:
        """Factor from design units to the normalized 1000-unit em."""
        return config.NORMALIZED_UPM / self.units_per_em

    def is_mapped(self, codepoint: int) -> bool:
        return codepoint in self._cmap

    def glyph_for_codepoint(self, codepoint: int) -> int:
        """Glyph id the cmap assigns to codepoint, 0 (.notdef) when unmapped."""
        name = self._cmap.get(codepoint)
        if name is None:
            return 0
        return self.font.getGlyphID(name)

    def advance_width(self, glyph_id: int) -> int:
        name = self.font.getGlyphName(glyph_id)
        advance, _lsb = self.font["hmtx"][name]
        return int(advance)

    def font_metrics(self):
        from .models import FontMetrics

        s = self.scale
        return FontMetrics(
            ascender=self.ascent * s,
            descender=self.descent * s,
            x_height=self.x_height * s,
            cap_height=self.cap_height * s,
            line_gap=self.line_gap * s,
        )

    def close(self) -> None:
        self.font.close()

    def __enter__(self) -> "FontHandle":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FontHandle({self.postscript_name!r}, upm={self.units_per_em})"


def open_font(path: str) -> FontHandle:
    """Open a .ttf/.otf font, raising FontFormatError or FontLoadError."""
    if not is_supported_font_path(path):
        raise FontFormatError(
            f"wrong font file format: {path} (expected one of "
            f"{', '.join(config.SUPPORTED_EXTENSIONS)})"
        )
    try:
        font = _read_ttfont(path)
        return FontHandle(path, font)
    except Exception as e:
        raise FontLoadError(f"could not load font {path}: {e}") from e
