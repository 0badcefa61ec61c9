"""Layout measurement data models."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class LayoutRequest:
    source_text: str
    font_path: str
    font_size: float = 12.0
    output_target: str = "stdout"
    source_is_file: bool = False

    @property
    def to_stdout(self) -> bool:
        return self.output_target == "stdout"


@dataclass(frozen=True)
class FontMetrics:
    """Vertical font metrics in 1000-units-per-em space."""

    ascender: float
    descender: float
    x_height: float
    cap_height: float
    line_gap: float

    def line_height(self, font_size: float) -> float:
        return (self.ascender + self.line_gap - self.descender) / 1000.0 * font_size


@dataclass(frozen=True)
class Glyph:
    id: int
    codepoints: Tuple[int, ...] = ()


@dataclass
class Position:
    x_advance: float = 0.0
    y_advance: float = 0.0
    x_offset: float = 0.0
    y_offset: float = 0.0
    # Authoritative per-glyph advance, overwritten from the font's hmtx entry
    advance_width: float = 0.0


@dataclass
class ShapedRun:
    glyphs: List[Glyph]
    positions: List[Position]
    advance_width: float = 0.0

    def __post_init__(self) -> None:
        if len(self.glyphs) != len(self.positions):
            raise ValueError(
                f"glyphs ({len(self.glyphs)}) and positions ({len(self.positions)}) differ in length"
            )

    def __len__(self) -> int:
        return len(self.glyphs)

    def __iter__(self):
        return iter(zip(self.glyphs, self.positions))


@dataclass
class Segment:
    """A line or word: glyph ids, scaled widths and reconstructed text."""

    glyph_ids: List[int] = field(default_factory=list)
    widths: List[float] = field(default_factory=list)
    text: str = ""

    def append(self, glyph_id: int, width: float, text: str) -> None:
        self.glyph_ids.append(glyph_id)
        self.widths.append(width)
        self.text += text

    @property
    def width(self) -> float:
        return float(sum(self.widths))

    def __len__(self) -> int:
        return len(self.glyph_ids)


@dataclass(frozen=True)
class SegmentMetric:
    value: str
    width: float
    glyphs: Optional[Tuple[int, ...]] = None
    widths: Optional[Tuple[float, ...]] = None

    @classmethod
    def from_segment(cls, segment: Segment, include_glyphs: bool = False) -> "SegmentMetric":
        if include_glyphs:
            return cls(
                segment.text,
                segment.width,
                tuple(segment.glyph_ids),
                tuple(segment.widths),
            )
        return cls(segment.text, segment.width)

    def to_dict(self) -> dict:
        data = {"value": self.value, "width": self.width}
        if self.glyphs is not None:
            data["glyphs"] = list(self.glyphs)
            data["widths"] = list(self.widths or ())
        return data


@dataclass(frozen=True)
class MetricsReport:
    name: str
    text: str
    total_width: float
    line_gap: float
    ascender: float
    descender: float
    x_height: float
    cap_height: float
    units_per_em: int
    font_size: float
    line_height: float
    lines: Tuple[SegmentMetric, ...]
    words: Tuple[SegmentMetric, ...]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "text": self.text,
            "total_width": self.total_width,
            "line_gap": self.line_gap,
            "ascender": self.ascender,
            "descender": self.descender,
            "x_height": self.x_height,
            "cap_height": self.cap_height,
            "units_per_em": self.units_per_em,
            "font_size": self.font_size,
            "line_height": self.line_height,
            "lines": [line.to_dict() for line in self.lines],
            "words": [word.to_dict() for word in self.words],
        }
