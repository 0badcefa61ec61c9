"""Configuration constants and dataclasses for layout measurement."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


# --- Unicode codepoints for separator glyphs ---
LINE_FEED: int = 0x000A
SPACE: int = 0x0020

# Reference glyphs for vertical metric fallbacks
CAP_HEIGHT_GLYPHS: Tuple[int, ...] = (0x0048, 0x0049)  # 'H', 'I'
U_LOWER_X: int = 0x0078  # 'x'

# All widths are normalized to this many units per em before point scaling
NORMALIZED_UPM: int = 1000
DEFAULT_FONT_SIZE: float = 12.0

SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".ttf", ".otf")

DECODE_HEX = "hex"
DECODE_CHARS = "chars"
DECODE_MODES: Tuple[str, ...] = (DECODE_HEX, DECODE_CHARS)

# Optional OpenType features switched off so one input character yields one glyph
DISABLED_FEATURES: Mapping[str, bool] = MappingProxyType(
    {
        "rvrn": False,
        "ltra": False,
        "ltrm": False,
        "frac": False,
        "numr": False,
        "dnom": False,
        "ccmp": False,
        "locl": False,
        "rlig": False,
        "mark": False,
        "mkmk": False,
        "calt": False,
        "clig": False,
        "liga": False,
        "rclt": False,
        "curs": False,
        "kern": False,
    }
)


@dataclass(frozen=True)
class ShapingConfig:
    """Feature toggles handed to the shaper on every call."""

    features: Mapping[str, bool] = field(default_factory=lambda: DISABLED_FEATURES)
    direction: str = "ltr"

    def with_enabled(self, tags: Iterable[str]) -> "ShapingConfig":
        features = dict(self.features)
        for tag in tags:
            features[tag] = True
        return replace(self, features=MappingProxyType(features))


@dataclass(frozen=True)
class LayoutConfig:
    """Options for one measurement run."""

    shaping: ShapingConfig = field(default_factory=ShapingConfig)
    decode_mode: str = DECODE_HEX
    indent: Optional[int] = None  # None writes compact JSON
    include_glyphs: bool = False
