"""Exceptions raised while resolving, loading and measuring."""


class LayoutMetricsError(Exception):
    """Base class for every fatal measurement error."""


class ArgumentError(LayoutMetricsError):
    """Command line input could not be resolved into a request."""


class FontFormatError(LayoutMetricsError):
    """Font path does not name a supported container format."""


class FontLoadError(LayoutMetricsError):
    """The font file could not be opened or parsed."""


class DecodeError(LayoutMetricsError):
    """A glyph's codepoints do not form a valid character."""
