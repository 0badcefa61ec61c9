"""Text layout metrics extracted from shaped glyph runs."""

__version__ = "0.1.0"
