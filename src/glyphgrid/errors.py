"""Exception hierarchy shared by the pixel grid, cursor and glyph modules."""
from __future__ import annotations


class GlyphGridError(Exception):
    """Base class for every error raised by :mod:`glyphgrid`."""


class InvalidArgumentError(GlyphGridError, ValueError):
    """Raised when an argument cannot be applied to the current grid or glyph."""


class InvalidCoordinateError(GlyphGridError, IndexError):
    """Raised when a strict write targets a cell outside the grid bounds."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"coordinate ({x}, {y}) outside {width}x{height} grid"
        )
        self.x = x
        self.y = y


class CursorExhaustedError(GlyphGridError, RuntimeError):
    """Raised when a directional cursor is advanced past its last cell."""


class GlyphConfigError(GlyphGridError, ValueError):
    """Raised when a glyph configuration file fails validation."""


__all__ = [
    "CursorExhaustedError",
    "GlyphConfigError",
    "GlyphGridError",
    "InvalidArgumentError",
    "InvalidCoordinateError",
]
