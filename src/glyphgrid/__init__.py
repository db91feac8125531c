"""Bitmap glyph editing model: pixel grids, directional cursors and glyphs."""
from __future__ import annotations

from .cursor import Direction, DirectionalIterator
from .errors import (
    CursorExhaustedError,
    GlyphConfigError,
    GlyphGridError,
    InvalidArgumentError,
    InvalidCoordinateError,
)
from .events import ChangeEvent, ChangeNotifier, ChangeReason, Rectangle
from .glyph import Glyph, GlyphListener
from .glyph_config import GlyphConfig, load_glyph_config, parse_glyph_config
from .logging_config import setup_logging
from .pixel_grid import PixelGrid, pack_bits, packed_length, unpack_bits

__all__ = [
    "ChangeEvent",
    "ChangeNotifier",
    "ChangeReason",
    "CursorExhaustedError",
    "Direction",
    "DirectionalIterator",
    "Glyph",
    "GlyphConfig",
    "GlyphConfigError",
    "GlyphGridError",
    "GlyphListener",
    "InvalidArgumentError",
    "InvalidCoordinateError",
    "PixelGrid",
    "Rectangle",
    "load_glyph_config",
    "pack_bits",
    "packed_length",
    "parse_glyph_config",
    "setup_logging",
    "unpack_bits",
]
