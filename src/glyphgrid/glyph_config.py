"""TOML configuration for glyph defaults and logging."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import tomllib

from .errors import GlyphConfigError
from .glyph import Glyph

DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 8


@dataclass(frozen=True)
class GlyphConfig:
    """Defaults applied to newly created glyphs and their text rendering."""

    default_width: int = DEFAULT_WIDTH
    default_height: int = DEFAULT_HEIGHT
    ink: str = "#"
    paper: str = "."
    log_level: int = logging.INFO

    def new_glyph(self, index: int = 0) -> Glyph:
        """Return a detached, blank glyph using the configured geometry."""

        return Glyph(self.default_width, self.default_height, index=index)

    def render(self, glyph: Glyph) -> str:
        """Return ``glyph`` as newline-joined rows using the configured characters."""

        return "\n".join(glyph.to_rows(ink=self.ink, paper=self.paper))


def load_glyph_config(config_path: Path) -> GlyphConfig:
    """Parse and validate the glyph configuration at ``config_path``."""

    with config_path.open("rb") as stream:
        try:
            raw_data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exc:
            raise GlyphConfigError(f"{config_path}: {exc}") from exc

    return parse_glyph_config(raw_data)


def parse_glyph_config(data: Mapping[str, Any]) -> GlyphConfig:
    """Build a :class:`GlyphConfig` from already-decoded TOML ``data``."""

    glyph = _optional_table(data, "glyph")
    logging_table = _optional_table(data, "logging")

    ink = _coerce_char(glyph.get("ink", "#"), "ink")
    paper = _coerce_char(glyph.get("paper", "."), "paper")
    if ink == paper:
        raise GlyphConfigError("ink and paper characters must differ")

    return GlyphConfig(
        default_width=_coerce_dimension(glyph.get("width", DEFAULT_WIDTH), "width"),
        default_height=_coerce_dimension(glyph.get("height", DEFAULT_HEIGHT), "height"),
        ink=ink,
        paper=paper,
        log_level=_coerce_log_level(logging_table.get("level", "INFO")),
    )


def _optional_table(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    table = data.get(name)
    if table is None:
        return {}
    if not isinstance(table, Mapping):
        raise GlyphConfigError(f"[{name}] section must be a mapping")
    return table


def _coerce_dimension(raw_value: Any, name: str) -> int:
    # ``bool`` is an ``int`` subclass but never a meaningful size.
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise GlyphConfigError(f"glyph {name} must be an integer, received {raw_value!r}")
    if raw_value < 0:
        raise GlyphConfigError(f"glyph {name} must be non-negative, received {raw_value}")
    return raw_value


def _coerce_char(raw_value: Any, name: str) -> str:
    if not isinstance(raw_value, str) or len(raw_value) != 1:
        raise GlyphConfigError(f"glyph {name} must be a single character, received {raw_value!r}")
    return raw_value


def _coerce_log_level(raw_level: Any) -> int:
    if isinstance(raw_level, int) and not isinstance(raw_level, bool):
        return raw_level
    if isinstance(raw_level, str):
        level = logging.getLevelName(raw_level.strip().upper())
        if isinstance(level, int):
            return level
    raise GlyphConfigError(f"unknown logging level: {raw_level!r}")


__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "GlyphConfig",
    "load_glyph_config",
    "parse_glyph_config",
]
