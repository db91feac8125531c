from __future__ import annotations

import logging
from pathlib import Path

import pytest

from glyphgrid import Glyph
from glyphgrid.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("glyphgrid")
    saved_level = logger.level
    saved_handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)


def test_setup_logging_replaces_existing_handlers(package_logger: logging.Logger) -> None:
    setup_logging(logging.WARNING)
    setup_logging(logging.INFO)

    assert package_logger.level == logging.INFO
    assert len(package_logger.handlers) == 1


def test_setup_logging_writes_glyph_events_to_file(
    package_logger: logging.Logger, tmp_path: Path
) -> None:
    log_path = tmp_path / "glyphs.log"
    setup_logging(logging.DEBUG, log_file=str(log_path))

    glyph = Glyph(3, 3, index=2)
    glyph.remove_row(1)
    for handler in package_logger.handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert "glyphgrid.glyph - DEBUG - glyph 2 rebuilt from 3x3 to 3x2" in text
    assert "glyph 2: RESIZE (0, 0, 3, 3)" in text
