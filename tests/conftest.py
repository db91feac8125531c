"""Pytest configuration to ensure the glyphgrid package is importable."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _SRC.exists() and _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from glyphgrid import ChangeEvent  # noqa: E402


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[ChangeEvent] = []

    def __call__(self, event: ChangeEvent) -> None:
        self.events.append(event)

    def summary(self) -> Sequence[tuple[str, tuple[int, int, int, int]]]:
        return [(event.reason.name, event.rectangle.as_tuple()) for event in self.events]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
