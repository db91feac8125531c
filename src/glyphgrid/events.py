"""Change notifications emitted by glyphs."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from .glyph import Glyph

EventT = TypeVar("EventT")


class ChangeReason(Enum):
    """Kind of mutation described by a :class:`ChangeEvent`."""

    COPY = auto()
    RESIZE = auto()
    PIXEL_CHANGED = auto()
    INDEX_CHANGED = auto()
    SHIFTED = auto()


@dataclass(frozen=True)
class Rectangle:
    """Cell-aligned rectangle in grid coordinates."""

    x: int
    y: int
    width: int
    height: int

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class ChangeEvent:
    """Immutable payload delivered to glyph listeners."""

    reason: ChangeReason
    rectangle: Rectangle
    source: Glyph | None = None


class ChangeNotifier(Generic[EventT]):
    """Ordered, synchronous fan-out of events to callables.

    Registering the same listener twice keeps two independent entries, and
    :meth:`remove` drops only the first matching entry. Listener exceptions
    propagate to whoever triggered :meth:`fire`; later listeners are skipped.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[EventT], object]] = []

    def add(self, listener: Callable[[EventT], object]) -> None:
        if not callable(listener):
            raise TypeError(f"listener must be callable, received {listener!r}")
        self._listeners.append(listener)

    def remove(self, listener: Callable[[EventT], object]) -> None:
        """Remove the first registration of ``listener``; unknown listeners are ignored."""

        for position, registered in enumerate(self._listeners):
            if registered == listener:
                del self._listeners[position]
                return

    def clear(self) -> None:
        self._listeners.clear()

    @property
    def listeners(self) -> tuple[Callable[[EventT], object], ...]:
        return tuple(self._listeners)

    def fire(self, event: EventT) -> None:
        # Snapshot so listeners may (un)register without skipping entries.
        for listener in tuple(self._listeners):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = ["ChangeEvent", "ChangeNotifier", "ChangeReason", "Rectangle"]
