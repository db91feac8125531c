"""Editable bitmap glyph with change notification.

A :class:`Glyph` owns one :class:`~glyphgrid.pixel_grid.PixelGrid` and adds
the identity a font collection needs: an index, a back-reference to the
owning collection and links to its neighbours. Every mutation computes
whether anything changed and, if so, fires exactly one
:class:`~glyphgrid.events.ChangeEvent` naming the reason and the rectangle a
view has to repaint.

Shifts, reflections and column/row excision are written as pairs of
:class:`~glyphgrid.cursor.DirectionalIterator` objects advanced in lockstep,
so they never compute cell offsets themselves.
"""
from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Iterable

from .cursor import Direction, DirectionalIterator
from .errors import InvalidArgumentError
from .events import ChangeEvent, ChangeNotifier, ChangeReason, Rectangle
from .pixel_grid import PixelGrid

LOGGER = logging.getLogger(__name__)

GlyphListener = Callable[[ChangeEvent], object]
Region = tuple[int, int, int, int]


def _check_index(index: int) -> int:
    if index < 0:
        raise InvalidArgumentError(f"glyph index must be non-negative, received {index}")
    return int(index)


def _resolve(reference: weakref.ref | None) -> Any:
    return reference() if reference is not None else None


def _reference(target: Any) -> weakref.ref | None:
    return weakref.ref(target) if target is not None else None


class Glyph:
    """One character of a bitmap font."""

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        bits: Iterable[bool] | None = None,
        *,
        index: int = 0,
    ) -> None:
        self._index = _check_index(index)
        self._grid = PixelGrid(width, height, bits)
        self._parent: weakref.ref | None = None
        self._prev: weakref.ref | None = None
        self._next: weakref.ref | None = None
        self._notifier: ChangeNotifier[ChangeEvent] = ChangeNotifier()

    @classmethod
    def from_packed(
        cls, width: int, height: int, data: bytes | Iterable[int], *, index: int = 0
    ) -> Glyph:
        """Create a glyph from LSB-first packed pixels."""

        glyph = cls(index=index)
        glyph._grid = PixelGrid.from_packed(width, height, data)
        return glyph

    # -- identity -----------------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def parent(self) -> Any:
        """Owning collection, or ``None`` while detached."""

        return _resolve(self._parent)

    @property
    def prev(self) -> Glyph | None:
        return _resolve(self._prev)

    @property
    def next(self) -> Glyph | None:
        return _resolve(self._next)

    def attach(self, parent: Any, index: int) -> None:
        """Adopt this glyph into ``parent`` at ``index``.

        Called by the owning collection, which is responsible for keeping
        indices unique. After adoption :meth:`set_index` no longer has any
        effect.
        """

        index = _check_index(index)
        if parent is None:
            raise InvalidArgumentError("parent must not be None")
        if self.parent is not None:
            raise InvalidArgumentError("glyph already belongs to a collection")
        self._parent = weakref.ref(parent)
        if index != self._index:
            self._index = index
            self._fire(ChangeReason.INDEX_CHANGED, self._bounds())

    def link(self, prev: Glyph | None, next: Glyph | None) -> None:
        """Record the neighbouring glyphs; maintained by the owning collection."""

        self._prev = _reference(prev)
        self._next = _reference(next)

    def set_index(self, index: int) -> None:
        index = _check_index(index)
        if self.parent is not None:
            return
        if index == self._index:
            return
        self._index = index
        self._fire(ChangeReason.INDEX_CHANGED, self._bounds())

    # -- read access --------------------------------------------------------

    @property
    def grid(self) -> PixelGrid:
        """The backing grid; write through the glyph so listeners are told."""

        return self._grid

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def size(self) -> tuple[int, int]:
        return self._grid.size

    def is_empty(self) -> bool:
        return self._grid.is_empty()

    def get_pixel(self, x: int, y: int) -> bool:
        return self._grid.get(x, y)

    def to_bools(self) -> list[bool]:
        return self._grid.to_bools()

    def to_packed(self) -> bytes:
        return self._grid.to_packed()

    def to_rows(self, *, ink: str = "#", paper: str = ".") -> list[str]:
        return self._grid.to_rows(ink=ink, paper=paper)

    def iterator(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        direction: Direction = Direction.TOP_LEFT_ROWS,
    ) -> DirectionalIterator:
        return self._grid.iterator(x, y, width, height, direction)

    # -- pixel and geometry edits -------------------------------------------

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        if self._grid.set(x, y, value):
            self._fire(ChangeReason.PIXEL_CHANGED, Rectangle(x, y, 1, 1))

    def set_width(self, width: int) -> None:
        before = self._grid.size
        if self._grid.set_width(width):
            self._fire(ChangeReason.RESIZE, self._covering(before))

    def set_height(self, height: int) -> None:
        before = self._grid.size
        if self._grid.set_height(height):
            self._fire(ChangeReason.RESIZE, self._covering(before))

    def set_size(self, width: int, height: int) -> None:
        before = self._grid.size
        if self._grid.set_size(width, height):
            self._fire(ChangeReason.RESIZE, self._covering(before))

    def set_array(self, bits: Iterable[bool]) -> None:
        """Overwrite all pixels without changing the geometry."""

        if self._grid.set_from_bools(bits):
            self._fire(ChangeReason.COPY, self._bounds())

    def set_packed(self, data: bytes | Iterable[int]) -> None:
        """Overwrite all pixels from LSB-first packed bytes."""

        if self._grid.set_from_packed(data):
            self._fire(ChangeReason.COPY, self._bounds())

    def copy_from(self, other: Glyph) -> None:
        """Take a private copy of ``other``'s pixels.

        Neither the index nor the listeners of ``other`` are copied.
        """

        if not isinstance(other, Glyph):
            raise InvalidArgumentError(f"cannot copy pixels from {other!r}")
        before = self._grid.size
        if self._grid.equals(other._grid):
            return
        self._grid = other._grid.clone()
        if before != self._grid.size:
            self._fire(ChangeReason.RESIZE, self._covering(before))
        else:
            self._fire(ChangeReason.COPY, self._bounds())

    # -- shifts -------------------------------------------------------------

    def shift_left(self) -> None:
        """Move every column one step left; the right column becomes empty."""

        self._shift((1, 0, self.width - 1, self.height), Direction.TOP_LEFT_COLUMNS)

    def shift_right(self) -> None:
        """Move every column one step right; the left column becomes empty."""

        self._shift((0, 0, self.width - 1, self.height), Direction.TOP_RIGHT_COLUMNS)

    def shift_up(self) -> None:
        """Move every row one step up; the bottom row becomes empty."""

        self._shift((0, 1, self.width, self.height - 1), Direction.TOP_LEFT_ROWS)

    def shift_down(self) -> None:
        """Move every row one step down; the top row becomes empty."""

        self._shift((0, 0, self.width, self.height - 1), Direction.BOTTOM_LEFT_ROWS)

    def _shift(self, retained: Region, direction: Direction) -> None:
        if self._grid.is_empty():
            return
        target = self._grid.iterator(0, 0, self.width, self.height, direction)
        source = self._grid.iterator(*retained, direction)
        while source.has_next():
            target.change_next(source.next())
        while target.has_next():
            target.change_next(False)
        self._fire(ChangeReason.SHIFTED, self._bounds())

    # -- excision -----------------------------------------------------------

    def remove_column(self, position: int) -> None:
        if self._grid.is_empty():
            return
        width, height = self._grid.size
        if not 0 <= position < width:
            raise InvalidArgumentError(
                f"column {position} outside glyph of width {width}"
            )
        self._excise(
            PixelGrid(width - 1, height),
            (
                (0, 0, position, height),
                (position + 1, 0, width - position - 1, height),
            ),
            Direction.TOP_LEFT_COLUMNS,
        )

    def remove_row(self, position: int) -> None:
        if self._grid.is_empty():
            return
        width, height = self._grid.size
        if not 0 <= position < height:
            raise InvalidArgumentError(
                f"row {position} outside glyph of height {height}"
            )
        self._excise(
            PixelGrid(width, height - 1),
            (
                (0, 0, width, position),
                (0, position + 1, width, height - position - 1),
            ),
            Direction.TOP_LEFT_ROWS,
        )

    def _excise(
        self, replacement: PixelGrid, kept: tuple[Region, ...], direction: Direction
    ) -> None:
        original = self._bounds()
        target = replacement.iterator(
            0, 0, replacement.width, replacement.height, direction
        )
        for region in kept:
            source = self._grid.iterator(*region, direction)
            while source.has_next():
                target.change_next(source.next())
        LOGGER.debug(
            "glyph %d rebuilt from %dx%d to %dx%d",
            self._index,
            original.width,
            original.height,
            replacement.width,
            replacement.height,
        )
        self._grid = replacement
        self._fire(ChangeReason.RESIZE, original)

    # -- reflections --------------------------------------------------------

    def reflect_vertical(self) -> None:
        """Mirror left to right across the vertical centre line."""

        width, height = self._grid.size
        half = width // 2
        self._reflect(
            (0, 0, half, height),
            Direction.TOP_LEFT_COLUMNS,
            (width - half, 0, half, height),
            Direction.TOP_RIGHT_COLUMNS,
        )

    def reflect_horizontal(self) -> None:
        """Mirror top to bottom across the horizontal centre line."""

        width, height = self._grid.size
        half = height // 2
        self._reflect(
            (0, 0, width, half),
            Direction.TOP_LEFT_ROWS,
            (0, height - half, width, half),
            Direction.BOTTOM_LEFT_ROWS,
        )

    def _reflect(
        self,
        near: Region,
        near_direction: Direction,
        far: Region,
        far_direction: Direction,
    ) -> None:
        # Each cell is read before its write cursor reaches it.
        near_read = self._grid.iterator(*near, near_direction)
        far_read = self._grid.iterator(*far, far_direction)
        near_write = self._grid.iterator(*near, near_direction)
        far_write = self._grid.iterator(*far, far_direction)
        changed = False
        while near_read.has_next():
            near_value = near_read.next()
            far_value = far_read.next()
            if near_value != far_value:
                changed = True
            near_write.change_next(far_value)
            far_write.change_next(near_value)
        if changed:
            self._fire(ChangeReason.COPY, self._bounds())

    # -- value semantics ----------------------------------------------------

    def clone(self) -> Glyph:
        """Detached copy with the same index and pixels but no listeners."""

        twin = type(self)(index=self._index)
        twin._grid = self._grid.clone()
        return twin

    def equals(self, other: Glyph | None) -> bool:
        if other is None:
            return False
        return self._index == other._index and self._grid.equals(other._grid)

    # -- listeners ----------------------------------------------------------

    def add_listener(self, listener: GlyphListener) -> None:
        self._notifier.add(listener)

    def remove_listener(self, listener: GlyphListener) -> None:
        self._notifier.remove(listener)

    @property
    def listeners(self) -> tuple[GlyphListener, ...]:
        return self._notifier.listeners

    def _bounds(self) -> Rectangle:
        return Rectangle(0, 0, self._grid.width, self._grid.height)

    def _covering(self, before: tuple[int, int]) -> Rectangle:
        width, height = self._grid.size
        return Rectangle(0, 0, max(width, before[0]), max(height, before[1]))

    def _fire(self, reason: ChangeReason, rectangle: Rectangle) -> None:
        LOGGER.debug("glyph %d: %s %s", self._index, reason.name, rectangle.as_tuple())
        self._notifier.fire(ChangeEvent(reason, rectangle, self))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(index={self._index}, "
            f"width={self.width}, height={self.height})"
        )


__all__ = ["Glyph", "GlyphListener"]
