"""Directional read/write cursors over rectangular regions of a pixel grid.

Every bulk transform in :mod:`glyphgrid.glyph` is written as two cursors
advanced in lockstep: one reading with :meth:`DirectionalIterator.next` and
one writing with :meth:`DirectionalIterator.change_next`. The transforms only
rely on the visiting order described by :class:`Direction`, so a single
cursor class serves all eight orders.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterator

from .errors import CursorExhaustedError

if TYPE_CHECKING:
    from .pixel_grid import PixelGrid


class Direction(Enum):
    """Traversal order, named by start corner and primary sweep axis.

    ``*_ROWS`` members sweep along a row before stepping to the next row;
    ``*_COLUMNS`` members sweep along a column before stepping to the next
    column. The value is ``(from_right, from_bottom, column_major)``.
    """

    TOP_LEFT_ROWS = (False, False, False)
    TOP_RIGHT_ROWS = (True, False, False)
    BOTTOM_LEFT_ROWS = (False, True, False)
    BOTTOM_RIGHT_ROWS = (True, True, False)
    TOP_LEFT_COLUMNS = (False, False, True)
    TOP_RIGHT_COLUMNS = (True, False, True)
    BOTTOM_LEFT_COLUMNS = (False, True, True)
    BOTTOM_RIGHT_COLUMNS = (True, True, True)

    @property
    def from_right(self) -> bool:
        return self.value[0]

    @property
    def from_bottom(self) -> bool:
        return self.value[1]

    @property
    def column_major(self) -> bool:
        return self.value[2]


def _axis(start: int, length: int, *, reverse: bool) -> range:
    if reverse:
        return range(start + length - 1, start - 1, -1)
    return range(start, start + length)


class DirectionalIterator:
    """Stateful cursor over ``[x, x + width) x [y, y + height)`` of ``grid``.

    The region may extend past the grid: reads outside it yield ``False``
    and writes outside it raise :class:`~glyphgrid.errors.InvalidCoordinateError`.
    A region with a non-positive width or height has no cells.
    """

    def __init__(
        self,
        grid: PixelGrid,
        x: int,
        y: int,
        width: int,
        height: int,
        direction: Direction = Direction.TOP_LEFT_ROWS,
    ) -> None:
        self._grid = grid
        self._direction = Direction(direction)
        width = max(int(width), 0)
        height = max(int(height), 0)
        columns = _axis(int(x), width, reverse=self._direction.from_right)
        rows = _axis(int(y), height, reverse=self._direction.from_bottom)
        if self._direction.column_major:
            self._outer, self._inner = columns, rows
        else:
            self._outer, self._inner = rows, columns
        self._total = width * height
        self._visited = 0

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def remaining(self) -> int:
        """Number of cells not yet visited."""

        return self._total - self._visited

    @property
    def position(self) -> tuple[int, int] | None:
        """Return the ``(x, y)`` the next call will visit, or ``None``."""

        if self._visited >= self._total:
            return None
        stride = len(self._inner)
        outer = self._outer[self._visited // stride]
        inner = self._inner[self._visited % stride]
        if self._direction.column_major:
            return outer, inner
        return inner, outer

    def has_next(self) -> bool:
        return self._visited < self._total

    def next(self) -> bool:
        """Return the current cell's value and advance."""

        x, y = self._advance()
        return self._grid.get(x, y)

    def change_next(self, value: bool) -> None:
        """Write ``value`` to the current cell and advance."""

        position = self.position
        if position is None:
            raise CursorExhaustedError("cursor advanced past its last cell")
        self._grid.set(position[0], position[1], value)
        self._visited += 1

    def _advance(self) -> tuple[int, int]:
        position = self.position
        if position is None:
            raise CursorExhaustedError("cursor advanced past its last cell")
        self._visited += 1
        return position

    def __iter__(self) -> Iterator[bool]:
        return self

    def __next__(self) -> bool:
        if not self.has_next():
            raise StopIteration
        return self.next()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(direction={self._direction.name}, "
            f"remaining={self.remaining})"
        )


__all__ = ["Direction", "DirectionalIterator"]
