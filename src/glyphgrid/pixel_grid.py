"""Fixed-origin boolean pixel grid backing every glyph.

Pixels are stored in a flat row-major list: index ``0`` is the top-left
cell and index ``width * height - 1`` the bottom-right one. Space outside the
grid is transparent, so lenient reads past the edges return ``False``.

The packed form used by :meth:`PixelGrid.to_packed` and
:meth:`PixelGrid.set_from_packed` stores one pixel per bit, least-significant
bit first, starting at the first byte. It is the compatibility contract for
any external persistence layer.
"""
from __future__ import annotations

from itertools import islice
from typing import Iterable, Sequence

from .cursor import Direction, DirectionalIterator
from .errors import InvalidArgumentError, InvalidCoordinateError

DEFAULT_INK = "#█"


def packed_length(count: int) -> int:
    """Return the number of bytes needed to pack ``count`` pixels."""

    return (count + 7) // 8


def pack_bits(bits: Sequence[bool]) -> bytes:
    """Pack ``bits`` LSB-first into bytes."""

    packed = bytearray(packed_length(len(bits)))
    for index, bit in enumerate(bits):
        if bit:
            packed[index >> 3] |= 1 << (index & 0x07)
    return bytes(packed)


def unpack_bits(data: bytes, count: int) -> list[bool]:
    """Unpack up to ``count`` LSB-first bits from ``data``, zero-filling the rest."""

    bits = [False] * count
    for index in range(min(count, len(data) * 8)):
        bits[index] = bool(data[index >> 3] & (1 << (index & 0x07)))
    return bits


def _coerce_dimension(value: int, name: str) -> int:
    dimension = int(value)
    if dimension < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, received {value}")
    return dimension


class PixelGrid:
    """Rectangular grid of boolean pixels with value semantics."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, width: int = 0, height: int = 0, bits: Iterable[bool] | None = None
    ) -> None:
        self._width = _coerce_dimension(width, "width")
        self._height = _coerce_dimension(height, "height")
        count = self._width * self._height
        cells = [bool(bit) for bit in islice(bits, count)] if bits is not None else []
        cells.extend([False] * (count - len(cells)))
        self._cells: list[bool] = cells

    @classmethod
    def from_packed(
        cls, width: int, height: int, data: bytes | bytearray | Iterable[int]
    ) -> PixelGrid:
        """Build a grid from packed bytes, truncating or zero-filling."""

        grid = cls(width, height)
        grid._cells = unpack_bits(_coerce_packed(data), grid._width * grid._height)
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[str], *, ink: str = DEFAULT_INK) -> PixelGrid:
        """Build a grid from text rows where characters in ``ink`` are set."""

        width = max((len(row) for row in rows), default=0)
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char in ink:
                    grid._cells[y * width + x] = True
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def is_empty(self) -> bool:
        return self._width == 0 or self._height == 0

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> bool:
        """Return the pixel at ``(x, y)``; anything outside the grid is ``False``."""

        if not self.contains(x, y):
            return False
        return self._cells[y * self._width + x]

    def set(self, x: int, y: int, value: bool) -> bool:
        """Set the pixel at ``(x, y)`` and report whether it changed."""

        if not self.contains(x, y):
            raise InvalidCoordinateError(x, y, self._width, self._height)
        offset = y * self._width + x
        value = bool(value)
        if self._cells[offset] == value:
            return False
        self._cells[offset] = value
        return True

    def set_width(self, width: int) -> bool:
        """Resize horizontally, keeping the left columns.

        Negative widths are ignored. Returns ``True`` when the width changed.
        """

        if width < 0 or width == self._width:
            return False
        kept = min(width, self._width)
        padding = [False] * (width - kept)
        cells: list[bool] = []
        for y in range(self._height):
            start = y * self._width
            cells.extend(self._cells[start : start + kept])
            cells.extend(padding)
        self._cells = cells
        self._width = width
        return True

    def set_height(self, height: int) -> bool:
        """Resize vertically, keeping the top rows.

        Negative heights are ignored. Returns ``True`` when the height changed.
        """

        if height < 0 or height == self._height:
            return False
        kept = min(height, self._height)
        cells = self._cells[: kept * self._width]
        cells.extend([False] * ((height - kept) * self._width))
        self._cells = cells
        self._height = height
        return True

    def set_size(self, width: int, height: int) -> bool:
        width_changed = self.set_width(width)
        height_changed = self.set_height(height)
        return width_changed or height_changed

    def clone(self) -> PixelGrid:
        twin = type(self)(self._width, self._height)
        twin._cells = list(self._cells)
        return twin

    def equals(self, other: PixelGrid | None) -> bool:
        if other is None:
            return False
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.equals(other)

    def to_bools(self) -> list[bool]:
        return list(self._cells)

    def to_packed(self) -> bytes:
        return pack_bits(self._cells)

    def to_rows(self, *, ink: str = "#", paper: str = ".") -> list[str]:
        return [
            "".join(
                ink if self._cells[y * self._width + x] else paper
                for x in range(self._width)
            )
            for y in range(self._height)
        ]

    def set_from_bools(self, data: Iterable[bool]) -> bool:
        """Overwrite every pixel from ``data``; the geometry is unchanged.

        ``data`` must hold exactly ``width * height`` values. Nothing is
        written when validation fails.
        """

        cells = [bool(bit) for bit in data]
        count = self._width * self._height
        if len(cells) != count:
            raise InvalidArgumentError(
                f"expected {count} pixels for a {self._width}x{self._height} grid, "
                f"received {len(cells)}"
            )
        return self._replace_cells(cells)

    def set_from_packed(self, data: bytes | bytearray | Iterable[int]) -> bool:
        """Overwrite every pixel from LSB-first packed ``data``.

        ``data`` must hold exactly ``ceil(width * height / 8)`` bytes.
        Nothing is written when validation fails.
        """

        payload = _coerce_packed(data)
        count = self._width * self._height
        expected = packed_length(count)
        if len(payload) != expected:
            raise InvalidArgumentError(
                f"expected {expected} packed bytes for a {self._width}x{self._height} "
                f"grid, received {len(payload)}"
            )
        return self._replace_cells(unpack_bits(payload, count))

    def _replace_cells(self, cells: list[bool]) -> bool:
        changed = cells != self._cells
        self._cells = cells
        return changed

    def iterator(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        direction: Direction = Direction.TOP_LEFT_ROWS,
    ) -> DirectionalIterator:
        """Return a cursor bound to ``[x, x + width) x [y, y + height)``."""

        return DirectionalIterator(self, x, y, width, height, direction)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self._width}, height={self._height})"


def _coerce_packed(data: bytes | bytearray | Iterable[int]) -> bytes:
    if isinstance(data, (str, int)):
        # ``bytes(3)`` would silently build three zero bytes.
        raise InvalidArgumentError(
            f"packed pixel data must be a byte sequence, received {type(data).__name__}"
        )
    try:
        return bytes(data)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"packed pixel data must be bytes: {exc}") from exc


__all__ = [
    "DEFAULT_INK",
    "PixelGrid",
    "pack_bits",
    "packed_length",
    "unpack_bits",
]
