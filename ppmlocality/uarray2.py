"""A two-dimensional array stored in one flat list, row after row."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

Apply = Callable[[int, int, "UArray2", Any], None]


class UArray2:
    """A fixed-size grid of ``width`` columns and ``height`` rows.

    Cells are addressed as ``array[col, row]``.  ``size`` records the
    nominal size of one element in bytes; every cell starts out as ``None``.
    """

    __slots__ = ("_width", "_height", "_size", "_cells")

    def __init__(self, width: int, height: int, size: int) -> None:
        if width < 0:
            raise ValueError(f"width must not be negative (got {width})")
        if height < 0:
            raise ValueError(f"height must not be negative (got {height})")
        if size <= 0:
            raise ValueError(f"element size must be positive (got {size})")
        self._width = width
        self._height = height
        self._size = size
        self._cells: list[Any] = [None] * (width * height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def size(self) -> int:
        """Nominal size of one element in bytes."""
        return self._size

    def __len__(self) -> int:
        return self._width * self._height

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self._width}, "
            f"height={self._height}, size={self._size})"
        )

    def _index(self, index: tuple[int, int]) -> int:
        col, row = index
        if not 0 <= col < self._width:
            raise IndexError(
                f"column {col} is out of bounds (width = {self._width})"
            )
        if not 0 <= row < self._height:
            raise IndexError(
                f"row {row} is out of bounds (height = {self._height})"
            )
        return row * self._width + col

    def __getitem__(self, index: tuple[int, int]) -> Any:
        return self._cells[self._index(index)]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        self._cells[self._index(index)] = value

    def row_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)`` left to right, top to bottom."""
        for row in range(self._height):
            for col in range(self._width):
                yield col, row, self._cells[row * self._width + col]

    def col_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)`` top to bottom, left to right."""
        for col in range(self._width):
            for row in range(self._height):
                yield col, row, self._cells[row * self._width + col]

    def map_row_major(self, apply: Apply) -> None:
        """Call ``apply(col, row, self, value)`` for each cell in row-major order."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.row_major():
            apply(col, row, self, value)

    def map_col_major(self, apply: Apply) -> None:
        """Call ``apply(col, row, self, value)`` for each cell in column-major order."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.col_major():
            apply(col, row, self, value)