"""A blocked two-dimensional array: cells of one square block lie together."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import Any

Apply = Callable[[int, int, "UArray2b", Any], None]

BYTES_IN_64K = 64 * 1024


class UArray2b:
    """A grid of ``width`` columns and ``height`` rows stored block by block.

    Each block is ``blocksize`` cells on a side.  Cells are addressed as
    ``array[col, row]`` and every cell starts out as ``None``.
    """

    __slots__ = ("_width", "_height", "_size", "_blocksize", "_cells")

    def __init__(self, width: int, height: int, size: int, blocksize: int) -> None:
        if blocksize < 1:
            raise ValueError(f"blocksize must be at least 1 (got {blocksize})")
        if width < 0 or height < 0:
            raise ValueError(
                f"dimensions must not be negative (got {width}x{height})"
            )
        if size <= 0:
            raise ValueError(f"element size must be positive (got {size})")
        self._width = width
        self._height = height
        self._size = size
        self._blocksize = blocksize
        blocks = self._blocks_wide * self._blocks_high
        self._cells: list[Any] = [None] * (blocks * blocksize * blocksize)

    @classmethod
    def new_64k_block(cls, width: int, height: int, size: int) -> "UArray2b":
        """Make an array whose blocks are as large as fit in 64 KB.

        An element larger than 64 KB gets a block size of 1.
        """
        if width < 0 or height < 0:
            raise ValueError(
                f"dimensions must not be negative (got {width}x{height})"
            )
        if size <= 0:
            raise ValueError(f"element size must be positive (got {size})")
        if size > BYTES_IN_64K:
            return cls(width, height, size, 1)
        blocksize = max(1, math.isqrt(BYTES_IN_64K // size))
        return cls(width, height, size, blocksize)

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

    @property
    def blocksize(self) -> int:
        """Number of cells on one side of a block."""
        return self._blocksize

    @property
    def _blocks_wide(self) -> int:
        return -(-self._width // self._blocksize)

    @property
    def _blocks_high(self) -> int:
        return -(-self._height // self._blocksize)

    def __len__(self) -> int:
        return self._width * self._height

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self._width}, height={self._height}, "
            f"size={self._size}, blocksize={self._blocksize})"
        )

    def _index(self, index: tuple[int, int]) -> int:
        col, row = index
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(
                f"cell ({col}, {row}) is out of bounds "
                f"({self._width}x{self._height})"
            )
        bs = self._blocksize
        block_row, in_row = divmod(row, bs)
        block_col, in_col = divmod(col, bs)
        block = block_row * self._blocks_wide + block_col
        return block * bs * bs + in_row * bs + in_col

    def __getitem__(self, index: tuple[int, int]) -> Any:
        return self._cells[self._index(index)]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        self._cells[self._index(index)] = value

    def block_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)``, finishing each block before the next."""
        bs = self._blocksize
        for block_row in range(self._blocks_high):
            for block_col in range(self._blocks_wide):
                rows = range(block_row * bs, min((block_row + 1) * bs, self._height))
                cols = range(block_col * bs, min((block_col + 1) * bs, self._width))
                for row in rows:
                    for col in cols:
                        yield col, row, self[col, row]

    def map(self, apply: Apply) -> None:
        """Call ``apply(col, row, self, value)`` for each cell in block-major order."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.block_major():
            apply(col, row, self, value)