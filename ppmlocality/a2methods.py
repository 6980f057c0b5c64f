"""Method tables that let code work on plain or blocked 2D arrays alike."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional, Union

from .uarray2 import UArray2
from .uarray2b import UArray2b

Array = Union[UArray2, UArray2b]
Apply = Callable[[int, int, Any, Any], None]
SmallApply = Callable[[Any], None]


class A2Methods:
    """Operations shared by every kind of two-dimensional array.

    The base table creates plain arrays and offers no mappings; subclasses
    name the mappings they provide in ``_MAPPINGS`` and pick their defaults.
    """

    _MAPPINGS: frozenset[str] = frozenset()
    _DEFAULT_MAP: Optional[str] = None
    _SMALL_DEFAULT_MAP: Optional[str] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def new(self, width: int, height: int, size: int) -> Array:
        """Make a new array with the layout's preferred block size."""
        return self.new_with_blocksize(width, height, size, 1)

    def new_with_blocksize(
        self, width: int, height: int, size: int, blocksize: int
    ) -> Array:
        """Make a new array; a plain layout ignores ``blocksize``."""
        return UArray2(width, height, size)

    def blocksize(self, array: Array) -> int:
        """Return the side length of the array's blocks (1 if unblocked)."""
        return getattr(array, "blocksize", 1)

    def supports(self, name: str) -> bool:
        """Tell whether this table provides the mapping called ``name``."""
        return name in self._MAPPINGS

    def _resolve(self, name: Optional[str], kind: str) -> Callable[[Array, Any], None]:
        if name is None or not self.supports(name):
            raise TypeError(f"{type(self).__name__} does not support {kind} mapping")
        return getattr(self, name)

    def map_default(self, array: Array, apply: Apply) -> None:
        """Visit every cell in the order that suits this layout best."""
        self._resolve(self._DEFAULT_MAP, "default")(array, apply)

    def small_map_default(self, array: Array, apply: SmallApply) -> None:
        """Call ``apply(value)`` for every cell in the best order."""
        self._resolve(self._SMALL_DEFAULT_MAP, "default small")(array, apply)


class PlainMethods(A2Methods):
    """Methods for arrays stored row after row."""

    _MAPPINGS = frozenset(
        {
            "map_row_major",
            "map_col_major",
            "map_default",
            "small_map_row_major",
            "small_map_col_major",
            "small_map_default",
        }
    )
    _DEFAULT_MAP = "map_row_major"
    _SMALL_DEFAULT_MAP = "small_map_row_major"

    def blocksize(self, array: Array) -> int:
        """A plain array has no blocks; its block size is always 1."""
        return 1

    def map_row_major(self, array: UArray2, apply: Apply) -> None:
        """Call ``apply(col, row, array, value)`` row by row."""
        array.map_row_major(apply)

    def map_col_major(self, array: UArray2, apply: Apply) -> None:
        """Call ``apply(col, row, array, value)`` column by column."""
        array.map_col_major(apply)

    def small_map_row_major(self, array: UArray2, apply: SmallApply) -> None:
        """Call ``apply(value)`` for each cell row by row."""
        for _col, _row, value in array.row_major():
            apply(value)

    def small_map_col_major(self, array: UArray2, apply: SmallApply) -> None:
        """Call ``apply(value)`` for each cell column by column."""
        for _col, _row, value in array.col_major():
            apply(value)


class BlockedMethods(A2Methods):
    """Methods for arrays stored block by block."""

    _MAPPINGS = frozenset(
        {
            "map_block_major",
            "map_default",
            "small_map_block_major",
            "small_map_default",
        }
    )
    _DEFAULT_MAP = "map_block_major"
    _SMALL_DEFAULT_MAP = "small_map_block_major"

    def new(self, width: int, height: int, size: int) -> UArray2b:
        """Make a blocked array whose blocks fit in 64 KB."""
        return UArray2b.new_64k_block(width, height, size)

    def new_with_blocksize(
        self, width: int, height: int, size: int, blocksize: int
    ) -> UArray2b:
        """Make a blocked array with the given block side length."""
        return UArray2b(width, height, size, blocksize)

    def blocksize(self, array: UArray2b) -> int:
        """Return the array's block side length."""
        return array.blocksize

    def map_block_major(self, array: UArray2b, apply: Apply) -> None:
        """Call ``apply(col, row, array, value)`` one block at a time."""
        array.map(apply)

    def small_map_block_major(self, array: UArray2b, apply: SmallApply) -> None:
        """Call ``apply(value)`` for each cell one block at a time."""
        for _col, _row, value in array.block_major():
            apply(value)