"""
Grid
====

Square matrix of tile values backed by a numpy array.

Cells hold 0 (empty) or a power of two >= 2. Coordinates are checked on
every access; negative indices are rejected rather than wrapped.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from crack2048.core.config_loader import is_power_of_two

TILE_DTYPE = np.int64


class Grid:
    """
    N x N tile matrix with bounds-checked read/write primitives.

    The grid is exclusively owned by a GameSession. Everything handed out
    to callers is either a scalar or a read-only copy (see ``view()``).
    """

    def __init__(self, size: int):
        """
        Create an empty grid.

        Args:
            size: Side length N (must be >= 1).
        """
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")
        self._size = int(size)
        self._cells = np.zeros((self._size, self._size), dtype=TILE_DTYPE)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """
        Build a grid from a square nested sequence of tile values.

        Raises:
            ValueError: If the rows are not square or hold an invalid tile.
        """
        size = len(rows)
        grid = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {size}")
            for c, value in enumerate(row):
                grid.set(r, c, int(value))
        return grid

    @property
    def size(self) -> int:
        """Side length N."""
        return self._size

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise IndexError(
                f"Cell ({row}, {col}) out of range for {self._size}x{self._size} grid"
            )

    def get(self, row: int, col: int) -> int:
        """Value at (row, col)."""
        self._check(row, col)
        return int(self._cells[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """
        Write a value at (row, col).

        Raises:
            IndexError: If the coordinate is outside the grid.
            ValueError: If value is neither 0 nor a power of two >= 2.
        """
        self._check(row, col)
        if value != 0 and (value < 2 or not is_power_of_two(value)):
            raise ValueError(f"Invalid tile value: {value}")
        self._cells[row, col] = value

    def is_empty(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self._cells[row, col] == 0)

    def count_empty(self) -> int:
        return int(np.count_nonzero(self._cells == 0))

    def any_at_least(self, threshold: int) -> bool:
        """True if any cell holds a value >= threshold."""
        return bool(np.any(self._cells >= threshold))

    def fill(self, value: int) -> None:
        """Set every cell to value (construction and reset only)."""
        if value != 0 and (value < 2 or not is_power_of_two(value)):
            raise ValueError(f"Invalid tile value: {value}")
        self._cells.fill(value)

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Empty coordinates in row-major order."""
        rows, cols = np.nonzero(self._cells == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def max_tile(self) -> int:
        return int(self._cells.max())

    def values(self) -> List[int]:
        """Non-zero tile values in row-major order."""
        return [int(v) for v in self._cells[self._cells != 0]]

    def rows(self) -> List[List[int]]:
        """Plain nested-list copy of the grid."""
        return self._cells.tolist()

    def view(self) -> np.ndarray:
        """Read-only copy of the cell matrix."""
        arr = self._cells.copy()
        arr.flags.writeable = False
        return arr

    def copy(self) -> "Grid":
        """Independent grid with the same contents."""
        other = Grid(self._size)
        other._cells[:] = self._cells
        return other

    def load(self, values: Iterable[Iterable[int]]) -> None:
        """
        Replace all cells with the given matrix (same size).

        Raises:
            ValueError: On shape mismatch or invalid tile values.
        """
        incoming = Grid.from_rows([list(row) for row in values])
        if incoming.size != self._size:
            raise ValueError(
                f"Expected a {self._size}x{self._size} matrix, got {incoming.size}x{incoming.size}"
            )
        self._cells[:] = incoming._cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._size == other._size and bool(np.array_equal(self._cells, other._cells))

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, rows={self.rows()})"
