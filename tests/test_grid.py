"""
Tests for the grid primitives.
"""

import numpy as np
import pytest

from crack2048.core.grid import Grid


@pytest.fixture
def grid():
    return Grid.from_rows([
        [2, 0, 0, 4],
        [0, 8, 0, 0],
        [0, 0, 16, 0],
        [32, 0, 0, 2048],
    ])


class TestGridAccess:
    """Test bounds-checked reads and writes."""
    
    def test_new_grid_is_empty(self):
        """A fresh grid has every cell empty."""
        grid = Grid(4)
        assert grid.size == 4
        assert grid.count_empty() == 16
        assert grid.max_tile() == 0
    
    def test_get_and_set(self, grid):
        """set() writes exactly one cell."""
        grid.set(1, 2, 64)
        assert grid.get(1, 2) == 64
        assert grid.get(1, 1) == 8
        assert grid.count_empty() == 9
    
    def test_is_empty(self, grid):
        """is_empty() reflects zero cells."""
        assert grid.is_empty(0, 1)
        assert not grid.is_empty(0, 0)
    
    def test_is_empty_returns_plain_bool(self, grid):
        """Results are Python bools, not numpy scalars."""
        assert type(grid.is_empty(0, 1)) is bool
        assert type(grid.is_empty(0, 0)) is bool
        assert grid.is_empty(0, 1) is True

    
    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (4, 0), (0, 4), (10, 10)])
    def test_out_of_range_fails_fast(self, grid, row, col):
        """Out-of-range coordinates raise instead of wrapping or clamping."""
        with pytest.raises(IndexError):
            grid.get(row, col)
        with pytest.raises(IndexError):
            grid.set(row, col, 2)
        with pytest.raises(IndexError):
            grid.is_empty(row, col)
    
    @pytest.mark.parametrize("value", [1, 3, 6, -2, 100])
    def test_invalid_tile_value_rejected(self, grid, value):
        """Only 0 and powers of two >= 2 can be stored."""
        with pytest.raises(ValueError):
            grid.set(0, 1, value)
    
    def test_invalid_size_rejected(self):
        """Grid size must be positive."""
        with pytest.raises(ValueError):
            Grid(0)
    
    def test_from_rows_requires_square(self):
        """Ragged input is rejected."""
        with pytest.raises(ValueError):
            Grid.from_rows([[2, 0], [0]])


class TestGridQueries:
    """Test whole-grid queries."""
    
    def test_count_empty(self, grid):
        assert grid.count_empty() == 10
    
    def test_any_at_least(self, grid):
        """any_at_least() compares with >=, not ==."""
        assert grid.any_at_least(2048)
        assert grid.any_at_least(1024)
        assert not grid.any_at_least(4096)
    
    def test_fill(self, grid):
        """fill() overwrites every cell."""
        grid.fill(0)
        assert grid.count_empty() == 16
        grid.fill(2)
        assert grid.count_empty() == 0
        assert grid.values() == [2] * 16
    
    def test_empty_cells_row_major(self):
        """empty_cells() lists coordinates in row-major order."""
        grid = Grid.from_rows([[2, 0], [0, 4]])
        assert grid.empty_cells() == [(0, 1), (1, 0)]
    
    def test_view_is_read_only_copy(self, grid):
        """view() cannot be used to write into the grid."""
        view = grid.view()
        assert view.shape == (4, 4)
        with pytest.raises(ValueError):
            view[0, 1] = 2
        assert grid.get(0, 1) == 0
    
    def test_copy_is_independent(self, grid):
        """Mutating a copy leaves the original untouched."""
        other = grid.copy()
        assert other == grid
        other.set(0, 1, 2)
        assert grid.get(0, 1) == 0
        assert other != grid
    
    def test_load_replaces_contents(self, grid):
        """load() swaps in a matrix of the same size."""
        grid.load([[2] * 4] * 4)
        assert np.array_equal(grid.view(), np.full((4, 4), 2))
    
    def test_load_size_mismatch(self, grid):
        """load() refuses a matrix of another size."""
        with pytest.raises(ValueError):
            grid.load([[2, 4], [4, 2]])
