"""
Tests for slide-and-merge resolution.
"""

from collections import Counter

import pytest

from crack2048.core.grid import Grid
from crack2048.core.move_resolver import (
    Direction,
    MoveResolver,
    collapse_line,
    line_coordinates,
)


@pytest.fixture
def resolver():
    return MoveResolver()


def grid_with_row(row, size=4):
    rows = [[0] * size for _ in range(size)]
    rows[0] = list(row)
    return Grid.from_rows(rows)


class TestCollapseLine:
    """Test the one-line fold."""
    
    def test_pair_merges(self):
        """[2, 2, 0, 0] -> [4, 0, 0, 0], delta 4."""
        assert collapse_line([2, 2, 0, 0]) == ([4, 0, 0, 0], 4, 1)
    
    def test_trailing_tile_does_not_remerge(self):
        """[2, 2, 2, 0] -> [4, 2, 0, 0]: the edge-most pair merges first."""
        assert collapse_line([2, 2, 2, 0]) == ([4, 2, 0, 0], 4, 1)
    
    def test_gap_closes_before_merge(self):
        """[2, 0, 2, 2] -> [4, 2, 0, 0]."""
        assert collapse_line([2, 0, 2, 2]) == ([4, 2, 0, 0], 4, 1)
    
    def test_merged_tile_cannot_merge_again(self):
        """[2, 2, 4, 0] -> [4, 4, 0, 0], not [8, 0, 0, 0]."""
        assert collapse_line([2, 2, 4, 0]) == ([4, 4, 0, 0], 4, 1)
    
    def test_two_pairs(self):
        """Four equal tiles make two merges."""
        assert collapse_line([2, 2, 2, 2]) == ([4, 4, 0, 0], 8, 2)
        assert collapse_line([4, 4, 8, 8]) == ([8, 16, 0, 0], 24, 2)
    
    def test_no_merge_only_slide(self):
        assert collapse_line([0, 2, 0, 4]) == ([2, 4, 0, 0], 0, 0)
    
    def test_already_compact(self):
        assert collapse_line([2, 4, 8, 16]) == ([2, 4, 8, 16], 0, 0)
    
    def test_empty_line(self):
        assert collapse_line([0, 0, 0, 0]) == ([0, 0, 0, 0], 0, 0)
    
    def test_longer_line(self):
        """Lines of any length compact the same way."""
        line = [2, 2, 0, 4, 4, 4, 0, 8, 0, 8]
        assert collapse_line(line) == ([4, 8, 4, 16, 0, 0, 0, 0, 0, 0], 28, 3)


class TestDirections:
    """Test each direction over a full grid."""
    
    def test_left(self, resolver):
        grid = grid_with_row([2, 2, 0, 0])
        result = resolver.resolve(grid, Direction.LEFT)
        assert result.changed
        assert result.score_delta == 4
        assert grid.rows()[0] == [4, 0, 0, 0]
    
    def test_right(self, resolver):
        """RIGHT scans from the right edge: [2, 2, 2, 0] -> [0, 0, 2, 4]."""
        grid = grid_with_row([2, 2, 2, 0])
        result = resolver.resolve(grid, Direction.RIGHT)
        assert grid.rows()[0] == [0, 0, 2, 4]
        assert result.score_delta == 4
    
    def test_up(self, resolver):
        grid = Grid.from_rows([
            [0, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
        ])
        result = resolver.resolve(grid, Direction.UP)
        assert [row[0] for row in grid.rows()] == [4, 2, 0, 0]
        assert result.score_delta == 4
    
    def test_down(self, resolver):
        grid = Grid.from_rows([
            [4, 0, 0, 0],
            [4, 0, 0, 0],
            [8, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        result = resolver.resolve(grid, Direction.DOWN)
        assert [row[0] for row in grid.rows()] == [0, 0, 8, 8]
        assert result.score_delta == 8
    
    def test_lines_are_independent(self, resolver):
        """Every row collapses on its own."""
        grid = Grid.from_rows([
            [2, 2, 0, 0],
            [0, 4, 0, 4],
            [8, 0, 8, 8],
            [2, 4, 8, 16],
        ])
        result = resolver.resolve(grid, Direction.LEFT)
        assert grid.rows() == [
            [4, 0, 0, 0],
            [8, 0, 0, 0],
            [16, 8, 0, 0],
            [2, 4, 8, 16],
        ]
        assert result.score_delta == 4 + 8 + 16
        assert result.merges == 3
    
    def test_line_coordinates_order(self):
        """Coordinates run from the destination edge inward."""
        assert line_coordinates(Direction.RIGHT, 1, 3) == [(1, 2), (1, 1), (1, 0)]
        assert line_coordinates(Direction.DOWN, 0, 3) == [(2, 0), (1, 0), (0, 0)]


class TestNoOp:
    """Test moves that change nothing."""
    
    def test_blocked_direction_is_noop(self, resolver):
        grid = grid_with_row([2, 4, 0, 0])
        before = grid.copy()
        result = resolver.resolve(grid, Direction.LEFT)
        assert not result.changed
        assert result.score_delta == 0
        assert grid == before
    
    def test_full_grid_without_pairs(self, resolver):
        """No direction changes a locked grid."""
        grid = Grid.from_rows([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 2],
        ])
        for direction in Direction:
            assert not resolver.resolve(grid, direction).changed
        assert resolver.legal_moves(grid) == []
    
    def test_preview_leaves_grid(self, resolver):
        grid = grid_with_row([2, 2, 0, 0])
        before = grid.copy()
        result = resolver.preview(grid, Direction.LEFT)
        assert result.changed
        assert result.score_delta == 4
        assert grid == before


class TestConservation:
    """Merges conserve tile values."""
    
    @pytest.mark.parametrize("direction", list(Direction))
    def test_multiset_after_merges(self, resolver, direction):
        """Removing merged pairs and adding their doubles gives the new multiset."""
        grid = Grid.from_rows([
            [2, 2, 4, 4],
            [8, 0, 8, 2],
            [2, 2, 2, 2],
            [0, 16, 16, 0],
        ])
        before_sum = sum(grid.values())
        before_count = len(grid.values())
        result = resolver.resolve(grid, direction)
        assert sum(grid.values()) == before_sum
        assert len(grid.values()) == before_count - result.merges
    
    def test_exact_multiset(self, resolver):
        grid = grid_with_row([2, 2, 2, 0])
        resolver.resolve(grid, Direction.LEFT)
        assert Counter(grid.values()) == Counter({4: 1, 2: 1})


class TestInvalidDirection:
    """Invalid directions fail fast."""
    
    @pytest.mark.parametrize("bad", [4, -1, "diagonal", None, True, 1.5])
    def test_rejected(self, resolver, bad):
        grid = grid_with_row([2, 2, 0, 0])
        with pytest.raises(ValueError):
            resolver.resolve(grid, bad)
    
    def test_names_and_ids_accepted(self, resolver):
        """Direction ids and names are coerced."""
        assert Direction.coerce("left") == Direction.LEFT
        assert Direction.coerce(3) == Direction.RIGHT
        grid = grid_with_row([2, 2, 0, 0])
        assert resolver.resolve(grid, "LEFT").changed
