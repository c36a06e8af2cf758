"""
Tests for win/loss rules and score tracking.
"""

import pytest

from crack2048.core.grid import Grid
from crack2048.core.rules import TerminationRules, has_adjacent_pair
from crack2048.core.scoring import ScoreTracker


@pytest.fixture
def rules():
    return TerminationRules()


class TestAdjacency:
    """Right/down neighbour scan."""
    
    def test_horizontal_pair(self):
        assert has_adjacent_pair(Grid.from_rows([[2, 2], [4, 8]]))
    
    def test_vertical_pair(self):
        assert has_adjacent_pair(Grid.from_rows([[2, 4], [2, 8]]))
    
    def test_pair_on_last_row_and_column(self):
        assert has_adjacent_pair(Grid.from_rows([[2, 4, 8], [4, 8, 16], [32, 64, 64]]))
        assert has_adjacent_pair(Grid.from_rows([[2, 4, 8], [4, 8, 16], [32, 64, 16]]))
    
    def test_diagonal_is_not_adjacent(self):
        assert not has_adjacent_pair(Grid.from_rows([[2, 4], [4, 2]]))
    
    def test_empty_cells_do_not_pair(self):
        assert not has_adjacent_pair(Grid(3))


class TestTerminationRules:
    """Win and loss checks."""
    
    def test_win_at_target(self, rules):
        grid = Grid.from_rows([[2048, 0], [0, 0]])
        assert rules.check_win(grid, 2048).won
        assert not rules.check_win(grid, 4096).won
    
    def test_loss_requires_full_grid(self, rules):
        assert not rules.check_loss(Grid.from_rows([[2, 4], [4, 0]])).lost
    
    def test_loss_requires_no_pair(self, rules):
        assert not rules.check_loss(Grid.from_rows([[2, 2], [4, 8]])).lost
        assert rules.check_loss(Grid.from_rows([[2, 4], [4, 2]])).lost
    
    def test_result_flags(self, rules):
        result = rules.check_loss(Grid.from_rows([[2, 4], [4, 2]]))
        assert result.terminal
        assert not result.won


class TestScoreTracker:
    """Score accumulation."""
    
    def test_apply_move(self):
        scorer = ScoreTracker()
        event = scorer.apply_move(12, 2)
        assert event.points == 12
        assert scorer.score == 12
        assert scorer.merges == 2
        assert scorer.best_score == 12
    
    def test_reset_keeps_best(self):
        scorer = ScoreTracker()
        scorer.apply_move(40, 3)
        scorer.reset()
        scorer.apply_move(8, 1)
        assert scorer.score == 8
        assert scorer.merges == 1
        assert scorer.best_score == 40
    
    def test_negative_rejected(self):
        scorer = ScoreTracker()
        with pytest.raises(ValueError):
            scorer.apply_move(-4, 1)
        with pytest.raises(ValueError):
            scorer.set_score(-1)
