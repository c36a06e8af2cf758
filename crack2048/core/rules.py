"""
Game Rules
==========

Win and loss detection for a grid at the end of a move.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from crack2048.core.grid import Grid


def has_adjacent_pair(grid: Grid) -> bool:
    """
    True if any two orthogonal neighbours hold the same non-zero value.

    Each cell is compared with its right and lower neighbour only, which
    visits every adjacent pair exactly once.
    """
    cells = grid.view()
    right = (cells[:, :-1] == cells[:, 1:]) & (cells[:, :-1] != 0)
    down = (cells[:-1, :] == cells[1:, :]) & (cells[:-1, :] != 0)
    return bool(np.any(right) or np.any(down))


@dataclass
class TerminationResult:
    """Result of a terminal check."""
    won: bool
    lost: bool

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, False)

    @staticmethod
    def win() -> "TerminationResult":
        return TerminationResult(True, False)

    @staticmethod
    def loss() -> "TerminationResult":
        return TerminationResult(False, True)

    @property
    def terminal(self) -> bool:
        return self.won or self.lost


class TerminationRules:
    """
    Win and loss conditions.

    - Win: any tile reaches the current level's target.
    - Loss: no empty cell and no adjacent equal pair.
    """

    def check_win(self, grid: Grid, target_tile: int) -> TerminationResult:
        if grid.any_at_least(target_tile):
            return TerminationResult.win()
        return TerminationResult.none()

    def check_loss(self, grid: Grid) -> TerminationResult:
        if grid.count_empty() == 0 and not has_adjacent_pair(grid):
            return TerminationResult.loss()
        return TerminationResult.none()
