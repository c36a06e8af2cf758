"""
Scoring System
==============

Accumulates merge values for the current level.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoreEvent:
    """Record of one scoring move."""
    points: int
    merges: int

    def __repr__(self) -> str:
        return f"ScoreEvent(points={self.points}, merges={self.merges})"


class ScoreTracker:
    """
    Tracks the level score and the best score seen by this process.

    The level score is zeroed on every reset and level change; each level is
    scored on its own. The best score is kept in memory only.
    """

    def __init__(self):
        self._score: int = 0
        self._merges: int = 0
        self._best_score: int = 0

    @property
    def score(self) -> int:
        """Current level score."""
        return self._score

    @property
    def merges(self) -> int:
        """Total merges this level."""
        return self._merges

    @property
    def best_score(self) -> int:
        """Highest level score reached so far."""
        return self._best_score

    def apply_move(self, points: int, merges: int) -> ScoreEvent:
        """
        Add the merge total of one move.

        Args:
            points: Sum of the tile values created by merges.
            merges: Number of merges in the move.

        Returns:
            ScoreEvent describing the points awarded.
        """
        if points < 0:
            raise ValueError(f"Score delta cannot be negative, got {points}")

        self._score += points
        self._merges += merges
        if self._score > self._best_score:
            self._best_score = self._score
        return ScoreEvent(points=points, merges=merges)

    def set_score(self, score: int) -> None:
        """Overwrite the level score (used when restoring a board)."""
        if score < 0:
            raise ValueError(f"Score cannot be negative, got {score}")
        self._score = score
        self._best_score = max(self._best_score, score)

    def reset(self) -> None:
        """Reset level score to zero. Best score is kept."""
        self._score = 0
        self._merges = 0
