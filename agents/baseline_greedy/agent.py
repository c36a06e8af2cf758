"""
Baseline Greedy Agent - Takes the best-scoring move one ply ahead.

Strategy:
- Rebuild a Grid from the "board" observation
- Preview every direction with MoveResolver (no spawn, no mutation)
- Keep the directions that change the board
- Pick the one with the highest merge score, breaking ties by the number
  of empty cells left, then by a fixed preference order that keeps large
  tiles in a corner (DOWN, LEFT, RIGHT, UP)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from crack2048.core.grid import Grid
from crack2048.core.move_resolver import Direction, MoveResolver

PREFERENCE = (Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.UP)


class Crack2048Agent:
    """Greedy one-ply agent."""

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug
        self._resolver = MoveResolver()

    def reset(self, seed: Optional[int] = None) -> None:
        """Stateless; kept for the agent interface."""
        pass

    def rank_moves(self, board: np.ndarray) -> List[Tuple[Direction, int, int]]:
        """
        Score every legal direction for board.

        Returns:
            (direction, score_delta, empty_after) tuples, best first.
        """
        grid = Grid.from_rows(np.asarray(board).tolist())
        ranked = []
        empty_now = grid.count_empty()
        for direction in PREFERENCE:
            result = self._resolver.preview(grid, direction)
            if result.changed:
                # each merge frees exactly one cell; nothing spawns in a preview
                ranked.append((direction, result.score_delta, empty_now + result.merges))

        # sort is stable, so PREFERENCE order breaks remaining ties
        ranked.sort(key=lambda item: (item[1], item[2]), reverse=True)
        return ranked

    def act(self, observation: Dict[str, Any], info: Optional[Dict[str, Any]] = None) -> int:
        """
        Choose a direction for the current board.

        Args:
            observation: Observation dict with a "board" array.
            info: Info dict from the environment (unused).

        Returns:
            Direction id in [0, 4).
        """
        ranked = self.rank_moves(observation["board"])
        if not ranked:
            # No legal move; the session is over or about to be
            return int(PREFERENCE[0])

        direction, score_delta, empty_after = ranked[0]
        if self.debug:
            print(f"[Greedy] {direction.name}: +{score_delta}, empty={empty_after}")
        return int(direction)


def create_agent(debug: bool = False) -> Crack2048Agent:
    """Factory function to create the agent."""
    return Crack2048Agent(debug=debug)
