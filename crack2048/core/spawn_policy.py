"""
Spawn Policy
============

Places one new tile into a uniformly chosen empty cell.

The tile value is drawn from the configured spawn values; the default
configuration gives 2 and 4 equal odds. The random source is always passed
in by the caller so that sessions built from the same seed spawn the same
tiles.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from crack2048.core.config_loader import GameConfig, get_config
from crack2048.core.grid import Grid


class SpawnPolicy:
    """
    Chooses where and what to spawn. Never decides whether to spawn.

    No tile value short-circuits the spawn: a board that already holds a
    2048 on a level whose target is higher still receives a new tile. Win
    detection is left entirely to the session and the per-level target.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize spawn policy.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._values = config.spawn.values
        self._weights = config.spawn.weights

    @property
    def values(self) -> Tuple[int, ...]:
        """Tile values that can spawn."""
        return self._values

    def choose_value(self, rng: random.Random) -> int:
        """Draw a spawn value according to the configured weights."""
        return rng.choices(self._values, weights=self._weights)[0]

    def spawn(self, grid: Grid, rng: random.Random) -> Optional[Tuple[int, int, int]]:
        """
        Place one tile into a random empty cell of grid.

        Args:
            grid: Grid to place into.
            rng: Random source.

        Returns:
            (row, col, value) of the new tile, or None if the grid is full.
        """
        empty = grid.empty_cells()
        if not empty:
            return None

        row, col = rng.choice(empty)
        value = self.choose_value(rng)
        grid.set(row, col, value)
        return (row, col, value)
