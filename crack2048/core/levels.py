"""
Level Table
===========

Ordered ladder of (grid size, target tile) pairs and the current position
in it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from crack2048.core.config_loader import GameConfig, get_config, is_power_of_two


@dataclass(frozen=True)
class LevelSpec:
    """Grid size and win target for one level."""
    grid_size: int
    target_tile: int

    def __repr__(self) -> str:
        return f"LevelSpec({self.grid_size}x{self.grid_size}, target={self.target_tile})"


class LevelTable:
    """
    Level progression.

    The index only moves forward, except through ``reset_to_first()``.
    """

    def __init__(self, levels: Iterable[Tuple[int, int]]):
        """
        Initialize level table.

        Args:
            levels: (grid_size, target_tile) pairs in play order.

        Raises:
            ValueError: If the table is empty or a level is malformed.
        """
        specs: List[LevelSpec] = []
        for grid_size, target_tile in levels:
            if grid_size < 2:
                raise ValueError(f"grid_size must be >= 2, got {grid_size}")
            if target_tile < 4 or not is_power_of_two(target_tile):
                raise ValueError(f"target_tile must be a power of two >= 4, got {target_tile}")
            specs.append(LevelSpec(int(grid_size), int(target_tile)))

        if not specs:
            raise ValueError("LevelTable needs at least one level")

        self._levels: Tuple[LevelSpec, ...] = tuple(specs)
        self._index: int = 0

    @classmethod
    def from_config(cls, config: Optional[GameConfig] = None) -> "LevelTable":
        """Build the table configured in game_config.yaml."""
        if config is None:
            config = get_config()
        return cls((level.grid_size, level.target_tile) for level in config.levels)

    @property
    def index(self) -> int:
        """Zero-based index of the current level."""
        return self._index

    @property
    def levels(self) -> Tuple[LevelSpec, ...]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def current(self) -> LevelSpec:
        return self._levels[self._index]

    def is_last(self) -> bool:
        return self._index >= len(self._levels) - 1

    def advance(self) -> LevelSpec:
        """
        Move to the next level and return it.

        Raises:
            IndexError: If already on the last level. Check ``is_last()`` first.
        """
        if self.is_last():
            raise IndexError(
                f"Cannot advance past the last level ({len(self._levels)} levels)"
            )
        self._index += 1
        return self._levels[self._index]

    def reset_to_first(self) -> LevelSpec:
        """Return to level 0."""
        self._index = 0
        return self._levels[0]
