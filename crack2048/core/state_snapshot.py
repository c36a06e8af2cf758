"""
State Snapshot
==============

Read-only view of a session handed to the presentation layer and to the
Gymnasium wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable session snapshot.

    ``tiles`` is a copy of the grid with the writeable flag cleared, so it can
    be rendered or stored without any way back into the session.
    """
    tiles: np.ndarray                 # (N, N) int64, read-only
    score: int
    best_score: int
    state: str                        # SessionState value
    level_index: int
    grid_size: int
    target_tile: int
    moves_used: int

    @property
    def max_tile(self) -> int:
        return int(self.tiles.max())

    @property
    def empty_count(self) -> int:
        return int(np.count_nonzero(self.tiles == 0))

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "board": np.array(self.tiles, dtype=np.int64),
            "score": np.array(self.score, dtype=np.int64),
            "max_tile": np.array(self.max_tile, dtype=np.int64),
            "empty_count": np.array(self.empty_count, dtype=np.int32),
            "level_index": np.array(self.level_index, dtype=np.int32),
        }
