"""
Game Session
============

Turn-based orchestrator combining grid, move resolution, spawning, scoring,
level progression and win/loss rules.

A session is not thread-safe. Callers must serialize ``apply_move``,
``reset``, ``advance_level`` and ``restart_from_start``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from crack2048.core.config_loader import GameConfig, get_config
from crack2048.core.grid import Grid
from crack2048.core.levels import LevelSpec, LevelTable
from crack2048.core.move_resolver import Direction, MoveResolver
from crack2048.core.rules import TerminationRules
from crack2048.core.scoring import ScoreTracker
from crack2048.core.spawn_policy import SpawnPolicy
from crack2048.core.state_snapshot import GameSnapshot


class SessionState(str, Enum):
    """Lifecycle of one level attempt."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a single ``apply_move`` call."""
    changed: bool
    score_delta: int
    state: SessionState
    spawned: Optional[Tuple[int, int, int]] = None
    merges: int = 0

    @property
    def terminal(self) -> bool:
        return self.state != SessionState.PLAYING


class GameSession:
    """
    Main game session.

    Orchestrates:
    - Grid (owned exclusively, only read-only snapshots leave)
    - Move resolution
    - Spawn policy with an injected random source
    - Scoring
    - Level table
    - Win/loss rules

    One call to ``apply_move`` = resolve, score, win check, spawn, loss check.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        levels: Optional[LevelTable] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize a session on the current level of the table.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Ignored when rng is given.
            levels: Level table. Built from config if None.
            rng: Random source for spawning. Seeded from seed if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._levels = levels if levels is not None else LevelTable.from_config(config)
        self._rng = rng if rng is not None else random.Random(seed)

        # Initialize subsystems
        self._resolver = MoveResolver()
        self._spawner = SpawnPolicy(config)
        self._scorer = ScoreTracker()
        self._rules = TerminationRules()

        # Session state; the grid itself is built by _start_level
        self._grid: Grid
        self._state = SessionState.PLAYING
        self._moves_used: int = 0

        self._start_level()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def levels(self) -> LevelTable:
        return self._levels

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def score(self) -> int:
        """Score of the current level."""
        return self._scorer.score

    @property
    def best_score(self) -> int:
        """Best level score reached by this session."""
        return self._scorer.best_score

    @property
    def moves_used(self) -> int:
        """Grid-changing moves made in the current level."""
        return self._moves_used

    @property
    def grid_size(self) -> int:
        return self._grid.size

    @property
    def is_over(self) -> bool:
        """True once the level has been won or lost."""
        return self._state != SessionState.PLAYING

    def current_level(self) -> LevelSpec:
        return self._levels.current()

    def _start_level(self) -> None:
        """Fresh grid for the current level, zero score, initial tiles."""
        self._grid = Grid(self._levels.current().grid_size)
        self._scorer.reset()
        self._moves_used = 0
        self._state = SessionState.PLAYING

        for _ in range(self._config.spawn.initial_tiles):
            if self._spawner.spawn(self._grid, self._rng) is None:
                break

    def apply_move(self, direction: Union[Direction, int, str]) -> MoveOutcome:
        """
        Apply one directional command.

        Args:
            direction: Direction (or its id / name).

        Returns:
            MoveOutcome for this call. Calls made after the session has ended
            and moves that change nothing return ``changed=False``.

        Raises:
            ValueError: If direction is not a valid Direction.
        """
        direction = Direction.coerce(direction)

        if self._state != SessionState.PLAYING:
            return MoveOutcome(changed=False, score_delta=0, state=self._state)

        result = self._resolver.resolve(self._grid, direction)
        if not result.changed:
            return MoveOutcome(changed=False, score_delta=0, state=self._state)

        self._scorer.apply_move(result.score_delta, result.merges)
        self._moves_used += 1

        # Winning move ends the level without a spawn
        if self._rules.check_win(self._grid, self.current_level().target_tile).won:
            self._state = SessionState.WON
            return MoveOutcome(
                changed=True,
                score_delta=result.score_delta,
                state=self._state,
                merges=result.merges
            )

        spawned = None
        if self._grid.count_empty() > 0:
            spawned = self._spawner.spawn(self._grid, self._rng)

        if self._rules.check_loss(self._grid).lost:
            self._state = SessionState.LOST

        return MoveOutcome(
            changed=True,
            score_delta=result.score_delta,
            state=self._state,
            spawned=spawned,
            merges=result.merges
        )

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Restart the current level.

        Args:
            seed: New random seed. Keeps the current random source if None.

        Returns:
            Snapshot of the fresh level.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._start_level()
        return self.snapshot()

    def advance_level(self) -> GameSnapshot:
        """
        Move to the next level: larger grid, higher target, zero score.

        Raises:
            IndexError: If the session is already on the last level.
        """
        self._levels.advance()
        self._start_level()
        return self.snapshot()

    def restart_from_start(self) -> GameSnapshot:
        """Go back to the first level and start it fresh."""
        self._levels.reset_to_first()
        self._start_level()
        return self.snapshot()

    def restore(self, tiles: Sequence[Sequence[int]], score: int = 0) -> GameSnapshot:
        """
        Load an explicit board into the current level.

        The state is set to PLAYING without a terminal check; the next move
        decides the outcome.

        Args:
            tiles: Square matrix matching the current grid size.
            score: Level score to resume from.

        Raises:
            ValueError: On size mismatch, invalid tiles or negative score.
        """
        if score < 0:
            raise ValueError(f"Score cannot be negative, got {score}")
        self._grid.load(tiles)
        self._scorer.reset()
        self._scorer.set_score(score)
        self._moves_used = 0
        self._state = SessionState.PLAYING
        return self.snapshot()

    def legal_moves(self) -> List[Direction]:
        """Directions that would change the grid. Empty once the session is over."""
        if self._state != SessionState.PLAYING:
            return []
        return self._resolver.legal_moves(self._grid)

    def snapshot(self) -> GameSnapshot:
        """Read-only view of grid, score and state."""
        level = self.current_level()
        return GameSnapshot(
            tiles=self._grid.view(),
            score=self._scorer.score,
            best_score=self._scorer.best_score,
            state=self._state.value,
            level_index=self._levels.index,
            grid_size=level.grid_size,
            target_tile=level.target_tile,
            moves_used=self._moves_used
        )

    def get_info(self) -> Dict[str, Any]:
        """Summary dict for tools and the Gymnasium wrapper."""
        level = self.current_level()
        return {
            "score": self._scorer.score,
            "best_score": self._scorer.best_score,
            "moves_used": self._moves_used,
            "merges": self._scorer.merges,
            "level_index": self._levels.index,
            "grid_size": level.grid_size,
            "target_tile": level.target_tile,
            "max_tile": self._grid.max_tile(),
            "empty_count": self._grid.count_empty(),
            "state": self._state.value,
        }
