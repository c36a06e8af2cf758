"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to one level of a game session.
Reward is the merge score of each move.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from crack2048.core.config_loader import GameConfig, load_config
from crack2048.core.game import GameSession, SessionState
from crack2048.core.levels import LevelTable
from crack2048.core.move_resolver import Direction
from crack2048.core.state_snapshot import GameSnapshot


class Crack2048Env(gym.Env):
    """
    Tile-merging puzzle as a Gymnasium environment.

    Action Space:
        Discrete(4): 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT.

    Observation Space:
        Dict with the (N, N) board and a few scalar summaries.

    Reward:
        Sum of tiles created by merges during the step.

    Episode:
        Terminates when the level is won or lost. Truncates after
        caps.max_moves attempted steps, so an agent that keeps pushing
        against a wall still ends.
    """

    metadata = {
        "render_modes": [],
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        level: int = 0,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            level: Index of the level to play.
            debug: If True, print a trace line per step.
        """
        super().__init__()

        self._config = load_config(config_path)
        self._debug = debug

        levels = LevelTable.from_config(self._config)
        if not 0 <= level < len(levels):
            raise ValueError(f"Level {level} out of range [0, {len(levels)})")
        for _ in range(level):
            levels.advance()

        self._game = GameSession(config=self._config, levels=levels)
        self._steps: int = 0

        size = levels.current().grid_size
        self.action_space = spaces.Discrete(len(Direction))
        self.observation_space = self._build_observation_space(size)

        if self._debug:
            spec = levels.current()
            print(f"[DEBUG] Crack2048Env initialized")
            print(f"[DEBUG]   Level: {level} ({spec.grid_size}x{spec.grid_size}, target {spec.target_tile})")
            print(f"[DEBUG]   Max moves: {self._config.caps.max_moves}")

    def _build_observation_space(self, size: int) -> spaces.Dict:
        """Build the observation space definition."""
        max_value = np.iinfo(np.int64).max
        return spaces.Dict({
            "board": spaces.Box(low=0, high=2 ** 31, shape=(size, size), dtype=np.int64),
            "score": spaces.Box(low=0, high=max_value, shape=(), dtype=np.int64),
            "max_tile": spaces.Box(low=0, high=2 ** 31, shape=(), dtype=np.int64),
            "empty_count": spaces.Box(low=0, high=size * size, shape=(), dtype=np.int32),
            "level_index": spaces.Box(low=0, high=self._config.num_levels, shape=(), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        snapshot = self._game.reset(seed=seed)
        self._steps = 0

        info = self._build_info()
        info["delta_score"] = 0
        info["changed"] = False
        return self._snapshot_to_obs(snapshot), info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Direction id in [0, 4).

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item() if action.ndim == 0 else action[0])

        outcome = self._game.apply_move(action)
        self._steps += 1

        terminated = outcome.state != SessionState.PLAYING
        truncated = not terminated and self._steps >= self._config.caps.max_moves

        info = self._build_info()
        info["delta_score"] = outcome.score_delta
        info["changed"] = outcome.changed
        info["spawned"] = outcome.spawned

        obs = self._snapshot_to_obs(self._game.snapshot())

        if self._debug:
            print(f"[DEBUG] Step: action={Direction(action).name}, changed={outcome.changed}, "
                  f"delta_score={outcome.score_delta}, max_tile={obs['max_tile']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {outcome.state.value}")

        return obs, float(outcome.score_delta), terminated, truncated, info

    def _build_info(self) -> Dict[str, Any]:
        info = self._game.get_info()
        info["steps"] = self._steps
        info["legal_moves"] = [int(d) for d in self._game.legal_moves()]
        return info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict()

    def close(self) -> None:
        """Nothing to release; kept for the Gymnasium API."""
        pass

    @property
    def game(self) -> GameSession:
        """Access to underlying session (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
