"""
Crack 2048 Core - The grid mutation engine.

This module provides the turn-based game session and all supporting
systems (grid, move resolution, spawning, scoring, level progression).

Main exports:
- GameSession: Turn-based session exposing apply_move / reset / advance_level
- MoveOutcome, SessionState: Per-move result and session lifecycle
- Direction: The four directional commands
- Grid, MoveResolver, SpawnPolicy, LevelTable: Engine components
- Crack2048Env: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
"""

from crack2048.core.config_loader import GameConfig, load_config
from crack2048.core.grid import Grid
from crack2048.core.move_resolver import Direction, MoveResolver, MoveResult
from crack2048.core.spawn_policy import SpawnPolicy
from crack2048.core.levels import LevelSpec, LevelTable
from crack2048.core.game import GameSession, MoveOutcome, SessionState
from crack2048.core.state_snapshot import GameSnapshot
from crack2048.core.env_gym import Crack2048Env

__all__ = [
    "GameConfig",
    "load_config",
    "Grid",
    "Direction",
    "MoveResolver",
    "MoveResult",
    "SpawnPolicy",
    "LevelSpec",
    "LevelTable",
    "GameSession",
    "MoveOutcome",
    "SessionState",
    "GameSnapshot",
    "Crack2048Env",
]
