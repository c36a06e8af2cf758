"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml


def is_power_of_two(value: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return value > 0 and (value & (value - 1)) == 0


@dataclass(frozen=True)
class LevelConfig:
    """One rung of the level ladder."""
    grid_size: int       # Side length of the square grid
    target_tile: int     # Tile value that wins the level


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn value distribution and starting tiles."""
    values: Tuple[int, ...]
    weights: Tuple[int, ...]
    initial_tiles: int


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_moves: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.
    
    All values are immutable to prevent accidental modification during runtime.
    """
    levels: Tuple[LevelConfig, ...]
    spawn: SpawnConfig
    caps: CapsConfig
    
    @property
    def num_levels(self) -> int:
        """Number of levels in the progression."""
        return len(self.levels)
    
    @property
    def max_grid_size(self) -> int:
        """Largest grid used by any level."""
        return max(level.grid_size for level in self.levels)
    
    def get_level(self, index: int) -> LevelConfig:
        """Get level config by index."""
        if 0 <= index < len(self.levels):
            return self.levels[index]
        raise ValueError(f"Invalid level index: {index}")


def _parse_level(level_data: dict) -> LevelConfig:
    """Parse a single level entry from YAML."""
    return LevelConfig(
        grid_size=int(level_data["grid_size"]),
        target_tile=int(level_data["target_tile"])
    )


def _parse_int_list(data: List, name: str) -> Tuple[int, ...]:
    """Parse a YAML list of integers."""
    if not isinstance(data, (list, tuple)) or len(data) == 0:
        raise ValueError(f"{name} must be a non-empty list, got {data!r}")
    return tuple(int(v) for v in data)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if not config.levels:
        raise ValueError("At least one level must be configured")
    
    for i, level in enumerate(config.levels):
        if level.grid_size < 2:
            raise ValueError(f"Level {i}: grid_size must be >= 2, got {level.grid_size}")
        if level.target_tile < 4 or not is_power_of_two(level.target_tile):
            raise ValueError(
                f"Level {i}: target_tile must be a power of two >= 4, got {level.target_tile}"
            )
    
    spawn = config.spawn
    for value in spawn.values:
        if value < 2 or not is_power_of_two(value):
            raise ValueError(f"Spawn value must be a power of two >= 2, got {value}")
    
    if len(spawn.weights) != len(spawn.values):
        raise ValueError(
            f"Spawn weights length ({len(spawn.weights)}) must match "
            f"values length ({len(spawn.values)})"
        )
    
    if any(w <= 0 for w in spawn.weights):
        raise ValueError(f"Spawn weights must be positive, got {spawn.weights}")
    
    if spawn.initial_tiles < 1:
        raise ValueError(f"initial_tiles must be >= 1, got {spawn.initial_tiles}")
    
    if config.caps.max_moves < 1:
        raise ValueError(f"max_moves must be >= 1, got {config.caps.max_moves}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.
    
    Args:
        config_path: Path to game_config.yaml. If None, uses default location.
        
    Returns:
        Validated GameConfig instance.
        
    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )
    
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)
    
    levels = tuple(_parse_level(level) for level in raw["levels"])
    
    spawn_data = raw.get("spawn", {})
    values = _parse_int_list(spawn_data.get("values", [2, 4]), "spawn.values")
    spawn = SpawnConfig(
        values=values,
        weights=_parse_int_list(spawn_data.get("weights", [1] * len(values)), "spawn.weights"),
        initial_tiles=int(spawn_data.get("initial_tiles", 2))
    )
    
    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_moves=int(caps_data.get("max_moves", 20000))
    )
    
    config = GameConfig(
        levels=levels,
        spawn=spawn,
        caps=caps
    )
    
    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
