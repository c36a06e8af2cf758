"""
Tests for configuration loading and validation.
"""

import pytest

from crack2048.core.config_loader import get_config, load_config, reload_config


VALID_YAML = """
levels:
  - grid_size: 3
    target_tile: 64
spawn:
  values: [2, 4]
  weights: [9, 1]
  initial_tiles: 1
caps:
  max_moves: 50
"""


def write_config(tmp_path, text):
    path = tmp_path / "game_config.yaml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:
    """Test YAML parsing."""
    
    def test_default_config(self):
        config = load_config()
        assert [(l.grid_size, l.target_tile) for l in config.levels] == [
            (4, 2048), (8, 4096), (10, 8192)
        ]
        assert config.spawn.values == (2, 4)
        assert config.spawn.weights == (1, 1)
        assert config.spawn.initial_tiles == 2
        assert config.caps.max_moves > 0
        assert config.num_levels == 3
        assert config.max_grid_size == 10
    
    def test_custom_file(self, tmp_path):
        config = load_config(write_config(tmp_path, VALID_YAML))
        assert config.get_level(0).target_tile == 64
        assert config.spawn.weights == (9, 1)
        assert config.caps.max_moves == 50
    
    def test_optional_sections_default(self, tmp_path):
        """spawn and caps fall back to defaults."""
        text = "levels:\n  - grid_size: 4\n    target_tile: 2048\n"
        config = load_config(write_config(tmp_path, text))
        assert config.spawn.values == (2, 4)
        assert config.spawn.weights == (1, 1)
        assert config.spawn.initial_tiles == 2
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))
    
    def test_invalid_level_index(self):
        with pytest.raises(ValueError):
            load_config().get_level(5)
    
    def test_config_is_frozen(self):
        config = load_config()
        with pytest.raises(AttributeError):
            config.caps.max_moves = 1
    
    def test_cached_config(self):
        assert get_config() is get_config()
        assert reload_config() is get_config()


class TestValidation:
    """Malformed configurations are rejected."""
    
    @pytest.mark.parametrize("old,new", [
        ("target_tile: 64", "target_tile: 100"),
        ("grid_size: 3", "grid_size: 1"),
        ("weights: [9, 1]", "weights: [1]"),
        ("weights: [9, 1]", "weights: [0, 1]"),
        ("values: [2, 4]", "values: [3, 4]"),
        ("initial_tiles: 1", "initial_tiles: 0"),
        ("max_moves: 50", "max_moves: 0"),
    ])
    def test_rejected(self, tmp_path, old, new):
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, VALID_YAML.replace(old, new)))
