"""
Unit tests for PuzzleConfig and settings loading.
"""

import logging

import pytest

from number_cruncher.puzzle.config import (
    DEFAULT_POINT_THRESHOLD,
    ConfigurationError,
    PuzzleConfig,
    load_puzzle_config,
)


class TestPuzzleConfig:
    """Tests for PuzzleConfig dataclass."""

    def test_init_when_defaults_then_threshold_is_twenty(self):
        """Default threshold should be 20."""
        config = PuzzleConfig()
        assert config.point_threshold == 20
        assert config.seed is None

    def test_init_when_zero_threshold_then_raises_error(self):
        """Zero threshold should raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="must be positive"):
            PuzzleConfig(point_threshold=0)

    def test_init_when_bool_threshold_then_raises_error(self):
        """Booleans are not thresholds."""
        with pytest.raises(ConfigurationError, match="must be an integer"):
            PuzzleConfig(point_threshold=True)

    def test_configuration_error_when_raised_then_is_value_error(self):
        """ConfigurationError should subclass ValueError."""
        assert issubclass(ConfigurationError, ValueError)


class TestLoadPuzzleConfig:
    """Tests for load_puzzle_config()."""

    def test_load_when_valid_file_then_uses_threshold(self, settings_file):
        """A valid PointThreshold is used."""
        path = settings_file('{"PointThreshold": 35}')
        assert load_puzzle_config(path).point_threshold == 35

    def test_load_when_none_then_default(self):
        """No path means defaults."""
        assert load_puzzle_config(None).point_threshold == DEFAULT_POINT_THRESHOLD

    def test_load_when_missing_file_then_default(self, tmp_path, caplog):
        """A missing file falls back with a warning."""
        with caplog.at_level(logging.WARNING):
            config = load_puzzle_config(tmp_path / "nope.json")
        assert config.point_threshold == DEFAULT_POINT_THRESHOLD
        assert "not found" in caplog.text

    def test_load_when_corrupt_json_then_default(self, settings_file, caplog):
        """Malformed JSON falls back with a warning."""
        path = settings_file("{PointThreshold: ")
        with caplog.at_level(logging.WARNING):
            config = load_puzzle_config(path)
        assert config.point_threshold == DEFAULT_POINT_THRESHOLD
        assert "corrupted" in caplog.text

    def test_load_when_wrong_type_then_default(self, settings_file):
        """A string threshold fails validation and falls back."""
        path = settings_file('{"PointThreshold": "thirty"}')
        assert load_puzzle_config(path).point_threshold == DEFAULT_POINT_THRESHOLD

    def test_load_when_whole_float_then_uses_threshold(self, settings_file):
        """A whole-number float such as 25.0 is read as 25."""
        path = settings_file('{"PointThreshold": 25.0}')

        config = load_puzzle_config(path)

        assert config.point_threshold == 25
        assert isinstance(config.point_threshold, int)

    @pytest.mark.parametrize("value", [0, -5])
    def test_load_when_non_positive_then_default(self, settings_file, value):
        """Non-positive thresholds fall back instead of raising."""
        path = settings_file(f'{{"PointThreshold": {value}}}')
        assert load_puzzle_config(path).point_threshold == DEFAULT_POINT_THRESHOLD

    def test_load_when_key_missing_then_default(self, settings_file):
        """An object without PointThreshold uses the default."""
        path = settings_file('{"Other": 1}')
        assert load_puzzle_config(path).point_threshold == DEFAULT_POINT_THRESHOLD

    def test_load_when_seed_given_then_passed_through(self, settings_file):
        """seed and session_id are passed to the config."""
        path = settings_file('{"PointThreshold": 12}')
        config = load_puzzle_config(path, seed=9, session_id=4)
        assert (config.point_threshold, config.seed, config.session_id) == (12, 9, 4)
