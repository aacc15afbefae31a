"""
Module: puzzle.config

Purpose:
    Configuration dataclass for a puzzle session, and loading of the
    point threshold from the host's JSON settings file.

Key Classes:
    - PuzzleConfig: Immutable session configuration
    - ConfigurationError: Invalid configuration values

Key Functions:
    - load_puzzle_config(): Read settings with graceful fallback to defaults

Dependencies:
    - dataclasses (std)
    - json (std)
    - core.schemas.validator: settings schema (jsonschema)

Used By:
    - puzzle.session: PuzzleSession
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS
from number_cruncher.core.schemas.validator import (
    SETTINGS_KEY_THRESHOLD,
    SettingsValidationError,
    validate_settings,
)

logger = logging.getLogger(__name__)

DEFAULT_POINT_THRESHOLD = PUZZLE_THRESHOLDS.default_point_threshold


class ConfigurationError(ValueError):
    """Invalid configuration value (e.g. non-positive threshold)."""
    pass


@dataclass(frozen=True)
class PuzzleConfig:
    """
    Configuration for a puzzle session (immutable).

    Attributes:
        point_threshold: Points needed to solve the puzzle
        seed: Random seed for reproducible rounds (None = unseeded)
        session_id: Number shown in log lines, e.g. "[Number Cruncher #3]"

    Invariants:
        - point_threshold > 0
        - session_id > 0

    Example:
        >>> config = PuzzleConfig(point_threshold=30, seed=7)
        >>> config.point_threshold
        30
    """

    point_threshold: int = DEFAULT_POINT_THRESHOLD
    seed: Optional[int] = None
    session_id: int = 1

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if isinstance(self.point_threshold, bool) or not isinstance(self.point_threshold, int):
            raise ConfigurationError(
                f"point_threshold must be an integer: {self.point_threshold!r}"
            )
        if self.point_threshold <= 0:
            raise ConfigurationError(
                f"point_threshold must be positive: {self.point_threshold}"
            )
        if self.session_id <= 0:
            raise ConfigurationError(f"session_id must be positive: {self.session_id}")


def load_puzzle_config(
    path: Union[str, Path, None],
    *,
    seed: Optional[int] = None,
    session_id: int = 1,
) -> PuzzleConfig:
    """
    Load a PuzzleConfig from a JSON settings file.

    Any malformed data falls back to the default threshold; this never raises
    for file or content problems.

    Args:
        path: Settings file path, or None to use defaults
        seed: Random seed passed through to the config
        session_id: Session number passed through to the config

    Returns:
        PuzzleConfig with the file's threshold, or the default
    """
    threshold = _read_threshold(Path(path)) if path is not None else None
    if threshold is None:
        return PuzzleConfig(seed=seed, session_id=session_id)
    try:
        return PuzzleConfig(point_threshold=threshold, seed=seed, session_id=session_id)
    except ConfigurationError as e:
        logger.warning(f"{e}; using default threshold {DEFAULT_POINT_THRESHOLD}")
        return PuzzleConfig(seed=seed, session_id=session_id)


def _read_threshold(path: Path) -> Optional[int]:
    """Read PointThreshold from a settings file, or None if unusable."""
    if not path.exists():
        logger.warning(f"Settings file not found: {path}; using default threshold")
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file is corrupted ({e}); using default threshold")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read settings ({e}); using default threshold")
        return None

    try:
        validate_settings(data)
    except SettingsValidationError as e:
        logger.warning(f"Invalid settings at {e.path or '<root>'}: {e}; using default threshold")
        return None

    threshold = data.get(SETTINGS_KEY_THRESHOLD)
    if threshold is None:
        logger.warning(f"{SETTINGS_KEY_THRESHOLD} missing from settings; using default threshold")
        return None
    # JSON Schema counts 25.0 as an integer
    if isinstance(threshold, float) and threshold.is_integer():
        return int(threshold)
    return threshold
