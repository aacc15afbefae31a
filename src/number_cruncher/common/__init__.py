"""Shared constants for the puzzle engine."""

from .thresholds import PUZZLE_THRESHOLDS, PuzzleThresholds

__all__ = ["PUZZLE_THRESHOLDS", "PuzzleThresholds"]
