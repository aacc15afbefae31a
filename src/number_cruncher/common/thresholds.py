"""Centralized puzzle constants.

All fixed numbers used by generation, selection and the session live here
so that the other modules never hardcode them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PuzzleThresholds:
    """Fixed sizes and defaults for the puzzle engine."""

    digit_count: int = 12  # Digits in every DigitSequence
    half_digit_count: int = 6  # Digits in each generated half
    default_point_threshold: int = 20  # Points needed to solve
    relaxation_headroom: int = 1  # Extra relax steps beyond the largest point value

    # Help audio
    unknown_help_name: str = "unknown"
    unknown_help_duration: float = 2 + 15224 / 44100  # Fallback clip length (s)

    # Strike display
    mask_characters: str = "1234567890Ab"  # Glyph shown for each wrong position

    @property
    def half_modulus(self) -> int:
        """Exclusive upper bound of one generated half."""
        return 10 ** self.half_digit_count

    @property
    def value_modulus(self) -> int:
        """Exclusive upper bound of a full 12-digit value."""
        return 10 ** self.digit_count


# Global instance for easy import
PUZZLE_THRESHOLDS = PuzzleThresholds()
