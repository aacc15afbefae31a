"""
Module: digits

Purpose:
    Provides DigitSequence and NumericInput - the validated representation
    of the numbers a player sees and the answers a rule produces.

Key Classes:
    - Arity: Number of operands a rule consumes
    - DigitSequence: Exactly 12 decimal digits, zero-padded
    - NumericInput: One or two DigitSequence operands

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.rules.Rule
    - puzzle.generation.generator
    - puzzle.rules.transforms
    - puzzle.session
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS

DIGIT_COUNT = PUZZLE_THRESHOLDS.digit_count


class Arity(Enum):
    """
    How many operands a rule consumes.

    The enum value is the operand count, so ``Arity(len(operands))`` works.
    """

    UNARY = 1
    BINARY = 2


@dataclass(frozen=True, slots=True)
class DigitSequence:
    """
    Twelve decimal digits - single source of truth for puzzle numbers.

    Attributes:
        digits: Tuple of exactly 12 ints, each in [0, 9]

    Invariants:
        - len(digits) == 12
        - every digit is an int in [0, 9]

    Example:
        >>> seq = DigitSequence.from_int(42)
        >>> seq.text
        '000000000042'
        >>> seq[11]
        2
    """

    digits: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate digits on construction."""
        if len(self.digits) != DIGIT_COUNT:
            raise ValueError(
                f"DigitSequence needs {DIGIT_COUNT} digits, got {len(self.digits)}"
            )
        for d in self.digits:
            if not isinstance(d, int) or isinstance(d, bool) or not 0 <= d <= 9:
                raise ValueError(f"Invalid digit in DigitSequence: {d!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def of(cls, digits: Iterable[int]) -> DigitSequence:
        """
        Create a sequence from any iterable of digits.

        Args:
            digits: Iterable yielding exactly 12 ints in [0, 9]

        Returns:
            DigitSequence holding those digits
        """
        return cls(tuple(digits))

    @classmethod
    def from_int(cls, value: int) -> DigitSequence:
        """
        Create a sequence from a non-negative integer below 10**12.

        Args:
            value: Integer to zero-pad to 12 digits

        Returns:
            DigitSequence of the canonical zero-padded form
        """
        if not 0 <= value < PUZZLE_THRESHOLDS.value_modulus:
            raise ValueError(f"Value out of range for DigitSequence: {value}")
        return cls.from_string(f"{value:0{DIGIT_COUNT}d}")

    @classmethod
    def from_string(cls, text: str) -> DigitSequence:
        """
        Parse a canonical 12-character digit string.

        Args:
            text: String of exactly 12 ASCII digits

        Returns:
            DigitSequence with those digits
        """
        if len(text) != DIGIT_COUNT or not is_digit_text(text):
            raise ValueError(f"Not a {DIGIT_COUNT}-digit string: {text!r}")
        return cls(tuple(int(c) for c in text))

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        """Canonical zero-padded 12-character form."""
        return "".join(str(d) for d in self.digits)

    @property
    def value(self) -> int:
        """Integer value of the sequence."""
        return int(self.text)

    def __len__(self) -> int:
        return len(self.digits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.digits)

    def __getitem__(self, index: int) -> int:
        return self.digits[index]

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"DigitSequence({self.text!r})"


@dataclass(frozen=True, slots=True)
class NumericInput:
    """
    Operands for one round - one or two DigitSequence values.

    Attributes:
        operands: Tuple of one (unary) or two (binary) sequences

    Invariants:
        - 1 <= len(operands) <= 2
        - binary operands may be equal; they are never deduplicated
    """

    operands: tuple[DigitSequence, ...]

    def __post_init__(self) -> None:
        """Validate operand count on construction."""
        if len(self.operands) not in (1, 2):
            raise ValueError(
                f"NumericInput takes one or two operands, got {len(self.operands)}"
            )

    @classmethod
    def of(cls, *operands: DigitSequence) -> NumericInput:
        """Create an input from positional operands."""
        return cls(tuple(operands))

    @classmethod
    def from_strings(cls, *texts: str) -> NumericInput:
        """Create an input from canonical 12-digit strings."""
        return cls(tuple(DigitSequence.from_string(t) for t in texts))

    @property
    def arity(self) -> Arity:
        """Arity matching the operand count."""
        return Arity(len(self.operands))

    @property
    def display(self) -> tuple[str, ...]:
        """One or two 12-character strings for the screen."""
        return tuple(op.text for op in self.operands)

    def __len__(self) -> int:
        return len(self.operands)

    def __getitem__(self, index: int) -> DigitSequence:
        return self.operands[index]


def is_digit_text(text: str) -> bool:
    """
    Check that every character is an ASCII digit.

    ``str.isdigit`` also accepts superscripts and other Unicode digits,
    which the puzzle never produces.
    """
    return all(c in "0123456789" for c in text)


def pairwise(first: Sequence[int], second: Sequence[int]) -> Iterator[tuple[int, int]]:
    """Yield aligned digit pairs from two sequences of equal length."""
    if len(first) != len(second):
        raise ValueError(f"Length mismatch: {len(first)} != {len(second)}")
    return zip(first, second)
