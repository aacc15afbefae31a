"""
Module: rules

Purpose:
    Provides the Rule descriptor - one entry of the closed rule table.
    A Rule pairs display metadata and a point value with a pure transform
    from one or two DigitSequence operands to a DigitSequence answer.

Key Classes:
    - Rule: Immutable rule descriptor

Key Functions:
    - Rule.apply(numeric_input): Run the transform with an arity check
    - Rule.help_clip: Help audio name and duration, with fallback

Dependencies:
    - dataclasses (std)
    - .digits: Arity, DigitSequence, NumericInput

Used By:
    - puzzle.rules.library: RuleLibrary
    - puzzle.selection.selector: candidate filtering
    - puzzle.session: round creation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS

from .digits import Arity, DigitSequence, NumericInput

Transform = Callable[..., DigitSequence]


@dataclass(frozen=True)
class Rule:
    """
    Immutable rule descriptor.

    Selection only ever looks at ``name`` and ``points``; no rule gets
    special treatment anywhere else.

    Attributes:
        name: Unique display name (also the help clip name)
        points: Points awarded for a correct answer
        arity: Number of operands the transform takes
        transform: Pure function of the operands returning the answer
        help_duration: Help clip length in seconds, if known
        has_help: Whether a help clip exists for this rule

    Invariants:
        - name is non-empty
        - points > 0

    Example:
        >>> rule = Rule("Equality", 2, Arity.UNARY, lambda seq: seq)
        >>> rule.apply(NumericInput.from_strings("000000000042")).text
        '000000000042'
    """

    name: str
    points: int
    arity: Arity
    transform: Transform = field(compare=False, repr=False)
    help_duration: Optional[float] = None
    has_help: bool = True

    def __post_init__(self) -> None:
        """Validate rule on construction."""
        if not self.name:
            raise ValueError("Rule name cannot be empty")
        if self.points <= 0:
            raise ValueError(f"Rule points must be positive: {self.name} has {self.points}")
        if not isinstance(self.arity, Arity):
            raise ValueError(f"Invalid arity for rule {self.name}: {self.arity!r}")

    def apply(self, numeric_input: NumericInput) -> DigitSequence:
        """
        Compute the answer for an input.

        Args:
            numeric_input: Operands matching this rule's arity

        Returns:
            The transformed DigitSequence

        Raises:
            ValueError: If the input arity does not match
        """
        if numeric_input.arity is not self.arity:
            raise ValueError(
                f"Rule {self.name} takes {self.arity.value} operand(s), "
                f"got {numeric_input.arity.value}"
            )
        return self.transform(*numeric_input.operands)

    @property
    def help_clip(self) -> tuple[str, float]:
        """
        Help clip to play for this rule.

        Returns:
            (clip name, duration in seconds); the shared "unknown" clip
            when the rule has no help message
        """
        if self.has_help and self.help_duration is not None:
            return self.name, self.help_duration
        return PUZZLE_THRESHOLDS.unknown_help_name, PUZZLE_THRESHOLDS.unknown_help_duration

    @property
    def points_label(self) -> str:
        """Points with the right plural, e.g. '1 point', '4 points'."""
        return f"{self.points} point" if self.points == 1 else f"{self.points} points"
