"""
Module: puzzle.events

Purpose:
    Values exchanged between the puzzle session and the presentation
    layer: input actions going in, events coming out. Every gameplay
    outcome, including a wrong answer, is an event rather than an
    exception.

Key Classes:
    - InputKind / InputAction: One button press
    - RoundStarted, ScoreChanged, Solved, Strike, InputChanged,
      HelpRequested: Events returned by PuzzleSession operations

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - puzzle.session: PuzzleSession
    - puzzle.commands: command parsing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class InputKind(str, Enum):
    """Kinds of input the presentation layer can send."""

    DIGIT = "DIGIT"
    BACKSPACE = "BACKSPACE"
    SUBMIT = "SUBMIT"
    HELP = "HELP"


@dataclass(frozen=True)
class InputAction:
    """
    One press of a puzzle button.

    Attributes:
        kind: What was pressed
        digit: The digit for DIGIT presses, else None

    Example:
        >>> InputAction.press_digit(7)
        InputAction(kind=<InputKind.DIGIT: 'DIGIT'>, digit=7)
    """

    kind: InputKind
    digit: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate action on construction."""
        if self.kind is InputKind.DIGIT:
            if self.digit is None or not 0 <= self.digit <= 9:
                raise ValueError(f"Digit press needs a digit 0-9: {self.digit!r}")
        elif self.digit is not None:
            raise ValueError(f"{self.kind.value} press takes no digit")

    @classmethod
    def press_digit(cls, digit: int) -> InputAction:
        """Create a digit press."""
        return cls(InputKind.DIGIT, digit)


BACKSPACE = InputAction(InputKind.BACKSPACE)
SUBMIT = InputAction(InputKind.SUBMIT)
HELP = InputAction(InputKind.HELP)


# ─────────────────────────────────────────────────────────────────────────────
# Events
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RoundStarted:
    """
    A new round is on screen.

    Attributes:
        rule_name: Display name of the active rule
        inputs: One or two 12-character digit strings
        points: Points the rule is worth
    """

    rule_name: str
    inputs: tuple[str, ...]
    points: int


@dataclass(frozen=True)
class ScoreChanged:
    """The score moved after a correct answer."""

    previous_score: int
    new_score: int


@dataclass(frozen=True)
class Solved:
    """The score reached the threshold; no more rounds follow."""

    final_score: int


@dataclass(frozen=True)
class Strike:
    """
    A submission did not match the answer.

    Attributes:
        wrong_positions: Ascending 1-based indices that are missing or wrong
        submitted: The text that was submitted
        mask: 12 characters, the position glyph where wrong, space elsewhere
    """

    wrong_positions: tuple[int, ...]
    submitted: str
    mask: str

    @property
    def description(self) -> str:
        """
        Human-readable summary, e.g. "Digits 1, 2 and 12 were wrong."

        An empty submission is reported as nothing.
        """
        if not self.submitted:
            return "You submitted nothing."
        labels = [str(p) for p in self.wrong_positions]
        if len(labels) == 1:
            return f"Digit {labels[0]} was wrong."
        joined = ", ".join(labels[:-1]) + " and " + labels[-1]
        return f"Digits {joined} were wrong."


@dataclass(frozen=True)
class InputChanged:
    """The text typed so far changed."""

    text: str


@dataclass(frozen=True)
class HelpRequested:
    """
    The player asked for the active rule's help clip.

    Attributes:
        clip_name: Help clip to play ("unknown" when the rule has none)
        duration: Clip length in seconds
    """

    clip_name: str
    duration: float


Event = Union[RoundStarted, ScoreChanged, Solved, Strike, InputChanged, HelpRequested]
