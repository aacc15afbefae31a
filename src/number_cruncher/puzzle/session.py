"""
Module: puzzle.session

Purpose:
    Orchestrate puzzle rounds.
    Select rule → Generate input → Compute answer → Accept input → Score

Key Classes:
    - PuzzleSession: Owns the session state and the active round
    - SessionState: Score, threshold and previous rule
    - ActiveRound: Rule, input, answer and the text typed so far
    - SessionPhase: INACTIVE → ACTIVE → SOLVED
    - SessionError: Operation not allowed in the current phase

Dependencies:
    - puzzle.selection: RuleSelector
    - puzzle.generation: NumberGenerator
    - puzzle.rules: RuleLibrary
    - puzzle.events: events and input actions

Used By:
    - puzzle.commands: remote command handling
    - presentation layer (external)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Union

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS
from number_cruncher.core.models.digits import DigitSequence, NumericInput, is_digit_text
from number_cruncher.core.models.rules import Rule

from .config import PuzzleConfig
from .events import (
    BACKSPACE,
    SUBMIT,
    Event,
    HelpRequested,
    InputAction,
    InputChanged,
    InputKind,
    RoundStarted,
    ScoreChanged,
    Solved,
    Strike,
)
from .generation import NumberGenerator
from .rules import RuleLibrary
from .selection import RuleSelector

logger = logging.getLogger(__name__)

DIGIT_COUNT = PUZZLE_THRESHOLDS.digit_count


class SessionError(Exception):
    """Operation attempted in the wrong phase, or malformed submission."""
    pass


class SessionPhase(Enum):
    """Lifecycle of a puzzle session."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    SOLVED = "solved"


@dataclass
class SessionState:
    """
    Mutable score state, created on activation.

    Attributes:
        score: Points earned so far
        threshold: Points needed to solve (never relaxed)
        previous_name: Rule of the last solved round, None before round two
    """

    score: int
    threshold: int
    previous_name: Optional[str] = None


@dataclass
class ActiveRound:
    """
    One round: rule, input and the answer computed when it starts.

    Only ``submitted_text`` changes after creation, and only through the
    session's input operations.

    Attributes:
        rule: The rule the player must infer
        numeric_input: Operands shown on screen
        answer: rule applied to numeric_input
        effective_threshold: Threshold the rule was selected under
        submitted_text: Digits typed so far (at most 12)
    """

    rule: Rule
    numeric_input: NumericInput
    answer: DigitSequence
    effective_threshold: int
    submitted_text: str = ""

    @classmethod
    def start(cls, rule: Rule, numeric_input: NumericInput, effective_threshold: int) -> ActiveRound:
        """Create a round, computing its answer once."""
        return cls(
            rule=rule,
            numeric_input=numeric_input,
            answer=rule.apply(numeric_input),
            effective_threshold=effective_threshold,
        )


def mismatch_positions(text: str, answer: str) -> tuple[int, ...]:
    """
    1-based positions where ``text`` is missing or differs from ``answer``.

    Example:
        >>> mismatch_positions("000000000000", "000000000001")
        (12,)
    """
    return tuple(
        i + 1 for i in range(len(answer))
        if i >= len(text) or text[i] != answer[i]
    )


def mismatch_mask(positions: tuple[int, ...]) -> str:
    """Blink mask: position glyph where wrong, space elsewhere."""
    wrong = set(positions)
    glyphs = PUZZLE_THRESHOLDS.mask_characters
    return "".join(glyphs[i] if i + 1 in wrong else " " for i in range(DIGIT_COUNT))


def _parse_digit(digit: object) -> int:
    """Accept an int 0-9 or a one-character digit string; bools are rejected."""
    if isinstance(digit, int) and not isinstance(digit, bool) and 0 <= digit <= 9:
        return digit
    if isinstance(digit, str) and len(digit) == 1 and is_digit_text(digit):
        return int(digit)
    raise SessionError(f"Not a digit: {digit!r}")


class PuzzleSession:
    """
    Puzzle session orchestrator.

    Every operation runs to completion and returns the events it caused;
    the caller renders them afterwards.

    Attributes:
        library: Rules to draw from
        config: Session configuration
        phase: Current lifecycle phase

    Example:
        >>> session = PuzzleSession(default_library(), PuzzleConfig(seed=3))
        >>> events = session.activate()
        >>> events[0].rule_name in {r.name for r in session.library}
        True
    """

    def __init__(
        self,
        library: RuleLibrary,
        config: Optional[PuzzleConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.library = library
        self.config = config or PuzzleConfig()
        if rng is None:
            rng = random.Random(self.config.seed)
        self._selector = RuleSelector(rng)
        self._generator = NumberGenerator(rng)
        self.phase = SessionPhase.INACTIVE
        self._state: Optional[SessionState] = None
        self._round: Optional[ActiveRound] = None
        self._log_prefix = f"[Number Cruncher #{self.config.session_id}]"

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        """Session state (raises before activation)."""
        if self._state is None:
            raise SessionError("Session has not been activated")
        return self._state

    @property
    def round(self) -> ActiveRound:
        """The active round (raises before activation)."""
        if self._round is None:
            raise SessionError("Session has not been activated")
        return self._round

    @property
    def score(self) -> int:
        return self._state.score if self._state else 0

    @property
    def threshold(self) -> int:
        return self._state.threshold if self._state else self.config.point_threshold

    @property
    def is_solved(self) -> bool:
        return self.phase is SessionPhase.SOLVED

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def activate(self) -> List[Event]:
        """
        Start the session and its first round.

        Returns:
            [RoundStarted] for the first round

        Raises:
            SessionError: If already activated
            SelectionExhaustion: If the library cannot produce a rule
        """
        if self.phase is not SessionPhase.INACTIVE:
            raise SessionError(f"Session already activated ({self.phase.value})")
        self._state = SessionState(score=0, threshold=self.config.point_threshold)
        event = self._start_round(first=True)
        self.phase = SessionPhase.ACTIVE
        return [event]

    def append_digit(self, digit: Union[int, str]) -> List[Event]:
        """
        Type one digit; ignored once 12 digits are typed.

        Returns:
            [InputChanged] if the text changed, else []
        """
        self._require_active()
        value = _parse_digit(digit)
        current = self.round
        if len(current.submitted_text) >= DIGIT_COUNT:
            return []
        current.submitted_text += str(value)
        return [InputChanged(current.submitted_text)]

    def backspace(self) -> List[Event]:
        """
        Remove the last typed digit; ignored when nothing is typed.

        Returns:
            [InputChanged] if the text changed, else []
        """
        self._require_active()
        current = self.round
        if not current.submitted_text:
            return []
        current.submitted_text = current.submitted_text[:-1]
        return [InputChanged(current.submitted_text)]

    def submit(self, text: Optional[str] = None) -> List[Event]:
        """
        Check a submission against the active round's answer.

        On a match the score goes up; the session is solved once the score
        reaches the threshold, otherwise the next round starts. On a
        mismatch nothing changes and a Strike is returned.

        Args:
            text: Text to submit; defaults to the digits typed so far

        Returns:
            [ScoreChanged, Solved] or [ScoreChanged, RoundStarted] on a
            match, [Strike] on a mismatch

        Raises:
            SessionError: If not active, or text is over 12 characters or
                has non-digits
        """
        self._require_active()
        current = self.round
        if text is None:
            text = current.submitted_text
        elif len(text) > DIGIT_COUNT or not is_digit_text(text):
            raise SessionError(f"Submission must be at most {DIGIT_COUNT} digits: {text!r}")

        if text != current.answer.text:
            return [self._strike(text)]

        state = self.state
        previous = state.score
        state.score += current.rule.points
        events: List[Event] = [ScoreChanged(previous, state.score)]
        if state.score >= state.threshold:
            self.phase = SessionPhase.SOLVED
            logger.info(f"{self._log_prefix} You submitted {text}, which was correct. Module solved!")
            events.append(Solved(state.score))
            return events

        noun = "point" if state.score == 1 else "points"
        logger.info(
            f"{self._log_prefix} You submitted {text}, which was correct. "
            f"You now have {state.score} {noun}."
        )
        state.previous_name = current.rule.name
        events.append(self._start_round(first=False))
        return events

    def request_help(self) -> List[Event]:
        """
        Ask for the active rule's help clip. No state changes.

        Returns:
            [HelpRequested]
        """
        self._require_active()
        clip_name, duration = self.round.rule.help_clip
        return [HelpRequested(clip_name, duration)]

    def press(self, action: InputAction) -> List[Event]:
        """Dispatch one input action to the matching operation."""
        if action.kind is InputKind.DIGIT:
            return self.append_digit(action.digit)
        if action.kind is InputKind.BACKSPACE:
            return self.backspace()
        if action.kind is InputKind.SUBMIT:
            return self.submit()
        return self.request_help()

    # ─────────────────────────────────────────────────────────────────────────
    # Forced Solve
    # ─────────────────────────────────────────────────────────────────────────

    def solve_steps(self) -> List[InputAction]:
        """
        Presses that finish the active round from the current text.

        Backspaces down to the longest correct prefix, types the rest of
        the answer, then submits.
        """
        self._require_active()
        answer = self.round.answer.text
        text = self.round.submitted_text
        keep = 0
        while keep < len(text) and text[keep] == answer[keep]:
            keep += 1
        steps = [BACKSPACE] * (len(text) - keep)
        steps.extend(InputAction.press_digit(int(c)) for c in answer[keep:])
        steps.append(SUBMIT)
        return steps

    def autosolve(self) -> Iterator[Event]:
        """Press through every remaining round until solved, yielding events."""
        while self.phase is SessionPhase.ACTIVE:
            for action in self.solve_steps():
                yield from self.press(action)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _require_active(self) -> None:
        if self.phase is not SessionPhase.ACTIVE:
            raise SessionError(f"Session is not accepting input ({self.phase.value})")

    def _start_round(self, *, first: bool) -> RoundStarted:
        state = self.state
        selection = self._selector.select(
            state.score, state.threshold, state.previous_name, self.library
        )
        rule = selection.rule
        numeric_input = self._generator.generate(rule.arity)
        self._round = ActiveRound.start(rule, numeric_input, selection.effective_threshold)

        display = numeric_input.display
        logger.info(
            f"{self._log_prefix} The {'first' if first else 'next'} calculation is "
            f"{rule.name}, worth {rule.points_label}."
        )
        if len(display) == 1:
            logger.info(f"{self._log_prefix} This calculation uses one number, which is {display[0]}.")
        else:
            logger.info(
                f"{self._log_prefix} This calculation uses two numbers, "
                f"which are {display[0]} and {display[1]}."
            )
        logger.info(f"{self._log_prefix} The answer is {self._round.answer.text}.")
        return RoundStarted(rule.name, display, rule.points)

    def _strike(self, text: str) -> Strike:
        positions = mismatch_positions(text, self.round.answer.text)
        strike = Strike(positions, text, mismatch_mask(positions))
        if text:
            logger.info(
                f"{self._log_prefix} You submitted {text}, which was incorrect: "
                f"{strike.description} Strike!"
            )
        else:
            logger.info(f"{self._log_prefix} You submitted nothing, which was incorrect. Strike!")
        return strike
