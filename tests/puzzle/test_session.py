"""
Unit tests for PuzzleSession round flow and scoring.
"""

import logging
import random

import pytest

from number_cruncher.core.models.digits import Arity, DigitSequence
from number_cruncher.core.models.rules import Rule
from number_cruncher.puzzle.config import PuzzleConfig
from number_cruncher.puzzle.events import (
    BACKSPACE,
    SUBMIT,
    HelpRequested,
    InputAction,
    InputChanged,
    RoundStarted,
    ScoreChanged,
    Solved,
    Strike,
)
from number_cruncher.puzzle.rules import RuleLibrary
from number_cruncher.puzzle.session import (
    PuzzleSession,
    SessionError,
    SessionPhase,
    mismatch_mask,
    mismatch_positions,
)


def make_const_rule(name: str, points: int, answer: str, arity: Arity = Arity.UNARY) -> Rule:
    """Helper to create a rule whose answer ignores its input."""
    fixed = DigitSequence.from_string(answer)
    return Rule(name, points, arity, lambda *operands: fixed, help_duration=1.5)


@pytest.fixture
def one_two_library() -> RuleLibrary:
    """X(1 point) and Y(2 points, binary) with fixed answers."""
    return RuleLibrary.of([
        make_const_rule("X", 1, "000000000001"),
        make_const_rule("Y", 2, "222222222222", Arity.BINARY),
    ])


@pytest.fixture
def session(one_two_library) -> PuzzleSession:
    """Activated session with threshold 3."""
    s = PuzzleSession(one_two_library, PuzzleConfig(point_threshold=3, seed=1))
    s.activate()
    return s


class TestActivation:
    """Tests for activate()."""

    def test_activate_when_inactive_then_starts_first_round(self, one_two_library):
        """Activation creates state and the first round."""
        s = PuzzleSession(one_two_library, PuzzleConfig(point_threshold=3, seed=1))
        assert s.phase is SessionPhase.INACTIVE

        events = s.activate()

        assert s.phase is SessionPhase.ACTIVE
        assert len(events) == 1
        started = events[0]
        assert isinstance(started, RoundStarted)
        assert started.rule_name == s.round.rule.name
        assert len(started.inputs) == s.round.rule.arity.value
        assert all(len(text) == 12 for text in started.inputs)
        assert s.score == 0
        assert s.state.previous_name is None

    def test_activate_when_called_twice_then_raises_error(self, session):
        """A session activates once."""
        with pytest.raises(SessionError, match="already activated"):
            session.activate()

    def test_input_when_not_activated_then_raises_error(self, one_two_library):
        """Input before activation is rejected."""
        s = PuzzleSession(one_two_library)
        with pytest.raises(SessionError, match="not accepting input"):
            s.append_digit(1)
        with pytest.raises(SessionError, match="not been activated"):
            _ = s.round

    def test_round_when_started_then_answer_computed(self, session):
        """The answer is present as soon as the round exists."""
        current = session.round
        assert current.answer == current.rule.apply(current.numeric_input)


class TestTyping:
    """Tests for append_digit() and backspace()."""

    def test_append_digit_when_typed_then_text_grows(self, session):
        """Digits are appended in order."""
        session.append_digit(4)
        events = session.append_digit("2")
        assert events == [InputChanged("42")]
        assert session.round.submitted_text == "42"

    def test_append_digit_when_twelve_typed_then_ignored(self, session):
        """Text is bounded to 12 characters."""
        for _ in range(12):
            session.append_digit(9)
        assert session.append_digit(1) == []
        assert session.round.submitted_text == "9" * 12

    def test_append_digit_when_not_digit_then_raises_error(self, session):
        """Only 0-9 can be typed."""
        with pytest.raises(SessionError, match="Not a digit"):
            session.append_digit(10)
        with pytest.raises(SessionError, match="Not a digit"):
            session.append_digit("x")

    @pytest.mark.parametrize("digit", [7.9, None, True, "12", "", "٣", -1])
    def test_append_digit_when_not_int_or_digit_char_then_raises_error(self, session, digit):
        """Floats, None, bools and multi-character text type nothing."""
        with pytest.raises(SessionError, match="Not a digit"):
            session.append_digit(digit)

        assert session.round.submitted_text == ""

    def test_backspace_when_text_then_removes_last(self, session):
        """Backspace drops the last digit."""
        session.append_digit(1)
        session.append_digit(2)
        assert session.backspace() == [InputChanged("1")]

    def test_backspace_when_empty_then_no_event(self, session):
        """Backspace on empty text does nothing."""
        assert session.backspace() == []


class TestSubmit:
    """Tests for submit()."""

    def test_submit_when_one_digit_wrong_then_strike_at_that_position(self):
        """000000000000 against 000000000001 is wrong only at 12."""
        library = RuleLibrary.of([make_const_rule("X", 1, "000000000001")])
        s = PuzzleSession(library, PuzzleConfig(seed=2))
        s.activate()

        events = s.submit("000000000000")

        assert len(events) == 1
        strike = events[0]
        assert isinstance(strike, Strike)
        assert strike.wrong_positions == (12,)
        assert strike.mask == " " * 11 + "b"
        assert strike.description == "Digit 12 was wrong."

    def test_submit_when_wrong_then_state_unchanged(self, session):
        """A strike leaves score, round and typed text alone."""
        current = session.round
        session.append_digit(5)

        session.submit()

        assert session.score == 0
        assert session.round is current
        assert current.submitted_text == "5"

    def test_submit_when_short_then_missing_positions_are_wrong(self, session):
        """Every index at or past the text length counts as wrong."""
        answer = session.round.answer.text
        events = session.submit(answer[:9])
        assert events[0].wrong_positions == (10, 11, 12)

    def test_submit_when_empty_then_all_positions_wrong(self, session, caplog):
        """An empty submission is wrong everywhere and logged as nothing."""
        with caplog.at_level(logging.INFO):
            events = session.submit()
        assert events[0].wrong_positions == tuple(range(1, 13))
        assert "submitted nothing" in caplog.text

    def test_submit_when_correct_then_scores_and_starts_next_round(self, session):
        """A correct answer below the threshold starts a new round."""
        first = session.round
        events = session.submit(first.answer.text)

        assert events[0] == ScoreChanged(0, first.rule.points)
        assert isinstance(events[1], RoundStarted)
        assert session.state.previous_name == first.rule.name
        assert session.round is not first
        assert session.round.rule.name != first.rule.name
        assert session.round.submitted_text == ""

    def test_submit_when_threshold_reached_exactly_then_solved_without_new_round(self, session):
        """Reaching the threshold ends the session with no further RoundStarted."""
        session.submit(session.round.answer.text)
        last_round = session.round

        events = session.submit(session.round.answer.text)

        assert session.score == 3
        assert session.is_solved
        assert isinstance(events[0], ScoreChanged)
        assert events[-1] == Solved(3)
        assert not any(isinstance(e, RoundStarted) for e in events)
        assert session.round is last_round

    def test_submit_when_solved_then_raises_error(self, session):
        """No input is accepted once solved."""
        session.submit(session.round.answer.text)
        session.submit(session.round.answer.text)
        with pytest.raises(SessionError, match="solved"):
            session.submit("1")

    @pytest.mark.parametrize("text", ["1234567890123", "12a"])
    def test_submit_when_malformed_then_raises_error(self, session, text):
        """Over-long or non-digit text is rejected."""
        with pytest.raises(SessionError, match="at most 12 digits"):
            session.submit(text)

    def test_submit_when_typed_answer_then_uses_typed_text(self, session):
        """submit() without text uses the typed digits."""
        for c in session.round.answer.text:
            session.append_digit(c)
        events = session.submit()
        assert isinstance(events[0], ScoreChanged)


class TestHelpAndPress:
    """Tests for request_help(), press() and forced solving."""

    def test_request_help_when_active_then_returns_clip(self, session):
        """Help names the active rule's clip."""
        events = session.request_help()
        assert events == [HelpRequested(session.round.rule.name, 1.5)]

    def test_press_when_actions_then_dispatches(self, session):
        """press() routes to the matching operation."""
        assert session.press(InputAction.press_digit(3)) == [InputChanged("3")]
        assert session.press(BACKSPACE) == [InputChanged("")]
        assert isinstance(session.press(SUBMIT)[0], Strike)

    def test_solve_steps_when_wrong_prefix_then_backspaces_first(self, session):
        """Steps delete back to the longest correct prefix."""
        answer = session.round.answer.text
        session.append_digit(answer[0])
        session.append_digit((int(answer[1]) + 1) % 10)
        session.append_digit(0)

        steps = session.solve_steps()

        assert steps[:2] == [BACKSPACE, BACKSPACE]
        assert steps[-1] == SUBMIT
        typed = "".join(str(a.digit) for a in steps[2:-1])
        assert typed == answer[1:]

    def test_autosolve_when_default_library_then_reaches_threshold(self, library):
        """Forced solving finishes a real session."""
        s = PuzzleSession(library, PuzzleConfig(seed=42))
        s.activate()

        events = list(s.autosolve())

        assert s.is_solved
        assert s.score >= 20
        assert isinstance(events[-1], Solved)
        assert not any(isinstance(e, Strike) for e in events)

    def test_autosolve_when_relaxed_then_threshold_not_persisted(self, library):
        """Relaxation never changes the session threshold."""
        s = PuzzleSession(library, PuzzleConfig(seed=5))
        s.activate()
        for _ in s.autosolve():
            assert s.state.threshold == 20


class TestDeterminismAndLogging:
    """Tests for seeding and the session log."""

    def test_activate_when_same_seed_then_same_first_round(self, library):
        """Seeded sessions replay the same rounds."""
        first = PuzzleSession(library, PuzzleConfig(seed=8)).activate()
        second = PuzzleSession(library, PuzzleConfig(seed=8)).activate()
        assert first == second

    def test_activate_when_rng_injected_then_uses_it(self, library):
        """An injected random source overrides the seed."""
        first = PuzzleSession(library, rng=random.Random(3)).activate()
        second = PuzzleSession(library, PuzzleConfig(seed=999), rng=random.Random(3)).activate()
        assert first == second

    def test_activate_when_logging_then_prefixed_round_lines(self, library, caplog):
        """Round details are logged with the session number."""
        s = PuzzleSession(library, PuzzleConfig(seed=1, session_id=3))
        with caplog.at_level(logging.INFO, logger="number_cruncher"):
            s.activate()
        assert "[Number Cruncher #3] The first calculation is" in caplog.text
        assert f"The answer is {s.round.answer.text}." in caplog.text


class TestMismatchHelpers:
    """Tests for mismatch_positions() and mismatch_mask()."""

    def test_positions_when_several_wrong_then_ascending(self):
        """Positions are 1-based and ascending."""
        assert mismatch_positions("x23x", "1234") == (1, 4)

    def test_mask_when_positions_then_glyphs_at_positions(self):
        """Wrong positions show their glyph."""
        assert mismatch_mask((1, 10, 11)) == "1        0A "

    def test_description_when_several_then_joined_with_and(self):
        """Multiple positions read naturally."""
        strike = Strike((1, 2, 12), "123", "")
        assert strike.description == "Digits 1, 2 and 12 were wrong."
