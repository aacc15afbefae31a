"""
Module: puzzle.commands

Purpose:
    Turn remote command strings into input actions. A command is either
    "play" (request help) or a run of characters from ``0-9#*``, where
    ``#`` submits and ``*`` deletes the last digit. Anything else is
    rejected before the session sees it.

Key Functions:
    - parse_command(): Validate and translate a command
    - apply_command(): Feed a command's actions to a session

Dependencies:
    - puzzle.events: InputAction
    - puzzle.session: PuzzleSession (type only)

Used By:
    - host integrations that relay chat commands
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from .events import BACKSPACE, HELP, SUBMIT, Event, InputAction

if TYPE_CHECKING:
    from .session import PuzzleSession

logger = logging.getLogger(__name__)

HELP_COMMAND = "play"
ALLOWED_CHARACTERS = "0123456789#*"

HELP_MESSAGE = (
    "Use '!{0} 0123456789#*' to press buttons 0-9, where # submits and * deletes "
    "the last digit. Use '!{0} play' to press the button labelled \"HELP\"."
)


class CommandError(ValueError):
    """Command string contains characters the puzzle does not accept."""
    pass


def parse_command(command: str) -> List[InputAction]:
    """
    Translate a command string into input actions.

    Args:
        command: Raw command text (case-insensitive, surrounding space ignored)

    Returns:
        Input actions in press order

    Raises:
        CommandError: If the command is empty or has a disallowed character

    Example:
        >>> [a.kind.value for a in parse_command("1#")]
        ['DIGIT', 'SUBMIT']
    """
    text = command.strip().lower()
    if text == HELP_COMMAND:
        return [HELP]
    if not text:
        raise CommandError("Empty command")
    invalid = sorted({c for c in text if c not in ALLOWED_CHARACTERS})
    if invalid:
        raise CommandError(f"Invalid command characters: {''.join(invalid)!r}")

    actions: List[InputAction] = []
    for c in text:
        if c == "#":
            actions.append(SUBMIT)
        elif c == "*":
            actions.append(BACKSPACE)
        else:
            actions.append(InputAction.press_digit(int(c)))
    return actions


def apply_command(session: PuzzleSession, command: str) -> List[Event]:
    """
    Parse a command and press its actions on a session, in order.

    Presses after the puzzle is solved are dropped.

    Returns:
        All events the presses produced
    """
    actions = parse_command(command)
    events: List[Event] = []
    for i, action in enumerate(actions):
        if session.is_solved:
            logger.debug(f"Puzzle solved; ignoring {len(actions) - i} remaining press(es)")
            break
        events.extend(session.press(action))
    return events
