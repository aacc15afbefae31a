"""
Logging utilities for relaying the puzzle log to a host display.

Session lines are logged as ``[Number Cruncher #<id>] <text>``. The queue
handler splits that prefix off so a host showing several puzzles can route
each line to the right one.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from queue import Queue
from typing import Optional

SESSION_PREFIX = re.compile(r"^\[Number Cruncher #(\d+)\] ")


@dataclass(frozen=True)
class LogEntry:
    """
    One line of the puzzle log.

    Attributes:
        text: Message without the session prefix
        level: Level name as shown to the player (DEBUG shown as INFO)
        session_id: Session the line belongs to, None for engine lines
        source: Name of the logger that emitted it
    """

    text: str
    level: str
    session_id: Optional[int] = None
    source: str = ""

    @property
    def line(self) -> str:
        """The line as it was logged, prefix included."""
        if self.session_id is None:
            return self.text
        return f"[Number Cruncher #{self.session_id}] {self.text}"

    @classmethod
    def from_record(cls, message: str, record: logging.LogRecord) -> LogEntry:
        """Build an entry from a formatted message and its record."""
        level = "INFO" if record.levelno == logging.DEBUG else record.levelname
        match = SESSION_PREFIX.match(message)
        if match is None:
            return cls(message, level, None, record.name)
        return cls(message[match.end():], level, int(match.group(1)), record.name)


class QueueLogHandler(logging.Handler):
    """
    A logging handler that puts LogEntry objects on a queue.

    Used by a host to show the round and submission log alongside the
    puzzle itself.
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_queue.put(LogEntry.from_record(self.format(record), record))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = "number_cruncher",
    level: int = logging.INFO,
) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to the package logger.

    Lowers the logger's level when it would otherwise drop records the
    handler asked for.

    Args:
        log_queue: Queue that receives LogEntry objects.
        logger_name: Name of logger to attach to. None = root logger.
        level: Minimum level forwarded to the queue.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(
    handler: QueueLogHandler,
    logger_name: Optional[str] = "number_cruncher",
) -> None:
    """Remove a handler added by attach_queue_handler()."""
    logging.getLogger(logger_name).removeHandler(handler)
