"""
Module: puzzle

Purpose:
    The Number Cruncher puzzle engine: number generation, the rule library,
    rule selection and the session that runs rounds and keeps score.

Key Functions:
    - default_library(): The standard 25-rule catalog
    - select_rule(): Pick the next rule
    - load_puzzle_config(): Read the point threshold from settings
    - parse_command() / apply_command(): Remote command input

Key Classes:
    - PuzzleConfig: Session configuration
    - PuzzleSession: Round orchestration and scoring
    - NumberGenerator: Uniform 12-digit inputs
    - RuleLibrary: Ordered rule table
    - RuleSelector: Threshold-aware rule choice

Used By:
    - presentation layer (external)
"""

from .config import ConfigurationError, PuzzleConfig, load_puzzle_config
from .generation import NumberGenerator
from .rules import RuleLibrary, default_library
from .selection import RuleSelector, Selection, SelectionExhaustion, select_rule
from .session import PuzzleSession, SessionError, SessionPhase
from .commands import CommandError, apply_command, parse_command

__all__ = [
    # Config
    "ConfigurationError",
    "PuzzleConfig",
    "load_puzzle_config",
    # Generation
    "NumberGenerator",
    # Rules
    "RuleLibrary",
    "default_library",
    # Selection
    "RuleSelector",
    "Selection",
    "SelectionExhaustion",
    "select_rule",
    # Session
    "PuzzleSession",
    "SessionError",
    "SessionPhase",
    # Commands
    "CommandError",
    "apply_command",
    "parse_command",
]
