import random
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import number_cruncher
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from number_cruncher.core.models.digits import Arity, DigitSequence
from number_cruncher.core.models.rules import Rule
from number_cruncher.puzzle.rules import RuleLibrary, default_library


def make_rule(name: str, points: int, arity: Arity = Arity.UNARY) -> Rule:
    """Helper to create a test rule that copies its first operand."""
    return Rule(name, points, arity, lambda first, *rest: DigitSequence.of(first))


# Common test fixtures
@pytest.fixture
def rng() -> random.Random:
    """Return a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def library() -> RuleLibrary:
    """Return the standard rule catalog."""
    return default_library()


@pytest.fixture
def abc_library() -> RuleLibrary:
    """Small library: A(1), B(2), C(7)."""
    return RuleLibrary.of([make_rule("A", 1), make_rule("B", 2), make_rule("C", 7)])


@pytest.fixture
def settings_file(tmp_path: Path):
    """Write a settings file and return its path."""
    def _write(text: str) -> Path:
        path = tmp_path / "NumberCruncher-settings.txt"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
