"""
Unit tests for RuleLibrary and the default catalog.
"""

import pytest

from conftest import make_rule
from number_cruncher.core.models.digits import Arity
from number_cruncher.puzzle.generation import NumberGenerator
from number_cruncher.puzzle.rules import RuleLibrary, default_library


class TestDefaultLibrary:
    """Tests for default_library()."""

    def test_default_library_when_built_then_has_25_rules_in_order(self, library):
        """Catalog order is fixed."""
        names = [r.name for r in library.all()]
        assert len(names) == 25
        assert names[:4] == ["Equality", "Reversal", "Parity", "Sorting"]
        assert names[-1] == "Plus One"

    def test_default_library_when_built_then_points_between_one_and_seven(self, library):
        """Point values are in 1..7."""
        assert {r.points for r in library} <= set(range(1, 8))
        assert library.max_points == 7

    def test_by_arity_when_binary_then_nine_rules(self, library):
        """Nine rules take two operands."""
        binary = library.by_arity(Arity.BINARY)
        assert len(binary) == 9
        assert {r.name for r in binary} >= {"Lunar Logic", "Modulo", "Lovers"}
        assert len(library.by_arity(Arity.UNARY)) == 16

    def test_by_name_when_known_then_returns_rule(self, library):
        """Rules can be looked up by name."""
        rule = library.by_name("Numeric Weight")
        assert rule is not None
        assert rule.points == 7
        assert rule.arity is Arity.BINARY
        assert library.by_name("Nope") is None

    def test_help_durations_when_built_then_from_sample_counts(self, library):
        """Help clip lengths are seconds plus 44.1 kHz samples."""
        rule = library.by_name("Equality")
        assert rule.help_clip == ("Equality", pytest.approx(4 + 13065 / 44100))

    def test_transforms_when_applied_twice_then_same_answer(self, library, rng):
        """Every transform is pure over generated inputs."""
        gen = NumberGenerator(rng)
        for rule in library:
            for _ in range(20):
                num = gen.generate(rule.arity)
                first = rule.apply(num)
                assert rule.apply(num) == first
                assert len(first.text) == 12


class TestRuleLibrary:
    """Tests for RuleLibrary container."""

    def test_init_when_duplicate_names_then_raises_error(self):
        """Names must be unique."""
        with pytest.raises(ValueError, match="Duplicate rule name"):
            RuleLibrary.of([make_rule("A", 1), make_rule("A", 2)])

    def test_max_points_when_empty_then_zero(self):
        """An empty library has no points."""
        assert RuleLibrary(()).max_points == 0
        assert len(RuleLibrary(())) == 0

    def test_index_when_in_range_then_returns_rule(self, abc_library):
        """Rules are indexed 0..N-1."""
        assert abc_library[2].name == "C"
        assert repr(abc_library) == "RuleLibrary(3 rules)"

    def test_default_library_when_called_twice_then_equal_tables(self):
        """Building the catalog is deterministic."""
        assert default_library() == default_library()
