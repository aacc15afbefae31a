"""
Module: puzzle.rules.library

Purpose:
    RuleLibrary - the closed, ordered table of rules a session draws from.
    The table is built once and passed to the session explicitly; there is
    no process-wide registry.

Key Classes:
    - RuleLibrary: Ordered, immutable collection of Rule

Key Functions:
    - default_library(): Build the standard 25-rule catalog

Dependencies:
    - core.models.rules: Rule
    - .transforms: transform functions

Used By:
    - puzzle.selection.selector
    - puzzle.session
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Iterator, Optional

from number_cruncher.core.models.digits import Arity
from number_cruncher.core.models.rules import Rule, Transform

from . import transforms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleLibrary:
    """
    Ordered, immutable rule table indexed 0..N-1.

    Attributes:
        rules: Tuple of rules in catalog order

    Invariants:
        - rule names are unique

    Example:
        >>> library = default_library()
        >>> len(library)
        25
        >>> library.by_name("Reversal").points
        2
    """

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        """Validate library on construction."""
        seen: set[str] = set()
        for rule in self.rules:
            if rule.name in seen:
                raise ValueError(f"Duplicate rule name in library: {rule.name}")
            seen.add(rule.name)

    @classmethod
    def of(cls, rules: Iterable[Rule]) -> RuleLibrary:
        """Create a library from any iterable of rules."""
        return cls(tuple(rules))

    def all(self) -> tuple[Rule, ...]:
        """All rules in catalog order."""
        return self.rules

    def by_arity(self, arity: Arity) -> tuple[Rule, ...]:
        """Rules taking ``arity`` operands, in catalog order."""
        return tuple(r for r in self.rules if r.arity is arity)

    def by_name(self, name: str) -> Optional[Rule]:
        """Look up a rule by its name, or None."""
        return self._by_name.get(name)

    @cached_property
    def _by_name(self) -> dict[str, Rule]:
        return {r.name: r for r in self.rules}

    @property
    def max_points(self) -> int:
        """Largest point value in the library (0 if empty)."""
        return max((r.points for r in self.rules), default=0)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"RuleLibrary({len(self.rules)} rules)"


def _clip(seconds: int, samples: int) -> float:
    """Help clip length from whole seconds plus 44.1 kHz samples."""
    return seconds + samples / 44100


# (name, points, transform, help clip seconds, help clip samples)
_CATALOG: tuple[tuple[str, int, Transform, int, int], ...] = (
    ("Equality", 2, transforms.equality, 4, 13065),
    ("Reversal", 2, transforms.reversal, 3, 43060),
    ("Parity", 1, transforms.parity, 3, 42110),
    ("Sorting", 4, transforms.sorting, 4, 27410),
    ("Lunar Logic", 4, transforms.lunar_logic, 5, 16464),
    ("Difference", 4, transforms.difference, 4, 43556),
    ("Product", 5, transforms.product, 5, 17739),
    ("Inverse", 4, transforms.inverse, 4, 21696),
    ("Exclusive OR", 4, transforms.exclusive_or, 6, 5796),
    ("Pair Products", 4, transforms.pair_products, 7, 8362),
    ("Sum", 4, transforms.running_sum, 7, 1412),
    ("Lovers", 5, transforms.lovers, 7, 17790),
    ("Numeric Weight", 7, transforms.numeric_weight, 7, 20442),
    ("Prime Checker", 3, transforms.prime_checker, 6, 34713),
    ("Attendance", 4, transforms.attendance, 6, 31317),
    ("Neighbour Sum", 6, transforms.neighbour_sum, 6, 37450),
    ("Triplity", 2, transforms.triplity, 3, 37214),
    ("Magnitude", 1, transforms.magnitude, 6, 30247),
    ("X-Sum", 7, transforms.x_sum, 9, 4624),
    ("Maximum Digit", 2, transforms.maximum_digit, 7, 41464),
    ("Means", 4, transforms.means, 8, 28328),
    ("Thermometer", 2, transforms.thermometer, 9, 15337),
    ("Altitude", 7, transforms.altitude, 6, 31221),
    ("Modulo", 4, transforms.modulo, 9, 4677),
    ("Plus One", 6, transforms.plus_one, 6, 38344),
)

_BINARY = frozenset({
    "Lunar Logic", "Difference", "Product", "Exclusive OR", "Lovers",
    "Numeric Weight", "Prime Checker", "Means", "Modulo",
})


def default_library() -> RuleLibrary:
    """
    Build the standard rule catalog.

    Returns:
        RuleLibrary of 25 rules in their fixed order
    """
    rules = [
        Rule(
            name=name,
            points=points,
            arity=Arity.BINARY if name in _BINARY else Arity.UNARY,
            transform=transform,
            help_duration=_clip(seconds, samples),
            has_help=True,
        )
        for name, points, transform, seconds, samples in _CATALOG
    ]
    logger.debug(f"Built default rule library with {len(rules)} rules")
    return RuleLibrary(tuple(rules))
