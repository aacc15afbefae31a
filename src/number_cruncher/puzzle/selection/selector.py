"""
Module: puzzle.selection.selector

Purpose:
    Pick the rule for the next round given the running score, the point
    threshold and the previous rule.

Algorithm:
    1. Candidates = rules whose name differs from the previous rule and
       whose points still fit: score + points <= threshold
    2. If no candidate, raise the threshold by one and retry, at most
       max_points + 1 times
    3. Draw one candidate uniformly at random
    4. Return the rule and the threshold it was drawn under; the relaxed
       threshold is never written back to the session

Key Functions:
    - candidate_rules(): The legal candidate set for one threshold
    - select_rule(): Main entry point for selection

Key Classes:
    - RuleSelector: Holds the random source between calls
    - Selection: Selection result
    - SelectionExhaustion: Raised when relaxation runs out

Dependencies:
    - random (std)
    - puzzle.rules.library: RuleLibrary

Used By:
    - puzzle.session: PuzzleSession
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS
from number_cruncher.core.models.rules import Rule
from number_cruncher.puzzle.rules.library import RuleLibrary

logger = logging.getLogger(__name__)


class SelectionError(Exception):
    """Error during rule selection."""
    pass


class SelectionExhaustion(SelectionError):
    """
    No rule could be selected even after relaxing the threshold.

    This means the rule library is misconfigured, not that the player did
    anything wrong.

    Attributes:
        score: Score the selection was attempted at
        threshold: Configured threshold
        previous_name: Excluded previous rule name
        attempts: Thresholds tried before giving up
    """

    def __init__(
        self,
        message: str,
        *,
        score: int,
        threshold: int,
        previous_name: Optional[str],
        attempts: int,
    ):
        super().__init__(message)
        self.score = score
        self.threshold = threshold
        self.previous_name = previous_name
        self.attempts = attempts


@dataclass(frozen=True)
class Selection:
    """
    Result of a rule selection.

    Attributes:
        rule: The chosen rule
        effective_threshold: Threshold in effect when it was chosen
        configured_threshold: Threshold the caller asked for

    Invariants:
        - effective_threshold >= configured_threshold
    """

    rule: Rule
    effective_threshold: int
    configured_threshold: int

    @property
    def relaxed(self) -> bool:
        """Whether the threshold had to be raised."""
        return self.effective_threshold > self.configured_threshold


def candidate_rules(
    library: RuleLibrary,
    score: int,
    threshold: int,
    previous_name: Optional[str],
) -> list[Rule]:
    """
    Build the candidate set for one threshold.

    When the library holds a single rule, the previous-name exclusion is
    dropped so that the rule may repeat.

    Args:
        library: Rules to choose from
        score: Current score
        threshold: Threshold to fit under
        previous_name: Name of the previous round's rule, or None

    Returns:
        Rules in catalog order that fit and are not the previous rule
    """
    exclude = previous_name if len(library) > 1 else None
    return [
        rule for rule in library
        if rule.name != exclude and score + rule.points <= threshold
    ]


@dataclass
class RuleSelector:
    """
    Rule selection with an injected random source.

    The selector keeps no state between calls beyond the random source.

    Attributes:
        rng: Random source for the uniform draw
    """

    rng: random.Random = field(default_factory=random.Random)

    def select(
        self,
        score: int,
        threshold: int,
        previous_name: Optional[str],
        library: RuleLibrary,
    ) -> Selection:
        """
        Select the next rule.

        Args:
            score: Current score
            threshold: Configured point threshold
            previous_name: Previous rule name, or None for the first round
            library: Rules to choose from

        Returns:
            Selection with the chosen rule and effective threshold

        Raises:
            SelectionExhaustion: If the library is empty, or no candidate
                appears within max_points + 1 relaxation steps
        """
        if len(library) == 0:
            raise SelectionExhaustion(
                "Cannot select from an empty rule library",
                score=score, threshold=threshold,
                previous_name=previous_name, attempts=0,
            )
        if len(library) == 1 and previous_name is not None:
            logger.warning(
                f"Library has a single rule; allowing {previous_name!r} to repeat"
            )

        max_steps = library.max_points + PUZZLE_THRESHOLDS.relaxation_headroom
        effective = threshold
        for step in range(max_steps + 1):
            candidates = candidate_rules(library, score, effective, previous_name)
            if candidates:
                rule = self.rng.choice(candidates)
                if step:
                    logger.debug(
                        f"Relaxed threshold {threshold} -> {effective} to select {rule.name}"
                    )
                return Selection(rule, effective, threshold)
            effective += 1

        raise SelectionExhaustion(
            f"No rule fits score {score} under threshold {threshold} "
            f"(tried up to {effective - 1}, previous rule {previous_name!r})",
            score=score, threshold=threshold,
            previous_name=previous_name, attempts=max_steps + 1,
        )


def select_rule(
    score: int,
    threshold: int,
    previous_name: Optional[str],
    library: RuleLibrary,
    *,
    rng: Optional[random.Random] = None,
) -> Selection:
    """
    Select the next rule.

    Main entry point for rule selection; see RuleSelector.select.

    Example:
        >>> sel = select_rule(0, 20, None, default_library(), rng=random.Random(1))
        >>> sel.effective_threshold
        20
    """
    selector = RuleSelector(rng if rng is not None else random.Random())
    return selector.select(score, threshold, previous_name, library)
