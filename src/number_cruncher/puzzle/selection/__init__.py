"""
Module: puzzle.selection

Purpose:
    Rule selection for the next round. Filters the rule library to the
    rules that fit under the point threshold and differ from the previous
    rule, relaxing the threshold one point at a time if nothing fits.

Key Functions:
    - select_rule(): Main entry point for selection

Key Classes:
    - RuleSelector: Selection with an injected random source
    - Selection: Chosen rule plus the threshold it was chosen under
    - SelectionExhaustion: Library cannot produce a candidate

Dependencies:
    - puzzle.rules: RuleLibrary

Used By:
    - puzzle.session: round creation
"""

from .selector import (
    RuleSelector,
    Selection,
    SelectionError,
    SelectionExhaustion,
    candidate_rules,
    select_rule,
)

__all__ = [
    "RuleSelector",
    "Selection",
    "SelectionError",
    "SelectionExhaustion",
    "candidate_rules",
    "select_rule",
]
