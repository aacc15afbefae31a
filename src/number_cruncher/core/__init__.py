"""
Number Cruncher Core Package

Shared data models used by every puzzle module.

All models are frozen dataclasses: a DigitSequence, NumericInput or Rule
never changes after construction, so a round can hold references to them
without copying.
"""

from .models import Arity, DigitSequence, NumericInput, Rule

__all__ = [
    "Arity",
    "DigitSequence",
    "NumericInput",
    "Rule",
]
