"""
Core Models Package

Immutable, validated data models for digits, inputs and rules.
"""

from .digits import Arity, DigitSequence, NumericInput
from .rules import Rule, Transform

__all__ = [
    "Arity",
    "DigitSequence",
    "NumericInput",
    "Rule",
    "Transform",
]
