"""
Module: puzzle.generation.generator

Purpose:
    Draw the numbers shown to the player. Each 12-digit value is built from
    two independent uniform 6-digit halves, which makes the whole value
    uniform over [0, 10**12).

Key Classes:
    - NumberGenerator: Generates NumericInput for a rule's arity

Dependencies:
    - random (std): injected random source
    - core.models.digits: Arity, DigitSequence, NumericInput

Used By:
    - puzzle.session: round creation
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from number_cruncher.common.thresholds import PUZZLE_THRESHOLDS
from number_cruncher.core.models.digits import Arity, DigitSequence, NumericInput


@dataclass
class NumberGenerator:
    """
    Generator of round inputs.

    Holds nothing but the random source, so reseeding the source replays
    the same inputs.

    Attributes:
        rng: Random source (defaults to an unseeded ``random.Random``)

    Example:
        >>> gen = NumberGenerator(random.Random(1))
        >>> len(gen.generate(Arity.BINARY))
        2
    """

    rng: random.Random = field(default_factory=random.Random)

    def draw_value(self) -> int:
        """
        Draw one integer uniformly from [0, 10**12).

        Returns:
            high * 10**6 + low for two independent 6-digit draws
        """
        modulus = PUZZLE_THRESHOLDS.half_modulus
        high = self.rng.randrange(modulus)
        low = self.rng.randrange(modulus)
        return high * modulus + low

    def draw_sequence(self) -> DigitSequence:
        """Draw one uniformly distributed DigitSequence."""
        return DigitSequence.from_int(self.draw_value())

    def generate(self, arity: Arity) -> NumericInput:
        """
        Generate a fresh input for a rule.

        Binary operands are drawn independently and may coincide.

        Args:
            arity: Operand count of the rule the input is for

        Returns:
            NumericInput with ``arity.value`` operands
        """
        return NumericInput(tuple(self.draw_sequence() for _ in range(arity.value)))
