"""
Module: puzzle.rules.transforms

Purpose:
    The pure digit transforms behind every rule. Each function takes one
    or two DigitSequence operands and returns a new DigitSequence; none
    reads anything but its arguments.

Families:
    - Identity/reordering: equality, reversal, sorting
    - Per-digit arithmetic on one input: parity, triplity, magnitude,
      inverse, running_sum, pair_products
    - Per-digit pairwise arithmetic on two inputs: lunar_logic, difference,
      product, exclusive_or, means, modulo
    - Table lookups on two inputs: numeric_weight, prime_checker, lovers
    - Windowed/positional on one input: neighbour_sum, maximum_digit,
      thermometer, altitude, x_sum, plus_one, attendance

Dependencies:
    - core.models.digits: DigitSequence

Used By:
    - puzzle.rules.library: default rule catalog
"""

from __future__ import annotations

from typing import Callable

from number_cruncher.core.models.digits import DigitSequence, pairwise

# Set bits in the binary form of each digit 0-9
BIT_COUNTS = (0, 1, 1, 2, 1, 2, 2, 3, 1, 2)

# Every possible sum of two digits that is prime
PRIMES = frozenset({2, 3, 5, 7, 11, 13, 17, 19})


def _per_digit(fn: Callable[[int], int]) -> Callable[[DigitSequence], DigitSequence]:
    """Lift a digit function to a whole-sequence transform."""
    def transform(seq: DigitSequence) -> DigitSequence:
        return DigitSequence.of(fn(d) for d in seq)
    transform.__doc__ = fn.__doc__
    return transform


def _per_pair(
    fn: Callable[[int, int], int],
) -> Callable[[DigitSequence, DigitSequence], DigitSequence]:
    """Lift a two-digit function to a position-wise transform of two sequences."""
    def transform(first: DigitSequence, second: DigitSequence) -> DigitSequence:
        return DigitSequence.of(fn(a, b) for a, b in pairwise(first, second))
    transform.__doc__ = fn.__doc__
    return transform


# ─────────────────────────────────────────────────────────────────────────────
# Identity / Reordering
# ─────────────────────────────────────────────────────────────────────────────

def equality(seq: DigitSequence) -> DigitSequence:
    """The input, unchanged."""
    return DigitSequence.of(seq)


def reversal(seq: DigitSequence) -> DigitSequence:
    """All digits in reverse order."""
    return DigitSequence.of(reversed(seq.digits))


def sorting(seq: DigitSequence) -> DigitSequence:
    """All digits in ascending order."""
    return DigitSequence.of(sorted(seq))


# ─────────────────────────────────────────────────────────────────────────────
# Per-Digit Arithmetic (one input)
# ─────────────────────────────────────────────────────────────────────────────

parity = _per_digit(lambda d: d % 2)
triplity = _per_digit(lambda d: d % 3)
magnitude = _per_digit(lambda d: d // 5)
inverse = _per_digit(lambda d: 9 - d)


def running_sum(seq: DigitSequence) -> DigitSequence:
    """
    Running total mod 10, starting from the first digit.

    Example:
        100000000000 -> 111111111111
    """
    out = []
    total = 0
    for d in seq:
        total = (total + d) % 10
        out.append(total)
    return DigitSequence.of(out)


def pair_products(seq: DigitSequence) -> DigitSequence:
    """
    Products of adjacent digit pairs, each written as two digits.

    Pairs are (0, 1), (2, 3), ... so six products fill twelve digits.
    """
    text = "".join(f"{seq[i] * seq[i + 1]:02d}" for i in range(0, len(seq), 2))
    return DigitSequence.from_string(text)


# ─────────────────────────────────────────────────────────────────────────────
# Pairwise Arithmetic (two inputs)
# ─────────────────────────────────────────────────────────────────────────────

lunar_logic = _per_pair(lambda a, b: max(a, b))
difference = _per_pair(lambda a, b: abs(a - b))
product = _per_pair(lambda a, b: (a * b) % 10)
exclusive_or = _per_pair(lambda a, b: int(a % 2 != b % 2))
means = _per_pair(lambda a, b: (a + b) // 2)


def _modulo_digit(a: int, b: int) -> int:
    # Zero counts as ten on both sides, so the divisor is never zero
    return (a or 10) % (b or 10)


modulo = _per_pair(_modulo_digit)


# ─────────────────────────────────────────────────────────────────────────────
# Table Lookups (two inputs)
# ─────────────────────────────────────────────────────────────────────────────

numeric_weight = _per_pair(lambda a, b: BIT_COUNTS[a] + BIT_COUNTS[b])
prime_checker = _per_pair(lambda a, b: int(a + b in PRIMES))


def _lovers_digit(a: int, b: int) -> int:
    quintant = abs(a % 5 - b % 5)
    band = abs(a // 5 - b // 5)
    return quintant + band


lovers = _per_pair(_lovers_digit)


# ─────────────────────────────────────────────────────────────────────────────
# Windowed / Positional (one input)
# ─────────────────────────────────────────────────────────────────────────────

def neighbour_sum(seq: DigitSequence) -> DigitSequence:
    """Sum of each digit and its neighbours mod 10; the ends have one neighbour."""
    last = len(seq) - 1
    return DigitSequence.of(
        sum(seq.digits[max(i - 1, 0):min(i + 1, last) + 1]) % 10 for i in range(len(seq))
    )


def maximum_digit(seq: DigitSequence) -> DigitSequence:
    """
    1 where a digit is strictly greater than its neighbours, else 0.

    The first digit is compared only with its right neighbour and the last
    only with its left.
    """
    last = len(seq) - 1
    out = []
    for i, d in enumerate(seq):
        left_ok = i == 0 or d > seq[i - 1]
        right_ok = i == last or d > seq[i + 1]
        out.append(int(left_ok and right_ok))
    return DigitSequence.of(out)


def thermometer(seq: DigitSequence) -> DigitSequence:
    """1 first, then 1 wherever a digit is strictly greater than the one before."""
    return DigitSequence.of(
        [1] + [int(seq[i] > seq[i - 1]) for i in range(1, len(seq))]
    )


def altitude(seq: DigitSequence) -> DigitSequence:
    """How many digits in the sequence are strictly lower, mod 10."""
    return DigitSequence.of(sum(1 for x in seq if x < d) % 10 for d in seq)


def x_sum(seq: DigitSequence) -> DigitSequence:
    """Sum of the first d digits of the sequence for each digit d, mod 10."""
    return DigitSequence.of(sum(seq.digits[:d]) % 10 for d in seq)


def plus_one(seq: DigitSequence) -> DigitSequence:
    """Each digit plus its 0-based position, mod 10."""
    return DigitSequence.of((d + i) % 10 for i, d in enumerate(seq))


def attendance(seq: DigitSequence) -> DigitSequence:
    """How often each digit's value occurs in the sequence, mod 10."""
    return DigitSequence.of(seq.digits.count(d) % 10 for d in seq)
