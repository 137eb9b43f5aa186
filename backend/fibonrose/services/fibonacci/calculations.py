"""
Fibonacci Calculations

Pure functions. No state, no logging, no I/O.
"""
from typing import Dict

from .constants import (
    FIBONACCI_SEQUENCE,
    GOLDEN_RATIO,
    RETRACEMENT_FRACTIONS,
    EXTENSION_FRACTIONS,
)


def fibonacci(index: int) -> int:
    """
    Fibonacci number at a sequence position.

    Negative positions are a boundary and return 0.
    Positions past the precomputed table are generated iteratively.
    """
    if index < 0:
        return 0
    if index < len(FIBONACCI_SEQUENCE):
        return FIBONACCI_SEQUENCE[index]

    a, b = FIBONACCI_SEQUENCE[-2], FIBONACCI_SEQUENCE[-1]
    for _ in range(len(FIBONACCI_SEQUENCE), index + 1):
        a, b = b, a + b
    return b


def fibonacci_index(value: float) -> int:
    """Largest sequence index whose Fibonacci number is <= value (0 below zero)."""
    if value < 1:
        return 0

    last = len(FIBONACCI_SEQUENCE) - 1
    if value < FIBONACCI_SEQUENCE[last]:
        for i in range(last, -1, -1):
            if value >= FIBONACCI_SEQUENCE[i]:
                return i

    index = last
    while fibonacci(index + 1) <= value:
        index += 1
    return index


def largest_fibonacci_at_most(value: float) -> int:
    return fibonacci(fibonacci_index(value))


def retracement_levels(high: float, low: float) -> Dict[str, float]:
    """
    Seven levels between high and low: level = high - (high - low) * fraction.

    Callers pass high >= low.
    """
    span = high - low
    return {label: high - span * fraction for label, fraction in RETRACEMENT_FRACTIONS}


def extension_levels(start: float, end: float) -> Dict[str, float]:
    """Four projections beyond end at 100%, 161.8%, 261.8% and 423.6% of the range."""
    span = end - start
    return {label: end + span * (fraction - 1) for label, fraction in EXTENSION_FRACTIONS}


def golden_ratio_score(positive: float, total: float) -> float:
    """Ratio scaled by 1.618 and capped there. Zero total scores 0."""
    if total == 0:
        return 0.0
    return min((positive / total) * GOLDEN_RATIO, GOLDEN_RATIO)
