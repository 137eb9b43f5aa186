"""
Fibonacci Math

Sequence generation, retracement/extension levels and the golden ratio score.
Everything else in the engine depends on this package.
"""

from .calculations import (
    fibonacci,
    fibonacci_index,
    largest_fibonacci_at_most,
    retracement_levels,
    extension_levels,
    golden_ratio_score,
)
from . import constants

__all__ = [
    'fibonacci',
    'fibonacci_index',
    'largest_fibonacci_at_most',
    'retracement_levels',
    'extension_levels',
    'golden_ratio_score',
    'constants',
]
