"""
Fibonacci Math Tests

Tests verify:
1. Sequence lookup and generation past the precomputed table
2. Index lookup (largest Fibonacci number <= value)
3. Retracement and extension levels
4. Golden ratio score bounds and monotonicity
"""
import pytest

from fibonrose.services.fibonacci import (
    fibonacci,
    fibonacci_index,
    largest_fibonacci_at_most,
    retracement_levels,
    extension_levels,
    golden_ratio_score,
)
from fibonrose.services.fibonacci.constants import FIBONACCI_SEQUENCE, GOLDEN_RATIO


CANONICAL = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987, 1597, 2584, 4181, 6765]


class TestFibonacci:

    def test_matches_canonical_sequence(self):
        assert [fibonacci(i) for i in range(len(CANONICAL))] == CANONICAL

    def test_recurrence_holds_past_table(self):
        for n in range(2, 60):
            assert fibonacci(n) == fibonacci(n - 1) + fibonacci(n - 2)

    def test_generated_values_beyond_table(self):
        assert len(FIBONACCI_SEQUENCE) == 17
        assert fibonacci(17) == 1597
        assert fibonacci(30) == 832040

    def test_negative_index_is_zero(self):
        """Negative positions are a boundary, not an error."""
        assert fibonacci(-1) == 0
        assert fibonacci(-50) == 0


class TestFibonacciIndex:

    @pytest.mark.parametrize("value,expected", [
        (0, 0),
        (0.5, 0),
        (1, 2),
        (2, 3),
        (4, 4),
        (20.09, 7),
        (21, 8),
        (986, 15),
        (987, 16),
        (1596, 16),
        (1597, 17),
        (10000, 20),
    ])
    def test_largest_index_at_or_below(self, value, expected):
        assert fibonacci_index(value) == expected

    def test_largest_fibonacci_at_most(self):
        assert largest_fibonacci_at_most(100) == 89
        assert largest_fibonacci_at_most(60) == 55
        assert largest_fibonacci_at_most(0) == 0


class TestRetracementLevels:

    def test_hundred_to_zero(self):
        levels = retracement_levels(100, 0)
        expected = {
            "level_0": 100,
            "level_236": 76.4,
            "level_382": 61.8,
            "level_500": 50,
            "level_618": 38.2,
            "level_786": 21.4,
            "level_100": 0,
        }
        assert set(levels) == set(expected)
        for key, value in expected.items():
            assert levels[key] == pytest.approx(value, abs=0.05)

    def test_levels_descend_from_high_to_low(self):
        levels = list(retracement_levels(250, 50).values())
        assert levels[0] == 250
        assert levels[-1] == 50
        assert levels == sorted(levels, reverse=True)

    def test_flat_range_collapses(self):
        assert set(retracement_levels(42, 42).values()) == {42}


class TestExtensionLevels:

    def test_projects_beyond_end(self):
        levels = extension_levels(0, 100)
        assert levels["extension_100"] == pytest.approx(100)
        assert levels["extension_1618"] == pytest.approx(161.8)
        assert levels["extension_2618"] == pytest.approx(261.8)
        assert levels["extension_4236"] == pytest.approx(423.6)

    def test_offset_start(self):
        levels = extension_levels(50, 100)
        assert levels["extension_1618"] == pytest.approx(130.9)


class TestGoldenRatioScore:

    def test_zero_total(self):
        assert golden_ratio_score(0, 0) == 0
        assert golden_ratio_score(5, 0) == 0

    def test_monotonic_in_positive(self):
        scores = [golden_ratio_score(p, 6) for p in range(7)]
        assert scores == sorted(scores)
        assert scores[-1] == pytest.approx(GOLDEN_RATIO)

    def test_capped_at_golden_ratio(self):
        assert golden_ratio_score(12, 6) == GOLDEN_RATIO

    def test_half(self):
        assert golden_ratio_score(3, 6) == pytest.approx(0.809)
