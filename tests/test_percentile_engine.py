# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for the percentile engine (stats/percentile.py).

Validates:
  1. Tie-aware rank with lower-is-better inversion
  2. Monotonicity and complementarity of the two directions
  3. Null results for empty populations and non-numeric values
  4. Color tiers inclusive at their lower bound
  5. Median
"""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import PercentileTier
from stats.percentile import (
    PERCENTILE_COLORS,
    calculate_median,
    calculate_percentile,
    get_percentile_color,
    percentile_tier,
)

POPULATION = list(range(1, 11))


class TestCalculatePercentile:

    def test_middle_value_counts_half_tie(self):
        # 4 below, 1 tie -> (4 + 0.5) / 10
        assert calculate_percentile(5, POPULATION) == 45

    def test_lower_is_better_inverts(self):
        assert calculate_percentile(5, POPULATION, higher_is_better=False) == 55

    def test_extremes(self):
        assert calculate_percentile(0, POPULATION) == 0
        assert calculate_percentile(11, POPULATION) == 100
        assert calculate_percentile(11, POPULATION, higher_is_better=False) == 0

    def test_whole_population_tied(self):
        assert calculate_percentile(".250", [".250", ".250", ".250"]) == 50

    def test_string_values_and_garbage_members(self):
        population = [".250", ".300", "-.--", None, ".275"]
        assert calculate_percentile(".300", population) == 83

    def test_monotonic_in_value(self):
        previous = -1
        for step in range(0, 25):
            pct = calculate_percentile(step / 2, POPULATION)
            assert pct >= previous
            previous = pct

    def test_directions_sum_to_100(self):
        for value in (0.5, 2, 3.7, 8, 10):
            up = calculate_percentile(value, POPULATION, True)
            down = calculate_percentile(value, POPULATION, False)
            assert abs(up + down - 100) <= 1

    @pytest.mark.parametrize("higher_is_better", [True, False])
    def test_empty_population(self, higher_is_better):
        assert calculate_percentile(5, [], higher_is_better) is None
        assert calculate_percentile(5, ["-", None], higher_is_better) is None

    def test_non_numeric_value(self):
        assert calculate_percentile(None, POPULATION) is None
        assert calculate_percentile("-", POPULATION) is None


class TestPercentileColor:

    @pytest.mark.parametrize("pct, color", [
        (100, "#22c55e"),
        (80, "#22c55e"),
        (79, "#84cc16"),
        (60, "#84cc16"),
        (59, "#eab308"),
        (40, "#eab308"),
        (39, "#f97316"),
        (20, "#f97316"),
        (19, "#ef4444"),
        (0, "#ef4444"),
    ])
    def test_tier_boundaries(self, pct, color):
        assert get_percentile_color(pct) == color

    def test_null_is_gray(self):
        assert get_percentile_color(None) == "#666666"
        assert percentile_tier(None) is PercentileTier.UNKNOWN

    def test_every_tier_has_a_color(self):
        assert set(PERCENTILE_COLORS) == set(PercentileTier)


class TestMedian:

    def test_odd(self):
        assert calculate_median([3, 1, 2]) == 2

    def test_even(self):
        assert calculate_median(["4", 1, 3, 2]) == 2.5

    def test_empty(self):
        assert calculate_median([]) is None
        assert calculate_median(["-"]) is None
