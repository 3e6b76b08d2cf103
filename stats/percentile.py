# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Percentile engine: rank a value against a reference population.

The primitive here is deliberately ignorant of what the population is:
league-qualified players, all teams, or a player's own seasons are all just
a sequence of numbers.  Callers choose the population.

Usage
-----
    from stats.percentile import calculate_percentile, get_percentile_color

    pct = calculate_percentile(".287", league_avgs, higher_is_better=True)
    color = get_percentile_color(pct)
"""

from __future__ import annotations

from typing import Any, Iterable

from models import PercentileTier
from stats.parsing import js_round, parse_number

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PERCENTILE_COLORS: dict[PercentileTier, str] = {
    PercentileTier.ELITE: "#22c55e",
    PercentileTier.ABOVE_AVERAGE: "#84cc16",
    PercentileTier.AVERAGE: "#eab308",
    PercentileTier.BELOW_AVERAGE: "#f97316",
    PercentileTier.POOR: "#ef4444",
    PercentileTier.UNKNOWN: "#666666",
}

# (min_percentile_inclusive, tier).  Evaluated top-down.
TIER_THRESHOLDS: list[tuple[int, PercentileTier]] = [
    (80, PercentileTier.ELITE),
    (60, PercentileTier.ABOVE_AVERAGE),
    (40, PercentileTier.AVERAGE),
    (20, PercentileTier.BELOW_AVERAGE),
    (0, PercentileTier.POOR),
]


def _numeric(values: Iterable[Any]) -> list[float]:
    parsed = (parse_number(v) for v in values)
    return [v for v in parsed if v is not None]


# ---------------------------------------------------------------------------
# Percentile computation
# ---------------------------------------------------------------------------

def calculate_percentile(
    value: Any,
    population_values: Iterable[Any],
    higher_is_better: bool = True,
) -> int | None:
    """Return the percentile rank (0–100) of *value* within *population_values*.

    Values strictly below count fully and ties count half, so a cluster of
    identical values sits at its midpoint.  For lower-is-better stats the
    rank is inverted.  Returns ``None`` when *value* is not numeric or the
    population has no numeric members.
    """
    number = parse_number(value)
    if number is None:
        return None
    population = sorted(_numeric(population_values))
    if not population:
        return None

    below = sum(1 for v in population if v < number)
    ties = sum(1 for v in population if v == number)
    percentile = (below + ties / 2) / len(population) * 100
    if not higher_is_better:
        percentile = 100 - percentile
    return js_round(percentile)


def percentile_tier(percentile: int | None) -> PercentileTier:
    if percentile is None:
        return PercentileTier.UNKNOWN
    for minimum, tier in TIER_THRESHOLDS:
        if percentile >= minimum:
            return tier
    return PercentileTier.POOR


def get_percentile_color(percentile: int | None) -> str:
    """Map a percentile to its tier color; ``None`` maps to the unknown gray."""
    return PERCENTILE_COLORS[percentile_tier(percentile)]


def calculate_median(values: Iterable[Any]) -> float | None:
    """Median of the numeric members of *values*, or ``None`` if there are none."""
    ordered = sorted(_numeric(values))
    if not ordered:
        return None
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]
