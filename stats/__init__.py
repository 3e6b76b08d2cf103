# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Stat aggregation and percentile ranking engine."""

from stats.career import aggregate_career, build_career_totals
from stats.enhance import enhance_hitting_stats, enhance_stat_line
from stats.formatting import format_stat_value, get_stat_description
from stats.parsing import parse_number
from stats.percentile import calculate_median, calculate_percentile, get_percentile_color
from stats.qualify import (
    MIN_IP_QUALIFIED,
    MIN_PA_QUALIFIED,
    Population,
    filter_qualified,
    qualified_population,
    unfiltered_population,
)

__all__ = [
    "MIN_IP_QUALIFIED",
    "MIN_PA_QUALIFIED",
    "Population",
    "aggregate_career",
    "build_career_totals",
    "calculate_median",
    "calculate_percentile",
    "enhance_hitting_stats",
    "enhance_stat_line",
    "filter_qualified",
    "format_stat_value",
    "get_percentile_color",
    "get_stat_description",
    "parse_number",
    "qualified_population",
    "unfiltered_population",
]
