# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Head-to-head comparison of two players against one shared population."""

from __future__ import annotations

from typing import Any, Mapping

from models import Comparison, ComparisonRow, RankedStat
from stats.columns import compare_columns
from stats.qualify import Population
from views.player_card import rank_stat


def pick_winner(left: RankedStat, right: RankedStat) -> str | None:
    """Higher percentile wins; ``None`` when either side is unranked.

    Percentiles already account for direction, so a lower ERA has the
    higher percentile.
    """
    if left.percentile is None or right.percentile is None:
        return None
    if left.percentile > right.percentile:
        return "left"
    if right.percentile > left.percentile:
        return "right"
    return "tie"


def build_comparison(
    left: Mapping[str, Any] | None,
    right: Mapping[str, Any] | None,
    population: Population,
) -> Comparison:
    rows = []
    for column in compare_columns(population.group):
        left_stat = rank_stat(column, left, population)
        right_stat = rank_stat(column, right, population)
        rows.append(ComparisonRow(
            key=column.key,
            label=column.label,
            left=left_stat,
            right=right_stat,
            winner=pick_winner(left_stat, right_stat),
        ))
    return Comparison(
        group=population.group,
        season=population.season or 0,
        population_size=len(population),
        rows=rows,
    )
