# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Player card: a season line ranked category by category against the league.

The population handed in decides what the percentiles mean.  A player
card is ranked against the qualified league population; the same builder
serves team cards, where the population is every team unfiltered.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import CategoryView, RankedStat, StatCard, StatCategory, StatColumn
from stats.columns import card_categories
from stats.formatting import format_stat_value, get_stat_description
from stats.parsing import stat_number
from stats.percentile import calculate_percentile, get_percentile_color, percentile_tier
from stats.qualify import Population


def rank_stat(
    column: StatColumn,
    stat: Mapping[str, Any] | None,
    population: Population,
) -> RankedStat:
    """Rank one stat of *stat* against *population*.

    Innings pitched is compared in exact thirds on both sides.  A value the
    population cannot rank (missing, or no numeric members) gets a null
    percentile and the unknown color.
    """
    raw = stat.get(column.key) if stat else None
    percentile = None
    if column.ranked:
        percentile = calculate_percentile(
            stat_number(stat, column.key),
            population.values(column.key),
            bool(column.higher_is_better),
        )
    return RankedStat(
        key=column.key,
        label=column.label,
        value=raw,
        display=format_stat_value(raw, column.key),
        percentile=percentile,
        color=get_percentile_color(percentile),
        tier=percentile_tier(percentile),
        reference=population.frame,
        description=get_stat_description(column.key),
    )


def build_stat_card(
    subject_id: int,
    stat: Mapping[str, Any] | None,
    population: Population,
    categories: Iterable[StatCategory] | None = None,
) -> StatCard:
    if categories is None:
        categories = card_categories(population.group)
    views = [
        CategoryView(
            key=category.key,
            title=category.title,
            stats=[rank_stat(column, stat, population) for column in category.columns],
        )
        for category in categories
    ]
    return StatCard(
        subject_id=subject_id,
        group=population.group,
        season=population.season,
        reference=population.frame,
        population_size=len(population),
        categories=views,
        stat=dict(stat) if stat else None,
    )
