# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Team card: a team's season line ranked against all 30 teams."""

from __future__ import annotations

from typing import Any, Mapping

from models import StatCard
from stats.columns import card_categories
from stats.qualify import Population
from views.player_card import build_stat_card


def build_team_card(
    team_id: int,
    stat: Mapping[str, Any] | None,
    population: Population,
) -> StatCard:
    """Build a team card; teams are never filtered by playing time."""
    return build_stat_card(
        team_id, stat, population, card_categories(population.group, team=True),
    )
