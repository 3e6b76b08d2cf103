# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""League leader boards."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import LeaderBoard, LeaderEntry, StatGroup
from stats.columns import LeaderCategory, leader_categories
from stats.formatting import format_leader_value
from stats.parsing import count_value


def build_leader_entry(leader: Mapping[str, Any], index: int, fmt: str) -> LeaderEntry:
    person = leader.get("person") or {}
    team = leader.get("team") or person.get("currentTeam") or {}
    return LeaderEntry(
        rank=count_value(leader.get("rank")) or index + 1,
        player_id=person.get("id"),
        name=person.get("fullName") or "Unknown",
        team=team.get("name") or "",
        value=format_leader_value(leader.get("value"), fmt),
    )


def build_leader_board(category: LeaderCategory, leaders: Iterable[Mapping[str, Any]]) -> LeaderBoard:
    return LeaderBoard(
        key=category.key,
        label=category.label,
        leaders=[build_leader_entry(leader, i, category.format) for i, leader in enumerate(leaders)],
    )


def build_leader_boards(
    boards: Mapping[str, Iterable[Mapping[str, Any]]],
    group: StatGroup | str,
) -> list[LeaderBoard]:
    """One board per category of *group*, in display order."""
    return [
        build_leader_board(category, boards.get(category.key, []))
        for category in leader_categories(group)
    ]
