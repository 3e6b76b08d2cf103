# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Game log: game-by-game lines plus last 7/15/30 game splits.

Entries come back most recent first.  Dates are shown as ``M/D`` and the
opponent by its abbreviation, ``"???"`` when the team is not one of the
30 current clubs.  Pitchers get a decision column (W, L, SV or H, in that
order of precedence).
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, Mapping

from data.mlb_api import get_team_abbreviation
from models import GameLog, GameLogEntry, SplitSummary, StatColumn, StatGroup
from stats.columns import game_log_columns, split_columns
from stats.formatting import format_stat_value
from stats.parsing import count_value

DECISION_ORDER: list[tuple[str, str]] = [
    ("wins", "W"), ("losses", "L"), ("saves", "SV"), ("holds", "H"),
]


def display_date(value: str | None) -> str:
    """``"2024-04-05"`` (or a full ISO timestamp) as ``"4/5"``."""
    if not value:
        return "-"
    try:
        day = datetime.date.fromisoformat(value[:10])
    except ValueError:
        return "-"
    return f"{day.month}/{day.day}"


def pitching_decision(stat: Mapping[str, Any]) -> str:
    for key, label in DECISION_ORDER:
        if count_value(stat.get(key)) > 0:
            return label
    return "-"


def _cells(stat: Mapping[str, Any] | None, columns: Iterable[StatColumn]) -> dict[str, str]:
    stat = stat or {}
    return {column.key: format_stat_value(stat.get(column.key), column.key) for column in columns}


def build_game_log_entry(split: Mapping[str, Any], group: StatGroup | str) -> GameLogEntry:
    group = StatGroup(group)
    stat = split.get("stat") or {}
    game = split.get("game") or {}
    opponent = split.get("opponent") or {}
    return GameLogEntry(
        date=display_date(split.get("date") or game.get("gameDate")),
        opponent=get_team_abbreviation(opponent.get("id")),
        opponent_id=opponent.get("id"),
        is_home=split.get("isHome"),
        decision=pitching_decision(stat) if group is StatGroup.PITCHING else "-",
        cells=_cells(stat, game_log_columns(group)),
    )


def build_split_summary(games: int, stat: Mapping[str, Any] | None,
                        group: StatGroup | str) -> SplitSummary:
    return SplitSummary(games=games, label=f"Last {games}", cells=_cells(stat, split_columns(group)))


def build_game_log(
    player_id: int,
    season: int,
    group: StatGroup | str,
    games: Iterable[Mapping[str, Any]],
    splits: Mapping[int, Mapping[str, Any] | None],
) -> GameLog:
    """Build the game log view from upstream splits (oldest first) and recent-form lines."""
    group = StatGroup(group)
    entries = [build_game_log_entry(split, group) for split in games]
    entries.reverse()
    return GameLog(
        player_id=player_id,
        season=season,
        group=group,
        columns=game_log_columns(group),
        games=entries,
        splits=[build_split_summary(n, stat, group) for n, stat in splits.items()],
    )
