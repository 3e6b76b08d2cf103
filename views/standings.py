# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Division standings grouped in display order."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import DivisionStandings, StandingsRow
from stats.parsing import count_value

# (division id, name, league) in display order
DIVISIONS: list[tuple[int, str, str]] = [
    (201, "AL East", "American League"),
    (202, "AL Central", "American League"),
    (200, "AL West", "American League"),
    (204, "NL East", "National League"),
    (205, "NL Central", "National League"),
    (203, "NL West", "National League"),
]


def _last_ten(record: Mapping[str, Any]) -> str:
    splits = (record.get("records") or {}).get("splitRecords") or []
    for split in splits:
        if split.get("type") == "lastTen":
            return f"{split.get('wins', 0)}-{split.get('losses', 0)}"
    return "-"


def build_standings_row(record: Mapping[str, Any], rank: int) -> StandingsRow:
    team = record.get("team") or {}
    streak = record.get("streak") or {}
    return StandingsRow(
        rank=rank,
        team_id=team.get("id"),
        team=team.get("name") or "Unknown",
        wins=count_value(record.get("wins")),
        losses=count_value(record.get("losses")),
        pct=record.get("winningPercentage") or ".000",
        games_back=str(record.get("gamesBack") or "-"),
        streak=streak.get("streakCode") or "-",
        last_ten=_last_ten(record),
        run_differential=count_value(record.get("runDifferential")),
    )


def _division_rank(record: Mapping[str, Any]) -> int:
    return count_value(record.get("divisionRank")) or 99


def build_standings(records: Iterable[Mapping[str, Any]]) -> list[DivisionStandings]:
    """Group flat team records by division and order each by division rank.

    Divisions with no records are left out.
    """
    by_division: dict[int, list[Mapping[str, Any]]] = {}
    for record in records:
        division_id = (record.get("division") or {}).get("id")
        if division_id is not None:
            by_division.setdefault(division_id, []).append(record)

    standings = []
    for division_id, name, league in DIVISIONS:
        teams = sorted(by_division.get(division_id, []), key=_division_rank)
        if not teams:
            continue
        standings.append(DivisionStandings(
            division_id=division_id,
            name=name,
            league=league,
            teams=[build_standings_row(team, i + 1) for i, team in enumerate(teams)],
        ))
    return standings
