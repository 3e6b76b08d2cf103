# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Team roster grouped by position, each group ordered by jersey number."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from data.mlb_api import PITCHER_POSITIONS
from models import RosterEntry, RosterGroup
from stats.formatting import format_stat_value
from stats.parsing import parse_number

# (key, label, position codes); unknown positions fall into "dh"
POSITION_GROUPS: list[tuple[str, str, frozenset[str]]] = [
    ("pitchers", "PITCHERS", PITCHER_POSITIONS),
    ("catchers", "CATCHERS", frozenset(["C"])),
    ("infielders", "INFIELDERS", frozenset(["1B", "2B", "3B", "SS"])),
    ("outfielders", "OUTFIELDERS", frozenset(["LF", "CF", "RF", "OF"])),
    ("dh", "DESIGNATED HITTERS", frozenset(["DH"])),
]
FALLBACK_GROUP = "dh"
NO_JERSEY = 999

SEASON_STAT_TYPES = frozenset(["season", "statsSingleSeason"])


def season_stat(person: Mapping[str, Any]) -> dict[str, Any] | None:
    """The hydrated season line, falling back to the first split present."""
    blocks = person.get("stats") or []
    for block in blocks:
        if (block.get("type") or {}).get("displayName") in SEASON_STAT_TYPES:
            splits = block.get("splits") or []
            if splits and splits[0].get("stat"):
                return splits[0]["stat"]
    if blocks:
        splits = blocks[0].get("splits") or []
        if splits:
            return splits[0].get("stat") or None
    return None


def _position(entry: Mapping[str, Any]) -> str:
    position = entry.get("position") or {}
    person = entry.get("person") or {}
    return (position.get("abbreviation")
            or (person.get("primaryPosition") or {}).get("abbreviation")
            or "")


def _roster_stats(stat: Mapping[str, Any] | None, pitcher: bool) -> dict[str, str]:
    stat = stat or {}
    if pitcher:
        return {
            "era": format_stat_value(stat.get("era"), "era"),
            "record": f"{stat.get('wins', 0)}-{stat.get('losses', 0)}",
            "strikeOuts": format_stat_value(stat.get("strikeOuts"), "strikeOuts"),
        }
    return {
        "avg": format_stat_value(stat.get("avg"), "avg"),
        "homeRuns": format_stat_value(stat.get("homeRuns"), "homeRuns"),
        "rbi": format_stat_value(stat.get("rbi"), "rbi"),
    }


def build_roster_entry(entry: Mapping[str, Any]) -> RosterEntry:
    person = entry.get("person") or {}
    position = _position(entry)
    return RosterEntry(
        player_id=person.get("id"),
        name=person.get("fullName") or "Unknown",
        jersey_number=entry.get("jerseyNumber") or None,
        position=position,
        stats=_roster_stats(season_stat(person), position in PITCHER_POSITIONS),
    )


def _jersey_key(entry: RosterEntry) -> int:
    number = parse_number(entry.jersey_number)
    return NO_JERSEY if number is None else int(number)


def build_roster(roster: Iterable[Mapping[str, Any]]) -> list[RosterGroup]:
    """Group roster entries by position; empty groups are left out."""
    grouped: dict[str, list[RosterEntry]] = {key: [] for key, _, _ in POSITION_GROUPS}
    for raw in roster:
        entry = build_roster_entry(raw)
        key = next(
            (key for key, _, codes in POSITION_GROUPS if entry.position in codes),
            FALLBACK_GROUP,
        )
        grouped[key].append(entry)
    return [
        RosterGroup(key=key, label=label, players=sorted(grouped[key], key=_jersey_key))
        for key, label, _ in POSITION_GROUPS
        if grouped[key]
    ]
