# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Career aggregation over year-by-year stat lines.

Turns the upstream ``yearByYear`` splits for one player into:

  1. season rows restricted to top-level play, sorted by season;
  2. a synthetic career line -- counting stats summed, innings summed in
     exact thirds, and rate stats recomputed from the summed components
     (never averaged across seasons);
  3. per-column populations of the player's own season values, used to
     color each season relative to the rest of the career.

The career percentile is self-relative: it ranks a season against the same
player's other seasons, not against the league.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from models import StatColumn, StatGroup
from stats.enhance import enhance_stat_line, enhance_hitting_stats
from stats.parsing import (
    count_value,
    innings_to_outs,
    outs_to_innings,
    stat_count,
    stat_number,
    to_fixed,
)
from stats.percentile import calculate_percentile

TOP_LEVEL_SPORT_ID = 1
TOP_LEVEL_SPORT_ABBREVIATION = "MLB"

# A season column needs this many values before it is colored.
MIN_CAREER_SAMPLE = 3

NOT_COMPUTABLE = "-"

HITTING_COUNTING_KEYS: tuple[str, ...] = (
    "gamesPlayed", "plateAppearances", "atBats", "runs", "hits", "doubles",
    "triples", "homeRuns", "rbi", "stolenBases", "caughtStealing",
    "baseOnBalls", "intentionalWalks", "strikeOuts", "hitByPitch",
    "sacFlies", "sacBunts",
)

PITCHING_COUNTING_KEYS: tuple[str, ...] = (
    "gamesPlayed", "gamesStarted", "wins", "losses", "saves", "holds",
    "hits", "runs", "earnedRuns", "homeRuns", "baseOnBalls", "strikeOuts",
    "hitBatsmen", "battersFaced",
)


@dataclass
class SeasonRow:
    season: str
    team: str
    stat: dict[str, Any]


@dataclass
class CareerSummary:
    group: StatGroup
    seasons: list[SeasonRow] = field(default_factory=list)
    totals: dict[str, Any] | None = None
    populations: dict[str, list[float]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Season rows
# ---------------------------------------------------------------------------

def is_top_level(split: Mapping[str, Any], sport_id: int = TOP_LEVEL_SPORT_ID) -> bool:
    sport = split.get("sport") or {}
    if sport.get("id") == sport_id:
        return True
    return sport_id == TOP_LEVEL_SPORT_ID and sport.get("abbreviation") == TOP_LEVEL_SPORT_ABBREVIATION


def season_rows(
    splits: Iterable[Mapping[str, Any]],
    group: StatGroup | str,
    sport_id: int = TOP_LEVEL_SPORT_ID,
) -> list[SeasonRow]:
    """Build season rows from year-by-year splits, ascending by season year.

    A player who changed teams mid-season gets one split per team plus a
    combined split without a ``team``.  Only the combined split is kept for
    such a season, so that the season is not counted twice in career totals.
    """
    by_season: dict[str, list[Mapping[str, Any]]] = {}
    for split in splits:
        if not split or not is_top_level(split, sport_id):
            continue
        by_season.setdefault(str(split.get("season", "")), []).append(split)

    rows = []
    for season, season_splits in by_season.items():
        combined = [s for s in season_splits if not s.get("team")]
        if combined and len(season_splits) > 1:
            team_count = len(season_splits) - len(combined)
            rows.append(_season_row(season, combined[0], group, f"{team_count}TM"))
            continue
        rows.extend(_season_row(season, split, group) for split in season_splits)
    rows.sort(key=lambda row: count_value(row.season))
    return rows


def _season_row(
    season: str,
    split: Mapping[str, Any],
    group: StatGroup | str,
    team: str | None = None,
) -> SeasonRow:
    if team is None:
        team = (split.get("team") or {}).get("abbreviation") or "???"
    return SeasonRow(
        season=season,
        team=team,
        stat=enhance_stat_line(split.get("stat") or {}, group) or {},
    )


# ---------------------------------------------------------------------------
# Career totals
# ---------------------------------------------------------------------------

def _sum_counts(stats: Sequence[Mapping[str, Any]], keys: Iterable[str]) -> dict[str, Any]:
    return {key: sum(stat_count(stat, key) for stat in stats) for key in keys}


def _rate(numerator: float, denominator: float, digits: int, scale: float = 1.0) -> str:
    if denominator <= 0:
        return NOT_COMPUTABLE
    return to_fixed(numerator / denominator * scale, digits)


def sum_innings(values: Iterable[Any]) -> int:
    """Sum innings-pitched values as outs; malformed values count as zero."""
    total = 0
    for value in values:
        outs = innings_to_outs(value)
        if outs is not None:
            total += outs
    return total


def career_hitting_totals(stats: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    totals = _sum_counts(stats, HITTING_COUNTING_KEYS)
    at_bats = totals["atBats"]
    hits = totals["hits"]
    plate_appearances = totals["plateAppearances"]

    totals["avg"] = _rate(hits, at_bats, 3)
    totals["obp"] = _rate(hits + totals["baseOnBalls"], plate_appearances, 3)
    total_bases = enhance_hitting_stats(totals)["totalBases"]
    totals["slg"] = _rate(total_bases, at_bats, 3)
    if totals["obp"] != NOT_COMPUTABLE and totals["slg"] != NOT_COMPUTABLE:
        totals["ops"] = to_fixed(float(totals["obp"]) + float(totals["slg"]), 3)
    else:
        totals["ops"] = NOT_COMPUTABLE
    return enhance_hitting_stats(totals)


def career_pitching_totals(stats: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    totals = _sum_counts(stats, PITCHING_COUNTING_KEYS)
    outs = sum_innings(stat.get("inningsPitched") for stat in stats)
    innings = outs / 3
    totals["outs"] = outs
    totals["inningsPitched"] = outs_to_innings(outs)

    strikeouts = totals["strikeOuts"]
    walks = totals["baseOnBalls"]
    totals["era"] = _rate(totals["earnedRuns"], innings, 2, scale=9)
    totals["whip"] = _rate(walks + totals["hits"], innings, 2)
    totals["strikeoutsPer9Inn"] = _rate(strikeouts, innings, 2, scale=9)
    totals["walksPer9Inn"] = _rate(walks, innings, 2, scale=9)
    totals["hitsPer9Inn"] = _rate(totals["hits"], innings, 2, scale=9)
    totals["homeRunsPer9"] = _rate(totals["homeRuns"], innings, 2, scale=9)
    totals["strikeoutWalkRatio"] = _rate(strikeouts, walks, 2)
    return totals


def build_career_totals(
    stats: Sequence[Mapping[str, Any]],
    group: StatGroup | str,
) -> dict[str, Any] | None:
    """Synthesize a career line, or ``None`` with fewer than two seasons."""
    if len(stats) <= 1:
        return None
    if StatGroup(group) is StatGroup.PITCHING:
        return career_pitching_totals(stats)
    return career_hitting_totals(stats)


# ---------------------------------------------------------------------------
# Self-relative percentiles
# ---------------------------------------------------------------------------

def column_populations(
    rows: Sequence[SeasonRow],
    columns: Iterable[StatColumn],
) -> dict[str, list[float]]:
    """Collect, per ranked column, the player's own numeric season values."""
    populations = {}
    for column in columns:
        if not column.ranked:
            continue
        values = (stat_number(row.stat, column.key) for row in rows)
        populations[column.key] = [v for v in values if v is not None]
    return populations


def self_relative_percentile(
    value: Any,
    population: Sequence[float],
    higher_is_better: bool,
    min_sample: int = MIN_CAREER_SAMPLE,
) -> int | None:
    """Percentile of a season value within the player's own seasons.

    Returns ``None`` when fewer than *min_sample* seasons have a value.
    """
    if len(population) < min_sample:
        return None
    return calculate_percentile(value, population, higher_is_better)


def aggregate_career(
    splits: Iterable[Mapping[str, Any]],
    group: StatGroup | str,
    columns: Iterable[StatColumn] = (),
    sport_id: int = TOP_LEVEL_SPORT_ID,
) -> CareerSummary:
    group = StatGroup(group)
    rows = season_rows(splits, group, sport_id)
    return CareerSummary(
        group=group,
        seasons=rows,
        totals=build_career_totals([row.stat for row in rows], group),
        populations=column_populations(rows, columns),
    )
