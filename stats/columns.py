# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Stat column configuration for cards, career tables, comparisons and game logs."""

from __future__ import annotations

from typing import NamedTuple

from models import StatCategory, StatColumn, StatGroup


def _col(key: str, label: str, higher_is_better: bool | None = None) -> StatColumn:
    return StatColumn(key=key, label=label, higher_is_better=higher_is_better)


def _category(key: str, title: str, *columns: StatColumn) -> StatCategory:
    return StatCategory(key=key, title=title, columns=list(columns))


# ---------------------------------------------------------------------------
# Player cards
# ---------------------------------------------------------------------------

HITTER_CARD: list[StatCategory] = [
    _category("batting", "BATTING",
              _col("avg", "AVG", True), _col("obp", "OBP", True),
              _col("slg", "SLG", True), _col("ops", "OPS", True)),
    _category("power", "POWER",
              _col("homeRuns", "HR", True), _col("extraBaseHits", "XBH", True),
              _col("totalBases", "TB", True)),
    _category("production", "RUN PRODUCTION",
              _col("rbi", "RBI", True), _col("runs", "R", True), _col("hits", "H", True)),
    _category("discipline", "DISCIPLINE",
              _col("baseOnBalls", "BB", True), _col("strikeOuts", "K", False)),
    _category("speed", "SPEED", _col("stolenBases", "SB", True)),
]

PITCHER_CARD: list[StatCategory] = [
    _category("volume", "VOLUME",
              _col("inningsPitched", "IP", True), _col("strikeOuts", "K", True)),
    _category("runPrevention", "RUN PREVENTION",
              _col("era", "ERA", False), _col("whip", "WHIP", False)),
    _category("dominance", "DOMINANCE", _col("strikeoutsPer9Inn", "K/9", True)),
    _category("starting", "STARTING",
              _col("wins", "W", True), _col("losses", "L", False),
              _col("gamesStarted", "GS", True)),
    _category("contact", "CONTACT",
              _col("homeRuns", "HR", False), _col("baseOnBalls", "BB", False),
              _col("hits", "H", False)),
]

# ---------------------------------------------------------------------------
# Team cards
# ---------------------------------------------------------------------------

TEAM_HITTING_CARD: list[StatCategory] = [
    _category("batting", "BATTING",
              _col("avg", "AVG", True), _col("obp", "OBP", True),
              _col("slg", "SLG", True), _col("ops", "OPS", True)),
    _category("production", "PRODUCTION",
              _col("homeRuns", "HR", True), _col("runs", "R", True),
              _col("rbi", "RBI", True), _col("hits", "H", True)),
    _category("discipline", "DISCIPLINE & SPEED",
              _col("stolenBases", "SB", True), _col("baseOnBalls", "BB", True),
              _col("strikeOuts", "K", False)),
]

TEAM_PITCHING_CARD: list[StatCategory] = [
    _category("runPrevention", "RUN PREVENTION",
              _col("era", "ERA", False), _col("whip", "WHIP", False)),
    _category("dominance", "DOMINANCE",
              _col("strikeOuts", "K", True), _col("strikeoutsPer9Inn", "K/9", True),
              _col("walksPer9Inn", "BB/9", False)),
    _category("bullpen", "BULLPEN", _col("saves", "SV", True), _col("holds", "HLD", True)),
    _category("hitPrevention", "HIT PREVENTION",
              _col("hitsPer9Inn", "H/9", False), _col("homeRunsPer9", "HR/9", False)),
]

# ---------------------------------------------------------------------------
# Career tables
# ---------------------------------------------------------------------------

HITTER_CAREER_COLUMNS: list[StatColumn] = [
    _col("gamesPlayed", "G"),
    _col("plateAppearances", "PA"),
    _col("avg", "AVG", True),
    _col("obp", "OBP", True),
    _col("slg", "SLG", True),
    _col("ops", "OPS", True),
    _col("homeRuns", "HR", True),
    _col("rbi", "RBI", True),
    _col("runs", "R", True),
    _col("hits", "H", True),
    _col("stolenBases", "SB", True),
    _col("baseOnBalls", "BB", True),
    _col("strikeOuts", "K", False),
]

PITCHER_CAREER_COLUMNS: list[StatColumn] = [
    _col("gamesPlayed", "G"),
    _col("gamesStarted", "GS"),
    _col("wins", "W", True),
    _col("losses", "L", False),
    _col("era", "ERA", False),
    _col("whip", "WHIP", False),
    _col("inningsPitched", "IP", True),
    _col("strikeOuts", "K", True),
    _col("strikeoutsPer9Inn", "K/9", True),
    _col("baseOnBalls", "BB", False),
    _col("homeRuns", "HR", False),
    _col("saves", "SV", True),
]

# ---------------------------------------------------------------------------
# Head-to-head comparison
# ---------------------------------------------------------------------------

HITTER_COMPARE_COLUMNS: list[StatColumn] = [
    _col("avg", "AVG", True),
    _col("obp", "OBP", True),
    _col("slg", "SLG", True),
    _col("homeRuns", "HR", True),
    _col("rbi", "RBI", True),
    _col("runs", "R", True),
    _col("stolenBases", "SB", True),
    _col("strikeOuts", "K", False),
]

PITCHER_COMPARE_COLUMNS: list[StatColumn] = [
    _col("inningsPitched", "IP", True),
    _col("strikeOuts", "K", True),
    _col("era", "ERA", False),
    _col("whip", "WHIP", False),
    _col("strikeoutsPer9Inn", "K/9", True),
    _col("wins", "W", True),
    _col("baseOnBalls", "BB", False),
]


def card_categories(group: StatGroup | str, team: bool = False) -> list[StatCategory]:
    pitching = StatGroup(group) is StatGroup.PITCHING
    if team:
        return TEAM_PITCHING_CARD if pitching else TEAM_HITTING_CARD
    return PITCHER_CARD if pitching else HITTER_CARD


def career_columns(group: StatGroup | str) -> list[StatColumn]:
    if StatGroup(group) is StatGroup.PITCHING:
        return PITCHER_CAREER_COLUMNS
    return HITTER_CAREER_COLUMNS


def compare_columns(group: StatGroup | str) -> list[StatColumn]:
    if StatGroup(group) is StatGroup.PITCHING:
        return PITCHER_COMPARE_COLUMNS
    return HITTER_COMPARE_COLUMNS


# ---------------------------------------------------------------------------
# Game logs
# ---------------------------------------------------------------------------

HITTER_GAME_LOG_COLUMNS: list[StatColumn] = [
    _col("atBats", "AB"), _col("hits", "H"), _col("runs", "R"), _col("rbi", "RBI"),
    _col("homeRuns", "HR"), _col("baseOnBalls", "BB"), _col("strikeOuts", "K"),
    _col("stolenBases", "SB"), _col("avg", "AVG"),
]

PITCHER_GAME_LOG_COLUMNS: list[StatColumn] = [
    _col("inningsPitched", "IP"), _col("hits", "H"), _col("runs", "R"),
    _col("earnedRuns", "ER"), _col("strikeOuts", "K"), _col("baseOnBalls", "BB"),
    _col("homeRuns", "HR"), _col("era", "ERA"),
]

HITTER_SPLIT_COLUMNS: list[StatColumn] = [
    _col("avg", "AVG"), _col("ops", "OPS"), _col("homeRuns", "HR"),
    _col("rbi", "RBI"), _col("hits", "H"), _col("runs", "R"),
]

PITCHER_SPLIT_COLUMNS: list[StatColumn] = [
    _col("era", "ERA"), _col("whip", "WHIP"), _col("strikeOuts", "K"),
    _col("inningsPitched", "IP"), _col("wins", "W"), _col("saves", "SV"),
]


def game_log_columns(group: StatGroup | str) -> list[StatColumn]:
    if StatGroup(group) is StatGroup.PITCHING:
        return PITCHER_GAME_LOG_COLUMNS
    return HITTER_GAME_LOG_COLUMNS


def split_columns(group: StatGroup | str) -> list[StatColumn]:
    if StatGroup(group) is StatGroup.PITCHING:
        return PITCHER_SPLIT_COLUMNS
    return HITTER_SPLIT_COLUMNS


# ---------------------------------------------------------------------------
# League leaders
# ---------------------------------------------------------------------------

class LeaderCategory(NamedTuple):
    key: str        # upstream leaderCategories value
    label: str
    format: str     # decimal3 | decimal2 | decimal1 | integer


HITTING_LEADER_CATEGORIES: list[LeaderCategory] = [
    LeaderCategory("battingAverage", "AVG", "decimal3"),
    LeaderCategory("homeRuns", "HR", "integer"),
    LeaderCategory("runsBattedIn", "RBI", "integer"),
    LeaderCategory("onBasePlusSlugging", "OPS", "decimal3"),
    LeaderCategory("stolenBases", "SB", "integer"),
    LeaderCategory("hits", "H", "integer"),
]

PITCHING_LEADER_CATEGORIES: list[LeaderCategory] = [
    LeaderCategory("earnedRunAverage", "ERA", "decimal2"),
    LeaderCategory("strikeouts", "K", "integer"),
    LeaderCategory("wins", "W", "integer"),
    LeaderCategory("walksAndHitsPerInningPitched", "WHIP", "decimal2"),
    LeaderCategory("saves", "SV", "integer"),
    LeaderCategory("inningsPitched", "IP", "decimal1"),
]


def leader_categories(group: StatGroup | str) -> list[LeaderCategory]:
    if StatGroup(group) is StatGroup.PITCHING:
        return PITCHING_LEADER_CATEGORIES
    return HITTING_LEADER_CATEGORIES
