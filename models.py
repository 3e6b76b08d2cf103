# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the stats viewer.

Stat lines themselves stay plain ``dict[str, Any]`` because upstream values
arrive as strings or numbers interchangeably.  The models here describe the
configuration and the display payloads built on top of them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class StatGroup(str, Enum):
    HITTING = "hitting"
    PITCHING = "pitching"


class ReferenceFrame(str, Enum):
    """What a percentile is relative to."""
    QUALIFIED = "qualified"  # league players meeting a playing-time minimum
    ALL = "all"              # every member, no qualification (e.g. all 30 teams)
    CAREER = "career"        # the subject's own seasons


class PercentileTier(str, Enum):
    ELITE = "elite"
    ABOVE_AVERAGE = "above_average"
    AVERAGE = "average"
    BELOW_AVERAGE = "below_average"
    POOR = "poor"
    UNKNOWN = "unknown"


class TransactionType(str, Enum):
    ALL = "all"
    TRADES = "trades"
    SIGNINGS = "signings"
    DFA = "dfa"
    ROSTER = "roster"


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------

class StatColumn(BaseModel):
    """One displayed stat: its key, label and ranking direction."""
    key: str
    label: str
    higher_is_better: Optional[bool] = Field(
        default=None, description="None for columns that are not ranked"
    )

    @property
    def ranked(self) -> bool:
        return self.higher_is_better is not None


class StatCategory(BaseModel):
    key: str
    title: str
    columns: list[StatColumn]


# ---------------------------------------------------------------------------
# Ranked values and card payloads
# ---------------------------------------------------------------------------

class RankedStat(BaseModel):
    """A stat value with its display string and percentile against a population."""
    key: str
    label: str
    value: Any = None
    display: str = "-"
    percentile: Optional[int] = Field(default=None, ge=0, le=100)
    color: str
    tier: PercentileTier
    reference: ReferenceFrame
    description: Optional[str] = None


class CategoryView(BaseModel):
    key: str
    title: str
    stats: list[RankedStat]


class StatCard(BaseModel):
    """A player or team card: the stat line ranked category by category."""
    subject_id: int
    group: StatGroup
    season: Optional[int] = None
    reference: ReferenceFrame
    population_size: int
    categories: list[CategoryView]
    stat: Optional[dict[str, Any]] = None


# ---------------------------------------------------------------------------
# Career table
# ---------------------------------------------------------------------------

class CareerCell(BaseModel):
    key: str
    display: str
    percentile: Optional[int] = None
    color: Optional[str] = None


class CareerRow(BaseModel):
    season: str
    team: str
    cells: list[CareerCell]
    stat: dict[str, Any]


class RadarAxis(BaseModel):
    label: str
    value: float = Field(ge=0.0, le=100.0)


class SparklineSeries(BaseModel):
    key: str
    label: str
    points: list[tuple[str, float]]
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    latest: Optional[str] = None


class CareerTable(BaseModel):
    player_id: Optional[int] = None
    group: StatGroup
    columns: list[StatColumn]
    seasons: list[CareerRow]
    totals: Optional[list[CareerCell]] = None
    career_stat: Optional[dict[str, Any]] = None
    sparklines: list[SparklineSeries] = Field(default_factory=list)
    radar: list[RadarAxis] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Comparison, leaders, standings
# ---------------------------------------------------------------------------

class ComparisonRow(BaseModel):
    key: str
    label: str
    left: RankedStat
    right: RankedStat
    winner: Optional[str] = Field(default=None, description="'left', 'right', 'tie' or None")


class Comparison(BaseModel):
    group: StatGroup
    season: int
    population_size: int
    rows: list[ComparisonRow]


class LeaderEntry(BaseModel):
    rank: int
    player_id: Optional[int] = None
    name: str
    team: str = ""
    value: str


class LeaderBoard(BaseModel):
    key: str
    label: str
    leaders: list[LeaderEntry]


class StandingsRow(BaseModel):
    rank: int
    team_id: Optional[int] = None
    team: str
    wins: int
    losses: int
    pct: str
    games_back: str
    streak: str
    last_ten: str
    run_differential: int


class DivisionStandings(BaseModel):
    division_id: int
    name: str
    league: str
    teams: list[StandingsRow]


# ---------------------------------------------------------------------------
# Game log
# ---------------------------------------------------------------------------

class GameLogEntry(BaseModel):
    date: str
    opponent: str
    opponent_id: Optional[int] = None
    is_home: Optional[bool] = None
    decision: str = "-"
    cells: dict[str, str]


class SplitSummary(BaseModel):
    """Recent form over the last N games."""
    games: int
    label: str
    cells: dict[str, str]


class GameLog(BaseModel):
    player_id: int
    season: int
    group: StatGroup
    columns: list[StatColumn]
    games: list[GameLogEntry] = Field(description="Most recent game first")
    splits: list[SplitSummary]


# ---------------------------------------------------------------------------
# Postseason, box scores, schedules
# ---------------------------------------------------------------------------

class SeriesTeam(BaseModel):
    team_id: Optional[int] = None
    name: str = ""
    wins: int = 0


class BracketSeries(BaseModel):
    series_id: str
    round: str
    round_label: str
    description: str = ""
    teams: tuple[SeriesTeam, SeriesTeam]
    leader: Optional[int] = Field(default=None, description="Team ID with more wins, if any")
    games: list[dict[str, Any]] = Field(default_factory=list)


class BracketRound(BaseModel):
    key: str
    label: str
    series: list[BracketSeries]


class LinescoreLine(BaseModel):
    innings: list[Optional[int]]
    runs: Optional[int] = None
    hits: Optional[int] = None
    errors: Optional[int] = None


class BoxScore(BaseModel):
    game_pk: int
    innings: list[int]
    away: LinescoreLine
    home: LinescoreLine


class ScheduleGame(BaseModel):
    game_pk: Optional[int] = None
    date: str
    opponent: str
    opponent_id: Optional[int] = None
    is_home: bool
    status: str = ""
    final: bool = False
    result: Optional[str] = Field(default=None, description="'W', 'L' or None")
    score: Optional[str] = None


# ---------------------------------------------------------------------------
# Rosters and transactions
# ---------------------------------------------------------------------------

class RosterEntry(BaseModel):
    player_id: Optional[int] = None
    name: str
    jersey_number: Optional[str] = None
    position: str = ""
    stats: dict[str, str] = Field(default_factory=dict)


class RosterGroup(BaseModel):
    key: str
    label: str
    players: list[RosterEntry]


class TransactionItem(BaseModel):
    id: Optional[int] = None
    type_code: str = ""
    badge: str
    description: str = ""
    player_id: Optional[int] = None
    player_name: Optional[str] = None
    from_team: Optional[str] = None
    to_team: Optional[str] = None


class TransactionDay(BaseModel):
    date: str
    transactions: list[TransactionItem]


class TransactionPage(BaseModel):
    season: int
    type: TransactionType
    offset: int
    limit: int
    total: int
    has_more: bool
    days: list[TransactionDay]
