# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Stat value formatting and descriptions for display."""

from __future__ import annotations

import re
from typing import Any

from stats.parsing import parse_number, to_fixed

DECIMAL_STATS: frozenset[str] = frozenset([
    "avg", "obp", "slg", "ops", "era", "whip", "iso", "babip",
    "strikeoutsPer9Inn", "walksPer9Inn", "homeRunsPer9", "hitsPer9Inn",
    "strikeoutWalkRatio", "walkRate", "strikeoutRate",
])

# Shown as .XXX (leading zero stripped)
BATTING_AVG_STYLE: frozenset[str] = frozenset(["avg", "obp", "slg", "iso", "babip"])
PERCENTAGE_STYLE: frozenset[str] = frozenset(["walkRate", "strikeoutRate"])

_LEADING_ZERO = re.compile(r"^0")


def _plain(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_stat_value(value: Any, stat_key: str) -> str:
    """Format a raw stat value for display.

    ``avg``/``obp``/``slg``/``iso``/``babip`` render as ``.287``, ``ops`` keeps
    its leading digit (``0.912``, ``1.035``), per-nine and ratio stats use two
    decimals, ``walkRate``/``strikeoutRate`` one decimal with ``%``.  Other
    keys are shown as-is.  Missing or unparseable values render as ``"-"``.
    """
    if value is None or value == "":
        return "-"

    if stat_key in DECIMAL_STATS:
        number = parse_number(value)
        if number is None:
            return "-"
        if stat_key in BATTING_AVG_STYLE:
            return _LEADING_ZERO.sub("", to_fixed(number, 3))
        if stat_key == "ops":
            return to_fixed(number, 3)
        if stat_key in PERCENTAGE_STYLE:
            return f"{to_fixed(number, 1)}%"
        return to_fixed(number, 2)

    return _plain(value)


def format_leader_value(value: Any, fmt: str) -> str:
    """Format a league-leader value for its category format.

    ``decimal3`` drops the leading zero only below 1 (``.312`` but ``1.012``).
    """
    if value is None:
        return "-"
    if fmt in ("decimal3", "decimal2", "decimal1"):
        number = parse_number(value)
        if number is None:
            return "-"
        if fmt == "decimal3":
            text = to_fixed(number, 3)
            return _LEADING_ZERO.sub("", text) if number < 1 else text
        return to_fixed(number, 2 if fmt == "decimal2" else 1)
    return _plain(value)


STAT_DESCRIPTIONS: dict[str, str] = {
    # Hitting
    "avg": "Batting Average: Hits divided by At Bats",
    "obp": "On-Base Percentage: How often a batter reaches base",
    "slg": "Slugging Percentage: Total bases divided by at bats",
    "ops": "On-base Plus Slugging: OBP + SLG combined",
    "babip": "BABIP: Batting average on balls in play (excludes HR and K)",
    "homeRuns": "Home Runs: Balls hit out of the park",
    "rbi": "Runs Batted In: Runs scored due to this batter",
    "runs": "Runs Scored: Times the player crossed home plate",
    "hits": "Hits: Times the batter safely reached base on a batted ball",
    "baseOnBalls": "Walks (BB): Times awarded first base on 4 balls",
    "strikeOuts": "Strikeouts: Times the batter struck out",
    "stolenBases": "Stolen Bases: Bases advanced by stealing",
    "extraBaseHits": "Extra Base Hits: Doubles + Triples + Home Runs",
    "totalBases": "Total Bases: Sum of all bases from hits",
    "iso": "Isolated Power: SLG minus AVG, measures raw power",
    "walkRate": "Walk Rate: Walks as a percentage of plate appearances",
    "strikeoutRate": "Strikeout Rate: Strikeouts as a percentage of plate appearances",
    # Pitching
    "era": "Earned Run Average: Earned runs per 9 innings pitched",
    "whip": "Walks + Hits per Inning Pitched",
    "inningsPitched": "Innings Pitched: Total innings thrown",
    "strikeoutsPer9Inn": "Strikeouts per 9 Innings: K rate over 9 innings",
    "strikeoutWalkRatio": "K/BB Ratio: Strikeouts divided by walks",
    "walksPer9Inn": "Walks per 9 Innings: Base on balls rate",
    "homeRunsPer9": "Home Runs per 9 Innings: HR rate allowed",
    "hitsPer9Inn": "Hits per 9 Innings: Hits allowed rate",
    "wins": "Wins: Games won as the pitcher of record",
    "losses": "Losses: Games lost as the pitcher of record",
    "gamesStarted": "Games Started: Games where this pitcher started",
}


def get_stat_description(stat_key: str) -> str | None:
    return STAT_DESCRIPTIONS.get(stat_key)
