# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Composite radar-profile axes and per-season sparkline series."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from models import RadarAxis, SparklineSeries, StatGroup
from stats.formatting import format_stat_value
from stats.parsing import number_or_zero, stat_count, stat_number

# Axes are drawn no smaller than this so an empty axis stays visible.
RADAR_FLOOR = 5.0


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def _per_pa(stat: Mapping[str, Any], key: str) -> float:
    plate_appearances = stat_count(stat, "plateAppearances") or 1
    return stat_count(stat, key) / plate_appearances


def _power(s: Mapping[str, Any]) -> float:
    iso = number_or_zero(s.get("iso")) or (number_or_zero(s.get("slg")) - number_or_zero(s.get("avg")))
    # 40 HR / .300 ISO = 100
    return (stat_count(s, "homeRuns") / 40 * 0.5 + iso / 0.300 * 0.5) * 100


def _contact(s: Mapping[str, Any]) -> float:
    k_rate = _per_pa(s, "strikeOuts")
    return (number_or_zero(s.get("avg")) / 0.300 * 0.6 + (1 - k_rate) / 0.85 * 0.4) * 100


def _speed(s: Mapping[str, Any]) -> float:
    return stat_count(s, "stolenBases") / 40 * 100


def _discipline(s: Mapping[str, Any]) -> float:
    bb_rate = _per_pa(s, "baseOnBalls")
    return (number_or_zero(s.get("obp")) / 0.400 * 0.6 + bb_rate / 0.15 * 0.4) * 100


def _production(s: Mapping[str, Any]) -> float:
    return (stat_count(s, "rbi") / 120 * 0.5 + stat_count(s, "runs") / 100 * 0.5) * 100


def _strikeouts(s: Mapping[str, Any]) -> float:
    return number_or_zero(s.get("strikeoutsPer9Inn")) / 12 * 100


def _control(s: Mapping[str, Any]) -> float:
    # 1.5 BB/9 = 100, 5.0+ = 0
    return (1 - (number_or_zero(s.get("walksPer9Inn")) - 1.5) / 3.5) * 100


def _durability(s: Mapping[str, Any]) -> float:
    return (stat_number(s, "inningsPitched") or 0.0) / 200 * 100


def _ground_ball(s: Mapping[str, Any]) -> float:
    return number_or_zero(s.get("groundOutsToAirouts")) / 2.0 * 100


def _prevention(s: Mapping[str, Any]) -> float:
    # ERA 2.00 = 100, 6.00+ = 0
    return (1 - (number_or_zero(s.get("era")) - 2.0) / 4.0) * 100


HITTER_AXES: list[tuple[str, Callable[[Mapping[str, Any]], float]]] = [
    ("Power", _power),
    ("Contact", _contact),
    ("Speed", _speed),
    ("Discipline", _discipline),
    ("Production", _production),
]

PITCHER_AXES: list[tuple[str, Callable[[Mapping[str, Any]], float]]] = [
    ("Strikeouts", _strikeouts),
    ("Control", _control),
    ("Durability", _durability),
    ("Ground Ball", _ground_ball),
    ("Prevention", _prevention),
]


def radar_profile(stat: Mapping[str, Any] | None, group: StatGroup | str) -> list[RadarAxis]:
    """Score a stat line on five 0–100 axes (floored at :data:`RADAR_FLOOR`)."""
    if not stat:
        return []
    axes = PITCHER_AXES if StatGroup(group) is StatGroup.PITCHING else HITTER_AXES
    return [
        RadarAxis(label=label, value=round(max(_clamp(calc(stat)), RADAR_FLOOR), 1))
        for label, calc in axes
    ]


SPARKLINE_STATS: dict[StatGroup, list[tuple[str, str]]] = {
    StatGroup.HITTING: [("avg", "AVG"), ("ops", "OPS"), ("homeRuns", "HR")],
    StatGroup.PITCHING: [("era", "ERA"), ("whip", "WHIP"), ("strikeOuts", "K")],
}


def sparkline_series(
    seasons: Sequence[tuple[str, Mapping[str, Any]]],
    group: StatGroup | str,
) -> list[SparklineSeries]:
    """Build one series per key stat from ``(season, stat)`` pairs in season order."""
    series = []
    for key, label in SPARKLINE_STATS[StatGroup(group)]:
        points = []
        for season, stat in seasons:
            value = stat_number(stat, key)
            if value is not None:
                points.append((season, value))
        values = [v for _, v in points]
        series.append(SparklineSeries(
            key=key,
            label=label,
            points=points,
            minimum=min(values) if values else None,
            maximum=max(values) if values else None,
            latest=format_stat_value(values[-1], key) if values else None,
        ))
    return series
