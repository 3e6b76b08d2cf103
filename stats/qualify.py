# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Qualification filter and percentile reference populations.

A league-wide percentile only means something against players with enough
playing time.  :func:`qualified_population` keeps hitters with at least
``MIN_PA_QUALIFIED`` plate appearances and pitchers with at least
``MIN_IP_QUALIFIED`` innings; :func:`unfiltered_population` keeps everyone
and says so.  Both return a :class:`Population` tagged with its
:class:`~models.ReferenceFrame`, so the two are never mixed up downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from config import get_min_innings_pitched, get_min_plate_appearances
from models import ReferenceFrame, StatGroup
from stats.parsing import count_value, innings_to_float, stat_number

MIN_PA_QUALIFIED: int = get_min_plate_appearances()
MIN_IP_QUALIFIED: int = get_min_innings_pitched()


def default_threshold(group: StatGroup | str) -> int:
    return MIN_IP_QUALIFIED if StatGroup(group) is StatGroup.PITCHING else MIN_PA_QUALIFIED


def playing_time(stat: Mapping[str, Any] | None, group: StatGroup | str) -> float:
    """Return the volume a stat line is qualified on (PA, or innings as thirds)."""
    if not stat:
        return 0.0
    if StatGroup(group) is StatGroup.PITCHING:
        innings = innings_to_float(stat.get("inningsPitched"))
        return 0.0 if innings is None else innings
    return float(count_value(stat.get("plateAppearances")))


def is_qualified(
    stat: Mapping[str, Any] | None,
    group: StatGroup | str,
    minimum: float | None = None,
) -> bool:
    threshold = default_threshold(group) if minimum is None else minimum
    return playing_time(stat, group) >= threshold


def filter_qualified(
    stats: Iterable[Mapping[str, Any] | None],
    group: StatGroup | str,
    minimum: float | None = None,
) -> list[Mapping[str, Any]]:
    """Return the stat lines meeting the playing-time minimum, in input order.

    Surviving entries are the same objects as the input; nothing is copied
    or modified, so filtering twice with the same minimum is a no-op.
    """
    return [s for s in stats if s and is_qualified(s, group, minimum)]


@dataclass(frozen=True)
class Population:
    """An immutable reference set of stat lines for one group."""

    lines: tuple[Mapping[str, Any], ...]
    group: StatGroup
    frame: ReferenceFrame
    season: int | None = None
    minimum: float | None = None

    def __len__(self) -> int:
        return len(self.lines)

    def values(self, key: str) -> list[float]:
        """Numeric values of *key* across the population (non-numeric dropped)."""
        parsed = (stat_number(line, key) for line in self.lines)
        return [v for v in parsed if v is not None]


def qualified_population(
    stats: Iterable[Mapping[str, Any] | None],
    group: StatGroup | str,
    season: int | None = None,
    minimum: float | None = None,
) -> Population:
    group = StatGroup(group)
    threshold = default_threshold(group) if minimum is None else minimum
    return Population(
        lines=tuple(filter_qualified(stats, group, threshold)),
        group=group,
        frame=ReferenceFrame.QUALIFIED,
        season=season,
        minimum=threshold,
    )


def unfiltered_population(
    stats: Sequence[Mapping[str, Any] | None],
    group: StatGroup | str,
    season: int | None = None,
    frame: ReferenceFrame = ReferenceFrame.ALL,
) -> Population:
    return Population(
        lines=tuple(s for s in stats if s),
        group=StatGroup(group),
        frame=frame,
        season=season,
    )
