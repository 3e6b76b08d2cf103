# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Derived hitting statistics.

:func:`enhance_hitting_stats` is the single source of truth for the
composite stats shown alongside a hitter's raw line.  It reads only base
fields, so derived fields found on the input are ignored and overwritten.
"""

from __future__ import annotations

from typing import Any, Mapping

from models import StatGroup
from stats.parsing import number_or_zero, stat_count, to_fixed

DERIVED_HITTING_KEYS: tuple[str, ...] = (
    "extraBaseHits",
    "totalBases",
    "iso",
    "babip",
    "walkRate",
    "strikeoutRate",
)


def _rate_per_pa(count: int, plate_appearances: int) -> str:
    if plate_appearances <= 0:
        return "0.0"
    return to_fixed(count / plate_appearances * 100, 1)


def enhance_hitting_stats(stat: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of a hitting stat line with derived fields added.

    Derived fields:
        extraBaseHits: doubles + triples + homeRuns
        totalBases: singles + 2*doubles + 3*triples + 4*homeRuns
        iso: slg - avg, 3 decimals (``"0.220"``)
        babip: (hits - homeRuns) / (atBats - strikeOuts - homeRuns + sacFlies),
            3 decimals, ``".000"`` when the denominator is not positive
        walkRate / strikeoutRate: percentage of plate appearances, 1 decimal,
            ``"0.0"`` without plate appearances

    Missing or unparseable inputs count as zero.  The input is never mutated.
    ``None`` is returned unchanged.
    """
    if stat is None:
        return None

    enhanced = dict(stat)

    doubles = stat_count(stat, "doubles")
    triples = stat_count(stat, "triples")
    home_runs = stat_count(stat, "homeRuns")
    hits = stat_count(stat, "hits")

    extra_base_hits = doubles + triples + home_runs
    singles = hits - extra_base_hits
    enhanced["extraBaseHits"] = extra_base_hits
    enhanced["totalBases"] = singles + doubles * 2 + triples * 3 + home_runs * 4

    slg = number_or_zero(stat.get("slg"))
    avg = number_or_zero(stat.get("avg"))
    enhanced["iso"] = to_fixed(slg - avg, 3)

    babip_denominator = (
        stat_count(stat, "atBats")
        - stat_count(stat, "strikeOuts")
        - home_runs
        + stat_count(stat, "sacFlies")
    )
    if babip_denominator > 0:
        enhanced["babip"] = to_fixed((hits - home_runs) / babip_denominator, 3)
    else:
        enhanced["babip"] = ".000"

    plate_appearances = stat_count(stat, "plateAppearances")
    enhanced["walkRate"] = _rate_per_pa(stat_count(stat, "baseOnBalls"), plate_appearances)
    enhanced["strikeoutRate"] = _rate_per_pa(stat_count(stat, "strikeOuts"), plate_appearances)

    return enhanced


def enhance_stat_line(
    stat: Mapping[str, Any] | None,
    group: StatGroup | str,
) -> dict[str, Any] | None:
    """Enhance a stat line for its group; pitching lines are copied unchanged."""
    if stat is None:
        return None
    if StatGroup(group) is StatGroup.HITTING:
        return enhance_hitting_stats(stat)
    return dict(stat)
