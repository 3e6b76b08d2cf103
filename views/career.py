# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Career table: season rows colored against the player's own history.

Every ranked cell is placed against the same column's values across the
player's other top-level seasons (reference frame ``career``), never
against the league.  Columns with fewer than ``MIN_CAREER_SAMPLE`` values
stay uncolored.  The career totals row is display-only.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import CareerCell, CareerRow, CareerTable, StatColumn
from stats.career import CareerSummary, self_relative_percentile
from stats.columns import career_columns
from stats.formatting import format_stat_value
from stats.parsing import stat_number
from stats.percentile import get_percentile_color
from stats.profile import radar_profile, sparkline_series


def _cell(
    column: StatColumn,
    stat: Mapping[str, Any],
    populations: Mapping[str, list[float]],
) -> CareerCell:
    display = format_stat_value(stat.get(column.key), column.key)
    if not column.ranked:
        return CareerCell(key=column.key, display=display)
    percentile = self_relative_percentile(
        stat_number(stat, column.key),
        populations.get(column.key, []),
        bool(column.higher_is_better),
    )
    return CareerCell(
        key=column.key,
        display=display,
        percentile=percentile,
        color=None if percentile is None else get_percentile_color(percentile),
    )


def build_career_table(
    summary: CareerSummary,
    player_id: int | None = None,
    columns: Iterable[StatColumn] | None = None,
) -> CareerTable:
    columns = list(career_columns(summary.group) if columns is None else columns)
    rows = [
        CareerRow(
            season=row.season,
            team=row.team,
            cells=[_cell(column, row.stat, summary.populations) for column in columns],
            stat=row.stat,
        )
        for row in summary.seasons
    ]

    totals = None
    if summary.totals is not None:
        totals = [
            CareerCell(key=c.key, display=format_stat_value(summary.totals.get(c.key), c.key))
            for c in columns
        ]

    latest = summary.seasons[-1].stat if summary.seasons else None
    return CareerTable(
        player_id=player_id,
        group=summary.group,
        columns=columns,
        seasons=rows,
        totals=totals,
        career_stat=summary.totals,
        sparklines=sparkline_series([(r.season, r.stat) for r in summary.seasons], summary.group),
        radar=radar_profile(latest, summary.group),
    )
