# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for career aggregation over year-by-year splits (stats/career.py).

Validates:
  1. Season rows keep only top-level play and sort by season
  2. Counting stats are summed and innings are summed in exact thirds
  3. Rate stats are recomputed from summed components, "-" without a denominator
  4. Fewer than two seasons produce no career line
  5. Self-relative percentiles need a minimum sample
"""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import StatGroup
from stats.career import (
    MIN_CAREER_SAMPLE,
    NOT_COMPUTABLE,
    aggregate_career,
    build_career_totals,
    career_hitting_totals,
    career_pitching_totals,
    column_populations,
    season_rows,
    self_relative_percentile,
    sum_innings,
)
from stats.columns import HITTER_CAREER_COLUMNS, PITCHER_CAREER_COLUMNS

MLB = {"id": 1, "abbreviation": "MLB"}
AAA = {"id": 11, "abbreviation": "AAA"}


def _split(season, stat, sport=MLB, team="NYY"):
    split = {"season": season, "stat": stat, "sport": sport}
    if team:
        split["team"] = {"abbreviation": team}
    return split


@pytest.fixture
def pitching_seasons():
    return [
        {"inningsPitched": "180.1", "earnedRuns": 60, "baseOnBalls": 50, "hits": 150,
         "strikeOuts": 200, "homeRuns": 20, "wins": 14, "gamesPlayed": 30},
        {"inningsPitched": "120.2", "earnedRuns": 40, "baseOnBalls": 30, "hits": 100,
         "strikeOuts": 120, "homeRuns": 10, "wins": 8, "gamesPlayed": 22},
    ]


@pytest.fixture
def hitting_seasons():
    return [
        {"hits": 150, "doubles": 30, "triples": 2, "homeRuns": 20, "atBats": 500,
         "plateAppearances": 570, "baseOnBalls": 60, "strikeOuts": 90, "sacFlies": 5},
        {"hits": 100, "doubles": 20, "triples": 0, "homeRuns": 10, "atBats": 400,
         "plateAppearances": 450, "baseOnBalls": 40, "strikeOuts": 80, "sacFlies": 3},
    ]


class TestSeasonRows:

    def test_filters_minor_leagues_and_sorts(self):
        splits = [
            _split("2023", {"avg": ".300"}),
            _split("2021", {"avg": ".250"}, sport=AAA),
            _split("2022", {"avg": ".280"}, team=None),
        ]
        rows = season_rows(splits, "hitting")
        assert [r.season for r in rows] == ["2022", "2023"]
        assert rows[0].team == "???"
        assert rows[0].stat["iso"] == "-0.280"

    def test_traded_season_keeps_only_combined_split(self):
        splits = [
            _split("2023", {"hits": 100, "atBats": 400}, team="NYY"),
            _split("2024", {"hits": 60, "atBats": 250}, team="SD"),
            _split("2024", {"hits": 40, "atBats": 150}, team="NYY"),
            _split("2024", {"hits": 100, "atBats": 400}, team=None),
        ]
        rows = season_rows(splits, "hitting")
        assert [(r.season, r.team) for r in rows] == [("2023", "NYY"), ("2024", "2TM")]
        summary = aggregate_career(splits, "hitting")
        assert summary.totals["hits"] == 200
        assert summary.totals["atBats"] == 800

    def test_pitching_rows_are_not_enhanced(self):
        rows = season_rows([_split("2024", {"era": "3.00"})], "pitching")
        assert rows[0].stat == {"era": "3.00"}


class TestPitchingTotals:

    def test_innings_sum_in_thirds(self, pitching_seasons):
        totals = career_pitching_totals(pitching_seasons)
        assert totals["outs"] == 903
        assert totals["inningsPitched"] == "301.0"

    def test_rates_from_components(self, pitching_seasons):
        totals = career_pitching_totals(pitching_seasons)
        assert totals["earnedRuns"] == 100
        assert totals["era"] == "2.99"           # 100 / 301 * 9
        assert totals["whip"] == "1.10"          # 330 / 301
        assert totals["strikeoutWalkRatio"] == "4.00"
        assert totals["wins"] == 22

    def test_zero_innings(self):
        totals = career_pitching_totals([{"inningsPitched": "0.0"}, {"inningsPitched": "0.0"}])
        assert totals["era"] == NOT_COMPUTABLE
        assert totals["whip"] == NOT_COMPUTABLE
        assert totals["inningsPitched"] == "0.0"

    def test_malformed_innings_count_as_zero(self):
        assert sum_innings(["10.1", "5.9", None, "3.2"]) == 31 + 11


class TestHittingTotals:

    def test_rates_from_components(self, hitting_seasons):
        totals = career_hitting_totals(hitting_seasons)
        assert totals["hits"] == 250
        assert totals["avg"] == "0.278"          # 250 / 900
        assert totals["obp"] == "0.343"          # (250 + 100) / 1020
        assert totals["slg"] == "0.438"          # 394 / 900
        assert totals["ops"] == "0.781"
        assert totals["totalBases"] == 394

    def test_zero_at_bats(self):
        totals = career_hitting_totals([{"plateAppearances": 2, "baseOnBalls": 2}, {}])
        assert totals["avg"] == NOT_COMPUTABLE
        assert totals["slg"] == NOT_COMPUTABLE
        assert totals["ops"] == NOT_COMPUTABLE
        assert totals["obp"] == "1.000"


class TestBuildCareerTotals:

    def test_single_season_has_no_career_line(self, hitting_seasons):
        assert build_career_totals(hitting_seasons[:1], "hitting") is None
        assert build_career_totals([], "pitching") is None

    def test_dispatches_on_group(self, pitching_seasons, hitting_seasons):
        assert build_career_totals(pitching_seasons, StatGroup.PITCHING)["inningsPitched"] == "301.0"
        assert "totalBases" in build_career_totals(hitting_seasons, StatGroup.HITTING)


class TestSelfRelative:

    def test_minimum_sample(self):
        assert MIN_CAREER_SAMPLE == 3
        assert self_relative_percentile(5, [4, 5], True) is None
        assert self_relative_percentile(5, [4, 5, 6], True) == 50

    def test_direction(self):
        assert self_relative_percentile(2.5, [2.5, 3.5, 4.5], False) == 83

    def test_column_populations_skip_unranked(self):
        splits = [_split(str(2020 + i), {"era": era, "gamesPlayed": 30}) for i, era in
                  enumerate(["3.00", "2.50", "-.--", "4.00"])]
        rows = season_rows(splits, "pitching")
        populations = column_populations(rows, PITCHER_CAREER_COLUMNS)
        assert "gamesPlayed" not in populations
        assert populations["era"] == pytest.approx([3.0, 2.5, 4.0])


class TestAggregateCareer:

    def test_end_to_end(self, hitting_seasons):
        splits = [
            _split("2020", hitting_seasons[0]),
            _split("2020", {"hits": 50, "atBats": 100}, sport=AAA),
            _split("2021", hitting_seasons[1]),
        ]
        summary = aggregate_career(splits, "hitting", HITTER_CAREER_COLUMNS)
        assert summary.group is StatGroup.HITTING
        assert len(summary.seasons) == 2
        assert summary.totals["avg"] == "0.278"
        assert summary.populations["homeRuns"] == pytest.approx([20, 10])
        assert summary.populations["avg"] == []
