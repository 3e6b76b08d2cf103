# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for radar profiles and sparkline series (stats/profile.py)."""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from stats.profile import RADAR_FLOOR, radar_profile, sparkline_series


class TestRadarProfile:

    def test_hitter_axes(self):
        axes = radar_profile({"avg": ".300", "homeRuns": 40, "slg": ".600",
                              "plateAppearances": 600, "strikeOuts": 90}, "hitting")
        assert [a.label for a in axes] == ["Power", "Contact", "Speed", "Discipline", "Production"]
        power = axes[0].value
        assert power == 100.0

    def test_pitcher_axes(self):
        axes = radar_profile({"era": "2.00", "walksPer9Inn": "1.5", "inningsPitched": "100.0"},
                             "pitching")
        values = {a.label: a.value for a in axes}
        assert values["Prevention"] == 100.0
        assert values["Control"] == 100.0
        assert values["Durability"] == 50.0
        assert values["Strikeouts"] == RADAR_FLOOR

    def test_values_are_clamped_and_floored(self):
        axes = radar_profile({"era": "9.00", "strikeoutsPer9Inn": "20"}, "pitching")
        for axis in axes:
            assert RADAR_FLOOR <= axis.value <= 100.0

    def test_empty_line(self):
        assert radar_profile(None, "hitting") == []
        assert radar_profile({}, "hitting") == []


class TestSparklines:

    def test_series_per_key_stat(self):
        seasons = [
            ("2022", {"avg": ".250", "ops": ".700", "homeRuns": 20}),
            ("2023", {"avg": ".300", "ops": "-.--", "homeRuns": 35}),
        ]
        series = {s.key: s for s in sparkline_series(seasons, "hitting")}
        assert set(series) == {"avg", "ops", "homeRuns"}

        avg = series["avg"]
        assert avg.points == [("2022", 0.25), ("2023", 0.3)]
        assert avg.minimum == pytest.approx(0.25)
        assert avg.maximum == pytest.approx(0.3)
        assert avg.latest == ".300"

        assert len(series["ops"].points) == 1
        assert series["homeRuns"].latest == "35"

    def test_no_seasons(self):
        series = sparkline_series([], "pitching")
        assert [s.key for s in series] == ["era", "whip", "strikeOuts"]
        assert all(s.latest is None and s.points == [] for s in series)
