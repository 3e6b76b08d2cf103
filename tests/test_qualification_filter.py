# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for the qualification filter and reference populations (stats/qualify.py)."""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import ReferenceFrame, StatGroup
from stats.qualify import (
    MIN_IP_QUALIFIED,
    MIN_PA_QUALIFIED,
    Population,
    filter_qualified,
    is_qualified,
    playing_time,
    qualified_population,
    unfiltered_population,
)


@pytest.fixture
def hitters():
    return [
        {"plateAppearances": 199, "avg": ".310"},
        {"plateAppearances": 200, "avg": ".250"},
        {"plateAppearances": "612", "avg": ".287"},
        {"avg": ".400"},
        None,
    ]


@pytest.fixture
def pitchers():
    return [
        {"inningsPitched": "49.2", "era": "1.50"},
        {"inningsPitched": "50.0", "era": "3.20"},
        {"inningsPitched": "180.1", "era": "2.90"},
        {"inningsPitched": "55.7", "era": "4.00"},
    ]


class TestThresholds:

    def test_defaults(self):
        assert MIN_PA_QUALIFIED == 200
        assert MIN_IP_QUALIFIED == 50

    def test_boundary_is_inclusive(self):
        assert not is_qualified({"plateAppearances": 199}, "hitting")
        assert is_qualified({"plateAppearances": 200}, "hitting")

    def test_innings_use_thirds(self):
        assert playing_time({"inningsPitched": "49.2"}, "pitching") == pytest.approx(49 + 2 / 3)
        assert not is_qualified({"inningsPitched": "49.2"}, "pitching")
        assert is_qualified({"inningsPitched": "50.0"}, "pitching")

    def test_malformed_innings_never_qualify(self):
        assert playing_time({"inningsPitched": "55.7"}, "pitching") == 0.0

    def test_explicit_minimum(self):
        assert is_qualified({"plateAppearances": 150}, "hitting", minimum=100)


class TestFilterQualified:

    def test_keeps_order_and_identity(self, hitters):
        kept = filter_qualified(hitters, StatGroup.HITTING)
        assert kept == [hitters[1], hitters[2]]
        assert kept[0] is hitters[1]

    def test_idempotent(self, hitters, pitchers):
        once = filter_qualified(hitters, "hitting")
        assert filter_qualified(once, "hitting") == once
        once = filter_qualified(pitchers, "pitching")
        assert filter_qualified(once, "pitching") == once

    def test_pitchers(self, pitchers):
        kept = filter_qualified(pitchers, "pitching")
        assert [p["era"] for p in kept] == ["3.20", "2.90"]


class TestPopulations:

    def test_qualified_population(self, hitters):
        population = qualified_population(hitters, "hitting", season=2024)
        assert isinstance(population, Population)
        assert population.frame is ReferenceFrame.QUALIFIED
        assert population.group is StatGroup.HITTING
        assert population.minimum == 200
        assert len(population) == 2
        assert population.values("avg") == pytest.approx([0.25, 0.287])

    def test_unfiltered_population_keeps_everyone(self, hitters):
        population = unfiltered_population(hitters, "hitting")
        assert population.frame is ReferenceFrame.ALL
        assert len(population) == 4

    def test_values_read_innings_as_thirds(self, pitchers):
        population = qualified_population(pitchers, "pitching")
        assert population.values("inningsPitched") == pytest.approx([50.0, 180 + 1 / 3])

    def test_population_is_immutable(self, hitters):
        population = qualified_population(hitters, "hitting")
        with pytest.raises(AttributeError):
            population.frame = ReferenceFrame.ALL
