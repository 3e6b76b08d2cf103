# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for defensive numeric parsing, fixed-point formatting and innings math."""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from stats.parsing import (
    count_value,
    innings_to_float,
    innings_to_outs,
    js_round,
    number_or_zero,
    outs_to_innings,
    parse_number,
    stat_number,
    to_fixed,
)


class TestParseNumber:

    @pytest.mark.parametrize("raw, expected", [
        (".287", 0.287),
        ("  12 ", 12.0),
        (7, 7.0),
        (1.5, 1.5),
        ("-3", -3.0),
    ])
    def test_numeric_inputs(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "   ", "-.--", "abc", True, False, float("nan"),
                                     float("inf"), "Infinity", [], {}])
    def test_non_numeric_inputs(self, raw):
        assert parse_number(raw) is None

    def test_number_or_zero(self):
        assert number_or_zero(None) == 0.0
        assert number_or_zero(".300") == pytest.approx(0.3)

    def test_count_value_truncates(self):
        assert count_value("12") == 12
        assert count_value(12.9) == 12
        assert count_value("x") == 0


class TestToFixed:

    def test_rounds_half_up_on_exact_binary_value(self):
        assert to_fixed(0.125, 2) == "0.13"
        assert to_fixed(0.22, 3) == "0.220"

    def test_negative_zero_is_normalized(self):
        assert to_fixed(-0.0, 3) == "0.000"

    def test_pads_digits(self):
        assert to_fixed(3, 2) == "3.00"
        assert to_fixed(10.5, 1) == "10.5"

    def test_js_round(self):
        assert js_round(49.5) == 50
        assert js_round(50.4999) == 50
        assert js_round(-0.5) == 0


class TestInnings:

    def test_thirds_notation(self):
        assert innings_to_outs("180.1") == 541
        assert innings_to_outs("120.2") == 362
        assert innings_to_outs("7.0") == 21
        assert innings_to_outs(6) == 18
        assert innings_to_outs(33.2) == 101

    def test_malformed_fraction_is_rejected(self, caplog):
        with caplog.at_level("WARNING"):
            assert innings_to_outs("45.7") is None
        assert "Malformed innings" in caplog.text

    @pytest.mark.parametrize("raw", [None, "", "-3.1", "1.25", "abc", True])
    def test_other_bad_values(self, raw):
        assert innings_to_outs(raw) is None

    def test_innings_to_float(self):
        assert innings_to_float("180.1") == pytest.approx(180 + 1 / 3)
        assert innings_to_float("bad") is None

    def test_outs_to_innings(self):
        assert outs_to_innings(903) == "301.0"
        assert outs_to_innings(541) == "180.1"
        assert outs_to_innings(0) == "0.0"

    def test_stat_number_reads_innings_as_thirds(self):
        stat = {"inningsPitched": "50.2", "era": "3.10"}
        assert stat_number(stat, "inningsPitched") == pytest.approx(50 + 2 / 3)
        assert stat_number(stat, "era") == pytest.approx(3.10)
        assert stat_number(None, "era") is None
