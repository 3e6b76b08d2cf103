# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for environment-driven configuration."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import config


def test_defaults(monkeypatch):
    for name in (config.STATS_API_BASE_URL_ENV, config.CACHE_TTL_LONG_ENV,
                 config.MIN_PA_QUALIFIED_ENV, config.LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    assert config.get_base_url() == "https://statsapi.mlb.com/api"
    assert config.get_ttl_long() == 1800
    assert config.get_min_plate_appearances() == 200
    assert config.get_log_level() == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv(config.STATS_API_BASE_URL_ENV, "http://localhost:9000/api/")
    monkeypatch.setenv(config.MIN_IP_QUALIFIED_ENV, "40")
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
    assert config.get_base_url() == "http://localhost:9000/api"
    assert config.get_min_innings_pitched() == 40
    assert config.get_log_level() == "DEBUG"


def test_unparseable_number_falls_back(monkeypatch):
    monkeypatch.setenv(config.STATS_API_TIMEOUT_ENV, "soon")
    monkeypatch.setenv(config.STATS_API_MAX_RETRIES_ENV, "0")
    assert config.get_timeout() == 10
    assert config.get_max_retries() == 1
