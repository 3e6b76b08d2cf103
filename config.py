"""Centralized configuration for environment variables."""

import os

STATS_API_BASE_URL_ENV = "STATS_API_BASE_URL"
STATS_API_TIMEOUT_ENV = "STATS_API_TIMEOUT"
STATS_API_MAX_RETRIES_ENV = "STATS_API_MAX_RETRIES"
CACHE_TTL_LONG_ENV = "STATS_CACHE_TTL_LONG"
CACHE_TTL_SHORT_ENV = "STATS_CACHE_TTL_SHORT"
MIN_PA_QUALIFIED_ENV = "STATS_MIN_PA_QUALIFIED"
MIN_IP_QUALIFIED_ENV = "STATS_MIN_IP_QUALIFIED"
LOG_LEVEL_ENV = "STATS_LOG_LEVEL"

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api"
DEFAULT_TIMEOUT = 10  # seconds
DEFAULT_MAX_RETRIES = 3
DEFAULT_TTL_LONG = 30 * 60  # completed-season aggregates, rosters, careers
DEFAULT_TTL_SHORT = 5 * 60  # schedules, standings, live data
DEFAULT_MIN_PA = 200
DEFAULT_MIN_IP = 50
DEFAULT_LOG_LEVEL = "INFO"


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to *default*."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_base_url() -> str:
    """Return the upstream statistics API base URL (no trailing slash)."""
    return os.environ.get(STATS_API_BASE_URL_ENV, DEFAULT_BASE_URL).rstrip("/")


def get_timeout() -> int:
    return _int_env(STATS_API_TIMEOUT_ENV, DEFAULT_TIMEOUT)


def get_max_retries() -> int:
    return max(1, _int_env(STATS_API_MAX_RETRIES_ENV, DEFAULT_MAX_RETRIES))


def get_ttl_long() -> int:
    """Return the long cache TTL in seconds."""
    return _int_env(CACHE_TTL_LONG_ENV, DEFAULT_TTL_LONG)


def get_ttl_short() -> int:
    """Return the short cache TTL in seconds."""
    return _int_env(CACHE_TTL_SHORT_ENV, DEFAULT_TTL_SHORT)


def get_min_plate_appearances() -> int:
    """Return the plate-appearance minimum for a qualified hitter."""
    return _int_env(MIN_PA_QUALIFIED_ENV, DEFAULT_MIN_PA)


def get_min_innings_pitched() -> int:
    """Return the innings-pitched minimum for a qualified pitcher."""
    return _int_env(MIN_IP_QUALIFIED_ENV, DEFAULT_MIN_IP)


def get_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
