# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Client for the MLB Stats API (statsapi.mlb.com).

Provides functions to fetch player and team stat lines, league-wide stat
populations, year-by-year career splits, game logs, standings, league
leaders, schedules, postseason series, linescores, rosters, transactions
and player search results.  All functions return plain Python
dicts/lists parsed from the API's JSON responses and raise
:class:`MLBApiError` subclasses on failure.

Caching and cancellation live one level up, in ``data.service``; every
fetch here accepts an optional :class:`~data.cancellation.CancelToken` only
so that retries stop as soon as the caller loses interest.

Usage::

    from data.mlb_api import (
        fetch_player_stats,
        fetch_league_stats,
        fetch_career_stats,
        fetch_standings,
        lookup_team_id,
    )
"""

from __future__ import annotations

import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from config import get_base_url, get_max_retries, get_timeout
from data.cancellation import CancelToken

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BASE_URL = get_base_url()
DEFAULT_TIMEOUT = get_timeout()  # seconds
MAX_RETRIES = get_max_retries()
RETRY_BACKOFF_BASE = 1.0  # seconds; actual delay = base * 2^attempt

MLB_SPORT_ID = 1
AMERICAN_LEAGUE_ID = 103
NATIONAL_LEAGUE_ID = 104
LEAGUE_STATS_LIMIT = 500
SEARCH_LIMIT = 10

PITCHER_POSITIONS = frozenset(["P", "SP", "RP", "CL", "TWP"])

# MLB team ID lookup table (all 30 teams)
TEAM_IDS: dict[str, int] = {
    "angels": 108, "los angeles angels": 108, "laa": 108,
    "diamondbacks": 109, "arizona diamondbacks": 109, "az": 109, "ari": 109,
    "orioles": 110, "baltimore orioles": 110, "bal": 110,
    "red sox": 111, "boston red sox": 111, "bos": 111,
    "cubs": 112, "chicago cubs": 112, "chc": 112,
    "reds": 113, "cincinnati reds": 113, "cin": 113,
    "guardians": 114, "cleveland guardians": 114, "cle": 114,
    "rockies": 115, "colorado rockies": 115, "col": 115,
    "tigers": 116, "detroit tigers": 116, "det": 116,
    "astros": 117, "houston astros": 117, "hou": 117,
    "royals": 118, "kansas city royals": 118, "kc": 118,
    "dodgers": 119, "los angeles dodgers": 119, "lad": 119,
    "nationals": 120, "washington nationals": 120, "wsh": 120, "was": 120,
    "mets": 121, "new york mets": 121, "nym": 121,
    "athletics": 133, "oakland athletics": 133, "oak": 133, "ath": 133,
    "pirates": 134, "pittsburgh pirates": 134, "pit": 134,
    "padres": 135, "san diego padres": 135, "sd": 135,
    "mariners": 136, "seattle mariners": 136, "sea": 136,
    "giants": 137, "san francisco giants": 137, "sf": 137,
    "cardinals": 138, "st. louis cardinals": 138, "stl": 138,
    "rays": 139, "tampa bay rays": 139, "tb": 139,
    "rangers": 140, "texas rangers": 140, "tex": 140,
    "blue jays": 141, "toronto blue jays": 141, "tor": 141,
    "twins": 142, "minnesota twins": 142, "min": 142,
    "phillies": 143, "philadelphia phillies": 143, "phi": 143,
    "braves": 144, "atlanta braves": 144, "atl": 144,
    "white sox": 145, "chicago white sox": 145, "cws": 145, "chw": 145,
    "marlins": 146, "miami marlins": 146, "mia": 146,
    "yankees": 147, "new york yankees": 147, "nyy": 147,
    "brewers": 158, "milwaukee brewers": 158, "mil": 158,
}

# Reverse lookup: team_id -> canonical name
TEAM_NAMES: dict[int, str] = {
    108: "Los Angeles Angels",
    109: "Arizona Diamondbacks",
    110: "Baltimore Orioles",
    111: "Boston Red Sox",
    112: "Chicago Cubs",
    113: "Cincinnati Reds",
    114: "Cleveland Guardians",
    115: "Colorado Rockies",
    116: "Detroit Tigers",
    117: "Houston Astros",
    118: "Kansas City Royals",
    119: "Los Angeles Dodgers",
    120: "Washington Nationals",
    121: "New York Mets",
    133: "Oakland Athletics",
    134: "Pittsburgh Pirates",
    135: "San Diego Padres",
    136: "Seattle Mariners",
    137: "San Francisco Giants",
    138: "St. Louis Cardinals",
    139: "Tampa Bay Rays",
    140: "Texas Rangers",
    141: "Toronto Blue Jays",
    142: "Minnesota Twins",
    143: "Philadelphia Phillies",
    144: "Atlanta Braves",
    145: "Chicago White Sox",
    146: "Miami Marlins",
    147: "New York Yankees",
    158: "Milwaukee Brewers",
}

# team_id -> display abbreviation
TEAM_ABBREVIATIONS: dict[int, str] = {
    108: "LAA", 109: "ARI", 110: "BAL", 111: "BOS", 112: "CHC",
    113: "CIN", 114: "CLE", 115: "COL", 116: "DET", 117: "HOU",
    118: "KC", 119: "LAD", 120: "WSH", 121: "NYM", 133: "OAK",
    134: "PIT", 135: "SD", 136: "SEA", 137: "SF", 138: "STL",
    139: "TB", 140: "TEX", 141: "TOR", 142: "MIN", 143: "PHI",
    144: "ATL", 145: "CWS", 146: "MIA", 147: "NYY", 158: "MIL",
}
UNKNOWN_TEAM = "???"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MLBApiError(Exception):
    """Base exception for MLB Stats API errors."""

    def __init__(self, message: str, status_code: int | None = None,
                 url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MLBApiNotFoundError(MLBApiError):
    """Raised when a resource is not found (404)."""


class MLBApiConnectionError(MLBApiError):
    """Raised when a connection to the API cannot be established."""


class MLBApiTimeoutError(MLBApiError):
    """Raised when a request to the API times out."""


# ---------------------------------------------------------------------------
# Low-level HTTP helpers
# ---------------------------------------------------------------------------

def _fetch_json(url: str, timeout: int = DEFAULT_TIMEOUT,
                max_retries: int = MAX_RETRIES,
                token: CancelToken | None = None) -> dict[str, Any]:
    """Fetch JSON from *url* with retry logic for transient failures.

    Retries on connection errors and 5xx responses using exponential
    backoff.  Raises :class:`MLBApiError` subclasses for non-retryable
    failures.  No further attempt is made once *token* is cancelled.

    Args:
        url: Full URL to fetch.
        timeout: Request timeout in seconds.
        max_retries: Maximum retry attempts for transient errors.
        token: Optional cancellation token checked between attempts.

    Returns:
        Parsed JSON response as a dict.

    Raises:
        MLBApiNotFoundError: If the server returns 404.
        MLBApiTimeoutError: If all attempts time out.
        MLBApiConnectionError: If the server is unreachable after retries.
        MLBApiError: For other HTTP errors or an unparseable body.
    """
    last_error: Exception | None = None

    for attempt in range(max_retries):
        if token is not None and token.cancelled:
            break
        try:
            logger.info("GET %s", url)
            req = urllib.request.Request(url)
            req.add_header("Accept", "application/json")
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                data = resp.read()
            try:
                return json.loads(data)
            except ValueError as exc:
                raise MLBApiError(f"Invalid JSON from {url}", url=url) from exc

        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                raise MLBApiNotFoundError(
                    f"Resource not found: {url}",
                    status_code=404,
                    url=url,
                ) from exc
            if exc.code >= 500:
                # Server error -- retryable
                last_error = exc
                logger.warning("HTTP %d from %s (attempt %d/%d)",
                               exc.code, url, attempt + 1, max_retries)
                if attempt < max_retries - 1:
                    _backoff_sleep(attempt, token)
                continue
            # Other client errors -- not retryable
            raise MLBApiError(
                f"HTTP {exc.code} from {url}",
                status_code=exc.code,
                url=url,
            ) from exc

        except (TimeoutError, urllib.error.URLError) as exc:
            if isinstance(exc, TimeoutError) or isinstance(
                getattr(exc, "reason", None), TimeoutError
            ):
                last_error = MLBApiTimeoutError(
                    f"Request timed out: {url}", url=url
                )
            else:
                last_error = MLBApiConnectionError(
                    f"Connection failed: {exc}", url=url
                )
            logger.warning("%s (attempt %d/%d)", last_error, attempt + 1, max_retries)
            if attempt < max_retries - 1:
                _backoff_sleep(attempt, token)
            continue

        except OSError as exc:
            last_error = MLBApiConnectionError(
                f"Connection error: {exc}", url=url
            )
            if attempt < max_retries - 1:
                _backoff_sleep(attempt, token)
            continue

    if isinstance(last_error, (MLBApiTimeoutError, MLBApiConnectionError)):
        raise last_error
    if last_error is None:
        raise MLBApiConnectionError(f"Request cancelled before completion: {url}", url=url)
    raise MLBApiConnectionError(
        f"Failed after {max_retries} retries: {last_error}", url=url
    )


def _backoff_sleep(attempt: int, token: CancelToken | None = None) -> None:
    """Sleep with exponential backoff, waking early if *token* is cancelled."""
    delay = RETRY_BACKOFF_BASE * (2 ** attempt)
    if token is not None:
        token.wait(delay)
        return
    time.sleep(delay)


def _build_url(version: str, path: str,
               params: dict[str, Any] | None = None) -> str:
    """Build a full MLB Stats API URL.

    Args:
        version: API version (e.g. ``"v1"``).
        path: Resource path (e.g. ``"people/660271/stats"``).
        params: Optional query parameters; ``None`` values are dropped.

    Returns:
        The full URL string.
    """
    url = f"{BASE_URL}/{version}/{path}"
    if params:
        filtered = {k: v for k, v in params.items() if v is not None}
        if filtered:
            query = urllib.parse.urlencode(filtered, safe=",")
            url = f"{url}?{query}"
    return url


def _first_split_stat(data: dict[str, Any]) -> dict[str, Any] | None:
    stats = data.get("stats") or []
    if not stats:
        return None
    splits = stats[0].get("splits") or []
    if not splits:
        return None
    return splits[0].get("stat") or None


def _all_splits(data: dict[str, Any]) -> list[dict[str, Any]]:
    stats = data.get("stats") or []
    if not stats:
        return []
    return list(stats[0].get("splits") or [])


# ---------------------------------------------------------------------------
# Team lookup
# ---------------------------------------------------------------------------

def lookup_team_id(team: str | int) -> int:
    """Resolve a team name, abbreviation, or ID to an MLB team ID.

    Args:
        team: Team name (e.g. ``"Red Sox"``), abbreviation (``"BOS"``),
            or numeric team ID (``111``).

    Returns:
        The integer MLB team ID.

    Raises:
        ValueError: If the team cannot be resolved.
    """
    if isinstance(team, int):
        if team in TEAM_NAMES:
            return team
        raise ValueError(f"Unknown team ID: {team}")

    key = team.strip().lower()
    if key in TEAM_IDS:
        return TEAM_IDS[key]

    try:
        team_id = int(key)
        if team_id in TEAM_NAMES:
            return team_id
    except ValueError:
        pass

    raise ValueError(
        f"Unknown team: {team!r}. Use a team name (e.g. 'Red Sox'), "
        f"abbreviation (e.g. 'BOS'), or numeric team ID (e.g. 111)."
    )


def get_team_name(team_id: int) -> str:
    """Return the canonical team name for a team ID.

    Raises:
        ValueError: If the team ID is unknown.
    """
    if team_id in TEAM_NAMES:
        return TEAM_NAMES[team_id]
    raise ValueError(f"Unknown team ID: {team_id}")


def get_team_abbreviation(team_id: int | None) -> str:
    """Return the display abbreviation for a team ID, ``"???"`` if unknown."""
    return TEAM_ABBREVIATIONS.get(team_id, UNKNOWN_TEAM)


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

def search_players(query: str, token: CancelToken | None = None) -> list[dict[str, Any]]:
    """Search active MLB players by name.

    Queries shorter than two characters return an empty list without a
    request.  At most :data:`SEARCH_LIMIT` people are returned.
    """
    if not query or len(query.strip()) < 2:
        return []
    url = _build_url("v1", "people/search", {
        "names": query.strip(),
        "sportIds": MLB_SPORT_ID,
        "active": "true",
        "hydrate": "currentTeam,team",
    })
    data = _fetch_json(url, token=token)
    return list(data.get("people") or [])[:SEARCH_LIMIT]


def get_player_info(player_id: int, token: CancelToken | None = None) -> dict[str, Any]:
    """Fetch metadata for a single player.

    Returns a dict with keys such as ``id``, ``fullName``,
    ``primaryPosition`` (dict) and ``currentTeam``.

    Raises:
        MLBApiNotFoundError: If the player ID does not exist.
    """
    url = _build_url("v1", f"people/{player_id}", {"hydrate": "currentTeam"})
    data = _fetch_json(url, token=token)
    people = data.get("people", [])
    if not people:
        raise MLBApiNotFoundError(
            f"Player {player_id} not found",
            status_code=404,
        )
    return people[0]


def is_pitcher_position(player: dict[str, Any] | None) -> bool:
    """Return ``True`` if the player's primary position is a pitching role."""
    if not player:
        return False
    position = player.get("primaryPosition") or {}
    return position.get("abbreviation") in PITCHER_POSITIONS


# ---------------------------------------------------------------------------
# Stat lines
# ---------------------------------------------------------------------------

def fetch_player_stats(
    player_id: int,
    season: int,
    group: str,
    token: CancelToken | None = None,
) -> dict[str, Any] | None:
    """Fetch a player's raw season stat line for one group.

    Returns:
        The ``stat`` mapping of the first split, or ``None`` when the
        player has no line for that season/group.
    """
    url = _build_url("v1", f"people/{player_id}/stats", {
        "stats": "season",
        "season": season,
        "group": group,
    })
    return _first_split_stat(_fetch_json(url, token=token))


def fetch_league_stats(
    season: int,
    group: str,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch every player's raw regular-season line for a season and group.

    Lines are ordered by playing time (plate appearances or innings),
    descending, capped at :data:`LEAGUE_STATS_LIMIT`.  No qualification
    filter is applied here.
    """
    sort_stat = "inningsPitched" if group == "pitching" else "plateAppearances"
    url = _build_url("v1", "stats", {
        "stats": "season",
        "season": season,
        "group": group,
        "gameType": "R",
        "sportIds": MLB_SPORT_ID,
        "limit": LEAGUE_STATS_LIMIT,
        "sortStat": sort_stat,
        "order": "desc",
    })
    data = _fetch_json(url, token=token)
    return [split["stat"] for split in _all_splits(data) if split.get("stat")]


def fetch_career_stats(
    player_id: int,
    group: str,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch a player's year-by-year splits (all levels; filter downstream).

    Each split carries ``season``, ``stat``, ``team`` and ``sport``.
    """
    url = _build_url("v1", f"people/{player_id}/stats", {
        "stats": "yearByYear",
        "group": group,
    })
    return _all_splits(_fetch_json(url, token=token))


def fetch_team_stats(
    team_id: int,
    season: int,
    group: str,
    token: CancelToken | None = None,
) -> dict[str, Any] | None:
    """Fetch one team's raw regular-season stat line."""
    url = _build_url("v1", f"teams/{team_id}/stats", {
        "stats": "season",
        "season": season,
        "group": group,
        "gameType": "R",
    })
    return _first_split_stat(_fetch_json(url, token=token))


def fetch_all_team_stats(
    season: int,
    group: str,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch all MLB teams' raw regular-season stat lines."""
    url = _build_url("v1", "teams/stats", {
        "stats": "season",
        "season": season,
        "group": group,
        "gameType": "R",
        "sportIds": MLB_SPORT_ID,
    })
    data = _fetch_json(url, token=token)
    return [split["stat"] for split in _all_splits(data) if split.get("stat")]


# ---------------------------------------------------------------------------
# Standings, leaders, schedule
# ---------------------------------------------------------------------------

def fetch_standings(season: int, token: CancelToken | None = None) -> list[dict[str, Any]]:
    """Fetch regular-season standings for both leagues.

    Returns:
        A flat list of team records.  Each record gets a ``division`` entry
        copied from its division block when the API leaves it out.
    """
    url = _build_url("v1", "standings", {
        "leagueId": f"{AMERICAN_LEAGUE_ID},{NATIONAL_LEAGUE_ID}",
        "season": season,
        "standingsTypes": "regularSeason",
        "hydrate": "team,division",
    })
    data = _fetch_json(url, token=token)
    records: list[dict[str, Any]] = []
    for block in data.get("records", []):
        division = block.get("division") or {}
        for team_record in block.get("teamRecords", []):
            if "division" not in team_record and division:
                team_record = {**team_record, "division": division}
            records.append(team_record)
    return records


def fetch_leaders(
    category: str,
    season: int,
    group: str,
    limit: int = 20,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch the league leaders for one category.

    Returns:
        Leader dicts with ``rank``, ``value``, ``person`` and ``team``.
    """
    url = _build_url("v1", "stats/leaders", {
        "leaderCategories": category,
        "season": season,
        "statGroup": group,
        "limit": limit,
        "sportId": MLB_SPORT_ID,
    })
    data = _fetch_json(url, token=token)
    for block in data.get("leagueLeaders", []):
        if block.get("leaderCategory", category) == category:
            return list(block.get("leaders") or [])
    return []


def get_schedule_by_date(
    date: str,
    sport_id: int = MLB_SPORT_ID,
    team_id: int | None = None,
    hydrate: str | None = None,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch the game schedule for a given date.

    Args:
        date: Date string in ``YYYY-MM-DD`` format.
        sport_id: Sport ID (``1`` for MLB).
        team_id: Optional team ID to filter games.
        hydrate: Optional hydration string (e.g. ``"probablePitcher,linescore"``).
        token: Optional cancellation token.

    Returns:
        A flat list of game dicts from all matching dates. Each game
        dict contains ``gamePk``, ``gameDate``, ``status``, ``teams``
        (with ``away`` and ``home``), ``venue``, etc.
    """
    params: dict[str, Any] = {"sportId": sport_id, "date": date}
    if team_id is not None:
        params["teamId"] = team_id
    if hydrate:
        params["hydrate"] = hydrate

    url = _build_url("v1", "schedule", params)
    data = _fetch_json(url, token=token)

    games: list[dict[str, Any]] = []
    for date_entry in data.get("dates", []):
        games.extend(date_entry.get("games", []))
    return games


# ---------------------------------------------------------------------------
# Game logs
# ---------------------------------------------------------------------------

def fetch_game_log(
    player_id: int,
    season: int,
    group: str,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch a player's game-by-game splits for a season, oldest first.

    Each split carries ``date``, ``stat``, ``opponent``, ``isHome`` and
    ``game``.
    """
    url = _build_url("v1", f"people/{player_id}/stats", {
        "stats": "gameLog",
        "season": season,
        "group": group,
        "gameType": "R",
    })
    return _all_splits(_fetch_json(url, token=token))


def fetch_recent_splits(
    player_id: int,
    season: int,
    group: str,
    games: int,
    token: CancelToken | None = None,
) -> dict[str, Any] | None:
    """Fetch a player's aggregate line over their last *games* games."""
    url = _build_url("v1", f"people/{player_id}/stats", {
        "stats": "lastXGames",
        "season": season,
        "group": group,
        "limit": games,
        "gameType": "R",
    })
    return _first_split_stat(_fetch_json(url, token=token))


# ---------------------------------------------------------------------------
# Postseason, box scores, team schedules
# ---------------------------------------------------------------------------

def fetch_postseason(season: int, token: CancelToken | None = None) -> list[dict[str, Any]]:
    """Fetch every postseason series of a season.

    Returns:
        Series dicts, each with a ``series`` block (``id``, ``gameType``)
        and the ``games`` played so far.
    """
    url = _build_url("v1", "schedule/postseason/series", {
        "season": season,
        "sportId": MLB_SPORT_ID,
    })
    data = _fetch_json(url, token=token)
    return list(data.get("series") or [])


def fetch_linescore(game_pk: int, token: CancelToken | None = None) -> dict[str, Any]:
    """Fetch the inning-by-inning linescore for one game.

    Raises:
        MLBApiNotFoundError: If the game does not exist.
    """
    url = _build_url("v1", f"game/{game_pk}/linescore")
    return _fetch_json(url, token=token)


def fetch_team_schedule(
    team_id: int,
    season: int,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch a team's regular-season games, flattened across dates."""
    url = _build_url("v1", "schedule", {
        "sportId": MLB_SPORT_ID,
        "teamId": team_id,
        "season": season,
        "gameType": "R",
    })
    data = _fetch_json(url, token=token)
    games: list[dict[str, Any]] = []
    for date_entry in data.get("dates", []):
        games.extend(date_entry.get("games", []))
    return games


# ---------------------------------------------------------------------------
# Rosters and transactions
# ---------------------------------------------------------------------------

def fetch_roster(
    team_id: int,
    season: int,
    token: CancelToken | None = None,
) -> list[dict[str, Any]]:
    """Fetch a team's active roster with each player's season stats.

    Each entry has ``person`` (with nested ``stats``), ``jerseyNumber``
    and ``position``.
    """
    url = _build_url("v1", f"teams/{team_id}/roster", {
        "rosterType": "active",
        "season": season,
        "hydrate": f"person(stats(type=season,season={season}))",
    })
    data = _fetch_json(url, token=token)
    return list(data.get("roster") or [])


def fetch_transactions(season: int, token: CancelToken | None = None) -> list[dict[str, Any]]:
    """Fetch every MLB transaction of a calendar year, newest first."""
    url = _build_url("v1", "transactions", {
        "startDate": f"{season}-01-01",
        "endDate": f"{season}-12-31",
        "sportId": MLB_SPORT_ID,
    })
    data = _fetch_json(url, token=token)
    transactions = list(data.get("transactions") or [])
    transactions.sort(key=lambda t: t.get("date") or t.get("effectiveDate") or "", reverse=True)
    return transactions
