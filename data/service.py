# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Stats service: cached, cancellable access to upstream datasets.

:class:`StatsService` is the one object that owns shared mutable state.
It holds one :class:`~data.cache.ExpiringCache` per logical dataset and is
constructed once at startup and handed to whoever needs data (the Flask
app, tests).  Nothing here is a module-level singleton, so every test can
build a fresh service with empty caches.

Every public method takes a :class:`~data.cancellation.CancelToken` and
returns an outcome instead of raising:

  * ``Ok(value)`` on success (served from cache or freshly fetched);
  * ``Cancelled(reason)`` when the token was cancelled before the result
    could be published -- in that case the cache is left untouched;
  * ``Failed(error)`` when the upstream API failed.

Composite loads (``load_*``) run their fetches in dependency order and stop
at the first step that does not succeed.

Usage::

    service = StatsService()
    slot = RequestSlot("player-card")
    outcome = service.load_player_card(660271, 2024, "hitting", slot.begin())
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable

from data import mlb_api
from data.cache import TTL_LONG, TTL_SHORT, ExpiringCache, make_key
from data.cancellation import (
    NEVER_CANCELLED,
    CancelToken,
    Failed,
    Ok,
    Outcome,
    cancelled_outcome,
)
from models import ReferenceFrame, StatGroup
from stats.career import CareerSummary, aggregate_career
from stats.columns import career_columns, leader_categories
from stats.enhance import enhance_stat_line
from stats.qualify import Population, qualified_population, unfiltered_population

logger = logging.getLogger(__name__)

# Recent-form windows, in games
RECENT_SPLIT_GAMES = (7, 15, 30)


# ---------------------------------------------------------------------------
# Composite load results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CardData:
    """A subject's stat line together with the population it is ranked against."""
    subject_id: int
    season: int
    group: StatGroup
    stat: dict[str, Any] | None
    population: Population


@dataclass(frozen=True)
class ComparisonData:
    season: int
    group: StatGroup
    left_id: int
    right_id: int
    left: dict[str, Any] | None
    right: dict[str, Any] | None
    population: Population


@dataclass(frozen=True)
class CareerData:
    player_id: int
    summary: CareerSummary


@dataclass(frozen=True)
class GameLogData:
    """A season's game log together with the recent-form split lines."""
    player_id: int
    season: int
    group: StatGroup
    games: list[dict[str, Any]]
    splits: dict[int, dict[str, Any] | None]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class StatsService:
    """Explicit context object holding one expiring cache per dataset.

    Args:
        ttl_long: TTL for season stat lines, populations, careers and rosters.
        ttl_short: TTL for standings, leaders, schedules, search results,
            game logs, postseason series, box scores and transactions.
        min_plate_appearances: Hitting qualification threshold override.
        min_innings_pitched: Pitching qualification threshold override.
    """

    def __init__(
        self,
        ttl_long: float = TTL_LONG,
        ttl_short: float = TTL_SHORT,
        min_plate_appearances: float | None = None,
        min_innings_pitched: float | None = None,
    ) -> None:
        self.player_stats = ExpiringCache(ttl_long, name="player-stats")
        self.player_info_cache = ExpiringCache(ttl_long, name="player-info")
        self.league_stats = ExpiringCache(ttl_long, name="league-stats")
        self.career_stats = ExpiringCache(ttl_long, name="career-stats")
        self.team_stats = ExpiringCache(ttl_long, name="team-stats")
        self.all_team_stats = ExpiringCache(ttl_long, name="all-team-stats")
        self.standings_cache = ExpiringCache(ttl_short, name="standings")
        self.leaders_cache = ExpiringCache(ttl_short, name="leaders")
        self.schedule_cache = ExpiringCache(ttl_short, name="schedule")
        self.search_cache = ExpiringCache(ttl_short, name="search")
        self.game_log_cache = ExpiringCache(ttl_short, name="game-log")
        self.recent_splits_cache = ExpiringCache(ttl_short, name="recent-splits")
        self.postseason_cache = ExpiringCache(ttl_short, name="postseason")
        self.box_score_cache = ExpiringCache(ttl_short, name="box-score")
        self.team_schedule_cache = ExpiringCache(ttl_short, name="team-schedule")
        self.roster_cache = ExpiringCache(ttl_long, name="roster")
        self.transactions_cache = ExpiringCache(ttl_short, name="transactions")
        self._minimums = {
            StatGroup.HITTING: min_plate_appearances,
            StatGroup.PITCHING: min_innings_pitched,
        }

    @property
    def caches(self) -> list[ExpiringCache]:
        return [
            self.player_stats, self.player_info_cache, self.league_stats,
            self.career_stats, self.team_stats, self.all_team_stats,
            self.standings_cache, self.leaders_cache, self.schedule_cache,
            self.search_cache, self.game_log_cache, self.recent_splits_cache,
            self.postseason_cache, self.box_score_cache, self.team_schedule_cache,
            self.roster_cache, self.transactions_cache,
        ]

    def clear_caches(self) -> dict[str, int]:
        """Empty every cache.  Returns the number of entries removed per cache."""
        removed = {cache.name: cache.clear() for cache in self.caches}
        logger.info("Cleared caches: %s", removed)
        return removed

    def cache_stats(self) -> list[dict[str, Any]]:
        return [cache.stats() for cache in self.caches]

    # -- core helper -------------------------------------------------------

    def _cached(
        self,
        cache: ExpiringCache,
        key: str,
        token: CancelToken,
        fetch: Callable[[], Any],
    ) -> Outcome:
        """Serve *key* from *cache*, or fetch, store and return it.

        A cancelled token short-circuits before the fetch, and a token
        cancelled while the fetch was in flight discards the result without
        storing it.
        """
        if token.cancelled:
            return cancelled_outcome(token)
        found, cached = cache.lookup(key)
        if found:
            logger.debug("Cache hit %s[%s]", cache.name, key)
            return Ok(cached)
        logger.debug("Cache miss %s[%s]", cache.name, key)

        try:
            value = fetch()
        except mlb_api.MLBApiError as exc:
            if token.cancelled:
                return cancelled_outcome(token)
            logger.error("Fetch for %s[%s] failed: %s", cache.name, key, exc)
            return Failed(exc)

        if token.cancelled:
            logger.warning("Discarding %s[%s] result: %s", cache.name, key, token.reason)
            return cancelled_outcome(token)
        cache.set(key, value)
        logger.debug("Cache store %s[%s]", cache.name, key)
        return Ok(value)

    # -- single datasets ---------------------------------------------------

    def player_season_stats(
        self,
        player_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """A player's season line, enhanced for hitting (``Ok(None)`` if absent)."""
        group = StatGroup(group)
        outcome = self._cached(
            self.player_stats, make_key(player_id, season, group.value), token,
            lambda: mlb_api.fetch_player_stats(player_id, season, group.value, token),
        )
        if isinstance(outcome, Ok):
            return Ok(enhance_stat_line(outcome.value, group))
        return outcome

    def player_info(
        self,
        player_id: int,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        return self._cached(
            self.player_info_cache, make_key(player_id), token,
            lambda: mlb_api.get_player_info(player_id, token),
        )

    def player_group(
        self,
        player_id: int,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Resolve whether a player is shown as a hitter or a pitcher."""
        outcome = self.player_info(player_id, token)
        if not isinstance(outcome, Ok):
            return outcome
        if mlb_api.is_pitcher_position(outcome.value):
            return Ok(StatGroup.PITCHING)
        return Ok(StatGroup.HITTING)

    def league_population(
        self,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
        minimum: float | None = None,
    ) -> Outcome:
        """The qualified league population for a season, hitting lines enhanced.

        The cache holds the raw, unfiltered lines so that different
        thresholds share one upstream fetch.
        """
        group = StatGroup(group)
        outcome = self._cached(
            self.league_stats, make_key(season, group.value), token,
            lambda: mlb_api.fetch_league_stats(season, group.value, token),
        )
        if not isinstance(outcome, Ok):
            return outcome
        if minimum is None:
            minimum = self._minimums[group]
        population = qualified_population(outcome.value, group, season, minimum)
        enhanced = tuple(enhance_stat_line(line, group) for line in population.lines)
        return Ok(dataclasses.replace(population, lines=enhanced))

    def team_population(
        self,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Every team's line for a season; teams are never qualification-filtered."""
        group = StatGroup(group)
        outcome = self._cached(
            self.all_team_stats, make_key(season, group.value), token,
            lambda: mlb_api.fetch_all_team_stats(season, group.value, token),
        )
        if not isinstance(outcome, Ok):
            return outcome
        lines = [enhance_stat_line(line, group) for line in outcome.value]
        return Ok(unfiltered_population(lines, group, season, ReferenceFrame.ALL))

    def team_season_stats(
        self,
        team_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        group = StatGroup(group)
        outcome = self._cached(
            self.team_stats, make_key(team_id, season, group.value), token,
            lambda: mlb_api.fetch_team_stats(team_id, season, group.value, token),
        )
        if isinstance(outcome, Ok):
            return Ok(enhance_stat_line(outcome.value, group))
        return outcome

    def career_splits(
        self,
        player_id: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        group = StatGroup(group)
        return self._cached(
            self.career_stats, make_key(player_id, group.value), token,
            lambda: mlb_api.fetch_career_stats(player_id, group.value, token),
        )

    def standings(self, season: int, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        return self._cached(
            self.standings_cache, make_key(season), token,
            lambda: mlb_api.fetch_standings(season, token),
        )

    def leaders(
        self,
        category: str,
        season: int,
        group: StatGroup | str,
        limit: int = 20,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        group = StatGroup(group)
        return self._cached(
            self.leaders_cache, make_key(category, season, group.value, limit), token,
            lambda: mlb_api.fetch_leaders(category, season, group.value, limit, token),
        )

    def schedule(self, date: str, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        return self._cached(
            self.schedule_cache, make_key(date), token,
            lambda: mlb_api.get_schedule_by_date(date, token=token),
        )

    def search(self, query: str, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        normalized = (query or "").strip().lower()
        if len(normalized) < 2:
            return Ok([])
        return self._cached(
            self.search_cache, make_key(normalized), token,
            lambda: mlb_api.search_players(normalized, token),
        )

    def game_log(
        self,
        player_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        group = StatGroup(group)
        return self._cached(
            self.game_log_cache, make_key(player_id, season, group.value), token,
            lambda: mlb_api.fetch_game_log(player_id, season, group.value, token),
        )

    def recent_split(
        self,
        player_id: int,
        season: int,
        group: StatGroup | str,
        games: int,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """A player's line over the last *games* games (``Ok(None)`` if absent)."""
        group = StatGroup(group)
        return self._cached(
            self.recent_splits_cache, make_key(player_id, season, group.value, games), token,
            lambda: mlb_api.fetch_recent_splits(player_id, season, group.value, games, token),
        )

    def postseason(self, season: int, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        return self._cached(
            self.postseason_cache, make_key(season), token,
            lambda: mlb_api.fetch_postseason(season, token),
        )

    def box_score(self, game_pk: int, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        return self._cached(
            self.box_score_cache, make_key(game_pk), token,
            lambda: mlb_api.fetch_linescore(game_pk, token),
        )

    def team_schedule(
        self,
        team_id: int,
        season: int,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        return self._cached(
            self.team_schedule_cache, make_key(team_id, season), token,
            lambda: mlb_api.fetch_team_schedule(team_id, season, token),
        )

    def roster(
        self,
        team_id: int,
        season: int,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        return self._cached(
            self.roster_cache, make_key(team_id, season), token,
            lambda: mlb_api.fetch_roster(team_id, season, token),
        )

    def transactions(self, season: int, token: CancelToken = NEVER_CANCELLED) -> Outcome:
        """The season's full transaction feed; paging happens in the view."""
        return self._cached(
            self.transactions_cache, make_key(season), token,
            lambda: mlb_api.fetch_transactions(season, token),
        )

    # -- composite loads ---------------------------------------------------

    def load_player_card(
        self,
        player_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Load a player's season line, then the qualified league population."""
        group = StatGroup(group)
        stat = self.player_season_stats(player_id, season, group, token)
        if not isinstance(stat, Ok):
            return stat
        population = self.league_population(season, group, token)
        if not isinstance(population, Ok):
            return population
        return Ok(CardData(player_id, season, group, stat.value, population.value))

    def load_team_card(
        self,
        team_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Load a team's season line, then every team's line for the season."""
        group = StatGroup(group)
        stat = self.team_season_stats(team_id, season, group, token)
        if not isinstance(stat, Ok):
            return stat
        population = self.team_population(season, group, token)
        if not isinstance(population, Ok):
            return population
        return Ok(CardData(team_id, season, group, stat.value, population.value))

    def load_career(
        self,
        player_id: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        group = StatGroup(group)
        splits = self.career_splits(player_id, group, token)
        if not isinstance(splits, Ok):
            return splits
        summary = aggregate_career(splits.value, group, career_columns(group))
        return Ok(CareerData(player_id, summary))

    def load_comparison(
        self,
        left_id: int,
        right_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Load both players' lines, then the shared qualified population."""
        group = StatGroup(group)
        left = self.player_season_stats(left_id, season, group, token)
        if not isinstance(left, Ok):
            return left
        right = self.player_season_stats(right_id, season, group, token)
        if not isinstance(right, Ok):
            return right
        population = self.league_population(season, group, token)
        if not isinstance(population, Ok):
            return population
        return Ok(ComparisonData(
            season, group, left_id, right_id, left.value, right.value, population.value,
        ))

    def load_leaders(
        self,
        season: int,
        group: StatGroup | str,
        limit: int = 20,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Load every leader category for a group, in display order."""
        group = StatGroup(group)
        boards: dict[str, list[dict[str, Any]]] = {}
        for category in leader_categories(group):
            outcome = self.leaders(category.key, season, group, limit, token)
            if not isinstance(outcome, Ok):
                return outcome
            boards[category.key] = outcome.value
        return Ok(boards)

    def load_game_log(
        self,
        player_id: int,
        season: int,
        group: StatGroup | str,
        token: CancelToken = NEVER_CANCELLED,
    ) -> Outcome:
        """Load a player's game log, then the last 7/15/30 game splits in order."""
        group = StatGroup(group)
        games = self.game_log(player_id, season, group, token)
        if not isinstance(games, Ok):
            return games
        splits: dict[int, dict[str, Any] | None] = {}
        for window in RECENT_SPLIT_GAMES:
            outcome = self.recent_split(player_id, season, group, window, token)
            if not isinstance(outcome, Ok):
                return outcome
            splits[window] = outcome.value
        return Ok(GameLogData(player_id, season, group, games.value, splits))
