# /// script
# requires-python = ">=3.12"
# dependencies = ["flask>=3.0", "pydantic>=2.0"]
# ///
"""JSON web API for the stats viewer.

Exposes player cards, team cards, career tables, game logs, head-to-head
comparisons, league leaders, standings, schedules, box scores, team
rosters, the postseason bracket, the transaction feed and player search,
all ranked and formatted by the stats engine.

Requests that carry an ``X-Request-Slot`` header take part in request
superseding: a newer request in the same slot cancels an older one still
in flight, and the older one answers ``409`` with status ``cancelled``.

Usage:
    uv run app.py --port 5050
"""

from __future__ import annotations

import argparse
import logging
import re
import threading
from collections import OrderedDict
from typing import Any, Callable

from flask import Flask, g, jsonify, request

from config import get_log_level
from data.cancellation import Cancelled, CancelToken, Failed, Ok, Outcome, RequestSlot
from data.mlb_api import get_team_name, lookup_team_id
from data.service import StatsService
from views.career import build_career_table
from views.compare import build_comparison
from views.game_log import build_game_log
from views.leaders import build_leader_boards
from views.player_card import build_stat_card
from views.postseason import build_bracket
from views.response import (
    INVALID_PARAMETER,
    cancelled_response,
    error_response,
    failed_response,
    success_response,
)
from views.roster import build_roster
from views.scoreboard import build_box_score, build_team_schedule
from views.standings import build_standings
from views.team_card import build_team_card
from views.transactions import build_transaction_page
from views.validation import (
    CardQuery,
    CareerQuery,
    CompareQuery,
    GameLogQuery,
    LeadersQuery,
    ScheduleQuery,
    SearchQuery,
    SeasonQuery,
    TeamCardQuery,
    TransactionsQuery,
    QueryValidationError,
    parse_query,
)

logger = logging.getLogger(__name__)

SLOT_HEADER = "X-Request-Slot"
SLOT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_.:-]{1,64}")
MAX_SLOTS = 1024


# ---------------------------------------------------------------------------
# Request slots
# ---------------------------------------------------------------------------

class SlotRegistry:
    """Named :class:`RequestSlot` instances for requests currently in flight.

    A slot exists only while one of its requests is running: it is dropped
    again by :meth:`release` once its latest request completes.  Slot names
    must match :data:`SLOT_NAME_PATTERN`, and at most *max_slots* slots are
    tracked; the least recently used one is forgotten beyond that.

    Args:
        max_slots: Upper bound on tracked slots.
    """

    def __init__(self, max_slots: int = MAX_SLOTS) -> None:
        self._slots: OrderedDict[str, RequestSlot] = OrderedDict()
        self._max_slots = max_slots
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._slots)

    def token_for(self, view: str, slot: str | None) -> CancelToken:
        """A token for this request; superseding applies only when *slot* is named.

        Raises:
            QueryValidationError: If *slot* is not a valid slot name.
        """
        if not slot:
            return CancelToken()
        if not SLOT_NAME_PATTERN.fullmatch(slot):
            raise QueryValidationError(
                f"Invalid {SLOT_HEADER} header: expected 1-64 letters, digits or '_.:-'",
                validation_errors=[{
                    "loc": SLOT_HEADER, "msg": "invalid slot name", "type": "value_error",
                }],
            )
        name = f"{view}:{slot}"
        with self._lock:
            request_slot = self._slots.get(name)
            if request_slot is None:
                request_slot = self._slots[name] = RequestSlot(name)
            self._slots.move_to_end(name)
            while len(self._slots) > self._max_slots:
                evicted, _ = self._slots.popitem(last=False)
                logger.warning("Request slot limit reached, forgetting %s", evicted)
            return request_slot.begin()

    def release(self, view: str, slot: str | None, token: CancelToken) -> None:
        """Mark the request holding *token* as done; drop its slot once idle."""
        if not slot:
            return
        name = f"{view}:{slot}"
        with self._lock:
            request_slot = self._slots.get(name)
            if request_slot is not None and request_slot.finish(token):
                del self._slots[name]


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(service: StatsService | None = None) -> Flask:
    """Build the Flask app around an explicit :class:`StatsService`."""
    app = Flask(__name__)
    app.json.sort_keys = False
    service = service or StatsService()
    slots = SlotRegistry()
    app.extensions["stats_service"] = service
    app.extensions["request_slots"] = slots

    def _token(view: str) -> CancelToken:
        slot = request.headers.get(SLOT_HEADER)
        token = slots.token_for(view, slot)
        g.request_slot = (view, slot, token)
        return token

    @app.teardown_request
    def _release_slot(exc: BaseException | None) -> None:
        held = g.pop("request_slot", None)
        if held is not None:
            slots.release(*held)

    def _respond(view: str, outcome: Outcome, build: Callable[[Any], Any]):
        if isinstance(outcome, Cancelled):
            logger.warning("%s cancelled: %s", view, outcome.reason)
            return jsonify(cancelled_response(view, outcome)), 409
        if isinstance(outcome, Failed):
            payload, status = failed_response(view, outcome)
            return jsonify(payload), status
        data = build(outcome.value)
        if hasattr(data, "model_dump"):
            data = data.model_dump(mode="json")
        return jsonify(success_response(view, data))

    def _invalid(view: str, message: str):
        return jsonify(error_response(view, INVALID_PARAMETER, message)), 400

    def _team_id(team: str) -> int:
        try:
            return lookup_team_id(team)
        except ValueError as exc:
            raise QueryValidationError(str(exc), validation_errors=[
                {"loc": "team", "msg": str(exc), "type": "value_error"},
            ]) from exc

    @app.errorhandler(QueryValidationError)
    def _handle_query_error(exc: QueryValidationError):
        view = request.endpoint or "unknown"
        return _invalid(view, str(exc))

    # -- players -----------------------------------------------------------

    @app.route("/api/players/search")
    def player_search():
        query = parse_query(SearchQuery, request.args)
        outcome = service.search(query.q, _token("player_search"))
        return _respond("player_search", outcome, lambda people: [
            {
                "id": person.get("id"),
                "name": person.get("fullName"),
                "position": (person.get("primaryPosition") or {}).get("abbreviation"),
                "team": (person.get("currentTeam") or {}).get("name"),
            }
            for person in people
        ])

    @app.route("/api/players/<int:player_id>/card")
    def player_card(player_id: int):
        query = parse_query(CardQuery, request.args)
        token = _token("player_card")
        group = query.group
        if group is None:
            detected = service.player_group(player_id, token)
            if not isinstance(detected, Ok):
                return _respond("player_card", detected, lambda value: value)
            group = detected.value
        outcome = service.load_player_card(player_id, query.season, group, token)
        return _respond("player_card", outcome, lambda card: build_stat_card(
            card.subject_id, card.stat, card.population,
        ))

    @app.route("/api/players/<int:player_id>/career")
    def player_career(player_id: int):
        query = parse_query(CareerQuery, request.args)
        token = _token("player_career")
        group = query.group
        if group is None:
            detected = service.player_group(player_id, token)
            if not isinstance(detected, Ok):
                return _respond("player_career", detected, lambda value: value)
            group = detected.value
        outcome = service.load_career(player_id, group, token)
        return _respond("player_career", outcome, lambda career: build_career_table(
            career.summary, career.player_id,
        ))

    @app.route("/api/players/<int:player_id>/gamelog")
    def player_game_log(player_id: int):
        query = parse_query(GameLogQuery, request.args)
        token = _token("player_game_log")
        group = query.group
        if group is None:
            detected = service.player_group(player_id, token)
            if not isinstance(detected, Ok):
                return _respond("player_game_log", detected, lambda value: value)
            group = detected.value
        outcome = service.load_game_log(player_id, query.season, group, token)
        return _respond("player_game_log", outcome, lambda log: build_game_log(
            log.player_id, log.season, log.group, log.games, log.splits,
        ))

    @app.route("/api/compare")
    def compare():
        query = parse_query(CompareQuery, request.args)
        outcome = service.load_comparison(
            query.left, query.right, query.season, query.group, _token("compare"),
        )
        return _respond("compare", outcome, lambda data: {
            "left_id": data.left_id,
            "right_id": data.right_id,
            **build_comparison(data.left, data.right, data.population).model_dump(mode="json"),
        })

    # -- teams -------------------------------------------------------------

    @app.route("/api/teams/<team>/card")
    def team_card(team: str):
        query = parse_query(TeamCardQuery, request.args)
        team_id = _team_id(team)
        outcome = service.load_team_card(team_id, query.season, query.group, _token("team_card"))
        return _respond("team_card", outcome, lambda card: {
            "team": get_team_name(team_id),
            **build_team_card(card.subject_id, card.stat, card.population).model_dump(mode="json"),
        })

    @app.route("/api/teams/<team>/schedule")
    def team_schedule(team: str):
        query = parse_query(SeasonQuery, request.args)
        team_id = _team_id(team)
        outcome = service.team_schedule(team_id, query.season, _token("team_schedule"))
        return _respond("team_schedule", outcome, lambda games: {
            "team": get_team_name(team_id),
            "season": query.season,
            "games": [game.model_dump(mode="json") for game in build_team_schedule(games, team_id)],
        })

    @app.route("/api/teams/<team>/roster")
    def team_roster(team: str):
        query = parse_query(SeasonQuery, request.args)
        team_id = _team_id(team)
        outcome = service.roster(team_id, query.season, _token("team_roster"))
        return _respond("team_roster", outcome, lambda roster: {
            "team": get_team_name(team_id),
            "season": query.season,
            "groups": [group.model_dump(mode="json") for group in build_roster(roster)],
        })

    # -- league ------------------------------------------------------------

    @app.route("/api/leaders")
    def leaders():
        query = parse_query(LeadersQuery, request.args)
        outcome = service.load_leaders(query.season, query.group, query.limit, _token("leaders"))
        return _respond("leaders", outcome, lambda boards: {
            "season": query.season,
            "group": query.group.value,
            "categories": [
                board.model_dump(mode="json")
                for board in build_leader_boards(boards, query.group)
            ],
        })

    @app.route("/api/standings")
    def standings():
        query = parse_query(SeasonQuery, request.args)
        outcome = service.standings(query.season, _token("standings"))
        return _respond("standings", outcome, lambda records: {
            "season": query.season,
            "divisions": [d.model_dump(mode="json") for d in build_standings(records)],
        })

    @app.route("/api/schedule")
    def schedule():
        query = parse_query(ScheduleQuery, request.args)
        date = query.date.isoformat()
        outcome = service.schedule(date, _token("schedule"))
        return _respond("schedule", outcome, lambda games: {"date": date, "games": games})

    @app.route("/api/games/<int:game_pk>/boxscore")
    def box_score(game_pk: int):
        outcome = service.box_score(game_pk, _token("box_score"))
        return _respond("box_score", outcome, lambda linescore: build_box_score(game_pk, linescore))

    @app.route("/api/postseason")
    def postseason():
        query = parse_query(SeasonQuery, request.args)
        outcome = service.postseason(query.season, _token("postseason"))
        return _respond("postseason", outcome, lambda series: {
            "season": query.season,
            "rounds": [r.model_dump(mode="json") for r in build_bracket(series)],
        })

    @app.route("/api/transactions")
    def transactions():
        query = parse_query(TransactionsQuery, request.args)
        outcome = service.transactions(query.season, _token("transactions"))
        return _respond("transactions", outcome, lambda feed: build_transaction_page(
            feed, query.season, query.type, query.offset, query.limit,
        ))

    # -- maintenance -------------------------------------------------------

    @app.route("/api/cache/clear", methods=["POST"])
    def clear_cache():
        removed = service.clear_caches()
        return jsonify(success_response("clear_cache", {"removed": removed}))

    return app


app = create_app()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the stats viewer JSON API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=5050, help="Port to listen on")
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=args.debug, host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
