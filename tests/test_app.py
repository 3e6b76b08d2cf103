# /// script
# requires-python = ">=3.12"
# dependencies = ["flask>=3.0", "pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the Flask JSON API.

Validates:
  1. Every endpoint answers with the ok/error envelope
  2. Invalid parameters are rejected with 400 before any upstream call
  3. Upstream failures map to 404/502, cancelled loads to 409
  4. Group detection from the player's primary position
  5. Game logs, box scores, schedules, rosters, the bracket and transactions
  6. Cache clearing
"""

import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from app import SLOT_HEADER, SlotRegistry, create_app
from data.mlb_api import MLBApiConnectionError, MLBApiNotFoundError
from data.service import StatsService


LEAGUE = [
    {"plateAppearances": 600, "avg": ".250", "homeRuns": 10},
    {"plateAppearances": 600, "avg": ".280", "homeRuns": 25},
    {"plateAppearances": 600, "avg": ".310", "homeRuns": 40},
]


@pytest.fixture
def service():
    return StatsService()


@pytest.fixture
def client(service):
    app = create_app(service)
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestPlayerCard:

    def test_card_with_explicit_group(self, client):
        with patch("data.mlb_api.fetch_player_stats", return_value={"avg": ".310", "homeRuns": 40}), \
             patch("data.mlb_api.fetch_league_stats", return_value=LEAGUE):
            resp = client.get("/api/players/592450/card?season=2024&group=hitting")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "ok"
        assert body["view"] == "player_card"
        card = body["data"]
        assert card["reference"] == "qualified"
        assert card["population_size"] == 3
        avg = card["categories"][0]["stats"][0]
        assert avg["key"] == "avg"
        assert avg["display"] == ".310"
        assert avg["percentile"] == 83

    def test_group_detected_from_position(self, client):
        with patch("data.mlb_api.get_player_info",
                   return_value={"primaryPosition": {"abbreviation": "SP"}}), \
             patch("data.mlb_api.fetch_player_stats", return_value={"era": "2.50"}) as mock_stats, \
             patch("data.mlb_api.fetch_league_stats", return_value=[]):
            resp = client.get("/api/players/1/card?season=2024")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["group"] == "pitching"
        assert mock_stats.call_args[0][2] == "pitching"

    def test_invalid_group(self, client):
        with patch("data.mlb_api.fetch_player_stats") as mock_stats:
            resp = client.get("/api/players/1/card?group=fielding")
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["status"] == "error"
        assert body["error_code"] == "INVALID_PARAMETER"
        assert "group" in body["message"]
        mock_stats.assert_not_called()

    def test_invalid_season(self, client):
        resp = client.get("/api/players/1/card?season=1700&group=hitting")
        assert resp.status_code == 400

    def test_upstream_failure_is_502(self, client):
        with patch("data.mlb_api.fetch_player_stats", side_effect=MLBApiConnectionError("down")):
            resp = client.get("/api/players/1/card?season=2024&group=hitting")
        assert resp.status_code == 502
        assert resp.get_json()["error_code"] == "UPSTREAM_ERROR"

    def test_unknown_player_is_404(self, client):
        with patch("data.mlb_api.get_player_info", side_effect=MLBApiNotFoundError("Player 9 not found")):
            resp = client.get("/api/players/9/card")
        assert resp.status_code == 404


class TestSuperseding:

    def test_superseded_request_answers_409(self, client):
        def newer_request_arrives(*args, **kwargs):
            # Starting a second request in the same slot cancels this one
            app_slots = client.application.extensions["request_slots"]
            app_slots.token_for("player_card", "tab-1")
            return {"avg": ".300"}

        with patch("data.mlb_api.fetch_player_stats", side_effect=newer_request_arrives), \
             patch("data.mlb_api.fetch_league_stats", return_value=LEAGUE):
            resp = client.get("/api/players/1/card?season=2024&group=hitting",
                              headers={SLOT_HEADER: "tab-1"})
        assert resp.status_code == 409
        body = resp.get_json()
        assert body["status"] == "cancelled"
        assert "superseded" in body["message"]

    def test_slot_dropped_once_request_completes(self, service):
        app = create_app(service)
        with patch("data.mlb_api.fetch_standings", return_value=[]):
            for n in range(5):
                resp = app.test_client().get("/api/standings?season=2024",
                                             headers={SLOT_HEADER: f"tab-{n}"})
                assert resp.status_code == 200
        assert len(app.extensions["request_slots"]) == 0

    def test_invalid_slot_header(self, client):
        with patch("data.mlb_api.fetch_standings") as mock_fetch:
            resp = client.get("/api/standings?season=2024", headers={SLOT_HEADER: "x" * 65})
        assert resp.status_code == 400
        assert resp.get_json()["error_code"] == "INVALID_PARAMETER"
        mock_fetch.assert_not_called()

    def test_requests_without_slot_are_independent(self, client):
        with patch("data.mlb_api.fetch_player_stats", return_value={"avg": ".300"}), \
             patch("data.mlb_api.fetch_league_stats", return_value=LEAGUE):
            first = client.get("/api/players/1/card?season=2024&group=hitting")
            second = client.get("/api/players/1/card?season=2024&group=hitting")
        assert first.status_code == second.status_code == 200


class TestCareer:

    def test_career_table(self, client):
        splits = [
            {"season": "2022", "team": {"abbreviation": "NYY"}, "sport": {"id": 1},
             "stat": {"hits": 100, "atBats": 400, "plateAppearances": 450}},
            {"season": "2023", "team": {"abbreviation": "NYY"}, "sport": {"id": 1},
             "stat": {"hits": 150, "atBats": 500, "plateAppearances": 560}},
        ]
        with patch("data.mlb_api.fetch_career_stats", return_value=splits):
            resp = client.get("/api/players/592450/career?group=hitting")
        assert resp.status_code == 200
        table = resp.get_json()["data"]
        assert [r["season"] for r in table["seasons"]] == ["2022", "2023"]
        totals = {c["key"]: c["display"] for c in table["totals"]}
        assert totals["avg"] == ".278"


class TestCompare:

    def test_compare(self, client):
        lines = {1: {"avg": ".310"}, 2: {"avg": ".250"}}
        with patch("data.mlb_api.fetch_player_stats", side_effect=lambda pid, *a, **k: lines[pid]), \
             patch("data.mlb_api.fetch_league_stats", return_value=LEAGUE):
            resp = client.get("/api/compare?left=1&right=2&season=2024")
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["left_id"] == 1
        avg = next(r for r in data["rows"] if r["key"] == "avg")
        assert avg["winner"] == "left"

    def test_compare_requires_both_players(self, client):
        resp = client.get("/api/compare?left=1")
        assert resp.status_code == 400
        assert "right" in resp.get_json()["message"]


class TestTeams:

    def test_team_card_by_abbreviation(self, client):
        with patch("data.mlb_api.fetch_team_stats", return_value={"era": "3.50"}) as mock_team, \
             patch("data.mlb_api.fetch_all_team_stats",
                   return_value=[{"era": "3.50"}, {"era": "4.10"}]):
            resp = client.get("/api/teams/NYY/card?season=2024&group=pitching")
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["team"] == "New York Yankees"
        assert data["reference"] == "all"
        assert mock_team.call_args[0][0] == 147

    def test_unknown_team(self, client):
        resp = client.get("/api/teams/Expos/card")
        assert resp.status_code == 400
        assert resp.get_json()["error_code"] == "INVALID_PARAMETER"


class TestLeagueViews:

    def test_leaders(self, client):
        with patch("data.mlb_api.fetch_leaders", return_value=[
            {"rank": 1, "value": "2.10", "person": {"id": 1, "fullName": "Ace"}},
        ]):
            resp = client.get("/api/leaders?season=2024&group=pitching&limit=5")
        assert resp.status_code == 200
        categories = resp.get_json()["data"]["categories"]
        assert categories[0]["label"] == "ERA"
        assert categories[0]["leaders"][0]["value"] == "2.10"

    def test_standings(self, client):
        records = [{"team": {"id": 147, "name": "New York Yankees"}, "division": {"id": 201},
                    "divisionRank": "1", "wins": 94, "losses": 68}]
        with patch("data.mlb_api.fetch_standings", return_value=records):
            resp = client.get("/api/standings?season=2024")
        divisions = resp.get_json()["data"]["divisions"]
        assert divisions[0]["name"] == "AL East"

    def test_schedule(self, client):
        with patch("data.mlb_api.get_schedule_by_date", return_value=[{"gamePk": 1}]) as mock_schedule:
            resp = client.get("/api/schedule?date=2024-07-04")
        assert resp.get_json()["data"] == {"date": "2024-07-04", "games": [{"gamePk": 1}]}
        assert mock_schedule.call_args[0][0] == "2024-07-04"

    def test_schedule_bad_date(self, client):
        resp = client.get("/api/schedule?date=July")
        assert resp.status_code == 400

    def test_search(self, client):
        people = [{"id": 592450, "fullName": "Aaron Judge",
                   "primaryPosition": {"abbreviation": "RF"},
                   "currentTeam": {"name": "New York Yankees"}}]
        with patch("data.mlb_api.search_players", return_value=people):
            resp = client.get("/api/players/search?q=judge")
        assert resp.get_json()["data"] == [
            {"id": 592450, "name": "Aaron Judge", "position": "RF", "team": "New York Yankees"},
        ]


class TestGameFeeds:

    def test_game_log(self, client):
        games = [{"date": "2024-04-01", "opponent": {"id": 111}, "stat": {"hits": 2}}]
        with patch("data.mlb_api.fetch_game_log", return_value=games), \
             patch("data.mlb_api.fetch_recent_splits", return_value={"avg": ".300"}) as mock_recent:
            resp = client.get("/api/players/592450/gamelog?season=2024&group=hitting")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["view"] == "player_game_log"
        data = body["data"]
        assert data["games"][0]["opponent"] == "BOS"
        assert [s["label"] for s in data["splits"]] == ["Last 7", "Last 15", "Last 30"]
        assert mock_recent.call_count == 3

    def test_game_log_detects_group(self, client):
        with patch("data.mlb_api.get_player_info",
                   return_value={"primaryPosition": {"abbreviation": "RP"}}), \
             patch("data.mlb_api.fetch_game_log", return_value=[]) as mock_log, \
             patch("data.mlb_api.fetch_recent_splits", return_value=None):
            resp = client.get("/api/players/1/gamelog?season=2024")
        assert resp.get_json()["data"]["group"] == "pitching"
        assert mock_log.call_args[0][2] == "pitching"

    def test_postseason(self, client):
        series = [{"series": {"id": "W_1", "gameType": "W"}, "games": []}]
        with patch("data.mlb_api.fetch_postseason", return_value=series):
            resp = client.get("/api/postseason?season=2024")
        rounds = resp.get_json()["data"]["rounds"]
        assert rounds[0]["label"] == "World Series"

    def test_box_score(self, client):
        linescore = {"innings": [{"num": 1, "away": {"runs": 1}, "home": {"runs": 0}}],
                     "teams": {"away": {"runs": 1}, "home": {"runs": 0}}}
        with patch("data.mlb_api.fetch_linescore", return_value=linescore):
            resp = client.get("/api/games/745000/boxscore")
        data = resp.get_json()["data"]
        assert data["game_pk"] == 745000
        assert data["away"]["innings"] == [1]

    def test_unknown_game_is_404(self, client):
        with patch("data.mlb_api.fetch_linescore", side_effect=MLBApiNotFoundError("no game")):
            resp = client.get("/api/games/1/boxscore")
        assert resp.status_code == 404

    def test_team_schedule(self, client):
        games = [{"gamePk": 1, "officialDate": "2024-05-03",
                  "status": {"abstractGameCode": "F"},
                  "teams": {"home": {"team": {"id": 147}, "score": 5},
                            "away": {"team": {"id": 111}, "score": 3}}}]
        with patch("data.mlb_api.fetch_team_schedule", return_value=games) as mock_schedule:
            resp = client.get("/api/teams/yankees/schedule?season=2024")
        data = resp.get_json()["data"]
        assert data["team"] == "New York Yankees"
        assert data["games"][0]["result"] == "W"
        assert mock_schedule.call_args[0][:2] == (147, 2024)

    def test_roster(self, client):
        roster = [{"person": {"id": 1, "fullName": "Catcher"}, "position": {"abbreviation": "C"},
                   "jerseyNumber": "24"}]
        with patch("data.mlb_api.fetch_roster", return_value=roster):
            resp = client.get("/api/teams/NYY/roster?season=2024")
        groups = resp.get_json()["data"]["groups"]
        assert groups[0]["key"] == "catchers"

    def test_roster_unknown_team(self, client):
        with patch("data.mlb_api.fetch_roster") as mock_roster:
            resp = client.get("/api/teams/Expos/roster")
        assert resp.status_code == 400
        mock_roster.assert_not_called()

    def test_transactions_page(self, client):
        feed = [{"id": i, "date": "2024-07-30", "typeCode": "TR"} for i in range(3)]
        with patch("data.mlb_api.fetch_transactions", return_value=feed):
            resp = client.get("/api/transactions?season=2024&type=trades&limit=2")
        data = resp.get_json()["data"]
        assert data["type"] == "trades"
        assert data["has_more"] is True
        assert len(data["days"][0]["transactions"]) == 2

    @pytest.mark.parametrize("query", ["type=injuries", "offset=-1", "limit=0", "limit=101"])
    def test_transactions_invalid_parameters(self, client, query):
        with patch("data.mlb_api.fetch_transactions") as mock_feed:
            resp = client.get(f"/api/transactions?season=2024&{query}")
        assert resp.status_code == 400
        mock_feed.assert_not_called()


class TestCacheClear:

    def test_clear(self, client, service):
        with patch("data.mlb_api.fetch_standings", return_value=[]):
            client.get("/api/standings?season=2024")
        resp = client.post("/api/cache/clear")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["removed"]["standings"] == 1
        assert len(service.standings_cache) == 0


class TestSlotRegistry:

    def test_size_is_capped(self):
        slots = SlotRegistry(max_slots=2)
        first = slots.token_for("career", "a")
        slots.token_for("career", "b")
        slots.token_for("career", "c")
        assert len(slots) == 2
        # the forgotten slot no longer supersedes anything
        assert not first.cancelled

    def test_slot_kept_while_newer_request_in_flight(self):
        slots = SlotRegistry()
        older = slots.token_for("compare", "tab")
        newer = slots.token_for("compare", "tab")
        slots.release("compare", "tab", older)
        assert len(slots) == 1
        slots.release("compare", "tab", newer)
        assert len(slots) == 0

    def test_unnamed_requests_are_not_tracked(self):
        slots = SlotRegistry()
        token = slots.token_for("leaders", None)
        slots.release("leaders", None, token)
        assert len(slots) == 0
