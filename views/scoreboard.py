# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Box score linescores and team schedules."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from data.mlb_api import get_team_abbreviation
from models import BoxScore, LinescoreLine, ScheduleGame
from stats.parsing import parse_number
from views.game_log import display_date


def _runs(value: Any) -> Optional[int]:
    number = parse_number(value)
    return None if number is None else int(number)


def _line(linescore: Mapping[str, Any], side: str) -> LinescoreLine:
    totals = (linescore.get("teams") or {}).get(side) or {}
    return LinescoreLine(
        innings=[_runs((inning.get(side) or {}).get("runs"))
                 for inning in linescore.get("innings") or []],
        runs=_runs(totals.get("runs")),
        hits=_runs(totals.get("hits")),
        errors=_runs(totals.get("errors")),
    )


def build_box_score(game_pk: int, linescore: Mapping[str, Any]) -> BoxScore:
    """Inning-by-inning runs plus R/H/E for both sides.

    An inning not yet played by one side (e.g. the home half of the
    ninth) shows ``None``.
    """
    innings = linescore.get("innings") or []
    return BoxScore(
        game_pk=game_pk,
        innings=[inning.get("num", i + 1) for i, inning in enumerate(innings)],
        away=_line(linescore, "away"),
        home=_line(linescore, "home"),
    )


def is_final(game: Mapping[str, Any]) -> bool:
    status = game.get("status") or {}
    return status.get("abstractGameCode") == "F" or status.get("detailedState") == "Final"


def game_result(game: Mapping[str, Any], team_id: int) -> Optional[str]:
    """``"W"`` or ``"L"`` for *team_id* in a final game; ``None`` otherwise or on a tie."""
    if not is_final(game):
        return None
    teams = game.get("teams") or {}
    home = teams.get("home") or {}
    away = teams.get("away") or {}
    ours, theirs = (home, away) if (home.get("team") or {}).get("id") == team_id else (away, home)
    score = parse_number(ours.get("score"))
    opponent_score = parse_number(theirs.get("score"))
    if score is None or opponent_score is None or score == opponent_score:
        return None
    return "W" if score > opponent_score else "L"


def build_schedule_game(game: Mapping[str, Any], team_id: int) -> ScheduleGame:
    teams = game.get("teams") or {}
    home = teams.get("home") or {}
    away = teams.get("away") or {}
    is_home = (home.get("team") or {}).get("id") == team_id
    ours, theirs = (home, away) if is_home else (away, home)
    opponent_id = (theirs.get("team") or {}).get("id")
    final = is_final(game)
    score = None
    if final and ours.get("score") is not None and theirs.get("score") is not None:
        score = f"{ours['score']}-{theirs['score']}"
    return ScheduleGame(
        game_pk=game.get("gamePk"),
        date=display_date(game.get("officialDate") or game.get("gameDate")),
        opponent=get_team_abbreviation(opponent_id),
        opponent_id=opponent_id,
        is_home=is_home,
        status=(game.get("status") or {}).get("detailedState") or "",
        final=final,
        result=game_result(game, team_id),
        score=score,
    )


def build_team_schedule(games: Iterable[Mapping[str, Any]], team_id: int) -> list[ScheduleGame]:
    return [build_schedule_game(game, team_id) for game in games]
