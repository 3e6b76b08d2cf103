# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Postseason bracket grouped by round."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import BracketRound, BracketSeries, SeriesTeam

# (gameType, label) in display order
ROUNDS: list[tuple[str, str]] = [
    ("F", "Wild Card"),
    ("D", "Division Series"),
    ("L", "Championship Series"),
    ("W", "World Series"),
]
ROUND_LABELS = dict(ROUNDS)


def _series_teams(games: Iterable[Mapping[str, Any]]) -> list[SeriesTeam]:
    """The first two teams seen (away before home), with wins counted from ``isWinner``."""
    teams: dict[int, SeriesTeam] = {}
    for game in games:
        for side in ("away", "home"):
            entry = (game.get("teams") or {}).get(side) or {}
            team = entry.get("team") or {}
            team_id = team.get("id")
            if team_id is None:
                continue
            if team_id not in teams:
                teams[team_id] = SeriesTeam(team_id=team_id, name=team.get("name") or "")
            if entry.get("isWinner"):
                teams[team_id].wins += 1
    found = list(teams.values())[:2]
    while len(found) < 2:
        found.append(SeriesTeam())
    return found


def build_series(series: Mapping[str, Any]) -> BracketSeries:
    info = series.get("series") or {}
    games = list(series.get("games") or [])
    round_key = info.get("gameType") or ""
    first, second = _series_teams(games)
    leader = None
    if first.wins != second.wins:
        leader = first.team_id if first.wins > second.wins else second.team_id
    return BracketSeries(
        series_id=str(info.get("id") or f"{round_key}-{first.team_id}-{second.team_id}"),
        round=round_key,
        round_label=ROUND_LABELS.get(round_key, round_key),
        description=(games[0].get("seriesDescription") or "") if games else "",
        teams=(first, second),
        leader=leader,
        games=sorted(games, key=lambda g: g.get("gameDate") or ""),
    )


def build_bracket(series_list: Iterable[Mapping[str, Any]]) -> list[BracketRound]:
    """Group series into rounds in bracket order; unknown round types are dropped."""
    by_round: dict[str, list[BracketSeries]] = {key: [] for key, _ in ROUNDS}
    for series in series_list:
        built = build_series(series)
        if built.round in by_round:
            by_round[built.round].append(built)
    return [
        BracketRound(key=key, label=label, series=by_round[key])
        for key, label in ROUNDS
        if by_round[key]
    ]
