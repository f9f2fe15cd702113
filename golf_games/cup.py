from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from golf_games.engines import ENGINES
from golf_games.errors import InvalidRoundError
from golf_games.models import Course, FormatResult, GameMode, RoundData

logger = logging.getLogger(__name__)

TEAM_A = "Team A"
TEAM_B = "Team B"
TEAMS = (TEAM_A, TEAM_B)
CUP_FORMATS = ("individual", "pairs", "team")
DEFAULT_POINTS_TO_WIN = 9


@dataclass(frozen=True)
class CupPlayer:
    id: str
    name: str = ""
    handicap: float = 0.0
    team: str = ""


@dataclass(frozen=True)
class CupRound:
    id: str
    name: str
    mode: GameMode
    format: str = "team"
    points_available: float = 2
    completed: bool = False

    def __post_init__(self) -> None:
        if self.format not in CUP_FORMATS:
            raise ValueError(f"unknown cup round format {self.format!r}")


DEFAULT_ROUNDS = (
    CupRound("round-1", "Team Stroke Play Championship", GameMode.STROKE_PLAY, "team", 4),
    CupRound("round-2", "Singles Match Play", GameMode.MATCH_PLAY, "individual", 6),
    CupRound("round-3", "Dots Championship", GameMode.DOTS, "individual", 4),
    CupRound("round-4", "Snake Challenge", GameMode.SNAKE, "team", 2),
)


@dataclass(frozen=True)
class Cup:
    name: str
    players: tuple[CupPlayer, ...]
    rounds: tuple[CupRound, ...] = DEFAULT_ROUNDS
    points_to_win: float = DEFAULT_POINTS_TO_WIN

    def team(self, team: str) -> list[CupPlayer]:
        return [player for player in self.players if player.team == team]

    def round(self, round_id: str) -> CupRound:
        for cup_round in self.rounds:
            if cup_round.id == round_id:
                return cup_round
        raise InvalidRoundError(f"Round {round_id} not found")


@dataclass(frozen=True)
class CupRoundResult:
    round_id: str
    mode: GameMode
    points: dict[str, float]
    summary: str
    results: list[FormatResult] = field(default_factory=list)

    @property
    def winner(self) -> str | None:
        if self.points[TEAM_A] == self.points[TEAM_B]:
            return None
        return TEAM_A if self.points[TEAM_A] > self.points[TEAM_B] else TEAM_B


@dataclass(frozen=True)
class CupStandings:
    points: dict[str, float]
    leaderboard: list[dict]
    complete: bool
    winner: str | None
    mvp: dict | None


def create_cup(players: Iterable[CupPlayer], name: str = "Pinseekr Cup") -> Cup:
    """Two-team cup over the default rounds; teams alternate by entry order."""
    entrants = list(players)
    if len(entrants) < 4 or len(entrants) % 2:
        raise InvalidRoundError("A cup requires an even number of players (minimum 4)")
    assigned = tuple(
        replace(player, team=TEAMS[idx % 2]) for idx, player in enumerate(entrants)
    )
    return Cup(name=name, players=assigned)


def complete_round(cup: Cup, round_id: str) -> Cup:
    cup.round(round_id)
    rounds = tuple(
        replace(cup_round, completed=True) if cup_round.id == round_id else cup_round
        for cup_round in cup.rounds
    )
    return replace(cup, rounds=rounds)


def _split(points: float, team_a_score: float, team_b_score: float, lower_is_better: bool) -> dict[str, float]:
    if team_a_score == team_b_score:
        return {TEAM_A: points / 2, TEAM_B: points / 2}
    a_wins = team_a_score < team_b_score if lower_is_better else team_a_score > team_b_score
    return {TEAM_A: points, TEAM_B: 0} if a_wins else {TEAM_A: 0, TEAM_B: points}


def _leading_team(points: Mapping[str, float]) -> str:
    if points[TEAM_A] == points[TEAM_B]:
        return "Teams tied"
    return TEAM_A if points[TEAM_A] > points[TEAM_B] else TEAM_B


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else float("inf")


def _stroke_points(cup: Cup, cup_round: CupRound, data: RoundData) -> tuple[dict, list[FormatResult], str]:
    result = ENGINES[GameMode.STROKE_PLAY].compute(data, {"use_net": True})
    totals = result.details["totals"]
    averages = [
        _average([totals[player.id]["net"] for player in cup.team(team) if totals[player.id]["holes"]])
        for team in TEAMS
    ]
    points = _split(cup_round.points_available, *averages, lower_is_better=True)
    return points, [result], f"Stroke Play: {_leading_team(points)} dominated with superior team scoring"


def _singles_points(cup: Cup, data: RoundData) -> tuple[dict, list[FormatResult], str]:
    engine = ENGINES[GameMode.MATCH_PLAY]
    points = {TEAM_A: 0.0, TEAM_B: 0.0}
    results = []
    for player_a, player_b in zip(cup.team(TEAM_A), cup.team(TEAM_B)):
        result = engine.compute(data.for_players((player_a.id, player_b.id)), {"use_net": True})
        results.append(result)
        winner = result.winners[0] if result.winners else None
        if winner == player_a.id:
            points[TEAM_A] += 1
        elif winner == player_b.id:
            points[TEAM_B] += 1
        else:
            points[TEAM_A] += 0.5
            points[TEAM_B] += 0.5
    return points, results, f"Singles Matches: {TEAM_A} {points[TEAM_A]:g} - {points[TEAM_B]:g} {TEAM_B}"


def _team_match_points(cup: Cup, cup_round: CupRound, data: RoundData) -> tuple[dict, list[FormatResult], str]:
    averages = []
    for team in TEAMS:
        strokes = [
            data.strokes(player.id, hole)
            for player in cup.team(team)
            for hole in data.holes_played()
        ]
        averages.append(_average([value for value in strokes if value is not None]))
    points = _split(cup_round.points_available, *averages, lower_is_better=True)
    return points, [], f"Match Play: {_leading_team(points)} won the team battle"


def _dots_points(cup: Cup, cup_round: CupRound, data: RoundData) -> tuple[dict, list[FormatResult], str]:
    result = ENGINES[GameMode.DOTS].compute(data)
    totals = result.details["totals"]
    team_dots = [sum(totals[player.id]["total"] for player in cup.team(team)) for team in TEAMS]
    points = _split(cup_round.points_available, *team_dots, lower_is_better=False)
    return points, [result], f"Dots Championship: {_leading_team(points)} accumulated more dots"


def _snake_points(cup: Cup, cup_round: CupRound, data: RoundData) -> tuple[dict, list[FormatResult], str]:
    result = ENGINES[GameMode.SNAKE].compute(data)
    holder = result.details.get("holder")
    teams = {player.id: player.team for player in cup.players}
    available = cup_round.points_available
    if teams.get(holder) == TEAM_A:
        points = {TEAM_A: 0, TEAM_B: available}
    elif teams.get(holder) == TEAM_B:
        points = {TEAM_A: available, TEAM_B: 0}
    else:
        points = {TEAM_A: available / 2, TEAM_B: available / 2}
    return points, [result], f"Snake Challenge: {_leading_team(points)} avoided the three-putt penalties"


def play_cup_round(
    cup: Cup,
    round_id: str,
    strokes: Mapping[str, Any],
    putts: Mapping[str, Any] | None = None,
    course: Course | None = None,
) -> CupRoundResult:
    """
    Score one cup round and award its points to the two teams. The cup itself
    is left untouched; mark the round done with ``complete_round``.
    """
    cup_round = cup.round(round_id)
    if cup_round.completed:
        raise InvalidRoundError(f"Round {round_id} has already been completed")
    data = RoundData.build(
        [player.id for player in cup.players],
        strokes,
        putts=putts,
        course=course,
        handicaps={player.id: player.handicap for player in cup.players},
    )

    if cup_round.mode == GameMode.STROKE_PLAY:
        points, results, summary = _stroke_points(cup, cup_round, data)
    elif cup_round.mode == GameMode.MATCH_PLAY and cup_round.format == "individual":
        points, results, summary = _singles_points(cup, data)
    elif cup_round.mode == GameMode.MATCH_PLAY:
        points, results, summary = _team_match_points(cup, cup_round, data)
    elif cup_round.mode == GameMode.DOTS:
        points, results, summary = _dots_points(cup, cup_round, data)
    elif cup_round.mode == GameMode.SNAKE:
        points, results, summary = _snake_points(cup, cup_round, data)
    else:
        raise InvalidRoundError(f"Unsupported cup game mode: {cup_round.mode.value}")

    logger.info("%s %s: %s", cup.name, round_id, summary)
    return CupRoundResult(round_id, cup_round.mode, points, summary, results)


def _mvp(cup: Cup, completed: list[CupRoundResult]) -> dict | None:
    if not cup.players or not completed:
        return None
    team_sizes = {team: len(cup.team(team)) for team in TEAMS}
    contributions = {
        player.id: sum(result.points[player.team] for result in completed) / team_sizes[player.team]
        for player in cup.players
    }
    best = max(cup.players, key=lambda player: contributions[player.id])
    return {
        "player_id": best.id,
        "name": best.name or best.id,
        "points_contributed": round(contributions[best.id], 1),
    }


def cup_standings(cup: Cup, completed: Iterable[CupRoundResult]) -> CupStandings:
    rounds = list(completed)
    points = {team: sum(result.points[team] for result in rounds) for team in TEAMS}
    leaderboard = sorted(
        (
            {
                "team": team,
                "points": points[team],
                "rounds_won": sum(1 for result in rounds if result.winner == team),
            }
            for team in TEAMS
        ),
        key=lambda entry: entry["points"],
        reverse=True,
    )
    complete = any(total >= cup.points_to_win for total in points.values())
    winner = None
    if complete:
        winner = TEAM_A if points[TEAM_A] > points[TEAM_B] else TEAM_B
    return CupStandings(points, leaderboard, complete, winner, _mvp(cup, rounds))
