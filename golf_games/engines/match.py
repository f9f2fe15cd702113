from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from golf_games.engines.base import ScoringEngine, hole_score, rank
from golf_games.models import FormatResult, GameMode, RoundData

MATCH_STATUS_LABELS = {
    "not_started": "Not started",
    "in_progress": "In progress",
    "completed": "Completed",
}


@dataclass(frozen=True)
class MatchConfig:
    use_net: bool = False
    first_hole: int = 1
    last_hole: int = 18


@dataclass(frozen=True)
class MatchStatus:
    leader: str | None
    margin: int
    holes_played: int
    holes_remaining: int
    complete: bool
    winner: str | None
    thru: int | None = None

    @property
    def state(self) -> str:
        if self.complete:
            return "completed"
        return "in_progress" if self.holes_played else "not_started"


def match_status(
    hole_results: Sequence[dict],
    player_a: str,
    player_b: str,
    total_holes: int = 18,
) -> MatchStatus:
    """Status after the scored holes in ``hole_results`` (in play order)."""
    up = sum(
        1 if entry["winner"] == player_a else -1 if entry["winner"] == player_b else 0
        for entry in hole_results
    )
    played = len(hole_results)
    remaining = total_holes - played
    leader = player_a if up > 0 else player_b if up < 0 else None
    complete = abs(up) > remaining or remaining == 0
    return MatchStatus(
        leader=leader,
        margin=abs(up),
        holes_played=played,
        holes_remaining=remaining,
        complete=complete,
        winner=leader if complete else None,
        thru=hole_results[-1]["hole"] if hole_results else None,
    )


def format_match_status(status: MatchStatus, names: dict[str, str] | None = None) -> str:
    names = names or {}
    if status.complete:
        if not status.winner:
            return "Match halved"
        winner = names.get(status.winner, status.winner)
        if status.holes_remaining == 0:
            return f"{winner} wins {status.margin} up"
        return f"{winner} wins {status.margin} & {status.holes_remaining}"
    if not status.holes_played:
        return MATCH_STATUS_LABELS["not_started"]
    if status.leader:
        leader = names.get(status.leader, status.leader)
        return f"{leader} {status.margin} up thru {status.thru}"
    return f"All square thru {status.thru}"


def play_match(
    data: RoundData,
    player_a: str,
    player_b: str,
    holes: Sequence[int],
    use_net: bool = False,
) -> dict:
    """
    Score holes in order until the match is closed out. A hole without a
    score for both players is not played; once one side is more holes up
    than holes remain, later holes are ignored even if scored.
    """
    hole_results: list[dict] = []
    up = 0
    for hole in holes:
        score_a = hole_score(data, player_a, hole, use_net)
        score_b = hole_score(data, player_b, hole, use_net)
        if score_a is None or score_b is None:
            continue
        if score_a < score_b:
            winner = player_a
            up += 1
        elif score_b < score_a:
            winner = player_b
            up -= 1
        else:
            winner = None
        hole_results.append(
            {
                "hole": hole,
                "winner": winner,
                "margin": abs(score_a - score_b),
                "scores": {player_a: score_a, player_b: score_b},
                "holes_up": up,
            }
        )
        if abs(up) > len(holes) - len(hole_results):
            break

    status = match_status(hole_results, player_a, player_b, total_holes=len(holes))
    won_a = sum(1 for entry in hole_results if entry["winner"] == player_a)
    won_b = sum(1 for entry in hole_results if entry["winner"] == player_b)
    halved = len(hole_results) - won_a - won_b
    totals = {
        player_a: _player_totals(won_a, won_b, halved),
        player_b: _player_totals(won_b, won_a, halved),
    }
    return {
        "hole_by_hole": hole_results,
        "totals": totals,
        "status": status,
        "summary": format_match_status(status),
    }


def _player_totals(won: int, lost: int, halved: int) -> dict:
    margin = won - lost
    return {
        "holes_won": won,
        "holes_lost": lost,
        "holes_halved": halved,
        "margin": margin,
        "current_status": "up" if margin > 0 else "down" if margin < 0 else "tied",
    }


class MatchPlayEngine(ScoringEngine):
    mode = GameMode.MATCH_PLAY
    config_type = MatchConfig
    min_players = 2
    max_players = 2

    def score(self, data: RoundData, config: MatchConfig) -> FormatResult:
        player_a, player_b = data.players
        holes = list(range(config.first_hole, config.last_hole + 1))
        match = play_match(data, player_a, player_b, holes, use_net=config.use_net)
        status: MatchStatus = match["status"]
        standings = rank(
            {pid: match["totals"][pid]["margin"] for pid in data.players},
            lower_is_better=False,
        )
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=[status.winner] if status.winner else [],
            details={
                "hole_by_hole": match["hole_by_hole"],
                "totals": match["totals"],
                "status": status,
                "state": status.state,
                "summary": match["summary"],
            },
        )
