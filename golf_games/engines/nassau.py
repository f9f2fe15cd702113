from __future__ import annotations

from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, leaders, rank
from golf_games.engines.match import play_match
from golf_games.models import FormatResult, GameMode, Payable, RoundData

NASSAU_LEGS = (
    ("Front 9", tuple(range(1, 10))),
    ("Back 9", tuple(range(10, 19))),
    ("Overall", tuple(range(1, 19))),
)


@dataclass(frozen=True)
class NassauConfig:
    use_net: bool = False
    unit: float = 0


class NassauEngine(ScoringEngine):
    """Three independent matches: front nine, back nine and the full round."""

    mode = GameMode.NASSAU
    config_type = NassauConfig
    min_players = 2
    max_players = 2

    def score(self, data: RoundData, config: NassauConfig) -> FormatResult:
        player_a, player_b = data.players
        legs: list[dict] = []
        legs_won = {player_a: 0, player_b: 0}
        ledger: list[Payable] = []
        for name, holes in NASSAU_LEGS:
            match = play_match(data, player_a, player_b, holes, use_net=config.use_net)
            status = match["status"]
            legs.append(
                {
                    "name": name,
                    "holes": list(holes),
                    "winner": status.winner,
                    "state": status.state,
                    "summary": match["summary"],
                    "status": status,
                    "hole_by_hole": match["hole_by_hole"],
                }
            )
            if status.winner:
                legs_won[status.winner] += 1
                if config.unit > 0:
                    loser = player_b if status.winner == player_a else player_a
                    ledger.append(Payable(loser, status.winner, config.unit, f"{name} - Nassau"))

        standings = rank(legs_won, lower_is_better=False)
        decided = any(leg["winner"] for leg in legs)
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=leaders(standings) if decided else [],
            details={"legs": legs, "legs_won": legs_won},
            ledger=ledger,
        )
