from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank
from golf_games.errors import InvalidRoundError
from golf_games.models import FormatResult, GameMode, RoundData

WIN_POINTS = 2
LOSS_POINTS = -1
LONE_WOLF_FACTOR = 2
LONE_WOLF = "lone"


def _partner_from(decision: Any) -> str:
    if isinstance(decision, dict):
        decision = decision.get("partner")
    if decision is None or decision == LONE_WOLF:
        return LONE_WOLF
    return str(decision)


@dataclass(frozen=True)
class WolfConfig:
    """
    ``decisions`` maps hole -> partner id, or ``"lone"`` (also ``None`` or
    ``{"partner": None}``) for a lone wolf. Holes without a decision are
    reported as undecided and score nothing.
    """

    decisions: dict = field(default_factory=dict)
    rotation: tuple | None = None
    use_net: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "decisions",
            {
                int(hole): _partner_from(decision)
                for hole, decision in self.decisions.items()
                if decision != ""
            },
        )
        if self.rotation is not None:
            object.__setattr__(self, "rotation", tuple(self.rotation))


class WolfEngine(ScoringEngine):
    mode = GameMode.WOLF
    config_type = WolfConfig
    min_players = 3

    def validate(self, data: RoundData, config: WolfConfig) -> None:
        super().validate(data, config)
        if config.rotation and set(config.rotation) - set(data.players):
            raise InvalidRoundError("Wolf rotation names players outside the round")
        for hole, partner in config.decisions.items():
            if partner != LONE_WOLF and partner not in data.players:
                raise InvalidRoundError(f"Wolf partner {partner!r} on hole {hole} is not in the round")

    def score(self, data: RoundData, config: WolfConfig) -> FormatResult:
        rotation = config.rotation or data.players
        points = {pid: 0 for pid in data.players}
        hole_by_hole: list[dict] = []
        for hole in data.holes_played():
            wolf = rotation[(hole - 1) % len(rotation)]
            decision = config.decisions.get(hole)
            if decision is None:
                hole_by_hole.append({"hole": hole, "wolf": wolf, "partner": None, "result": "undecided"})
                continue
            partner = None if decision in (LONE_WOLF, wolf) else decision
            scores = {pid: hole_score(data, pid, hole, config.use_net) for pid in data.players}
            if any(value is None for value in scores.values()):
                hole_by_hole.append({"hole": hole, "wolf": wolf, "partner": partner, "result": "incomplete"})
                continue

            wolf_team = [wolf] if partner is None else [wolf, partner]
            field_team = [pid for pid in data.players if pid not in wolf_team]
            wolf_best = min(scores[pid] for pid in wolf_team)
            field_best = min(scores[pid] for pid in field_team)
            factor = LONE_WOLF_FACTOR if partner is None else 1

            awarded = {pid: 0 for pid in data.players}
            if wolf_best != field_best:
                winners, losers = (wolf_team, field_team) if wolf_best < field_best else (field_team, wolf_team)
                for pid in winners:
                    awarded[pid] = WIN_POINTS * factor
                for pid in losers:
                    awarded[pid] = LOSS_POINTS * factor
            for pid, value in awarded.items():
                points[pid] += value

            hole_by_hole.append(
                {
                    "hole": hole,
                    "wolf": wolf,
                    "partner": partner,
                    "lone_wolf": partner is None,
                    "wolf_score": wolf_best,
                    "field_score": field_best,
                    "result": "halved" if wolf_best == field_best else "wolf" if wolf_best < field_best else "field",
                    "points": awarded,
                }
            )

        standings = rank(points, lower_is_better=False)
        scored = any("points" in entry for entry in hole_by_hole)
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=leaders(standings) if scored else [],
            details={"hole_by_hole": hole_by_hole, "totals": points},
        )
