from __future__ import annotations

from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank
from golf_games.models import FormatResult, GameMode, RoundData

# Points keyed by strokes relative to par, clamped to -3..+2.
STABLEFORD_POINTS = {-3: 8, -2: 5, -1: 3, 0: 2, 1: 1, 2: 0}
MODIFIED_STABLEFORD_POINTS = {-3: 8, -2: 5, -1: 2, 0: 0, 1: -1, 2: -3}


def stableford_points(strokes: int, par: int, modified: bool = False) -> int:
    table = MODIFIED_STABLEFORD_POINTS if modified else STABLEFORD_POINTS
    relative = max(-3, min(2, strokes - par))
    return table[relative]


@dataclass(frozen=True)
class PointsConfig:
    use_net: bool = False
    modified: bool = False


class PointsEngine(ScoringEngine):
    mode = GameMode.POINTS
    config_type = PointsConfig

    def score(self, data: RoundData, config: PointsConfig) -> FormatResult:
        totals: dict[str, int] = {}
        hole_by_hole: dict[str, dict[int, int]] = {}
        for pid in data.players:
            per_hole: dict[int, int] = {}
            for hole in data.holes_played():
                strokes = hole_score(data, pid, hole, config.use_net)
                if strokes is None:
                    continue
                per_hole[hole] = stableford_points(
                    strokes, data.course.par_for(hole), modified=config.modified
                )
            hole_by_hole[pid] = per_hole
            totals[pid] = sum(per_hole.values())

        standings = rank(totals, lower_is_better=False)
        return FormatResult(
            mode=self.mode,
            name="Modified Stableford" if config.modified else self.name,
            standings=standings,
            winners=leaders(standings) if data.holes_played() else [],
            details={"totals": totals, "hole_by_hole": hole_by_hole},
        )
