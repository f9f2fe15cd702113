from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank
from golf_games.models import FormatResult, GameMode, RoundData

MAX_SCORE_KINDS = ("double-bogey", "triple-bogey", "par-plus", "fixed")


@dataclass(frozen=True)
class MaxScoreRule:
    kind: str
    value: int | None = None

    def __post_init__(self) -> None:
        if self.kind not in MAX_SCORE_KINDS:
            raise ValueError(f"unknown max score rule {self.kind!r}")

    def cap(self, score: int, par: int) -> int:
        if self.kind == "double-bogey":
            return min(score, par + 2)
        if self.kind == "triple-bogey":
            return min(score, par + 3)
        if self.kind == "par-plus":
            return min(score, par + (self.value or 2))
        return min(score, self.value or 10)


@dataclass(frozen=True)
class StrokeConfig:
    use_net: bool = False
    max_score: MaxScoreRule | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_score, dict):
            rule: dict[str, Any] = self.max_score
            object.__setattr__(
                self,
                "max_score",
                MaxScoreRule(rule.get("kind") or rule.get("type", ""), rule.get("value")),
            )


class StrokePlayEngine(ScoringEngine):
    mode = GameMode.STROKE_PLAY
    config_type = StrokeConfig

    def score(self, data: RoundData, config: StrokeConfig) -> FormatResult:
        totals: dict[str, dict[str, int]] = {}
        hole_by_hole: dict[str, dict[int, dict[str, int]]] = {}
        for pid in data.players:
            gross_total = 0
            net_total = 0
            breakdown: dict[int, dict[str, int]] = {}
            for hole in data.holes_played():
                gross = data.strokes(pid, hole)
                if gross is None:
                    continue
                net = hole_score(data, pid, hole, config.use_net)
                if config.max_score:
                    net = config.max_score.cap(net, data.course.par_for(hole))
                gross_total += gross
                net_total += net
                breakdown[hole] = {"gross": gross, "net": net}
            totals[pid] = {"gross": gross_total, "net": net_total, "holes": len(breakdown)}
            hole_by_hole[pid] = breakdown

        score_key = "net" if config.use_net else "gross"
        standings = rank({pid: totals[pid][score_key] for pid in data.players})
        winners = leaders(standings) if data.holes_played() else []
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=winners,
            details={
                "score_type": score_key,
                "totals": totals,
                "hole_by_hole": hole_by_hole,
            },
        )
