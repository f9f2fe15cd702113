from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations

from golf_games.engines.base import ScoringEngine, leaders, rank
from golf_games.models import FormatResult, GameMode, HoleScore, Payable, RoundData

DOT_EVENTS = ("fairway", "green_in_regulation", "one_putt", "birdie", "eagle", "double_bogey")


@dataclass(frozen=True)
class DotsConfig:
    fairway: int = 1
    green_in_regulation: int = 1
    one_putt: int = 1
    birdie: int = 2
    eagle: int = 5
    double_bogey: int = -1
    unit_per_dot: float = 0


def hole_dots(score: HoleScore, par: int, config: DotsConfig) -> dict[str, int]:
    events = {
        "fairway": score.fairway_hit,
        "green_in_regulation": score.green_in_regulation,
        "one_putt": score.putts == 1,
        "birdie": score.strokes == par - 1,
        "eagle": score.strokes <= par - 2,
        "double_bogey": score.strokes >= par + 2,
    }
    dots = {event: getattr(config, event) if hit else 0 for event, hit in events.items()}
    dots["total"] = sum(dots.values())
    return dots


class DotsEngine(ScoringEngine):
    mode = GameMode.DOTS
    config_type = DotsConfig

    def score(self, data: RoundData, config: DotsConfig) -> FormatResult:
        totals = {pid: {event: 0 for event in (*DOT_EVENTS, "total")} for pid in data.players}
        hole_by_hole: list[dict] = []
        for hole in data.holes_played():
            par = data.course.par_for(hole)
            breakdown: dict[str, dict[str, int]] = {}
            for pid in data.players:
                entry = data.score(pid, hole)
                if entry is None:
                    breakdown[pid] = {event: 0 for event in (*DOT_EVENTS, "total")}
                    continue
                breakdown[pid] = hole_dots(entry, par, config)
                for event, value in breakdown[pid].items():
                    totals[pid][event] += value
            hole_by_hole.append({"hole": hole, "dots": breakdown})

        standings = rank({pid: totals[pid]["total"] for pid in data.players}, lower_is_better=False)
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=leaders(standings) if hole_by_hole else [],
            details={"totals": totals, "hole_by_hole": hole_by_hole},
            ledger=self._ledger(data.players, totals, config.unit_per_dot),
        )

    @staticmethod
    def _ledger(players: tuple[str, ...], totals: dict, unit: float) -> list[Payable]:
        if unit <= 0:
            return []
        ledger: list[Payable] = []
        for first, second in combinations(players, 2):
            diff = totals[first]["total"] - totals[second]["total"]
            if diff == 0:
                continue
            payer, payee = (second, first) if diff > 0 else (first, second)
            ledger.append(Payable(payer, payee, abs(diff) * unit, f"Dots difference: {abs(diff)}"))
        return ledger
