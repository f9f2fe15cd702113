from __future__ import annotations

from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, hole_score, leaders, rank, unique_low
from golf_games.models import HOLE_COUNT, FormatResult, GameMode, Payable, RoundData


@dataclass(frozen=True)
class SkinsConfig:
    use_net: bool = False
    skin_value: float = 1
    carry_cap: int | None = None


class SkinsEngine(ScoringEngine):
    mode = GameMode.SKINS
    config_type = SkinsConfig
    min_players = 2

    def score(self, data: RoundData, config: SkinsConfig) -> FormatResult:
        carry = 0
        won = {pid: {"skins": 0, "value": 0.0} for pid in data.players}
        hole_by_hole: list[dict] = []
        ledger: list[Payable] = []
        played = [hole for hole in data.holes_played() if 1 <= hole <= HOLE_COUNT]

        for hole in played:
            carry += 1
            scores = {pid: hole_score(data, pid, hole, config.use_net) for pid in data.players}
            complete = {pid: value for pid, value in scores.items() if value is not None}
            winner = unique_low(complete) if len(complete) == len(scores) else None

            if winner:
                value = carry * config.skin_value
                won[winner]["skins"] += carry
                won[winner]["value"] += value
                hole_by_hole.append(
                    {"hole": hole, "winner": winner, "skins": carry, "value": value, "scores": scores}
                )
                ledger.extend(self._pay(data.players, winner, value, hole, carry))
                carry = 0
                continue

            entry = {"hole": hole, "winner": None, "result": "carry", "carry": carry, "scores": scores}
            if config.carry_cap and carry >= config.carry_cap:
                entry.update({"result": "voided", "skins_voided": carry})
                carry = 0
            hole_by_hole.append(entry)

        finished = HOLE_COUNT in played
        unresolved = None
        if carry:
            unresolved = {
                "skins": carry,
                "value": carry * config.skin_value,
                "state": "pushed" if finished else "pending",
            }

        standings = rank({pid: won[pid]["value"] for pid in data.players}, lower_is_better=False)
        awarded = any(entry["winner"] for entry in hole_by_hole)
        return FormatResult(
            mode=self.mode,
            name=self.name,
            standings=standings,
            winners=leaders(standings) if awarded else [],
            details={"hole_by_hole": hole_by_hole, "totals": won, "carry": unresolved},
            ledger=ledger,
        )

    @staticmethod
    def _pay(players: tuple[str, ...], winner: str, value: float, hole: int, skins: int) -> list[Payable]:
        if value <= 0:
            return []
        losers = [pid for pid in players if pid != winner]
        share = value / len(losers)
        memo = f"Hole {hole} - {skins} skin{'s' if skins > 1 else ''}"
        return [Payable(pid, winner, share, memo) for pid in losers]
