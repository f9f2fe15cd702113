from __future__ import annotations

import math
from dataclasses import dataclass

from golf_games.engines.base import ScoringEngine, rank
from golf_games.models import FormatResult, GameMode, Payable, RoundData

POT = "pot"
VARIANTS = ("fixed", "progressive")


@dataclass(frozen=True)
class SnakeConfig:
    penalty_amount: int = 500
    three_putt_threshold: int = 3
    variant: str = "fixed"
    progressive_multiplier: float = 1.1
    distribute_to_group: bool = False

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"unknown snake variant {self.variant!r}")


@dataclass(frozen=True)
class SnakeState:
    holder: str | None = None
    passes: int = 0

    def take(self, player_id: str) -> "SnakeState":
        return SnakeState(holder=player_id, passes=self.passes + 1)


def penalty_amount(config: SnakeConfig, passes: int) -> int:
    if config.variant == "progressive":
        return math.floor(round(config.penalty_amount * config.progressive_multiplier ** passes, 6))
    return config.penalty_amount


class SnakeEngine(ScoringEngine):
    """Last player to three-putt holds the snake and pays the group."""

    mode = GameMode.SNAKE
    config_type = SnakeConfig

    def score(self, data: RoundData, config: SnakeConfig) -> FormatResult:
        state = SnakeState()
        summary = {pid: 0 for pid in data.players}
        hole_by_hole: list[dict] = []
        for hole in data.holes_played():
            putts = {pid: data.putts(pid, hole) for pid in data.players}
            three_putters = [
                pid
                for pid in data.players
                if putts[pid] is not None and putts[pid] >= config.three_putt_threshold
            ]
            for pid in three_putters:
                summary[pid] += 1
                state = state.take(pid)
            hole_by_hole.append(
                {
                    "hole": hole,
                    "putts": putts,
                    "three_putters": three_putters,
                    "holder": state.holder,
                    "passes": state.passes,
                }
            )

        penalty = self._penalty(data.players, state, config)
        balances = {pid: 0 for pid in data.players}
        ledger: list[Payable] = []
        if penalty:
            balances[state.holder] -= sum(recipient["amount"] for recipient in penalty["recipients"])
            for recipient in penalty["recipients"]:
                if recipient["player_id"] in balances:
                    balances[recipient["player_id"]] += recipient["amount"]
                ledger.append(
                    Payable(state.holder, recipient["player_id"], recipient["amount"], "Snake penalty")
                )

        standings = rank(balances, lower_is_better=False)
        return FormatResult(
            mode=self.mode,
            name=f"Snake ({config.variant.title()})",
            standings=standings,
            winners=[pid for pid in data.players if pid != state.holder] if state.holder else [],
            details={
                "hole_by_hole": hole_by_hole,
                "holder": state.holder,
                "passes": state.passes,
                "three_putt_summary": summary,
                "variant": config.variant,
                "penalty": penalty,
            },
            ledger=ledger,
        )

    @staticmethod
    def _penalty(players: tuple[str, ...], state: SnakeState, config: SnakeConfig) -> dict | None:
        amount = penalty_amount(config, state.passes)
        if not state.holder or amount <= 0:
            return None
        if config.distribute_to_group:
            recipients = [{"player_id": POT, "amount": amount}]
        else:
            others = [pid for pid in players if pid != state.holder]
            # Floor split; the remainder is not paid out.
            share = amount // len(others) if others else 0
            recipients = [{"player_id": pid, "amount": share} for pid in others]
        return {
            "loser": state.holder,
            "amount": amount,
            "base_amount": config.penalty_amount,
            "multiplier": (
                config.progressive_multiplier ** state.passes if config.variant == "progressive" else 1
            ),
            "recipients": recipients,
        }


def snake_status(result: FormatResult) -> str:
    holder = result.details.get("holder")
    if not holder:
        return "No three-putts this round - no snake penalty!"
    penalty = result.details.get("penalty")
    if penalty:
        return f"{holder} holds the snake and owes {penalty['amount']} units!"
    return f"{holder} holds the snake"


def format_three_putt_summary(summary: dict[str, int]) -> list[str]:
    return [
        f"{pid}: {count} three-putt{'s' if count > 1 else ''}"
        for pid, count in summary.items()
        if count > 0
    ]
