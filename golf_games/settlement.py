from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from golf_games.models import FormatResult, Payable

NET_MEMO = "Net settlement"


def collect_ledger(results: Iterable[FormatResult]) -> list[Payable]:
    ledger: list[Payable] = []
    for result in results:
        ledger.extend(result.ledger)
    return ledger


def balances(ledger: Iterable[Payable]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for payment in ledger:
        totals[payment.from_player] -= payment.amount
        totals[payment.to_player] += payment.amount
    return dict(totals)


def net_ledger(ledger: Iterable[Payable]) -> list[Payable]:
    """Collapse a ledger of abstract units into the fewest transfers, largest first."""
    totals = balances(ledger)
    creditors = sorted(
        ([pid, amount] for pid, amount in totals.items() if amount > 0),
        key=lambda item: -item[1],
    )
    debtors = sorted(
        ([pid, -amount] for pid, amount in totals.items() if amount < 0),
        key=lambda item: -item[1],
    )
    settled: list[Payable] = []
    while creditors and debtors:
        debtor, creditor = debtors[0], creditors[0]
        amount = min(debtor[1], creditor[1])
        settled.append(Payable(debtor[0], creditor[0], amount, NET_MEMO))
        debtor[1] -= amount
        creditor[1] -= amount
        if debtor[1] <= 1e-9:
            debtors.pop(0)
        if creditor[1] <= 1e-9:
            creditors.pop(0)
    return settled
