"""Cash-on-hand positions derived from the cash-flow ledger.

Each ledger row carries the running balance for its currency, so the last row
seen for a currency is its current balance.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Sequence

from cashdesk.core.errors import MissingReferenceDataError
from cashdesk.models.cash_flow import CashPosition


def positions_from_rows(rows: Iterable[Sequence[Any]]) -> list[CashPosition]:
    return [CashPosition.from_row(r) for r in rows]


def latest_balances(positions: Iterable[CashPosition]) -> Dict[str, float]:
    balances: Dict[str, float] = {}
    for p in positions:
        balances[p.currency] = p.balance
    return balances


def balance_of(balances: Dict[str, float], currency: str) -> float:
    if not balances:
        raise MissingReferenceDataError("cash-flow ledger is empty or missing")
    try:
        return balances[currency.upper()]
    except KeyError:
        raise MissingReferenceDataError(
            f"currency {currency.upper()} has no cash-flow balance"
        ) from None
