"""Money / rounding helpers.

Centralized so pricing, reconciliation and the ledger use identical rounding
semantics (half-up on the decimal representation, never on binary floats).
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from cashdesk.core.errors import MissingReferenceDataError
from cashdesk.models.constants import DENOMINATIONS


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: float | Decimal, places: int) -> Decimal:
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_to(value: float | Decimal, places: int) -> float:
    return float(quantize(value, places))


def round2(value: float | Decimal) -> float:
    return round_to(value, 2)


def precision_for_faces(faces: Iterable[float]) -> int:
    """Decimal places implied by the smallest face value of a denomination set."""
    smallest = min(to_decimal(f) for f in faces)
    if smallest >= 1:
        return 0
    if smallest >= Decimal("0.1"):
        return 1
    return 2


def denomination_sets(
    currency: str,
) -> tuple[tuple[float, ...], tuple[float, ...]]:
    """(banknotes, coins) for ``currency``; unknown currencies are rejected."""
    try:
        return DENOMINATIONS[currency.upper()]
    except KeyError:
        raise MissingReferenceDataError(
            f"No denomination table for currency '{currency}'"
        ) from None


def denomination_faces(currency: str) -> tuple[float, ...]:
    notes, coins = denomination_sets(currency)
    return notes + coins


def precision(currency: str) -> int:
    notes, coins = denomination_sets(currency)
    # Smallest coin decides; a coin-less set falls back to its smallest note.
    return precision_for_faces(coins or notes)


def format_amount(value: float | Decimal, places: int) -> str:
    return f"{quantize(value, places):.{places}f}"
