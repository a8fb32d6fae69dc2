"""Pydantic domain models for the exchange counter."""

from .constants import DENOMINATIONS  # re-export
from .order import Direction, OrderIn, OrderRecord, Settlement
from .rates import CurrencyQuote
from .cash_flow import CashPosition
from .reconciliation import (
    BreakdownLine,
    Classification,
    DenominationCount,
    ReconciliationIn,
    ReconciliationResult,
)

__all__ = [
    "DENOMINATIONS",
    "Direction",
    "OrderIn",
    "OrderRecord",
    "Settlement",
    "CurrencyQuote",
    "CashPosition",
    "BreakdownLine",
    "Classification",
    "DenominationCount",
    "ReconciliationIn",
    "ReconciliationResult",
]
