from __future__ import annotations
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cashdesk.core.errors import MalformedInputError
from .constants import CASH_FLOW_BALANCE_COLUMN, CASH_FLOW_CURRENCY_COLUMN


class CashPosition(BaseModel):
    """Running balance of one currency as recorded by the cash-flow ledger."""

    model_config = ConfigDict(frozen=True)

    currency: str = Field(..., min_length=1)
    balance: float = Field(..., allow_inf_nan=False)

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "CashPosition":
        if len(row) <= max(CASH_FLOW_CURRENCY_COLUMN, CASH_FLOW_BALANCE_COLUMN):
            raise MalformedInputError(
                f"cash-flow row too short ({len(row)} columns): {list(row)!r}"
            )
        try:
            return cls(
                currency=str(row[CASH_FLOW_CURRENCY_COLUMN] or "").strip().upper(),
                balance=row[CASH_FLOW_BALANCE_COLUMN],
            )
        except ValidationError as e:
            raise MalformedInputError(f"invalid cash-flow row {list(row)!r}: {e}") from e
