from __future__ import annotations
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cashdesk.core.errors import MalformedInputError
from .constants import RATE_ROW_MIN_COLUMNS
from .order import Direction


class CurrencyQuote(BaseModel):
    """One rate-table entry. Rates are quoted per ``rate_amount`` units."""

    model_config = ConfigDict(frozen=True)

    code: str
    rate_amount: float = Field(..., gt=0, allow_inf_nan=False)
    buy_rate: float = Field(..., ge=0, allow_inf_nan=False)
    sell_rate: float = Field(..., ge=0, allow_inf_nan=False)
    buy_rate_vip: float = Field(..., ge=0, allow_inf_nan=False)
    sell_rate_vip: float = Field(..., ge=0, allow_inf_nan=False)
    cash_limit: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    flag: Optional[str] = None

    @field_validator("code")
    @classmethod
    def valid_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("currency code cannot be empty")
        return v

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "CurrencyQuote":
        """Parse a positional rate-table row.

        Layout: (flag, code, rate_amount, buy, sell, buy_vip, sell_vip[, cash_limit]).
        """
        if len(row) < RATE_ROW_MIN_COLUMNS:
            raise MalformedInputError(
                f"rate row needs at least {RATE_ROW_MIN_COLUMNS} columns, got {len(row)}"
            )
        cash_limit = row[7] if len(row) > 7 and row[7] not in (None, "") else None
        try:
            return cls(
                flag=str(row[0]) if row[0] not in (None, "") else None,
                code=str(row[1] or ""),
                rate_amount=row[2],
                buy_rate=row[3],
                sell_rate=row[4],
                buy_rate_vip=row[5],
                sell_rate_vip=row[6],
                cash_limit=cash_limit,
            )
        except ValidationError as e:
            raise MalformedInputError(f"invalid rate row {list(row)!r}: {e}") from e

    def rate_for(self, direction: Direction, vip: bool = False) -> float:
        if direction == Direction.BUY:
            return self.buy_rate_vip if vip else self.buy_rate
        return self.sell_rate_vip if vip else self.sell_rate
