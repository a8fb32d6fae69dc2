from __future__ import annotations
from datetime import date, datetime, time
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class OrderIn(BaseModel):
    """Order form submission.

    ``rate`` may be omitted; the order service then fills in the catalog rate
    for the direction and VIP tier.
    """

    direction: Direction
    currency: str
    rate: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    amount: int = Field(..., gt=0)
    discount_pct: float = Field(0, ge=0, le=100, allow_inf_nan=False)
    vip: bool = False
    note: str = ""
    submitted_by: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("currency is required")
        return v


class Settlement(BaseModel):
    """Outcome of pricing one order against the counter's liquidity."""

    model_config = ConfigDict(frozen=True)

    total_paid: float
    accepted: bool
    side: str
    required: float
    available: float
    shortfall: Optional[float] = None


class OrderRecord(BaseModel):
    """Persisted order. Immutable once written."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    order_number: str
    direction: Direction
    currency: str
    rate: float
    amount: int
    discount_pct: float
    vip: bool
    submitted_by: str
    trade_date: date
    trade_time: time
    total_paid: float
    note: str = ""
    created_at: Optional[datetime] = None

    def as_ledger_row(self) -> List[Any]:
        return [
            self.order_number,
            self.direction.value,
            self.currency,
            self.rate,
            self.amount,
            self.discount_pct,
            "Yes" if self.vip else "No",
            self.submitted_by,
            self.trade_date.isoformat(),
            self.trade_time.strftime("%H:%M:%S"),
            self.total_paid,
            self.note,
        ]
