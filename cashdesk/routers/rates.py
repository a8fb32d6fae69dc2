"""Rates router.

Endpoints:
    - PUT /rates          -> replace the rate table from positional rows
    - GET /rates          -> list quotes
    - GET /rates/{code}   -> one quote plus the rate per direction / VIP tier

The rate table itself is maintained outside this service; PUT simply takes the
latest snapshot.
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cashdesk.core.config import Settings
from cashdesk.db.dal import Database
from cashdesk.models import CurrencyQuote, Direction
from cashdesk.services.rates.catalog import RateCatalog
from .deps import get_app_settings, get_db

router = APIRouter(prefix="/rates", tags=["rates"])


class RateTableIn(BaseModel):
    rows: List[List[Any]] = Field(
        ...,
        description="(flag, code, rate_amount, buy, sell, buy_vip, sell_vip[, cash_limit])",
    )


class QuotedRates(BaseModel):
    buy: float
    sell: float
    buy_vip: float
    sell_vip: float


class QuoteOut(CurrencyQuote):
    quoted: Optional[QuotedRates] = None

    @classmethod
    def from_quote(cls, q: CurrencyQuote) -> "QuoteOut":
        return cls(
            **q.model_dump(),
            quoted=QuotedRates(
                buy=q.rate_for(Direction.BUY),
                sell=q.rate_for(Direction.SELL),
                buy_vip=q.rate_for(Direction.BUY, vip=True),
                sell_vip=q.rate_for(Direction.SELL, vip=True),
            ),
        )


@router.put("/", summary="Replace the rate table")
async def replace_rates(
    payload: RateTableIn,
    settings: Settings = Depends(get_app_settings),
    db: Database = Depends(get_db),
):
    # Parse and validate everything before touching the stored table
    catalog = RateCatalog.from_rows(payload.rows, settings.base_currency)
    count = db.replace_rates(catalog.quotes())
    return {"status": "ok", "count": count, "codes": catalog.codes()}


@router.get("/", response_model=list[CurrencyQuote], summary="List rate quotes")
async def list_rates(db: Database = Depends(get_db)):
    return db.list_rates()


@router.get("/{code}", response_model=QuoteOut, summary="Get one currency quote")
async def get_rate(
    code: str,
    settings: Settings = Depends(get_app_settings),
    db: Database = Depends(get_db),
):
    catalog = RateCatalog(db.list_rates(), settings.base_currency)
    return QuoteOut.from_quote(catalog.get(code))
