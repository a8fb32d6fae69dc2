from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from cashdesk.core.logging import current_operator
from cashdesk.db.dal import Database
from cashdesk.models import OrderIn, OrderRecord, Settlement
from cashdesk.services.orders import OrderService
from .deps import get_db, get_order_service

router = APIRouter(prefix="/orders", tags=["orders"])


# Response Models --------------------------------------------------
class OrderOut(OrderRecord):
    ledger_row: list = []

    @classmethod
    def from_record(cls, record: OrderRecord) -> "OrderOut":
        return cls(**record.model_dump(), ledger_row=record.as_ledger_row())


class OrderQuoteOut(BaseModel):
    order: OrderIn
    settlement: Settlement


# Routes -----------------------------------------------------------
@router.post(
    "/", response_model=OrderOut, status_code=201, summary="Submit an order"
)
async def submit_order(
    payload: OrderIn,
    service: OrderService = Depends(get_order_service),
):
    # Liquidity and reference-data rejections surface via the domain error handlers
    record = service.submit(payload, operator=current_operator())
    return OrderOut.from_record(record)


@router.post(
    "/quote",
    response_model=OrderQuoteOut,
    summary="Price an order and check liquidity without recording it",
)
async def quote_order(
    payload: OrderIn,
    service: OrderService = Depends(get_order_service),
):
    order, settlement = service.quote(payload)
    return OrderQuoteOut(order=order, settlement=settlement)


@router.get("/", response_model=List[OrderOut], summary="List recorded orders")
async def list_orders(
    trade_date: Optional[date] = Query(None, description="Filter: trade date"),
    currency: Optional[str] = Query(None, description="Filter by currency code"),
    db: Database = Depends(get_db),
):
    return [OrderOut.from_record(r) for r in db.list_orders(trade_date, currency)]


@router.get(
    "/{order_number}", response_model=OrderOut, summary="Get one recorded order"
)
async def get_order(order_number: str, db: Database = Depends(get_db)):
    record = db.get_order(order_number)
    if record is None:
        raise HTTPException(status_code=404, detail="order not found")
    return OrderOut.from_record(record)
