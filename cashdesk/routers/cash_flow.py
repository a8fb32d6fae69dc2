from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cashdesk.db.dal import Database
from cashdesk.services.cash_flow import latest_balances, positions_from_rows
from .deps import get_db

router = APIRouter(prefix="/cash-flow", tags=["cash-flow"])


class CashFlowIn(BaseModel):
    rows: List[List[Any]] = Field(
        ..., description="Ledger rows; currency at column 2, balance at column 5"
    )


@router.put("/", summary="Replace the cash-flow ledger snapshot")
async def replace_cash_flow(payload: CashFlowIn, db: Database = Depends(get_db)):
    positions = positions_from_rows(payload.rows)
    count = db.replace_cash_flow(positions)
    return {"status": "ok", "count": count}


@router.get(
    "/balances",
    response_model=Dict[str, float],
    summary="Current balance per currency",
)
async def balances(db: Database = Depends(get_db)):
    return latest_balances(db.cash_positions())
