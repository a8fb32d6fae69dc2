import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cashdesk.db.dal import Database
from cashdesk.models import ReconciliationIn, ReconciliationResult
from cashdesk.services.cash_flow import balance_of, latest_balances
from cashdesk.services.money import denomination_sets, precision
from cashdesk.services.reconciliation import reconcile, summary_text
from .deps import get_db

logger = logging.getLogger("cashdesk.reconciliation")

router = APIRouter(prefix="/reconciliation", tags=["reconciliation"])


class DenominationSheet(BaseModel):
    currency: str
    precision: int
    notes: List[float]
    coins: List[float]


class ReconciliationOut(ReconciliationResult):
    summary: str


@router.get(
    "/{currency}/denominations",
    response_model=DenominationSheet,
    summary="Notes and coins to count for a currency",
)
async def denominations(currency: str):
    currency = currency.upper()
    notes, coins = denomination_sets(currency)
    return DenominationSheet(
        currency=currency,
        precision=precision(currency),
        notes=list(notes),
        coins=list(coins),
    )


@router.post(
    "/{currency}",
    response_model=ReconciliationOut,
    summary="Reconcile counted cash against the recorded balance",
)
async def reconcile_currency(
    currency: str,
    payload: ReconciliationIn,
    db: Database = Depends(get_db),
):
    currency = currency.upper()
    recorded = payload.recorded_balance
    if recorded is None:
        recorded = balance_of(latest_balances(db.cash_positions()), currency)
    result = reconcile(currency, recorded, payload.counts)
    summary = summary_text(result)
    logger.info(summary)
    return ReconciliationOut(**result.model_dump(), summary=summary)
