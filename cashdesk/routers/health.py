from fastapi import APIRouter, Depends

from cashdesk.core.config import Settings
from cashdesk.db.dal import Database
from .deps import get_app_settings, get_db

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness and ledger summary")
async def health(
    settings: Settings = Depends(get_app_settings),
    db: Database = Depends(get_db),
):
    return {
        "status": "ok",
        "version": settings.version,
        "base_currency": settings.base_currency,
        "last_order_number": db.last_order_number(),
    }
