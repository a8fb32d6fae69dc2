from fastapi import Depends, Request

from cashdesk.core.config import Settings, get_settings
from cashdesk.db.dal import Database
from cashdesk.services.orders import OrderService


def get_app_settings(request: Request) -> Settings:
    # create_app stores the (possibly test-injected) settings on app.state
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_order_service(
    db: Database = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> OrderService:
    return OrderService(db, settings)
