import pytest
from fastapi.testclient import TestClient

from cashdesk.core.config import Settings
from cashdesk.db.dal import Database
from cashdesk.db.migrate import apply_migrations
from cashdesk.main import create_app

# (flag, code, rate_amount, buy, sell, buy_vip, sell_vip, cash_limit)
RATE_ROWS = [
    ["eu", "EUR", 1, 24.10, 25.30, 24.40, 25.00, 50000],
    ["us", "USD", 1, 21.90, 23.20, 22.10, 22.90, 30000],
    ["hu", "HUF", 100, 6.10, 6.70, 6.20, 6.60, None],
]

# Cash-flow ledger rows: currency at column 2, running balance at column 5.
CASH_FLOW_ROWS = [
    ["2026-10-19", "open", "CZK", 0, 0, 100000.00],
    ["2026-10-19", "open", "EUR", 0, 0, 500.00],
    ["2026-10-19", "open", "USD", 0, 0, 1200.00],
    ["2026-10-19", "adjust", "EUR", 0, 0, 532.50],
]


@pytest.fixture
def settings(tmp_path):
    s = Settings(db_path=tmp_path / "ledger.sqlite3", data_dir=tmp_path, debug=False)
    s.init_post_load()
    return s


@pytest.fixture
def db(settings):
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def client(settings):
    app = create_app(settings_override=settings)
    return TestClient(app)


@pytest.fixture
def seeded_client(client):
    assert client.put("/rates/", json={"rows": RATE_ROWS}).status_code == 200
    assert client.put("/cash-flow/", json={"rows": CASH_FLOW_ROWS}).status_code == 200
    return client
