"""Database schema DDL definitions and initialization utilities.

Tables:
  - rates: current rate table, one row per foreign currency
  - cash_flow: cash-flow ledger rows (currency + running balance)
  - orders: append-only order ledger
  - metadata: key/value store (order counter, schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
ORDER_COUNTER_KEY = "last_order_number"

RATES_DDL = f"""
CREATE TABLE IF NOT EXISTS rates (
    code TEXT PRIMARY KEY,
    flag TEXT,
    rate_amount REAL NOT NULL CHECK (rate_amount > 0),
    buy_rate REAL NOT NULL,
    sell_rate REAL NOT NULL,
    buy_rate_vip REAL NOT NULL,
    sell_rate_vip REAL NOT NULL,
    cash_limit REAL,
    position INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

CASH_FLOW_DDL = f"""
CREATE TABLE IF NOT EXISTS cash_flow (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    currency TEXT NOT NULL,
    balance REAL NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

ORDERS_DDL = f"""
CREATE TABLE IF NOT EXISTS orders (
    order_number TEXT PRIMARY KEY,
    seq INTEGER NOT NULL UNIQUE,
    direction TEXT NOT NULL CHECK (direction IN ('Buy','Sell')),
    currency TEXT NOT NULL,
    rate REAL NOT NULL CHECK (rate > 0),
    amount INTEGER NOT NULL CHECK (amount > 0),
    discount_pct REAL NOT NULL DEFAULT 0,
    vip INTEGER NOT NULL DEFAULT 0,
    submitted_by TEXT NOT NULL,
    trade_date TEXT NOT NULL, -- ISO date (YYYY-MM-DD), counter local time
    trade_time TEXT NOT NULL, -- HH:MM:SS, counter local time
    total_paid REAL NOT NULL,
    note TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

CASH_FLOW_CURRENCY_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_cash_flow_currency ON cash_flow(currency, id);"
)
ORDERS_DATE_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_orders_date ON orders(trade_date, seq);"
)

DDL_ORDER: Sequence[str] = (
    RATES_DDL,
    CASH_FLOW_DDL,
    ORDERS_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        _ensure_order_counter(cur)
        for ddl in (CASH_FLOW_CURRENCY_INDEX_DDL, ORDERS_DATE_INDEX_DDL):
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()


def _ensure_order_counter(cur: sqlite3.Cursor) -> None:
    """Seed the order counter at 0 unless it already exists."""
    cur.execute(
        "INSERT OR IGNORE INTO metadata (key, value) VALUES (?, '0')",
        (ORDER_COUNTER_KEY,),
    )
