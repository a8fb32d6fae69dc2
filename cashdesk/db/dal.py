"""Data Access Layer for the counter ledger.

Responsibilities
----------------
- Store the current rate table and cash-flow ledger supplied by the host.
- Append orders together with the order-number counter in one transaction, so
  a failed write leaves neither a row nor an advanced counter behind.
- Hand back named records (``CurrencyQuote``, ``CashPosition``,
  ``OrderRecord``) rather than positional rows.
"""

from __future__ import annotations

from pathlib import Path
import logging
import sqlite3
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from cashdesk.core.errors import LedgerWriteError
from cashdesk.models import CashPosition, CurrencyQuote, OrderIn, OrderRecord
from .schema import BASIC_UTC_NOW, ORDER_COUNTER_KEY

logger = logging.getLogger("cashdesk.db")


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    # Rate table
    def replace_rates(self, quotes: Iterable[CurrencyQuote]) -> int:
        """Swap the whole rate table for ``quotes``; returns the row count."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM rates")
            count = 0
            for position, q in enumerate(quotes):
                cur.execute(
                    f"""
                    INSERT INTO rates (
                        code, flag, rate_amount, buy_rate, sell_rate,
                        buy_rate_vip, sell_rate_vip, cash_limit, position, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ({BASIC_UTC_NOW}))
                    """,
                    (
                        q.code,
                        q.flag,
                        q.rate_amount,
                        q.buy_rate,
                        q.sell_rate,
                        q.buy_rate_vip,
                        q.sell_rate_vip,
                        q.cash_limit,
                        position,
                    ),
                )
                count += 1
            conn.commit()
            return count

    def list_rates(self) -> List[CurrencyQuote]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT code, flag, rate_amount, buy_rate, sell_rate,
                       buy_rate_vip, sell_rate_vip, cash_limit
                FROM rates ORDER BY position, code
                """
            )
            return [CurrencyQuote(**dict(r)) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Cash-flow ledger
    def replace_cash_flow(self, positions: Iterable[CashPosition]) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM cash_flow")
            count = 0
            for p in positions:
                cur.execute(
                    f"""
                    INSERT INTO cash_flow (currency, balance, created_at)
                    VALUES (?, ?, ({BASIC_UTC_NOW}))
                    """,
                    (p.currency, p.balance),
                )
                count += 1
            conn.commit()
            return count

    def cash_positions(self) -> List[CashPosition]:
        """Ledger rows in insertion order (later rows supersede earlier ones)."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT currency, balance FROM cash_flow ORDER BY id")
            return [CashPosition(**dict(r)) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Orders
    def last_order_number(self) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (ORDER_COUNTER_KEY,))
            row = cur.fetchone()
            return int(row[0]) if row else 0

    def append_order(
        self,
        order: OrderIn,
        total_paid: float,
        submitted_by: str,
        now: datetime,
        number_width: int = 6,
    ) -> OrderRecord:
        """Advance the order counter and append the order row atomically."""
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = self._connect()
            cur = conn.cursor()
            # IMMEDIATE takes the write lock before the counter is read.
            cur.execute("BEGIN IMMEDIATE")
            cur.execute("SELECT value FROM metadata WHERE key = ?", (ORDER_COUNTER_KEY,))
            row = cur.fetchone()
            seq = (int(row[0]) if row else 0) + 1
            order_number = str(seq).zfill(number_width)
            cur.execute(
                f"""
                INSERT INTO orders (
                    order_number, seq, direction, currency, rate, amount, discount_pct,
                    vip, submitted_by, trade_date, trade_time, total_paid, note, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ({BASIC_UTC_NOW}))
                """,
                (
                    order_number,
                    seq,
                    order.direction.value,
                    order.currency,
                    order.rate,
                    order.amount,
                    order.discount_pct,
                    1 if order.vip else 0,
                    submitted_by,
                    now.date().isoformat(),
                    now.strftime("%H:%M:%S"),
                    total_paid,
                    order.note,
                ),
            )
            cur.execute(
                f"""
                INSERT INTO metadata (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                    updated_at = ({BASIC_UTC_NOW})
                """,
                (ORDER_COUNTER_KEY, str(seq)),
            )
            conn.commit()
        except sqlite3.Error as e:
            if conn is not None:
                conn.rollback()
            raise LedgerWriteError(f"failed to append order: {e}") from e
        finally:
            if conn is not None:
                conn.close()

        record = self.get_order(order_number)
        if record is None:
            raise LedgerWriteError(f"order {order_number} not found after append")
        logger.debug("appended order %s", order_number)
        return record

    def get_order(self, order_number: str) -> Optional[OrderRecord]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM orders WHERE order_number = ?", (order_number,))
            row = cur.fetchone()
            return _row_to_order(dict(row)) if row else None

    def list_orders(
        self,
        trade_date: Optional[date] = None,
        currency: Optional[str] = None,
    ) -> List[OrderRecord]:
        query = "SELECT * FROM orders WHERE 1=1"
        params: List[Any] = []
        if trade_date:
            query += " AND trade_date = ?"
            params.append(trade_date.isoformat())
        if currency:
            query += " AND currency = ?"
            params.append(currency.upper())
        query += " ORDER BY seq ASC"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query, params)
            return [_row_to_order(dict(r)) for r in cur.fetchall()]


def _row_to_order(row: Dict[str, Any]) -> OrderRecord:
    created = row.get("created_at")
    if created:
        row["created_at"] = datetime.fromisoformat(created.replace("Z", ""))
    return OrderRecord(**row)
