"""Order submission workflow.

validate -> resolve rate -> price -> liquidity check -> atomic append.

Every rejection is terminal for the submission: nothing is written and nothing
is retried. The ledger's ``append_order`` is the only place that advances the
order-number counter.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, Optional, Protocol

from cashdesk.core.config import Settings
from cashdesk.models import (
    CashPosition,
    CurrencyQuote,
    Direction,
    OrderIn,
    OrderRecord,
    Settlement,
)
from .cash_flow import balance_of, latest_balances
from .pricing import compute_settlement, ensure_accepted
from .rates.catalog import RateCatalog

logger = logging.getLogger("cashdesk.orders")


class OrderLedger(Protocol):
    def list_rates(self) -> list[CurrencyQuote]: ...

    def cash_positions(self) -> list[CashPosition]: ...

    def append_order(
        self,
        order: OrderIn,
        total_paid: float,
        submitted_by: str,
        now: datetime,
        number_width: int = 6,
    ) -> OrderRecord: ...


class OrderService:
    def __init__(
        self,
        ledger: OrderLedger,
        settings: Settings,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._ledger = ledger
        self._settings = settings
        self._clock = clock or (lambda: datetime.now(settings.tz))

    def catalog(self) -> RateCatalog:
        return RateCatalog(self._ledger.list_rates(), self._settings.base_currency)

    def _resolve(self, order: OrderIn, catalog: RateCatalog) -> tuple[OrderIn, CurrencyQuote]:
        quote = catalog.get(order.currency)
        if order.rate is None:
            order = order.model_copy(
                update={"rate": quote.rate_for(order.direction, order.vip)}
            )
        return order, quote

    def quote(self, order: OrderIn) -> tuple[OrderIn, Settlement]:
        """Price ``order`` and decide acceptance without writing anything."""
        order, quote = self._resolve(order, self.catalog())
        balances = latest_balances(self._ledger.cash_positions())
        capital = None
        if order.direction == Direction.BUY:
            capital = balance_of(balances, self._settings.base_currency)
        settlement = compute_settlement(
            order,
            quote,
            balances,
            capital,
            base_currency=self._settings.base_currency,
        )
        return order, settlement

    def submit(self, order: OrderIn, operator: Optional[str] = None) -> OrderRecord:
        order, settlement = self.quote(order)
        if not settlement.accepted:
            logger.info(
                "order rejected: %s %s %s short by %s %s",
                order.direction.value,
                order.amount,
                order.currency,
                settlement.shortfall,
                settlement.side,
            )
        ensure_accepted(settlement)

        submitted_by = order.submitted_by or operator or self._settings.default_operator
        record = self._ledger.append_order(
            order,
            total_paid=settlement.total_paid,
            submitted_by=submitted_by,
            now=self._clock(),
            number_width=self._settings.order_number_width,
        )
        logger.info(
            "order %s accepted: %s %s %s total %.2f",
            record.order_number,
            record.direction.value,
            record.amount,
            record.currency,
            record.total_paid,
        )
        return record
