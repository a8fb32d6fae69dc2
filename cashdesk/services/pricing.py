"""Order pricing and liquidity validation.

``compute_settlement`` is a pure function of its inputs: it prices one order
against a rate-table quote and decides whether the counter can cover it.

Rules:
- total_paid = round2(amount / rate_amount * (rate - discount_pct / 100 * rate)),
  always in the base currency at 2 decimal places.
- Sell: the counter must already hold at least ``amount`` units of the foreign
  currency (compared in foreign units, not against total_paid).
- Buy: base-currency capital must cover total_paid.
"""

from __future__ import annotations
import math
from decimal import Decimal
from numbers import Real
from typing import Mapping, Optional

from cashdesk.core.errors import (
    InsufficientLiquidityError,
    MalformedInputError,
    MissingReferenceDataError,
)
from cashdesk.models.order import Direction, OrderIn, Settlement
from cashdesk.models.rates import CurrencyQuote
from .money import quantize, round2, to_decimal

DEFAULT_BASE_CURRENCY = "CZK"


def _require_number(value: object, name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise MalformedInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise MalformedInputError(f"{name} must be finite, got {value!r}")
    return to_decimal(value)


def _require_rate(rate: object) -> Decimal:
    if rate is None:
        raise MalformedInputError("rate is required")
    d = _require_number(rate, "rate")
    if d <= 0:
        raise MalformedInputError(f"rate must be positive, got {rate!r}")
    return d


def _require_amount(amount: object) -> int:
    d = _require_number(amount, "amount")
    if d != d.to_integral_value() or d <= 0:
        raise MalformedInputError(f"amount must be a positive integer, got {amount!r}")
    return int(d)


def _require_discount(discount_pct: object) -> Decimal:
    d = _require_number(discount_pct, "discount_pct")
    if not (0 <= d <= 100):
        raise MalformedInputError(f"discount_pct must be within [0, 100], got {discount_pct!r}")
    return d


def price(amount: int, rate_amount: float, rate: float, discount_pct: float = 0) -> float:
    """Base-currency total for ``amount`` units quoted at ``rate`` per ``rate_amount``."""
    r = to_decimal(rate)
    effective = r - to_decimal(discount_pct) / 100 * r
    return round2(Decimal(amount) / to_decimal(rate_amount) * effective)


def compute_settlement(
    order: OrderIn,
    quote: CurrencyQuote,
    cash_available: Mapping[str, float],
    capital_available: Optional[float],
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> Settlement:
    """Price ``order`` and decide whether the counter can cover it.

    ``capital_available`` is the base-currency balance; only Buy orders read it,
    so a Sell may pass ``None``.
    """
    rate = _require_rate(order.rate)
    amount = _require_amount(order.amount)
    discount = _require_discount(order.discount_pct)
    currency = (order.currency or "").strip().upper()
    if not currency:
        raise MalformedInputError("currency is required")
    if currency != quote.code:
        raise MalformedInputError(
            f"order currency {currency} does not match quote {quote.code}"
        )

    total_paid = price(amount, quote.rate_amount, rate, discount)

    if order.direction == Direction.SELL:
        side = currency
        required = Decimal(amount)
        if currency not in cash_available:
            raise MissingReferenceDataError(f"no cash balance recorded for {currency}")
        available = _require_number(cash_available[currency], "cash available")
    else:
        side = base_currency.upper()
        required = to_decimal(total_paid)
        if capital_available is None:
            raise MissingReferenceDataError(f"no cash balance recorded for {side}")
        available = _require_number(capital_available, "capital available")

    accepted = available >= required
    return Settlement(
        total_paid=total_paid,
        accepted=accepted,
        side=side,
        required=float(required),
        available=float(available),
        shortfall=None if accepted else float(quantize(required - available, 2)),
    )


def ensure_accepted(settlement: Settlement) -> Settlement:
    if not settlement.accepted:
        raise InsufficientLiquidityError(
            side=settlement.side,
            required=settlement.required,
            available=settlement.available,
            shortfall=settlement.shortfall or 0.0,
        )
    return settlement
