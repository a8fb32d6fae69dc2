"""Denomination reconciliation.

Compares physically counted notes and coins with the recorded balance of a
currency. Sums are done in ``Decimal`` so the counted total does not depend on
the order the denominations are listed in, and the itemized breakdown adds up
to the counted total exactly.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Iterable, List, Tuple

from cashdesk.core.errors import MalformedInputError
from cashdesk.models.reconciliation import (
    BreakdownLine,
    Classification,
    DenominationCount,
    ReconciliationResult,
)
from .money import denomination_faces, format_amount, precision, quantize, to_decimal


def _format_face(face: Decimal) -> str:
    return format(face.normalize(), "f")


def _counted_lines(
    currency: str, counted: Iterable[DenominationCount], places: int
) -> List[Tuple[Decimal, int, Decimal]]:
    allowed = {to_decimal(f) for f in denomination_faces(currency)}
    lines = []
    for entry in counted:
        face = to_decimal(entry.face_value)
        if face not in allowed:
            raise MalformedInputError(
                f"{entry.face_value} is not a {currency.upper()} denomination"
            )
        if entry.quantity <= 0:
            continue
        lines.append((face, entry.quantity, quantize(face * entry.quantity, places)))
    return lines


def classify(difference: Decimal, places: int) -> Classification:
    if abs(difference) < Decimal(1).scaleb(-places):
        return Classification.MATCH
    return Classification.SURPLUS if difference > 0 else Classification.DEFICIT


def reconcile(
    currency: str, recorded_balance: float, counted: Iterable[DenominationCount]
) -> ReconciliationResult:
    currency = currency.upper()
    places = precision(currency)
    lines = _counted_lines(currency, counted, places)

    counted_total = quantize(sum((sub for _, _, sub in lines), Decimal(0)), places)
    recorded = quantize(recorded_balance, places)
    difference = counted_total - recorded
    classification = classify(difference, places)

    breakdown: List[BreakdownLine] = []
    if classification != Classification.MATCH:
        breakdown = [
            BreakdownLine(
                face_value=float(face),
                quantity=qty,
                subtotal=float(sub),
                text=f"{_format_face(face)} × {qty} = {format_amount(sub, places)}",
            )
            for face, qty, sub in lines
        ]

    return ReconciliationResult(
        currency=currency,
        counted_total=float(counted_total),
        recorded_balance=float(recorded),
        difference=float(difference),
        precision=places,
        classification=classification,
        breakdown=breakdown,
        breakdown_text="\n".join(line.text for line in breakdown),
    )


def summary_text(result: ReconciliationResult) -> str:
    """One-line operator message for the result."""
    p = result.precision
    counted = format_amount(result.counted_total, p)
    recorded = format_amount(result.recorded_balance, p)
    if result.classification == Classification.MATCH:
        return f"{result.currency}: counted {counted} matches recorded {recorded}"
    return (
        f"{result.currency}: {result.classification.value.lower()} of "
        f"{format_amount(abs(result.difference), p)} "
        f"(counted {counted}, recorded {recorded})"
    )
