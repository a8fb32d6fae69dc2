import itertools
from decimal import Decimal

import pytest

from cashdesk.core.errors import MalformedInputError, MissingReferenceDataError
from cashdesk.models import Classification, DenominationCount
from cashdesk.services.reconciliation import reconcile, summary_text


def counts(*pairs):
    return [DenominationCount(face_value=f, quantity=q) for f, q in pairs]


def test_czk_exact_count_matches():
    result = reconcile("CZK", 15000.00, counts((1000, 10), (200, 25)))
    assert result.classification == Classification.MATCH
    assert result.counted_total == 15000
    assert result.difference == 0
    assert result.precision == 0
    assert result.breakdown == []
    assert result.breakdown_text == ""


def test_eur_short_by_fifty_cents_is_deficit():
    result = reconcile("EUR", 532.50, counts((100, 5), (20, 1), (10, 1), (2, 1)))
    assert result.classification == Classification.DEFICIT
    assert result.counted_total == 532.0
    assert result.recorded_balance == 532.5
    assert result.difference == -0.50
    assert result.precision == 2
    assert [line.text for line in result.breakdown] == [
        "100 × 5 = 500.00",
        "20 × 1 = 20.00",
        "10 × 1 = 10.00",
        "2 × 1 = 2.00",
    ]


def test_surplus_when_more_cash_than_recorded():
    result = reconcile("EUR", 10.00, counts((10, 1), (0.2, 1), (0.05, 2)))
    assert result.classification == Classification.SURPLUS
    assert result.difference == 0.3
    assert "0.05 × 2 = 0.10" in result.breakdown_text


def test_recorded_balance_rounded_to_currency_precision():
    # CZK has no sub-crown coins, so 14999.6 recorded counts as 15000.
    result = reconcile("CZK", 14999.6, counts((5000, 3)))
    assert result.recorded_balance == 15000
    assert result.classification == Classification.MATCH


def test_float_noise_does_not_break_a_match():
    recorded = 0.1 + 0.2  # 0.30000000000000004
    result = reconcile("EUR", recorded, counts((0.1, 3)))
    assert result.classification == Classification.MATCH


def test_zero_and_negative_quantities_are_ignored():
    result = reconcile("EUR", 100, counts((50, 2), (20, 0), (10, -3), (5, 1)))
    assert result.counted_total == 105.0
    assert result.classification == Classification.SURPLUS
    faces = [line.face_value for line in result.breakdown]
    assert faces == [50, 5]


def test_breakdown_lines_sum_to_counted_total():
    result = reconcile(
        "EUR",
        0,
        counts((200, 3), (5, 7), (0.5, 9), (0.2, 11), (0.05, 13), (0.01, 17)),
    )
    total = sum(Decimal(str(line.subtotal)) for line in result.breakdown)
    assert total == Decimal(str(result.counted_total))


def test_order_of_denominations_does_not_matter():
    entries = counts((0.1, 7), (0.2, 3), (0.01, 9), (20, 1), (0.05, 11))
    seen = set()
    for perm in itertools.permutations(entries):
        r = reconcile("EUR", 21.5, perm)
        seen.add((r.counted_total, r.classification))
    assert len(seen) == 1


def test_unknown_denomination_rejected():
    with pytest.raises(MalformedInputError):
        reconcile("CZK", 100, counts((25, 4)))


def test_unknown_currency_rejected():
    with pytest.raises(MissingReferenceDataError):
        reconcile("XYZ", 100, counts((1, 1)))


def test_summary_text():
    deficit = reconcile("EUR", 532.50, counts((100, 5), (20, 1), (10, 1), (2, 1)))
    assert summary_text(deficit) == (
        "EUR: deficit of 0.50 (counted 532.00, recorded 532.50)"
    )
    match = reconcile("CZK", 200, counts((100, 2)))
    assert summary_text(match) == "CZK: counted 200 matches recorded 200"
