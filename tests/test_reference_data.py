import pytest

from cashdesk.core.errors import MalformedInputError, MissingReferenceDataError
from cashdesk.models import CashPosition, CurrencyQuote, Direction
from cashdesk.services.cash_flow import balance_of, latest_balances, positions_from_rows
from cashdesk.services.rates.catalog import RateCatalog

from .conftest import CASH_FLOW_ROWS, RATE_ROWS


def test_catalog_parses_positional_rows():
    catalog = RateCatalog.from_rows(RATE_ROWS, "CZK")
    assert catalog.codes() == ["EUR", "HUF", "USD"]
    eur = catalog.get("eur")
    assert eur.rate_amount == 1
    assert eur.sell_rate == 25.30
    assert eur.cash_limit == 50000
    assert catalog.get("HUF").cash_limit is None
    assert [q.code for q in catalog.quotes()] == ["EUR", "USD", "HUF"]


def test_quoted_rate_by_direction_and_tier():
    catalog = RateCatalog.from_rows(RATE_ROWS, "CZK")
    assert catalog.quoted_rate("EUR", Direction.BUY) == 24.10
    assert catalog.quoted_rate("EUR", Direction.SELL) == 25.30
    assert catalog.quoted_rate("EUR", Direction.BUY, vip=True) == 24.40
    assert catalog.quoted_rate("EUR", Direction.SELL, vip=True) == 25.00


def test_seven_column_row_has_no_cash_limit():
    q = CurrencyQuote.from_row(["", "gbp", 1, 28.0, 29.5, 28.3, 29.2])
    assert q.code == "GBP"
    assert q.flag is None
    assert q.cash_limit is None


@pytest.mark.parametrize(
    "row",
    [
        ["eu", "EUR", 0, 24.1, 25.3, 24.4, 25.0],
        ["eu", "EUR", 1, -1, 25.3, 24.4, 25.0],
        ["eu", "", 1, 24.1, 25.3, 24.4, 25.0],
        ["eu", "EUR", 1, "abc", 25.3, 24.4, 25.0],
        ["eu", "EUR", 1, 24.1],
    ],
)
def test_bad_rate_rows_rejected(row):
    with pytest.raises(MalformedInputError):
        CurrencyQuote.from_row(row)


def test_catalog_rejects_base_currency_and_duplicates():
    with pytest.raises(MalformedInputError):
        RateCatalog.from_rows([["cz", "CZK", 1, 1, 1, 1, 1]], "CZK")
    with pytest.raises(MalformedInputError):
        RateCatalog.from_rows([RATE_ROWS[0], RATE_ROWS[0]], "CZK")


def test_catalog_never_guesses_missing_rates():
    with pytest.raises(MissingReferenceDataError):
        RateCatalog([], "CZK").get("EUR")
    with pytest.raises(MissingReferenceDataError):
        RateCatalog.from_rows(RATE_ROWS, "CZK").get("GBP")


def test_latest_row_per_currency_wins():
    balances = latest_balances(positions_from_rows(CASH_FLOW_ROWS))
    assert balances == {"CZK": 100000.0, "EUR": 532.5, "USD": 1200.0}


def test_cash_flow_row_validation():
    assert CashPosition.from_row(["d", "x", "eur", 0, 0, "12.5"]).currency == "EUR"
    with pytest.raises(MalformedInputError):
        CashPosition.from_row(["d", "x", "EUR", 0])
    with pytest.raises(MalformedInputError):
        CashPosition.from_row(["d", "x", "EUR", 0, 0, "n/a"])
    with pytest.raises(MalformedInputError):
        CashPosition.from_row(["d", "x", "", 0, 0, 10])


def test_balance_of_missing_data():
    with pytest.raises(MissingReferenceDataError):
        balance_of({}, "EUR")
    with pytest.raises(MissingReferenceDataError):
        balance_of({"CZK": 1.0}, "EUR")
    assert balance_of({"EUR": 3.0}, "eur") == 3.0
