"""Rate catalog built from the externally supplied rate table.

The host hands over raw positional rows; they are parsed once here into
``CurrencyQuote`` records so nothing downstream indexes rows by position.
Lookups for unlisted currencies fail loudly; the catalog never guesses a rate.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from cashdesk.core.errors import MalformedInputError, MissingReferenceDataError
from cashdesk.models.order import Direction
from cashdesk.models.rates import CurrencyQuote


class RateCatalog:
    def __init__(self, quotes: Iterable[CurrencyQuote], base_currency: str):
        self.base_currency = base_currency.upper()
        self._quotes: Dict[str, CurrencyQuote] = {}
        for q in quotes:
            if q.code == self.base_currency:
                raise MalformedInputError(
                    f"rate table lists the base currency {self.base_currency}"
                )
            if q.code in self._quotes:
                raise MalformedInputError(f"duplicate rate row for {q.code}")
            self._quotes[q.code] = q

    @classmethod
    def from_rows(
        cls, rows: Iterable[Sequence[Any]], base_currency: str
    ) -> "RateCatalog":
        return cls((CurrencyQuote.from_row(r) for r in rows), base_currency)

    def __len__(self) -> int:
        return len(self._quotes)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._quotes

    def codes(self) -> List[str]:
        return sorted(self._quotes)

    def quotes(self) -> List[CurrencyQuote]:
        """Quotes in rate-table order."""
        return list(self._quotes.values())

    def get(self, code: str) -> CurrencyQuote:
        if not self._quotes:
            raise MissingReferenceDataError("rate table is empty or missing")
        quote = self._quotes.get(code.upper())
        if quote is None:
            raise MissingReferenceDataError(f"currency {code.upper()} is not in the rate table")
        return quote

    def quoted_rate(self, code: str, direction: Direction, vip: bool = False) -> float:
        return self.get(code).rate_for(direction, vip)
