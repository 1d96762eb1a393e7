"""
In-memory rate table.

The resolver never talks to the database: callers load the rows they need
into a RateTable first and hand it over.
"""

from decimal import Decimal
from typing import Iterable

from apps.pricing.domain.catalog import DEFAULT_CURRENCY
from apps.pricing.domain.interfaces import BaseRateStore
from apps.pricing.domain.models import ExchangeRate, round_to

RATE_PRECISION = Decimal("0.000001")


class RateTable(BaseRateStore):
    """
    Read-only set of exchange rates.

    Lookup order: identical currencies -> 1, direct pair, inverse pair,
    then a cross rate through the pivot currency (NPR by default).
    Returns None when no path is known.
    """

    def __init__(self, rates: Iterable[ExchangeRate] = (), pivot: str = DEFAULT_CURRENCY):
        self.pivot = str(pivot)
        self._rates: dict[tuple[str, str], Decimal] = {}
        for rate in rates:
            self._rates[(rate.source_currency, rate.exchanged_currency)] = rate.rate_value

    def __len__(self):
        return len(self._rates)

    def _pair(self, from_currency: str, to_currency: str) -> Decimal | None:
        if from_currency == to_currency:
            return Decimal("1")
        direct = self._rates.get((from_currency, to_currency))
        if direct is not None:
            return direct
        inverse = self._rates.get((to_currency, from_currency))
        if inverse is not None:
            return Decimal("1") / inverse
        return None

    def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        from_currency, to_currency = str(from_currency), str(to_currency)
        if from_currency == to_currency:
            return Decimal("1")

        direct = self._rates.get((from_currency, to_currency))
        if direct is not None:
            return direct

        rate = self._pair(from_currency, to_currency)
        if rate is None and self.pivot not in (from_currency, to_currency):
            to_pivot = self._pair(from_currency, self.pivot)
            from_pivot = self._pair(self.pivot, to_currency)
            if to_pivot is not None and from_pivot is not None:
                rate = to_pivot * from_pivot

        if rate is None:
            return None
        return round_to(rate, RATE_PRECISION)
