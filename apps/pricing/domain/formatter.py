"""
Display formatting for prices.

NPR is shown with a space after the symbol and no decimals ("NPR 1,501"),
every other currency with the symbol attached and two decimals ("$19.50").
Only the rendered string is rounded; amounts are never modified.
"""

from decimal import Decimal

from apps.pricing.domain.catalog import CurrencyCatalog, DEFAULT_CATALOG
from apps.pricing.domain.models import CurrencyCode, ResolvedPrice, round_to, to_decimal

WHOLE_UNIT_CURRENCIES = frozenset({CurrencyCode.NPR.value})


class CurrencyFormatter:

    def __init__(self, catalog: CurrencyCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    @staticmethod
    def decimal_places(currency) -> int:
        return 0 if str(currency) in WHOLE_UNIT_CURRENCIES else 2

    def format(self, currency, amount, symbol: str | None = None) -> str:
        """
        Render an amount with its currency symbol.

        Example:
            >>> CurrencyFormatter().format("NPR", Decimal("1500.5"))
            'NPR 1,501'
            >>> CurrencyFormatter().format("USD", 19.5, "$")
            '$19.50'
        """
        currency = str(currency)
        if symbol is None:
            symbol = self.catalog.symbol_for(currency)

        places = self.decimal_places(currency)
        value = round_to(to_decimal(amount), Decimal(1).scaleb(-places))
        number = f"{value:,.{places}f}"

        if currency in WHOLE_UNIT_CURRENCIES:
            return f"{symbol} {number}"
        return f"{symbol}{number}"

    def format_range(self, minimum, maximum, currency, symbol: str | None = None) -> str:
        return f"{self.format(currency, minimum, symbol)} - {self.format(currency, maximum, symbol)}"

    def format_resolved(self, resolved: ResolvedPrice) -> str:
        return self.format(resolved.currency, resolved.amount, resolved.symbol)
