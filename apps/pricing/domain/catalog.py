"""
Currency catalog - currency symbols and the country -> currency table.

Tables are read-only mappings built once at import time.
"""

from types import MappingProxyType
from typing import Mapping

from apps.pricing.domain.models import CurrencyCode


CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType({
    CurrencyCode.NPR.value: "NPR",
    CurrencyCode.USD.value: "$",
    CurrencyCode.AUD.value: "$",
    CurrencyCode.GBP.value: "£",
    CurrencyCode.CAD.value: "$",
    CurrencyCode.EUR.value: "€",
    CurrencyCode.INR.value: "₹",
    CurrencyCode.CNY.value: "¥",
    CurrencyCode.JPY.value: "¥",
    CurrencyCode.SGD.value: "$",
    CurrencyCode.AED.value: "د.إ",
})

# Country labels as stored by the storefront (case-sensitive).
COUNTRY_CURRENCIES: Mapping[str, str] = MappingProxyType({
    "Australia": CurrencyCode.AUD.value,
    "USA": CurrencyCode.USD.value,
    "UK": CurrencyCode.GBP.value,
    "Canada": CurrencyCode.CAD.value,
    "India": CurrencyCode.INR.value,
    "China": CurrencyCode.CNY.value,
    "Japan": CurrencyCode.JPY.value,
    "Singapore": CurrencyCode.SGD.value,
    "UAE": CurrencyCode.AED.value,
    "Nepal": CurrencyCode.NPR.value,
    "NPR": CurrencyCode.NPR.value,
})

DEFAULT_CURRENCY = CurrencyCode.NPR.value


class CurrencyCatalog:
    """Lookup over immutable symbol and country tables. Never raises."""

    def __init__(
        self,
        symbols: Mapping[str, str] = CURRENCY_SYMBOLS,
        countries: Mapping[str, str] = COUNTRY_CURRENCIES,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        self._symbols = MappingProxyType(dict(symbols))
        self._countries = MappingProxyType(dict(countries))
        self._default_currency = str(default_currency)

    @property
    def default_currency(self) -> str:
        return self._default_currency

    def symbol_for(self, currency) -> str:
        code = str(currency)
        return self._symbols.get(code, code)

    def currency_for_country(self, country) -> str:
        if not isinstance(country, str):
            return self._default_currency
        return self._countries.get(country, self._default_currency)

    def is_supported(self, currency) -> bool:
        return str(currency) in self._symbols

    def knows_country(self, country) -> bool:
        return isinstance(country, str) and country in self._countries

    def supported_codes(self) -> list[str]:
        return list(self._symbols)

    def symbols(self) -> Mapping[str, str]:
        return self._symbols

    def countries(self) -> Mapping[str, str]:
        return self._countries


DEFAULT_CATALOG = CurrencyCatalog()
