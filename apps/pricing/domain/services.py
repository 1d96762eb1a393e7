"""
Domain services - Core business logic.
Wires repositories, the price resolver and the formatter together for
display callers (API views, management commands).
"""

import logging
from dataclasses import asdict
from decimal import Decimal

from apps.pricing.application.dto import ConversionResultDTO, DisplayPriceDTO
from apps.pricing.domain.catalog import CurrencyCatalog, DEFAULT_CATALOG
from apps.pricing.domain.formatter import CurrencyFormatter
from apps.pricing.domain.models import round_to
from apps.pricing.domain.resolver import AMOUNT_PRECISION, PriceResolver
from apps.pricing.infrastructure.persistence.repositories import (
    ExchangeRateRepository,
    ProductCurrencyPriceRepository,
    ProductRepository,
)

logger = logging.getLogger(__name__)


class ProductPricingService:
    """
    Resolves and formats storefront prices.

    Overrides and the rate table are loaded before resolution, so the
    resolver itself never touches the database.
    """

    def __init__(
        self,
        catalog: CurrencyCatalog = DEFAULT_CATALOG,
        override_repository: ProductCurrencyPriceRepository | None = None,
        rate_repository: ExchangeRateRepository | None = None,
    ):
        self.catalog = catalog
        self.formatter = CurrencyFormatter(catalog)
        self.override_repository = override_repository or ProductCurrencyPriceRepository(catalog)
        self.rate_repository = rate_repository or ExchangeRateRepository()

    def get_display_price(self, product_id, country: str) -> dict | None:
        """
        Price a product for a visitor country.

        Returns:
            Dict with the resolved and formatted price, or None if the product does not exist

        Raises:
            InvalidPriceInput: if the stored base price is not a finite number
        """
        product = ProductRepository.get_by_id(product_id)
        if product is None:
            return None

        overrides = self.override_repository.fetch_overrides(product.pk)
        rates = self.rate_repository.load_table()
        resolver = PriceResolver(rates, self.catalog)

        resolved = resolver.resolve(
            product.pk,
            country,
            product.base_price,
            product.base_currency,
            overrides,
            base_compare_price=product.compare_price,
        )

        formatted_compare = None
        if resolved.compare_amount is not None:
            formatted_compare = self.formatter.format(resolved.currency, resolved.compare_amount, resolved.symbol)

        return asdict(DisplayPriceDTO(
            product_id=str(product.pk),
            country=country,
            currency=str(resolved.currency),
            symbol=resolved.symbol,
            price=resolved.amount,
            compare_price=resolved.compare_amount,
            formatted=self.formatter.format_resolved(resolved),
            formatted_compare=formatted_compare,
            source_country=resolved.source_country,
            strategy=resolved.strategy,
            base_currency=product.base_currency,
            base_price=product.base_price,
            exchange_rate=rates.fetch_rate(product.base_currency, resolved.currency),
            warnings=[str(issue) for issue in resolved.issues],
        ))

    def convert_amount(self, source_currency: str, exchanged_currency: str, amount: Decimal) -> dict | None:
        """
        Convert an amount between two currencies using the rate table.

        Returns:
            Dict with conversion details, or None if no rate is available

        Example:
            >>> ProductPricingService().convert_amount("NPR", "USD", Decimal("1000"))
            {
                "source_currency": "NPR",
                "exchanged_currency": "USD",
                "amount": Decimal("1000"),
                "rate": Decimal("0.007500"),
                "converted_amount": Decimal("7.50"),
                "formatted_amount": "NPR 1,000",
                "formatted_converted_amount": "$7.50",
            }
        """
        rate = self.rate_repository.fetch_rate(source_currency, exchanged_currency)
        if rate is None:
            logger.warning("No exchange rate for %s/%s", source_currency, exchanged_currency)
            return None

        converted_amount = round_to(amount * rate, AMOUNT_PRECISION)

        return asdict(ConversionResultDTO(
            source_currency=source_currency,
            exchanged_currency=exchanged_currency,
            amount=amount,
            rate=rate,
            converted_amount=converted_amount,
            formatted_amount=self.formatter.format(source_currency, amount),
            formatted_converted_amount=self.formatter.format(exchanged_currency, converted_amount),
        ))

    def list_rates(self) -> dict:
        """Rates from the default currency to every supported currency."""
        base_currency = self.catalog.default_currency
        rates = self.rate_repository.load_table()

        return {
            "base_currency": base_currency,
            "rates": {
                code: rates.fetch_rate(base_currency, code)
                for code in self.catalog.supported_codes()
            },
            "symbols": dict(self.catalog.symbols()),
            "countries": dict(self.catalog.countries()),
        }
