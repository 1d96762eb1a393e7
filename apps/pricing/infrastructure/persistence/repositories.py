"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.pricing.domain.catalog import CurrencyCatalog, DEFAULT_CATALOG, DEFAULT_CURRENCY
from apps.pricing.domain.interfaces import BaseOverrideStore, BaseRateStore
from apps.pricing.domain.models import (
    ExchangeRate as ExchangeRateRecord,
    ProductCurrencyPrice as ProductCurrencyPriceRecord,
)
from apps.pricing.domain.rates import RateTable
from apps.pricing.infrastructure.persistence.models import (
    ExchangeRate,
    Product,
    ProductCurrencyPrice,
    Provider,
)

logger = logging.getLogger(__name__)


class ProductRepository:
    """Repository for Product aggregate."""

    @staticmethod
    def get_by_id(product_id) -> Optional[Product]:
        """Get product by id; None for unknown or malformed ids."""
        try:
            return Product.objects.get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return None


class ProductCurrencyPriceRepository(BaseOverrideStore):
    """Repository for per-country price overrides."""

    def __init__(self, catalog: CurrencyCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    @staticmethod
    def to_record(row: ProductCurrencyPrice) -> ProductCurrencyPriceRecord:
        return ProductCurrencyPriceRecord(
            product_id=str(row.product_id),
            country=row.country,
            currency=row.currency,
            symbol=row.symbol,
            price=row.price,
            compare_price=row.compare_price,
        )

    def fetch_overrides(self, product_id) -> list[ProductCurrencyPriceRecord]:
        """
        Active overrides for a product as validated domain records,
        in creation order.

        Rows failing validation are logged and skipped.
        """
        rows = ProductCurrencyPrice.objects.filter(
            product_id=product_id,
            is_active=True,
        ).order_by("created_at", "id")

        records = []
        for row in rows:
            try:
                records.append(self.to_record(row))
            except ValueError as e:
                logger.error("Skipping invalid price override %s: %s", row.pk, e)
        return records

    @staticmethod
    def get_for_product(product_id) -> List[ProductCurrencyPrice]:
        return list(
            ProductCurrencyPrice.objects
            .filter(product_id=product_id)
            .order_by("created_at", "id")
        )

    def resync_currency_fields(self) -> int:
        """
        Re-derive currency and symbol from the country label of every row.

        Returns:
            Number of rows changed
        """
        updated = 0
        with transaction.atomic():
            for row in ProductCurrencyPrice.objects.select_for_update().order_by("created_at", "id"):
                currency = self.catalog.currency_for_country(row.country)
                symbol = self.catalog.symbol_for(currency)
                if row.currency == currency and row.symbol == symbol:
                    continue
                row.currency = currency
                row.symbol = symbol
                row.save(update_fields=["currency", "symbol", "updated_at"])
                updated += 1
        logger.info("Resynced currency fields on %d price overrides", updated)
        return updated


class ExchangeRateRepository(BaseRateStore):
    """Repository for the exchange rate table."""

    @staticmethod
    def to_record(row: ExchangeRate) -> ExchangeRateRecord:
        return ExchangeRateRecord(
            source_currency=row.source_currency,
            exchanged_currency=row.exchanged_currency,
            rate_value=row.rate_value,
        )

    def load_table(self) -> RateTable:
        """Load every stored rate into an in-memory table."""
        return RateTable(self.to_record(row) for row in ExchangeRate.objects.all())

    def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """Rate for a pair, loading only the rows that touch the pair or the pivot currency."""
        currencies = [from_currency, to_currency, DEFAULT_CURRENCY]
        rows = ExchangeRate.objects.filter(
            source_currency__in=currencies,
            exchanged_currency__in=currencies,
        )
        return RateTable(self.to_record(row) for row in rows).fetch_rate(from_currency, to_currency)

    @staticmethod
    def upsert(source_currency: str, exchanged_currency: str, rate_value: Decimal) -> ExchangeRate:
        """Create or update the rate for a currency pair."""
        rate, _ = ExchangeRate.objects.update_or_create(
            source_currency=source_currency,
            exchanged_currency=exchanged_currency,
            defaults={"rate_value": rate_value},
        )
        return rate

    @staticmethod
    def get_all() -> List[ExchangeRate]:
        return list(ExchangeRate.objects.all())


class ProviderRepository:
    """Repository for Provider aggregate."""

    @staticmethod
    def get_active_ordered() -> List[Provider]:
        """Get all active providers ordered by priority."""
        return list(
            Provider.objects
            .filter(is_active=True)
            .order_by('priority')
        )

    @staticmethod
    def get_by_name(name: str) -> Optional[Provider]:
        """Get provider by name."""
        try:
            return Provider.objects.get(name=name)
        except Provider.DoesNotExist:
            return None
