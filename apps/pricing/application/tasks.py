"""
Celery tasks for background processing.
"""

import logging
from dataclasses import asdict
from typing import Dict

from celery import shared_task

from apps.pricing.application.dto import RateSyncResultDTO, ResyncResultDTO
from apps.pricing.domain.catalog import DEFAULT_CATALOG
from apps.pricing.infrastructure.persistence.repositories import (
    ExchangeRateRepository,
    ProductCurrencyPriceRepository,
)
from apps.pricing.infrastructure.providers.registry import get_active_providers_ordered

logger = logging.getLogger(__name__)


@shared_task(name="sync_exchange_rates")
def sync_exchange_rates() -> Dict:
    """
    Refresh the rate table from the default currency to every supported currency.

    Each pair is requested from the active providers in priority order;
    the first provider that answers wins. Pairs no provider can price are
    reported in `errors` and left untouched in the table.

    Returns:
        Dict with operation results (see RateSyncResultDTO)
    """
    providers = get_active_providers_ordered()
    if not providers:
        return asdict(RateSyncResultDTO(
            success=False,
            rates_synced=0,
            message="No active providers found. Check that at least one provider is active in the database.",
        ))

    base_currency = DEFAULT_CATALOG.default_currency
    repository = ExchangeRateRepository()
    result = RateSyncResultDTO(success=True, rates_synced=0)
    used = []

    for code in DEFAULT_CATALOG.supported_codes():
        if code == base_currency:
            continue

        rate_value = None
        for provider in providers:
            provider_name = provider.__class__.__name__
            rate_value = provider.get_exchange_rate_data(base_currency, code)
            if rate_value is not None and rate_value > 0:
                if provider_name not in used:
                    used.append(provider_name)
                break
            logger.info("%s has no rate for %s/%s, trying next...", provider_name, base_currency, code)
            rate_value = None

        result.currencies_processed.append(code)
        if rate_value is None:
            result.errors.append(f"No rate for {base_currency}/{code}")
            continue

        repository.upsert(base_currency, code, rate_value)
        result.rates_synced += 1

    result.provider_used = ", ".join(used) or None
    logger.info(
        "Synced %d rates from %s (%d errors)",
        result.rates_synced, result.provider_used, len(result.errors),
    )
    return asdict(result)


@shared_task(name="resync_override_currencies")
def resync_override_currencies() -> Dict:
    """Re-derive currency and symbol of every price override from its country."""
    rows_updated = ProductCurrencyPriceRepository().resync_currency_fields()
    return asdict(ResyncResultDTO(success=True, rows_updated=rows_updated))
