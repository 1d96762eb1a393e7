"""
Static provider backed by a fixed NPR rate table.
Used for development and as the last resort when live providers fail.
"""

import logging
from decimal import Decimal

from apps.pricing.domain.interfaces import BaseExchangeRateProvider
from apps.pricing.domain.rates import RATE_PRECISION

logger = logging.getLogger(__name__)


class StaticRateProvider(BaseExchangeRateProvider):
    """
    Rates expressed as units of currency per 1 NPR.
    Cross rates between two non-NPR currencies go through NPR.
    """

    NPR_RATES = {
        "NPR": Decimal("1"),
        "USD": Decimal("0.0075"),
        "AUD": Decimal("0.011"),
        "GBP": Decimal("0.0059"),
        "CAD": Decimal("0.010"),
        "EUR": Decimal("0.0069"),
        "INR": Decimal("0.63"),
        "CNY": Decimal("0.054"),
        "JPY": Decimal("1.15"),
        "SGD": Decimal("0.010"),
        "AED": Decimal("0.027"),
    }

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str
    ) -> Decimal | None:
        source_rate = self.NPR_RATES.get(source_currency)
        target_rate = self.NPR_RATES.get(exchanged_currency)

        if source_rate is None or target_rate is None:
            logger.warning("StaticRateProvider: unsupported currency pair %s/%s", source_currency, exchanged_currency)
            return None

        return (target_rate / source_rate).quantize(RATE_PRECISION)
