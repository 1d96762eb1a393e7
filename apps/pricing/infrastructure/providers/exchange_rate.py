import logging
import requests
from decimal import Decimal

from django.conf import settings

from apps.pricing.domain.interfaces import BaseExchangeRateProvider

logger = logging.getLogger(__name__)


class ExchangeRateProvider(BaseExchangeRateProvider):
    """
    ExchangeRate API provider.
    Uses the /pair endpoint to fetch the latest rate for a currency pair.
    """

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str
    ) -> Decimal | None:
        """
        Fetch the latest exchange rate from ExchangeRate API.

        Args:
            source_currency: Base currency code (e.g. NPR)
            exchanged_currency: Target currency code (e.g. USD)

        Returns:
            Exchange rate as Decimal, or None if error occurs
        """
        base_url = settings.EXCHANGERATE_URL
        api_key = settings.EXCHANGERATE_API_KEY

        if not base_url or not api_key:
            logger.warning("EXCHANGERATE_URL or EXCHANGERATE_API_KEY is not configured. Cannot fetch exchange rates.")
            return None

        # Format: https://v6.exchangerate-api.com/v6/YOUR-API-KEY/pair/NPR/USD
        url = f"{base_url}/{api_key}/pair/{source_currency}/{exchanged_currency}"

        try:
            response = requests.get(url, timeout=settings.EXCHANGERATE_TIMEOUT_SECONDS)
            response.raise_for_status()
            data = response.json()

            # Response format: {"result": "success", "conversion_rate": 0.0075}
            rate = data['conversion_rate']
            return Decimal(str(rate))

        except requests.exceptions.Timeout:
            logger.warning("Timeout calling ExchangeRate API for %s/%s", source_currency, exchanged_currency)
            return None
        except requests.exceptions.HTTPError as e:
            logger.warning("HTTP error from ExchangeRate API: %s", e)
            return None
        except requests.exceptions.RequestException as e:
            logger.warning("Request to ExchangeRate API failed: %s", e)
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Invalid response from ExchangeRate API: %s", e)
            return None
