import pytest
from decimal import Decimal
from unittest.mock import patch, MagicMock

from django.core.management import call_command
from django.core.management.base import CommandError

from apps.pricing.application.tasks import (
    resync_override_currencies,
    sync_exchange_rates,
)
from apps.pricing.infrastructure.persistence.models import (
    ExchangeRate,
    ProductCurrencyPrice,
    Provider,
    ProviderName,
)


def provider_returning(value):
    provider = MagicMock()
    provider.get_exchange_rate_data.return_value = value
    return provider


@pytest.mark.django_db(transaction=True)
class TestSyncExchangeRates:
    """Tests for the rate synchronization task."""

    def setup_method(self):
        """Clean up before each test."""
        ExchangeRate.objects.all().delete()
        Provider.objects.all().delete()

    def test_no_providers(self):
        result = sync_exchange_rates()

        assert result["success"] is False
        assert "No active provider" in result["message"]
        assert result["rates_synced"] == 0

    def test_sync_with_static_provider(self):
        Provider.objects.create(name=ProviderName.STATIC, priority=1, is_active=True)

        result = sync_exchange_rates()

        assert result["success"] is True
        assert result["rates_synced"] == 10
        assert result["errors"] == []
        assert result["provider_used"] == "StaticRateProvider"
        assert "NPR" not in result["currencies_processed"]
        assert ExchangeRate.objects.get(source_currency="NPR", exchanged_currency="USD").rate_value == Decimal("0.0075")

    @patch('apps.pricing.application.tasks.get_active_providers_ordered')
    def test_falls_back_to_next_provider(self, mock_get_providers):
        failing = provider_returning(None)
        working = provider_returning(Decimal("0.01"))
        mock_get_providers.return_value = [failing, working]

        result = sync_exchange_rates()

        assert result["rates_synced"] == 10
        assert failing.get_exchange_rate_data.call_count == 10
        assert working.get_exchange_rate_data.call_count == 10

    @patch('apps.pricing.application.tasks.get_active_providers_ordered')
    def test_first_provider_wins(self, mock_get_providers):
        first = provider_returning(Decimal("0.02"))
        second = provider_returning(Decimal("0.03"))
        mock_get_providers.return_value = [first, second]

        sync_exchange_rates()

        second.get_exchange_rate_data.assert_not_called()
        assert ExchangeRate.objects.get(exchanged_currency="EUR").rate_value == Decimal("0.02")

    @patch('apps.pricing.application.tasks.get_active_providers_ordered')
    def test_unpriced_pairs_are_reported_and_existing_rates_kept(self, mock_get_providers):
        ExchangeRate.objects.create(source_currency="NPR", exchanged_currency="USD", rate_value=Decimal("0.0075"))
        mock_get_providers.return_value = [provider_returning(None)]

        result = sync_exchange_rates()

        assert result["success"] is True
        assert result["rates_synced"] == 0
        assert len(result["errors"]) == 10
        assert result["provider_used"] is None
        assert ExchangeRate.objects.get().rate_value == Decimal("0.0075")

    @patch('apps.pricing.application.tasks.get_active_providers_ordered')
    def test_non_positive_rates_are_rejected(self, mock_get_providers):
        mock_get_providers.return_value = [provider_returning(Decimal("0"))]

        result = sync_exchange_rates()

        assert result["rates_synced"] == 0
        assert ExchangeRate.objects.count() == 0

    def test_sync_rates_command(self):
        Provider.objects.create(name=ProviderName.STATIC, priority=1, is_active=True)

        call_command("sync_rates", "--sync")

        assert ExchangeRate.objects.count() == 10

    def test_sync_rates_command_fails_without_providers(self):
        with pytest.raises(CommandError):
            call_command("sync_rates", "--sync")


@pytest.mark.django_db(transaction=True)
class TestResyncOverrideCurrencies:

    def test_resync(self, product):
        ProductCurrencyPrice.objects.create(
            product=product, country="Australia", currency="USD", symbol="$", price=Decimal("50")
        )

        result = resync_override_currencies()

        assert result == {"success": True, "rows_updated": 1}
        assert ProductCurrencyPrice.objects.get().currency == "AUD"

    def test_resync_command(self, product):
        ProductCurrencyPrice.objects.create(
            product=product, country="India", currency="NPR", symbol="NPR", price=Decimal("500")
        )

        call_command("resync_currency_prices")

        row = ProductCurrencyPrice.objects.get()
        assert (row.currency, row.symbol) == ("INR", "₹")
