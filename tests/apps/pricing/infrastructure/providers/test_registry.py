import pytest
from apps.pricing.infrastructure.providers.registry import (
    get_provider_instance,
    get_active_providers_ordered,
    PROVIDER_REGISTRY
)
from apps.pricing.infrastructure.persistence.models import Provider, ProviderName
from apps.pricing.infrastructure.providers.exchange_rate import ExchangeRateProvider
from apps.pricing.infrastructure.providers.static import StaticRateProvider


@pytest.mark.django_db(transaction=True)
class TestProviderRegistry:
    """Tests for provider registry functions."""

    def setup_method(self):
        """Clean up providers before each test."""
        Provider.objects.all().delete()

    def test_provider_registry_contains_providers(self):
        assert ProviderName.STATIC in PROVIDER_REGISTRY
        assert ProviderName.EXCHANGE_RATE in PROVIDER_REGISTRY

    def test_get_provider_instance_static(self):
        assert isinstance(get_provider_instance(ProviderName.STATIC), StaticRateProvider)

    def test_get_provider_instance_exchange_rate(self):
        assert isinstance(get_provider_instance(ProviderName.EXCHANGE_RATE), ExchangeRateProvider)

    def test_get_provider_instance_invalid(self):
        assert get_provider_instance("invalid_provider") is None

    def test_get_active_providers_ordered_empty(self):
        assert get_active_providers_ordered() == []

    def test_get_active_providers_ordered_by_priority(self):
        Provider.objects.create(name=ProviderName.STATIC, priority=5, is_active=True)
        Provider.objects.create(name=ProviderName.EXCHANGE_RATE, priority=1, is_active=True)

        providers = get_active_providers_ordered()

        assert len(providers) == 2
        assert isinstance(providers[0], ExchangeRateProvider)
        assert isinstance(providers[1], StaticRateProvider)

    def test_get_active_providers_ordered_excludes_inactive(self):
        Provider.objects.create(name=ProviderName.STATIC, priority=1, is_active=True)
        Provider.objects.create(name=ProviderName.EXCHANGE_RATE, priority=2, is_active=False)

        providers = get_active_providers_ordered()

        assert len(providers) == 1
        assert isinstance(providers[0], StaticRateProvider)
