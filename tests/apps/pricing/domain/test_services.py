import pytest
import uuid
from decimal import Decimal

from apps.pricing.domain.services import ProductPricingService
from apps.pricing.infrastructure.persistence.models import ProductCurrencyPrice


@pytest.fixture
def service():
    return ProductPricingService()


@pytest.mark.django_db(transaction=True)
class TestProductPricingService:
    """Tests for ProductPricingService domain service."""

    def test_unknown_product(self, service):
        assert service.get_display_price(uuid.uuid4(), "USA") is None

    def test_exact_override(self, service, product, uk_override, rates):
        result = service.get_display_price(product.pk, "UK")

        assert result["strategy"] == "exact_override"
        assert result["price"] == Decimal("22.00")
        assert result["formatted"] == "£22.00"
        assert result["formatted_compare"] == "£27.50"
        assert result["source_country"] == "UK"
        assert result["warnings"] == []

    def test_converted_price(self, service, product, rates):
        result = service.get_display_price(product.pk, "USA")

        assert result["strategy"] == "converted_base"
        assert result["currency"] == "USD"
        assert result["price"] == Decimal("30.00")
        assert result["formatted"] == "$30.00"
        assert result["compare_price"] == Decimal("37.50")
        assert result["exchange_rate"] == Decimal("0.0075")

    def test_default_country(self, service, product):
        result = service.get_display_price(product.pk, "")

        assert result["currency"] == "NPR"
        assert result["formatted"] == "NPR 4,000"
        assert result["formatted_compare"] == "NPR 5,000"
        assert result["exchange_rate"] == Decimal("1")

    def test_missing_rate(self, service, product):
        result = service.get_display_price(product.pk, "Japan")

        assert result["strategy"] == "base_currency"
        assert result["currency"] == "NPR"
        assert result["exchange_rate"] == Decimal("1")
        assert len(result["warnings"]) == 1

    def test_inactive_override_is_ignored(self, service, product, uk_override, rates):
        uk_override.is_active = False
        uk_override.save()

        result = service.get_display_price(product.pk, "UK")

        assert result["strategy"] == "converted_base"
        assert result["price"] == Decimal("23.60")

    def test_currency_match_under_other_label(self, service, product, rates):
        ProductCurrencyPrice.objects.create(
            product=product, country="United States", currency="USD", symbol="$", price=Decimal("29.99")
        )

        result = service.get_display_price(product.pk, "USA")

        assert result["strategy"] == "currency_override"
        assert result["formatted"] == "$29.99"

    def test_convert_amount(self, service, rates):
        result = service.convert_amount("NPR", "USD", Decimal("1000"))

        assert result["converted_amount"] == Decimal("7.50")
        assert result["formatted_amount"] == "NPR 1,000"
        assert result["formatted_converted_amount"] == "$7.50"

    def test_convert_amount_inverse(self, service, rates):
        result = service.convert_amount("USD", "NPR", Decimal("10"))

        assert result["converted_amount"] == Decimal("1333.33")
        assert result["formatted_converted_amount"] == "NPR 1,333"

    def test_convert_amount_cross_rate(self, service, rates):
        result = service.convert_amount("USD", "GBP", Decimal("10"))

        assert result["rate"] == Decimal("0.786667")
        assert result["converted_amount"] == Decimal("7.87")
        assert result["formatted_converted_amount"] == "£7.87"

    def test_convert_amount_no_rate(self, service, rates):
        assert service.convert_amount("USD", "JPY", Decimal("10")) is None

    def test_list_rates(self, service, rates):
        result = service.list_rates()

        assert result["base_currency"] == "NPR"
        assert result["rates"]["NPR"] == Decimal("1")
        assert result["rates"]["USD"] == Decimal("0.0075")
        assert result["rates"]["JPY"] is None
        assert result["symbols"]["GBP"] == "£"
        assert result["countries"]["UK"] == "GBP"
