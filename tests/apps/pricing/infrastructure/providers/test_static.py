import pytest
from decimal import Decimal
from apps.pricing.infrastructure.providers.static import StaticRateProvider


@pytest.fixture
def provider():
    return StaticRateProvider()


def test_get_exchange_rate_data_from_npr(provider):
    """
    Test that rates from NPR come straight from the table.
    """
    assert provider.get_exchange_rate_data("NPR", "USD") == Decimal("0.0075")
    assert provider.get_exchange_rate_data("NPR", "JPY") == Decimal("1.15")


def test_get_exchange_rate_data_to_npr(provider):
    """
    Test that rates into NPR are the inverse of the table entry.
    """
    rate = provider.get_exchange_rate_data("USD", "NPR")

    assert rate == Decimal("133.333333")


def test_get_exchange_rate_data_cross_rate(provider):
    """
    Test cross rate calculation through NPR (USD to INR).
    """
    rate = provider.get_exchange_rate_data("USD", "INR")

    # 0.63 / 0.0075 = 84
    assert rate == Decimal("84.000000")


def test_get_exchange_rate_data_unsupported_currency(provider):
    """
    Test that unsupported currency returns None.
    """
    assert provider.get_exchange_rate_data("NPR", "CHF") is None


def test_get_exchange_rate_data_precision(provider):
    """
    Test that rates are rounded to 6 decimal places.
    """
    rate = provider.get_exchange_rate_data("GBP", "AED")

    assert rate.as_tuple().exponent == -6
