import pytest
from decimal import Decimal

from apps.pricing.infrastructure.persistence.models import (
    ExchangeRate,
    Product,
    ProductCurrencyPrice,
)


@pytest.fixture
def product(db):
    """Product priced in NPR."""
    return Product.objects.create(
        name="Pashmina Shawl",
        slug="pashmina-shawl",
        base_price=Decimal("4000.00"),
        compare_price=Decimal("5000.00"),
        base_currency="NPR",
    )


@pytest.fixture
def rates(db):
    """NPR rate rows for USD and GBP."""
    return [
        ExchangeRate.objects.create(source_currency="NPR", exchanged_currency="USD", rate_value=Decimal("0.0075")),
        ExchangeRate.objects.create(source_currency="NPR", exchanged_currency="GBP", rate_value=Decimal("0.0059")),
    ]


@pytest.fixture
def uk_override(product):
    return ProductCurrencyPrice.objects.create(
        product=product,
        country="UK",
        currency="GBP",
        symbol="£",
        price=Decimal("22.00"),
        compare_price=Decimal("27.50"),
    )
