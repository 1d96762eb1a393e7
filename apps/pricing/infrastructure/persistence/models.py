"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

import uuid
from django.db import models

from apps.pricing.domain.models import CurrencyCode


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Currency(models.TextChoices):
    NPR = CurrencyCode.NPR.value, "Nepalese Rupee"
    USD = CurrencyCode.USD.value, "US Dollar"
    AUD = CurrencyCode.AUD.value, "Australian Dollar"
    GBP = CurrencyCode.GBP.value, "British Pound"
    CAD = CurrencyCode.CAD.value, "Canadian Dollar"
    EUR = CurrencyCode.EUR.value, "Euro"
    INR = CurrencyCode.INR.value, "Indian Rupee"
    CNY = CurrencyCode.CNY.value, "Chinese Yuan"
    JPY = CurrencyCode.JPY.value, "Japanese Yen"
    SGD = CurrencyCode.SGD.value, "Singapore Dollar"
    AED = CurrencyCode.AED.value, "UAE Dirham"


class Product(BaseModel):

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    compare_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    base_currency = models.CharField(
        max_length=3,
        choices=Currency.choices,
        default=Currency.NPR,
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.base_currency} {self.base_price})"


class ProductCurrencyPrice(BaseModel):

    product = models.ForeignKey(
        Product,
        related_name="currency_prices",
        on_delete=models.CASCADE,
    )
    country = models.CharField(max_length=100, db_index=True)
    currency = models.CharField(max_length=3, choices=Currency.choices)
    symbol = models.CharField(max_length=10)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    compare_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["product", "country", "currency"],
                name="unique_price_per_market",
            )
        ]
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.product_id} | {self.country} | {self.symbol} {self.price}"


class ExchangeRate(BaseModel):

    source_currency = models.CharField(max_length=3, choices=Currency.choices)
    exchanged_currency = models.CharField(max_length=3, choices=Currency.choices)
    rate_value = models.DecimalField(
        decimal_places=6,
        max_digits=18,
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["source_currency", "exchanged_currency"],
                name="unique_rate_per_pair",
            ),
            models.CheckConstraint(
                condition=models.Q(rate_value__gt=0),
                name="rate_value_positive",
            ),
        ]
        ordering = ["source_currency", "exchanged_currency"]

    def __str__(self):
        return f"From {self.source_currency} To {self.exchanged_currency} | {self.rate_value}"


class ProviderName(models.TextChoices):
    """
    Enum with available rate providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface
    3. Register in PROVIDER_REGISTRY (providers/registry.py)
    """

    STATIC = "static", "Static"
    EXCHANGE_RATE = "exchange_rate", "ExchangeRate"


class Provider(BaseModel):

    name = models.CharField(
        max_length=50,
        choices=ProviderName.choices,
        unique=True,
    )
    priority = models.PositiveSmallIntegerField(
        unique=True,
        help_text="Lower number = higher priority. Determines the fallback order.",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Uncheck to exclude this provider from rate synchronization.",
    )

    class Meta:
        ordering = ["priority"]

    def __str__(self):
        return f"{self.get_name_display()} (priority={self.priority}) (status={self.is_active})"
