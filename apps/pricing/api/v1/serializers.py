"""
Serializers for the pricing bounded context.
Handles validation and transformation between API and ORM layers.
"""

from rest_framework import serializers

from apps.pricing.domain.catalog import DEFAULT_CATALOG
from apps.pricing.infrastructure.persistence.models import (
    ExchangeRate,
    Product,
    ProductCurrencyPrice,
)


class CurrencyCodeField(serializers.ChoiceField):
    """Currency code accepted in any case, stored upper-case."""

    def __init__(self, **kwargs):
        kwargs.setdefault("choices", DEFAULT_CATALOG.supported_codes())
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().upper()
        return super().to_internal_value(data)


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "base_price",
            "compare_price",
            "base_currency",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductCurrencyPriceSerializer(serializers.ModelSerializer):
    currency = CurrencyCodeField()
    symbol = serializers.CharField(max_length=10, required=False, allow_blank=True)

    class Meta:
        model = ProductCurrencyPrice
        fields = [
            "id",
            "product",
            "country",
            "currency",
            "symbol",
            "price",
            "compare_price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_country(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Country must not be blank.")
        return value

    def validate(self, attrs):
        currency = attrs.get("currency", getattr(self.instance, "currency", None))
        expected_symbol = DEFAULT_CATALOG.symbol_for(currency)
        symbol = attrs.get("symbol")

        if not symbol:
            attrs["symbol"] = expected_symbol
        elif symbol != expected_symbol:
            raise serializers.ValidationError({
                "symbol": f"Symbol for {currency} must be '{expected_symbol}', got '{symbol}'."
            })

        return attrs


class ExchangeRateSerializer(serializers.ModelSerializer):
    source_currency = CurrencyCodeField()
    exchanged_currency = CurrencyCodeField()

    class Meta:
        model = ExchangeRate
        fields = [
            "id",
            "source_currency",
            "exchanged_currency",
            "rate_value",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_rate_value(self, value):
        if value <= 0:
            raise serializers.ValidationError("Rate must be positive.")
        return value

    def validate(self, attrs):
        source = attrs.get("source_currency", getattr(self.instance, "source_currency", None))
        target = attrs.get("exchanged_currency", getattr(self.instance, "exchanged_currency", None))
        if source == target:
            raise serializers.ValidationError("source_currency and exchanged_currency must be different.")
        return attrs
