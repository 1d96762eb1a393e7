"""
ViewSets for the pricing API v1.
Read endpoints for products, per-country price overrides and the rate table,
plus the display-price and conversion endpoints.
"""

import logging
from decimal import Decimal, InvalidOperation

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.pricing.api.v1.serializers import (
    ExchangeRateSerializer,
    ProductCurrencyPriceSerializer,
    ProductSerializer,
)
from apps.pricing.domain.catalog import DEFAULT_CATALOG
from apps.pricing.domain.exceptions import InvalidPriceInput
from apps.pricing.domain.services import ProductPricingService
from apps.pricing.infrastructure.persistence.models import (
    ExchangeRate,
    Product,
    ProductCurrencyPrice,
)

logger = logging.getLogger(__name__)


def _decimal_str(value):
    return None if value is None else str(value)


@extend_schema(tags=['Products'])
class ProductViewSet(viewsets.ReadOnlyModelViewSet):

    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("country", OpenApiTypes.STR, description="Visitor country (e.g. UK). Unknown or empty uses the default currency"),
        ],
        description="Resolve the display price of a product for a visitor country"
    )
    @action(detail=True, methods=['get'], url_path='price')
    def price(self, request, pk=None):
        """
        Resolve the display price of a product.

        Query params:
        - country: visitor country label (optional)

        Returns:
        The resolved currency, symbol and amount with the formatted string.
        """
        country = request.query_params.get('country', '')

        try:
            result = ProductPricingService().get_display_price(pk, country)
        except InvalidPriceInput as e:
            logger.error("Cannot price product %s: %s", pk, e)
            return Response(
                {"error": f"Invalid stored price: {e}"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if result is None:
            return Response(
                {"error": f"Product {pk} not found"},
                status=status.HTTP_404_NOT_FOUND
            )

        for key in ("price", "compare_price", "base_price", "exchange_rate"):
            result[key] = _decimal_str(result[key])
        return Response(result)


@extend_schema(tags=['Price overrides'])
class ProductCurrencyPriceViewSet(viewsets.ModelViewSet):

    serializer_class = ProductCurrencyPriceSerializer

    def get_queryset(self):
        queryset = ProductCurrencyPrice.objects.select_related("product").order_by("created_at", "id")
        product_id = self.request.query_params.get("product")
        if product_id:
            queryset = queryset.filter(product_id=product_id)
        return queryset


@extend_schema(tags=['Rates'])
class ExchangeRateViewSet(viewsets.ModelViewSet):

    queryset = ExchangeRate.objects.all()
    serializer_class = ExchangeRateSerializer


@extend_schema(tags=['Currencies'])
class CurrencyViewSet(viewsets.ViewSet):

    @extend_schema(description="Supported currencies with their symbols, country mapping and rates from the default currency")
    def list(self, request):
        data = ProductPricingService().list_rates()
        data["rates"] = {code: _decimal_str(rate) for code, rate in data["rates"].items()}
        return Response(data)

    @extend_schema(
        parameters=[
            OpenApiParameter("source_currency", OpenApiTypes.STR, required=True, description="Source currency code (e.g. NPR)"),
            OpenApiParameter("exchanged_currency", OpenApiTypes.STR, required=True, description="Target currency code (e.g. USD)"),
            OpenApiParameter("amount", OpenApiTypes.DECIMAL, required=True, description="Amount to convert"),
        ],
        description="Convert amount from one currency to another using the rate table"
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        """
        Convert an amount from one currency to another.
        """
        source_currency_code = request.query_params.get('source_currency')
        exchanged_currency_code = request.query_params.get('exchanged_currency')
        amount_str = request.query_params.get('amount')

        # Validation
        if not all([source_currency_code, exchanged_currency_code, amount_str]):
            return Response(
                {"error": "source_currency, exchanged_currency, and amount are required"},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            return Response(
                {"error": "Invalid amount. Must be a number"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not amount.is_finite() or amount <= 0:
            return Response(
                {"error": "Amount must be positive"},
                status=status.HTTP_400_BAD_REQUEST
            )

        source_currency_code = source_currency_code.upper()
        exchanged_currency_code = exchanged_currency_code.upper()
        for code in (source_currency_code, exchanged_currency_code):
            if not DEFAULT_CATALOG.is_supported(code):
                return Response(
                    {"error": f"Currency {code} is not supported"},
                    status=status.HTTP_400_BAD_REQUEST
                )

        result = ProductPricingService().convert_amount(
            source_currency_code,
            exchanged_currency_code,
            amount
        )

        if result is None:
            return Response(
                {"error": f"No exchange rate for {source_currency_code}/{exchanged_currency_code}"},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response({
            "source_currency": result["source_currency"],
            "exchanged_currency": result["exchanged_currency"],
            "amount": str(result["amount"]),
            "rate": str(result["rate"]),
            "converted_amount": str(result["converted_amount"]),
            "formatted_amount": result["formatted_amount"],
            "formatted_converted_amount": result["formatted_converted_amount"],
        })
