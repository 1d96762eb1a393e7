from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.pricing.api.v1.views import (
    CurrencyViewSet,
    ExchangeRateViewSet,
    ProductCurrencyPriceViewSet,
    ProductViewSet,
)

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'overrides', ProductCurrencyPriceViewSet, basename='price-override')
router.register(r'currencies', CurrencyViewSet, basename='currency')
router.register(r'rates', ExchangeRateViewSet, basename='exchange-rate')

urlpatterns = [
    path('', include(router.urls)),
]
