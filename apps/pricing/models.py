# Django discovers models through this module.
from apps.pricing.infrastructure.persistence.models import (  # noqa: F401
    BaseModel,
    Currency,
    ExchangeRate,
    Product,
    ProductCurrencyPrice,
    Provider,
    ProviderName,
)
