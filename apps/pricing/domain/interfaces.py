from abc import ABC, abstractmethod
from decimal import Decimal

from apps.pricing.domain.models import ProductCurrencyPrice


class BaseOverrideStore(ABC):
    @abstractmethod
    def fetch_overrides(self, product_id) -> list[ProductCurrencyPrice]:
        pass


class BaseRateStore(ABC):
    @abstractmethod
    def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        pass


class BaseExchangeRateProvider(ABC):
    @abstractmethod
    def get_exchange_rate_data(self, source_currency: str, exchanged_currency: str) -> Decimal | None:
        pass
