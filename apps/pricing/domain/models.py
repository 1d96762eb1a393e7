"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from enum import Enum


class CurrencyCode(str, Enum):
    """Closed set of currencies the storefront can display."""

    NPR = "NPR"
    USD = "USD"
    AUD = "AUD"
    GBP = "GBP"
    CAD = "CAD"
    EUR = "EUR"
    INR = "INR"
    CNY = "CNY"
    JPY = "JPY"
    SGD = "SGD"
    AED = "AED"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value) -> "CurrencyCode | None":
        """Return the member for a code (any case), or None if unsupported."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def to_decimal(value) -> Decimal:
    """
    Coerce a number into a Decimal without binary float artefacts.

    Raises:
        ValueError: if the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Not a numeric amount: {value!r}")
    raise ValueError(f"Not a numeric amount: {value!r}")


def round_to(value: Decimal, exponent: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """
    Quantize a finite Decimal to the given exponent.

    The working precision grows with the magnitude of the value, so large
    amounts round instead of raising InvalidOperation.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=rounding)


@dataclass(frozen=True)
class ProductCurrencyPrice:
    """
    Explicit price for a product in one market.

    Built by the persistence layer; fields are validated here so the
    resolver can trust them.
    """

    product_id: str
    country: str
    currency: CurrencyCode | str
    symbol: str
    price: Decimal
    compare_price: Decimal | None = None

    def __post_init__(self):
        if not isinstance(self.country, str) or not self.country:
            raise ValueError("country must be a non-empty string")
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(f"Currency code must be exactly 3 characters, got '{self.currency}'")
        # Unsupported codes stay plain strings so the resolver can flag them.
        code = CurrencyCode.parse(self.currency)
        if code is not None:
            object.__setattr__(self, "currency", code)
        if not isinstance(self.price, Decimal) or not self.price.is_finite():
            raise ValueError(f"price must be a finite Decimal, got {self.price!r}")
        if self.compare_price is not None and (
            not isinstance(self.compare_price, Decimal) or not self.compare_price.is_finite()
        ):
            raise ValueError(f"compare_price must be a finite Decimal, got {self.compare_price!r}")


@dataclass(frozen=True)
class ResolvedPrice:
    """Price chosen for display, with the strategy that produced it."""

    currency: str
    symbol: str
    amount: Decimal
    source_country: str
    strategy: str
    compare_amount: Decimal | None = None
    issues: tuple = field(default=(), compare=False)


@dataclass(frozen=True)
class ExchangeRate:
    """Rate for converting one unit of source_currency into exchanged_currency."""

    source_currency: str
    exchanged_currency: str
    rate_value: Decimal

    def __post_init__(self):
        if self.rate_value <= 0:
            raise ValueError(f"rate_value must be positive, got {self.rate_value}")
        if self.source_currency == self.exchanged_currency:
            raise ValueError("source_currency and exchanged_currency must be different")

    def convert(self, amount: Decimal) -> Decimal:
        return round_to(amount * self.rate_value, Decimal("0.000001"))
