"""
Pricing error taxonomy.

Only InvalidPriceInput ever propagates to callers. The other classes describe
conditions the resolver degrades around; their instances are logged and
attached to the ResolvedPrice they affected.
"""


class PricingError(Exception):
    """Base class for pricing errors."""


class DataIntegrityError(PricingError):
    """More than one override row exists for the same (product, country)."""

    def __init__(self, product_id, country: str, count: int):
        self.product_id = product_id
        self.country = country
        self.count = count
        super().__init__(
            f"{count} overrides found for product {product_id} in country '{country}'; "
            f"using the first one"
        )


class InvalidPriceInput(PricingError, ValueError):
    """The base price handed to the resolver is not a finite number."""


class PricingWarning(UserWarning):
    """Base class for degradations that still produce a price."""


class UnknownCurrencyWarning(PricingWarning):

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Currency '{currency}' is not in the catalog; using the code as its symbol")


class MissingRateWarning(PricingWarning):

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(
            f"No exchange rate {from_currency}->{to_currency}; displaying in {from_currency}"
        )
