"""
Price resolution - picks the price a storefront shows for one product
in one visitor country.

Strategies are tried in order; the first one that returns a price wins:
1. exact_override     - override stored for the requested country
2. currency_override  - override in the target currency under another label
3. converted_base     - base price converted through the rate table
4. base_currency      - base price as stored, in the base currency
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from apps.pricing.domain.catalog import CurrencyCatalog, DEFAULT_CATALOG
from apps.pricing.domain.exceptions import (
    DataIntegrityError,
    InvalidPriceInput,
    MissingRateWarning,
    UnknownCurrencyWarning,
)
from apps.pricing.domain.interfaces import BaseRateStore
from apps.pricing.domain.models import ProductCurrencyPrice, ResolvedPrice, round_to, to_decimal

logger = logging.getLogger(__name__)

AMOUNT_PRECISION = Decimal("0.01")


@dataclass(frozen=True)
class ResolutionContext:
    product_id: object
    requested_country: str
    base_price: Decimal
    base_compare_price: Decimal | None
    base_currency: str
    target_currency: str
    overrides: tuple
    rate_store: BaseRateStore
    catalog: CurrencyCatalog
    issues: list = field(default_factory=list)

    @property
    def country_is_known(self) -> bool:
        return self.catalog.knows_country(self.requested_country)

    def note(self, issue: Exception, level: int = logging.WARNING) -> None:
        logger.log(level, "product %s: %s", self.product_id, issue)
        self.issues.append(issue)


def _symbol(ctx: ResolutionContext, currency: str) -> str:
    if not ctx.catalog.is_supported(currency):
        ctx.note(UnknownCurrencyWarning(currency))
    return ctx.catalog.symbol_for(currency)


def _from_override(ctx: ResolutionContext, override: ProductCurrencyPrice, strategy: str) -> ResolvedPrice:
    if not ctx.catalog.is_supported(override.currency):
        ctx.note(UnknownCurrencyWarning(override.currency))
    return ResolvedPrice(
        currency=override.currency,
        symbol=override.symbol or ctx.catalog.symbol_for(override.currency),
        amount=override.price,
        source_country=override.country,
        strategy=strategy,
        compare_amount=override.compare_price,
    )


def exact_override(ctx: ResolutionContext) -> Optional[ResolvedPrice]:
    matches = [o for o in ctx.overrides if o.country == ctx.requested_country]
    if not matches:
        return None

    if len(matches) > 1:
        ctx.note(
            DataIntegrityError(ctx.product_id, ctx.requested_country, len(matches)),
            level=logging.ERROR,
        )

    return _from_override(ctx, matches[0], "exact_override")


def currency_override(ctx: ResolutionContext) -> Optional[ResolvedPrice]:
    # Empty or unknown countries go straight to conversion.
    if not ctx.country_is_known:
        return None

    for override in ctx.overrides:
        if override.currency == ctx.target_currency:
            return _from_override(ctx, override, "currency_override")
    return None


def _convert(amount: Decimal | None, rate: Decimal) -> Decimal | None:
    if amount is None:
        return None
    return round_to(amount * rate, AMOUNT_PRECISION)


def converted_base(ctx: ResolutionContext) -> Optional[ResolvedPrice]:
    if ctx.base_currency == ctx.target_currency:
        amount, compare_amount = ctx.base_price, ctx.base_compare_price
    else:
        rate = ctx.rate_store.fetch_rate(ctx.base_currency, ctx.target_currency)
        if rate is None:
            return None
        amount = _convert(ctx.base_price, rate)
        compare_amount = _convert(ctx.base_compare_price, rate)

    source_country = (
        ctx.requested_country if ctx.country_is_known else _country_for(ctx, ctx.target_currency)
    )
    return ResolvedPrice(
        currency=ctx.target_currency,
        symbol=_symbol(ctx, ctx.target_currency),
        amount=amount,
        source_country=source_country,
        strategy="converted_base",
        compare_amount=compare_amount,
    )


def base_currency(ctx: ResolutionContext) -> Optional[ResolvedPrice]:
    ctx.note(MissingRateWarning(ctx.base_currency, ctx.target_currency))
    return ResolvedPrice(
        currency=ctx.base_currency,
        symbol=_symbol(ctx, ctx.base_currency),
        amount=ctx.base_price,
        source_country=_country_for(ctx, ctx.base_currency),
        strategy="base_currency",
        compare_amount=ctx.base_compare_price,
    )


def _country_for(ctx: ResolutionContext, currency: str) -> str:
    for country, code in ctx.catalog.countries().items():
        if code == currency:
            return country
    return ctx.requested_country


Strategy = Callable[[ResolutionContext], Optional[ResolvedPrice]]

RESOLUTION_STRATEGIES: tuple[Strategy, ...] = (
    exact_override,
    currency_override,
    converted_base,
    base_currency,
)


def _validated_amount(value, name: str, required: bool = True) -> Decimal | None:
    if value is None and not required:
        return None
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise InvalidPriceInput(f"{name} must be a number: {e}")
    if not amount.is_finite():
        raise InvalidPriceInput(f"{name} must be finite, got {value!r}")
    return amount


class PriceResolver:
    """
    Resolves display prices. Holds no per-request state.

    Args:
        rate_store: lookup used by the conversion strategy
        catalog: currency catalog (defaults to the process-wide one)
        strategies: ordered strategies; the last one must always return a price
    """

    def __init__(
        self,
        rate_store: BaseRateStore,
        catalog: CurrencyCatalog = DEFAULT_CATALOG,
        strategies: Sequence[Strategy] = RESOLUTION_STRATEGIES,
    ):
        self.rate_store = rate_store
        self.catalog = catalog
        self.strategies = tuple(strategies)

    def resolve(
        self,
        product_id,
        requested_country: str,
        base_price,
        base_currency: str,
        overrides: Iterable[ProductCurrencyPrice],
        base_compare_price=None,
    ) -> ResolvedPrice:
        """
        Resolve the price to display.

        Raises:
            InvalidPriceInput: if base_price (or base_compare_price) is not a finite number
        """
        price = _validated_amount(base_price, "base_price")
        compare_price = _validated_amount(base_compare_price, "base_compare_price", required=False)
        requested_country = requested_country if isinstance(requested_country, str) else ""

        ctx = ResolutionContext(
            product_id=product_id,
            requested_country=requested_country,
            base_price=price,
            base_compare_price=compare_price,
            base_currency=str(base_currency),
            target_currency=self.catalog.currency_for_country(requested_country),
            overrides=tuple(overrides),
            rate_store=self.rate_store,
            catalog=self.catalog,
        )

        for strategy in self.strategies:
            resolved = strategy(ctx)
            if resolved is not None:
                logger.debug(
                    "product %s resolved for '%s' via %s: %s %s",
                    product_id, requested_country, strategy.__name__, resolved.currency, resolved.amount,
                )
                return _with_issues(resolved, ctx.issues)

        raise RuntimeError("No pricing strategy produced a price")


def _with_issues(resolved: ResolvedPrice, issues: list) -> ResolvedPrice:
    if not issues:
        return resolved
    return ResolvedPrice(
        currency=resolved.currency,
        symbol=resolved.symbol,
        amount=resolved.amount,
        source_country=resolved.source_country,
        strategy=resolved.strategy,
        compare_amount=resolved.compare_amount,
        issues=tuple(issues),
    )
