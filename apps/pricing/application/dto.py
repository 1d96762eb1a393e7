"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from task and API contracts.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class RateSyncResultDTO:
    """Result DTO for rate synchronization task."""
    success: bool
    rates_synced: int
    currencies_processed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    provider_used: Optional[str] = None
    message: Optional[str] = None


@dataclass
class ResyncResultDTO:
    """Result DTO for the override currency resync task."""
    success: bool
    rows_updated: int


@dataclass
class DisplayPriceDTO:
    """Resolved and formatted storefront price for one product and country."""
    product_id: str
    country: str
    currency: str
    symbol: str
    price: Decimal
    formatted: str
    source_country: str
    strategy: str
    base_currency: str
    base_price: Decimal
    compare_price: Optional[Decimal] = None
    formatted_compare: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class ConversionResultDTO:
    """Result DTO for an amount conversion."""
    source_currency: str
    exchanged_currency: str
    amount: Decimal
    rate: Decimal
    converted_amount: Decimal
    formatted_amount: str
    formatted_converted_amount: str
