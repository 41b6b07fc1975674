"""Data providers: protocols and vendor adapters."""

from earnmove.providers.base import (
    EarningsCalendarProvider,
    EarningsDataProvider,
    PriceHistoryProvider,
    SymbolProvider,
)
from earnmove.providers.eodhd import EODHDClient

__all__ = [
    "EODHDClient",
    "EarningsCalendarProvider",
    "EarningsDataProvider",
    "PriceHistoryProvider",
    "SymbolProvider",
]
