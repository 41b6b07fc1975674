"""Abstract provider protocols for earnings-move inputs.

The pipeline depends on these interfaces only, so the EODHD adapter can be
swapped for another vendor without touching estimation or batching code.

Provider Types:
- SymbolProvider: the universe of tradable symbols
- EarningsCalendarProvider: past and upcoming earnings announcement dates
- PriceHistoryProvider: daily closing prices
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from earnmove.processing.earnings.models import EarningsEvent, PricePoint


@runtime_checkable
class SymbolProvider(Protocol):
    """Protocol for listing the symbols of one exchange."""

    async def list_symbols(self) -> list[str]:
        """Return every tradable symbol.

        Raises:
            UniverseUnavailableError: the list could not be obtained
        """
        ...


@runtime_checkable
class EarningsCalendarProvider(Protocol):
    """Protocol for per-symbol earnings calendars."""

    async def get_earnings(self, symbol: str, start: date, end: date) -> list[EarningsEvent]:
        """Get earnings announcements for ``symbol`` between ``start`` and ``end``.

        Returns an empty list when the provider has no calendar for the symbol.
        """
        ...


@runtime_checkable
class PriceHistoryProvider(Protocol):
    """Protocol for daily price history."""

    async def get_daily_prices(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Get daily closes for ``symbol`` between ``start`` and ``end``, oldest first.

        Returns an empty list when the provider has no history for the symbol.
        """
        ...


@runtime_checkable
class EarningsDataProvider(EarningsCalendarProvider, PriceHistoryProvider, Protocol):
    """A single vendor serving both calendars and prices."""

    async def close(self) -> None:
        """Clean up resources."""
        ...
