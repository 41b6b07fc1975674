"""Trading-day price lookup.

Earnings dates +/- one day often fall on weekends or market holidays.
The locator walks backward from the requested calendar day until it hits
a day the provider has a close for, giving up after a fixed number of
attempts.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from earnmove.core.constants import PRICE_LOOKBACK_ATTEMPTS
from earnmove.processing.earnings.models import PricePoint


class TradingDayLocator:
    """Close-price lookup over one symbol's daily price series.

    Usage:
        locator = TradingDayLocator(prices)
        close = locator.locate(date(2024, 1, 6))  # falls back to Friday's close
    """

    def __init__(
        self,
        prices: Iterable[PricePoint],
        attempts: int = PRICE_LOOKBACK_ATTEMPTS,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self._attempts = attempts
        self._closes: dict[date, float | None] = {}
        for point in prices:
            # First occurrence of a date wins
            self._closes.setdefault(point.trade_date, point.close)

    def __len__(self) -> int:
        return len(self._closes)

    def locate(self, target: date) -> float | None:
        """Return the close on ``target`` or the nearest prior trading day.

        Checks ``target`` and then up to ``attempts - 1`` earlier calendar
        days. Returns None when nothing matches within that window, or when
        the first matching day has no close.
        """
        for offset in range(self._attempts):
            day = target - timedelta(days=offset)
            if day in self._closes:
                return self._closes[day]
        return None
