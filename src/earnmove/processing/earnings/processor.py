"""Per-symbol earnings-move processing: fetch, estimate, cache.

Every failure mode for a symbol ends here. Expected data gaps come back
as skips, anything unexpected is logged and returned as an error outcome,
so the batch runner never sees an exception from a single symbol.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from earnmove.core.constants import DEFAULT_HISTORY_YEARS, DEFAULT_LOOKAHEAD_YEARS
from earnmove.core.exceptions import CacheWriteError
from earnmove.core.logging import get_logger
from earnmove.processing.earnings.estimator import EarningsMoveEstimator
from earnmove.processing.earnings.models import SkipReason, SymbolOutcome

if TYPE_CHECKING:
    from earnmove.providers.base import EarningsCalendarProvider, PriceHistoryProvider
    from earnmove.storage.summary_cache import SummaryCache

logger = get_logger(__name__)

_SKIP_MESSAGES: dict[SkipReason, str] = {
    SkipReason.no_earnings: "No earnings data",
    SkipReason.insufficient_prices: "Insufficient price data",
    SkipReason.no_valid_moves: "No valid earnings moves",
    SkipReason.no_future_earnings: "No future earnings",
}


def _utc_today() -> date:
    return datetime.now(UTC).date()


def shift_years(day: date, years: int) -> date:
    """Move ``day`` by whole years; Feb 29 lands on Feb 28 in non-leap years."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class EarningsMoveProcessor:
    """Computes and caches the earnings summary for one symbol at a time.

    Usage:
        processor = EarningsMoveProcessor(calendar=client, prices=client, cache=cache)
        outcome = await processor.process_symbol("AAPL")
    """

    def __init__(
        self,
        calendar: EarningsCalendarProvider,
        prices: PriceHistoryProvider,
        cache: SummaryCache,
        estimator: EarningsMoveEstimator | None = None,
        history_years: int = DEFAULT_HISTORY_YEARS,
        lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._calendar = calendar
        self._prices = prices
        self._cache = cache
        self._estimator = estimator or EarningsMoveEstimator()
        self._history_years = history_years
        self._lookahead_years = lookahead_years
        self._today = today

    async def process_symbol(self, symbol: str) -> SymbolOutcome:
        """Fetch inputs for ``symbol``, estimate, and store the summary.

        Never raises; the outcome says whether a summary was produced.
        """
        logger.debug("Processing symbol", symbol=symbol)
        try:
            return await self._process(symbol)
        except CacheWriteError as e:
            logger.error("Failed to cache earnings summary", symbol=symbol, error=e.message)
            return SymbolOutcome(symbol=symbol, error=e.message)
        except Exception as e:
            logger.warning("Error processing symbol", symbol=symbol, error=_describe(e))
            return SymbolOutcome(symbol=symbol, error=_describe(e))

    async def _process(self, symbol: str) -> SymbolOutcome:
        today = self._today()
        history_start = shift_years(today, -self._history_years)
        horizon = shift_years(today, self._lookahead_years)

        events = await self._calendar.get_earnings(symbol, history_start, horizon)
        if not events:
            return self._skip(symbol, SkipReason.no_earnings)

        prices = await self._prices.get_daily_prices(symbol, history_start, today)

        result = self._estimator.estimate(symbol, events, prices, today)
        if isinstance(result, SkipReason):
            return self._skip(symbol, result)

        await self._cache.store(result)
        logger.info(
            "Earnings summary cached",
            symbol=symbol,
            next_date=result.next_announcement_date.isoformat(),
            avg_move=result.average_move_percent,
        )
        return SymbolOutcome(symbol=symbol, summary=result)

    @staticmethod
    def _skip(symbol: str, reason: SkipReason) -> SymbolOutcome:
        logger.info(_SKIP_MESSAGES[reason], symbol=symbol)
        return SymbolOutcome(symbol=symbol, skip_reason=reason)
