"""Earnings-move estimation.

For every past earnings announcement the close on the trading day before
and the trading day after are compared; the mean absolute percentage move
across announcements is the symbol's expected earnings move. The earliest
announcement after today is reported alongside it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from statistics import fmean

from earnmove.core.constants import MIN_PRICE_POINTS, MOVE_DECIMAL_PLACES
from earnmove.core.logging import get_logger
from earnmove.processing.earnings.locator import TradingDayLocator
from earnmove.processing.earnings.models import (
    EarningsEvent,
    EarningsSummary,
    PricePoint,
    SkipReason,
)

logger = get_logger(__name__)

_ONE_DAY = timedelta(days=1)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def percent_move(before: float, after: float) -> float:
    """Absolute percentage change from ``before`` to ``after``."""
    return abs(after - before) / before * 100


def round_move(value: float, places: int = MOVE_DECIMAL_PLACES) -> float:
    """Round half away from zero (float ``round`` is banker's rounding)."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def collect_moves(events: Sequence[EarningsEvent], locator: TradingDayLocator) -> list[float]:
    """Percentage moves for every event with a usable before/after close."""
    moves: list[float] = []
    for event in events:
        before = locator.locate(event.announcement_date - _ONE_DAY)
        after = locator.locate(event.announcement_date + _ONE_DAY)
        if before is None or after is None or before <= 0:
            continue
        moves.append(percent_move(before, after))
    return moves


def next_announcement(events: Sequence[EarningsEvent], today: date) -> date | None:
    """Earliest announcement date strictly after ``today``.

    Provider ordering is not trusted; dates are sorted before selection.
    """
    upcoming = sorted(e.announcement_date for e in events if e.announcement_date > today)
    return upcoming[0] if upcoming else None


class EarningsMoveEstimator:
    """Turns one symbol's earnings events and daily closes into a summary."""

    def __init__(
        self,
        min_price_points: int = MIN_PRICE_POINTS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._min_price_points = min_price_points
        self._clock = clock

    def estimate(
        self,
        symbol: str,
        events: Sequence[EarningsEvent],
        prices: Sequence[PricePoint],
        today: date,
    ) -> EarningsSummary | SkipReason:
        """Estimate the average earnings move and next announcement for ``symbol``.

        Returns a SkipReason instead of a summary when the data cannot
        support one; skips are expected and are not errors.
        """
        if not events:
            return SkipReason.no_earnings
        if len(prices) < self._min_price_points:
            return SkipReason.insufficient_prices

        moves = collect_moves(events, TradingDayLocator(prices))
        if not moves:
            return SkipReason.no_valid_moves

        next_date = next_announcement(events, today)
        if next_date is None:
            return SkipReason.no_future_earnings

        logger.debug(
            "Earnings moves collected",
            symbol=symbol,
            events=len(events),
            observations=len(moves),
        )

        return EarningsSummary(
            symbol=symbol,
            next_announcement_date=next_date,
            average_move_percent=round_move(fmean(moves)),
            computed_at=self._clock(),
        )
