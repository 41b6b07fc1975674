"""Tests for earnings-move estimation."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from earnmove.processing.earnings.estimator import (
    EarningsMoveEstimator,
    next_announcement,
    percent_move,
    round_move,
)
from earnmove.processing.earnings.models import (
    EarningsEvent,
    EarningsSummary,
    PricePoint,
    SkipReason,
)

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
TODAY = date(2024, 6, 1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _events(*dates: str, symbol: str = "AAPL") -> list[EarningsEvent]:
    return [EarningsEvent(symbol=symbol, announcement_date=date.fromisoformat(d)) for d in dates]


def _prices(closes: dict[str, float], padding: int = 10) -> list[PricePoint]:
    """Price series with ``closes`` plus filler days far from any test event."""
    start = date(2021, 1, 4)
    filler = [PricePoint(trade_date=start + timedelta(days=i), close=50.0) for i in range(padding)]
    points = [PricePoint(trade_date=date.fromisoformat(d), close=c) for d, c in closes.items()]
    return sorted(filler + points, key=lambda p: p.trade_date)


@pytest.fixture
def estimator() -> EarningsMoveEstimator:
    return EarningsMoveEstimator(clock=lambda: FIXED_NOW)


# ---------------------------------------------------------------------------
# Helpers under test
# ---------------------------------------------------------------------------


class TestPercentMove:
    def test_up_move(self) -> None:
        assert percent_move(100.0, 110.0) == pytest.approx(10.0)

    def test_down_move_is_absolute(self) -> None:
        assert percent_move(100.0, 90.0) == pytest.approx(10.0)


class TestRoundMove:
    def test_half_rounds_away_from_zero(self) -> None:
        # float round() would give 2.67 here
        assert round_move(2.675) == 2.68
        assert round_move(1.005) == 1.01

    def test_plain_value(self) -> None:
        assert round_move(10.0) == 10.0
        assert round_move(3.14159) == 3.14


class TestNextAnnouncement:
    def test_earliest_future_date(self) -> None:
        events = _events("2023-06-01", "2024-12-01", "2025-01-01")
        assert next_announcement(events, TODAY) == date(2024, 12, 1)

    def test_unsorted_provider_order(self) -> None:
        events = _events("2025-01-01", "2023-06-01", "2024-12-01")
        assert next_announcement(events, TODAY) == date(2024, 12, 1)

    def test_today_is_not_future(self) -> None:
        assert next_announcement(_events("2024-06-01"), TODAY) is None

    def test_tomorrow_is_future(self) -> None:
        assert next_announcement(_events("2024-06-02"), TODAY) == date(2024, 6, 2)


# ---------------------------------------------------------------------------
# EarningsMoveEstimator
# ---------------------------------------------------------------------------


class TestEstimate:
    def test_single_move(self, estimator: EarningsMoveEstimator) -> None:
        """2024-02-01 earnings: 100 on 01-31, 110 on 02-02 is a 10% move."""
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({"2024-01-31": 100.0, "2024-02-02": 110.0})

        result = estimator.estimate("AAPL", events, prices, TODAY)

        assert isinstance(result, EarningsSummary)
        assert result.symbol == "AAPL"
        assert result.average_move_percent == 10.0
        assert result.next_announcement_date == date(2024, 12, 1)
        assert result.computed_at == FIXED_NOW

    def test_average_of_three_moves(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2023-03-01", "2023-06-01", "2023-09-07", "2024-08-01")
        prices = _prices(
            {
                "2023-02-28": 100.0,
                "2023-03-02": 105.0,  # 5%
                "2023-05-31": 100.0,
                "2023-06-02": 110.0,  # 10%
                "2023-09-06": 100.0,
                "2023-09-08": 85.0,  # 15%
            }
        )

        result = estimator.estimate("AAPL", events, prices, TODAY)

        assert isinstance(result, EarningsSummary)
        assert result.average_move_percent == 10.0

    def test_weekend_sides_use_prior_trading_day(self, estimator: EarningsMoveEstimator) -> None:
        # Announcement Sunday 2024-03-03: before = Sat -> Fri 03-01, after = Mon 03-04
        events = _events("2024-03-03", "2024-09-01")
        prices = _prices({"2024-03-01": 50.0, "2024-03-04": 55.0})

        result = estimator.estimate("MSFT", events, prices, TODAY)

        assert isinstance(result, EarningsSummary)
        assert result.average_move_percent == 10.0

    def test_skip_without_events(self, estimator: EarningsMoveEstimator) -> None:
        prices = _prices({}, padding=500)
        assert estimator.estimate("AAPL", [], prices, TODAY) is SkipReason.no_earnings

    def test_skip_with_nine_prices(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({"2024-01-31": 100.0, "2024-02-02": 110.0}, padding=7)
        assert len(prices) == 9

        result = estimator.estimate("AAPL", events, prices, TODAY)

        assert result is SkipReason.insufficient_prices

    def test_ten_prices_is_enough(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({"2024-01-31": 100.0, "2024-02-02": 110.0}, padding=8)
        assert len(prices) == 10

        assert isinstance(estimator.estimate("AAPL", events, prices, TODAY), EarningsSummary)

    def test_skip_without_valid_moves(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({})

        assert estimator.estimate("AAPL", events, prices, TODAY) is SkipReason.no_valid_moves

    def test_zero_before_price_is_ignored(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({"2024-01-31": 0.0, "2024-02-02": 110.0})

        assert estimator.estimate("AAPL", events, prices, TODAY) is SkipReason.no_valid_moves

    def test_partial_events_contribute_nothing(self, estimator: EarningsMoveEstimator) -> None:
        # 2023-06-05 finds its before-price at the edge of the lookback, no after-price
        events = _events("2023-06-05", "2024-02-01", "2024-12-01")
        prices = _prices({"2023-05-31": 100.0, "2024-01-31": 100.0, "2024-02-02": 104.0})

        result = estimator.estimate("AAPL", events, prices, TODAY)

        assert isinstance(result, EarningsSummary)
        assert result.average_move_percent == 4.0

    def test_skip_without_future_event(self, estimator: EarningsMoveEstimator) -> None:
        events = _events("2024-02-01")
        prices = _prices({"2024-01-31": 100.0, "2024-02-02": 110.0})

        assert estimator.estimate("AAPL", events, prices, TODAY) is SkipReason.no_future_earnings

    def test_min_price_points_configurable(self) -> None:
        estimator = EarningsMoveEstimator(min_price_points=3, clock=lambda: FIXED_NOW)
        events = _events("2024-02-01", "2024-12-01")
        prices = _prices({"2024-01-31": 100.0, "2024-02-02": 110.0}, padding=1)

        assert isinstance(estimator.estimate("AAPL", events, prices, TODAY), EarningsSummary)


class TestEarningsSummary:
    def test_cache_payload_uses_wire_names(self) -> None:
        summary = EarningsSummary(
            symbol="AAPL",
            next_announcement_date=date(2024, 12, 1),
            average_move_percent=4.25,
            computed_at=FIXED_NOW,
        )

        payload = summary.to_cache_payload()

        assert payload == {
            "symbol": "AAPL",
            "nextDate": "2024-12-01",
            "avgMove": 4.25,
            "lastUpdated": "2024-06-01T12:00:00Z",
        }

    def test_validates_from_wire_names(self) -> None:
        summary = EarningsSummary.model_validate(
            {
                "symbol": "AAPL",
                "nextDate": "2024-12-01",
                "avgMove": 4.25,
                "lastUpdated": "2024-06-01T12:00:00Z",
            }
        )
        assert summary.next_announcement_date == date(2024, 12, 1)
        assert summary.average_move_percent == 4.25
