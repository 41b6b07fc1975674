"""Earnings-move estimation: price lookup, estimation and per-symbol processing."""

from earnmove.processing.earnings.estimator import EarningsMoveEstimator
from earnmove.processing.earnings.locator import TradingDayLocator
from earnmove.processing.earnings.models import (
    EarningsEvent,
    EarningsSummary,
    PricePoint,
    SkipReason,
    SymbolOutcome,
)
from earnmove.processing.earnings.processor import EarningsMoveProcessor

__all__ = [
    "EarningsEvent",
    "EarningsMoveEstimator",
    "EarningsMoveProcessor",
    "EarningsSummary",
    "PricePoint",
    "SkipReason",
    "SymbolOutcome",
    "TradingDayLocator",
]
