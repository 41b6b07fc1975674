"""Data models for earnings-move estimation.

- EarningsEvent / PricePoint: immutable inputs fetched per symbol per run
- EarningsSummary: the artifact written to the cache
- SkipReason / SymbolOutcome: what one symbol's processing produced
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def to_calendar_date(value: date | datetime | str) -> date:
    """Reduce a provider date value to a calendar date.

    Time-of-day and timezone parts are dropped so that one-day offsets
    land on the intended calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True, slots=True)
class EarningsEvent:
    """One earnings announcement for a symbol."""

    symbol: str
    announcement_date: date


@dataclass(frozen=True, slots=True)
class PricePoint:
    """Daily close for one trading day. ``close`` is None when the provider omitted it."""

    trade_date: date
    close: float | None


# =============================================================================
# Outputs
# =============================================================================


class SkipReason(str, Enum):
    """Why no summary was produced for a symbol."""

    no_earnings = "no_earnings"
    insufficient_prices = "insufficient_prices"
    no_valid_moves = "no_valid_moves"
    no_future_earnings = "no_future_earnings"


class EarningsSummary(BaseModel):
    """Cached per-symbol earnings-move summary.

    Serialized with ``by_alias=True`` the keys are the ones downstream
    readers expect: ``symbol``, ``nextDate``, ``avgMove``, ``lastUpdated``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    next_announcement_date: date = Field(alias="nextDate")
    average_move_percent: float = Field(alias="avgMove", ge=0)
    computed_at: datetime = Field(alias="lastUpdated")

    def to_cache_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class SymbolOutcome(BaseModel):
    """Result of processing one symbol. Exactly one of the three result fields is set."""

    symbol: str
    summary: EarningsSummary | None = None
    skip_reason: SkipReason | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.summary is not None
