"""EODHD API client for symbol lists, earnings calendars and daily prices.

Endpoints (all take ``api_token`` and ``fmt=json``):
- Symbol list: https://eodhd.com/api/exchange-symbol-list/{EXCHANGE}
- Earnings calendar: https://eodhd.com/api/calendar/earnings?symbols=AAPL.US&from=...&to=...
- Daily prices: https://eodhd.com/api/eod/AAPL.US?period=d&from=...&to=...

A 404 means "nothing for this symbol" and maps to an empty result. Any
other non-200 status or an undecodable body raises.
"""

from __future__ import annotations

import asyncio
import math
from datetime import date
from typing import Any

import httpx
import orjson
from pydantic import ValidationError

from earnmove.core.constants import (
    DEFAULT_EODHD_API_URL,
    DEFAULT_EXCHANGE,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from earnmove.core.exceptions import (
    ProviderError,
    ProviderHTTPError,
    ProviderResponseError,
    UniverseUnavailableError,
)
from earnmove.core.logging import get_logger
from earnmove.processing.earnings.models import EarningsEvent, PricePoint, to_calendar_date
from earnmove.providers.eodhd.models import ExchangeSymbol

logger = get_logger(__name__)


class EODHDClient:
    """Client for the EODHD REST API.

    Implements SymbolProvider, EarningsCalendarProvider and
    PriceHistoryProvider.

    Usage:
        client = EODHDClient(api_key="your_key")
        symbols = await client.list_symbols()
        events = await client.get_earnings("AAPL", date(2024, 1, 1), date(2026, 1, 1))
        await client.close()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_EODHD_API_URL,
        exchange: str = DEFAULT_EXCHANGE,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
    ) -> None:
        """Initialize EODHDClient.

        Args:
            api_key: EODHD API token
            base_url: API root, without trailing slash
            exchange: Exchange code for the symbol list and ticker suffix
            timeout: Hard upper bound in seconds on each request, once it has a connection
            max_concurrent_requests: Requests in flight at once; also the pool size
        """
        if max_concurrent_requests < 1:
            raise ValueError("max_concurrent_requests must be at least 1")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._exchange = exchange
        self._timeout = timeout
        self._max_concurrent_requests = max_concurrent_requests
        self._request_slots = asyncio.Semaphore(max_concurrent_requests)
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
                limits=httpx.Limits(
                    max_connections=self._max_concurrent_requests,
                    max_keepalive_connections=self._max_concurrent_requests,
                ),
            )
        return self._http_client

    def _ticker(self, symbol: str) -> str:
        return f"{symbol.upper()}.{self._exchange}"

    async def _get_json(self, path: str, params: dict[str, str]) -> Any | None:
        """GET ``path`` and decode the body. Returns None on 404.

        Requests wait for one of ``max_concurrent_requests`` slots first. The
        slot count matches the connection pool, so the ``asyncio.timeout``
        that follows only covers the request itself and a stalled server
        cannot hold a batch group open.
        """
        client = self._get_http_client()
        query = {**params, "api_token": self._api_key, "fmt": "json"}

        async with self._request_slots:
            async with asyncio.timeout(self._timeout):
                response = await client.get(f"{self._base_url}{path}", params=query)

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ProviderHTTPError(
                f"EODHD returned {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ProviderResponseError(f"Invalid JSON from EODHD for {path}") from e

    # ─────────────────────────────────────────────────────────────
    # SymbolProvider
    # ─────────────────────────────────────────────────────────────

    async def list_symbols(self) -> list[str]:
        """Get every symbol listed on the configured exchange.

        Returns:
            Symbol codes in provider order, without duplicates

        Raises:
            UniverseUnavailableError: on any transport, status or format failure
        """
        logger.info("Fetching symbol list", exchange=self._exchange)
        try:
            data = await self._get_json(f"/exchange-symbol-list/{self._exchange}", {})
        except (httpx.HTTPError, TimeoutError, ProviderError) as e:
            raise UniverseUnavailableError(f"Failed to fetch symbol list: {e}") from e

        if not isinstance(data, list):
            raise UniverseUnavailableError("Symbol list response is not an array")

        symbols: list[str] = []
        seen: set[str] = set()
        for row in data:
            try:
                record = ExchangeSymbol.model_validate(row)
            except ValidationError:
                continue
            code = record.code.strip()
            if code and code not in seen:
                seen.add(code)
                symbols.append(code)

        logger.info("Fetched symbol list", exchange=self._exchange, count=len(symbols))
        return symbols

    # ─────────────────────────────────────────────────────────────
    # EarningsCalendarProvider
    # ─────────────────────────────────────────────────────────────

    async def get_earnings(self, symbol: str, start: date, end: date) -> list[EarningsEvent]:
        """Get earnings announcements for ``symbol`` in ``[start, end]``.

        Args:
            symbol: Bare ticker (e.g., "AAPL")
            start: First calendar date to include
            end: Last calendar date to include

        Returns:
            Events in provider order; empty when the provider has none
        """
        data = await self._get_json(
            "/calendar/earnings",
            {
                "symbols": self._ticker(symbol),
                "from": start.isoformat(),
                "to": end.isoformat(),
            },
        )
        if not isinstance(data, dict):
            return []

        events: list[EarningsEvent] = []
        for row in data.get("earnings") or []:
            raw_date = row.get("date") if isinstance(row, dict) else None
            if not raw_date:
                continue
            try:
                announced = to_calendar_date(raw_date)
            except (ValueError, TypeError) as e:
                logger.debug("Skipping unparseable earnings date", symbol=symbol, error=str(e))
                continue
            events.append(EarningsEvent(symbol=symbol, announcement_date=announced))

        return events

    # ─────────────────────────────────────────────────────────────
    # PriceHistoryProvider
    # ─────────────────────────────────────────────────────────────

    async def get_daily_prices(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Get daily closes for ``symbol`` in ``[start, end]``, oldest first."""
        data = await self._get_json(
            f"/eod/{self._ticker(symbol)}",
            {
                "period": "d",
                "from": start.isoformat(),
                "to": end.isoformat(),
            },
        )
        if not isinstance(data, list):
            return []

        points: list[PricePoint] = []
        for row in data:
            if not isinstance(row, dict) or not row.get("date"):
                continue
            try:
                trade_date = to_calendar_date(row["date"])
            except (ValueError, TypeError) as e:
                logger.debug("Skipping unparseable price date", symbol=symbol, error=str(e))
                continue
            points.append(PricePoint(trade_date=trade_date, close=_parse_float(row.get("close"))))

        points.sort(key=lambda p: p.trade_date)
        return points

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    async def close(self) -> None:
        """Clean up resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("EODHDClient closed")


def _parse_float(value: str | float | None) -> float | None:
    """Parse a string or numeric value to a finite float."""
    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except (ValueError, TypeError):
        return None
    return parsed if math.isfinite(parsed) else None
