"""Earnings summary cache backed by Redis.

Each symbol's summary lives under ``{prefix}:{SYMBOL}`` as a JSON object
and is fully replaced on every run. Entries expire on their own if a
symbol stops being refreshed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError
from redis.exceptions import RedisError

from earnmove.core.constants import EARNINGS_CACHE_PREFIX, EARNINGS_CACHE_TTL_SECONDS
from earnmove.core.exceptions import CacheWriteError
from earnmove.core.logging import get_logger
from earnmove.processing.earnings.models import EarningsSummary

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)


class SummaryCache:
    """Writes and reads per-symbol earnings summaries.

    Usage:
        cache = SummaryCache(redis=redis_client)
        await cache.store(summary)
        cached = await cache.get("AAPL")
    """

    def __init__(
        self,
        redis: Redis,
        prefix: str = EARNINGS_CACHE_PREFIX,
        ttl_seconds: int = EARNINGS_CACHE_TTL_SECONDS,
    ) -> None:
        self._redis = redis
        self._prefix = prefix
        self._ttl_seconds = ttl_seconds

    def key_for(self, symbol: str) -> str:
        return f"{self._prefix}:{symbol.upper()}"

    async def store(self, summary: EarningsSummary, ttl_seconds: int | None = None) -> None:
        """Write ``summary``, replacing any previous value for the symbol.

        Raises:
            CacheWriteError: the write did not reach Redis
        """
        key = self.key_for(summary.symbol)
        payload = orjson.dumps(summary.to_cache_payload())
        try:
            await self._redis.set(key, payload, ex=ttl_seconds or self._ttl_seconds)
        except (RedisError, OSError) as e:
            raise CacheWriteError(f"Failed to write {key}: {e}") from e

    async def get(self, symbol: str) -> EarningsSummary | None:
        """Read the cached summary for ``symbol``, or None if absent or unreadable."""
        key = self.key_for(symbol)
        cached = await self._redis.get(key)
        if not cached:
            return None
        try:
            return EarningsSummary.model_validate(orjson.loads(cached))
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Cache deserialization failed", key=key, error=str(e))
            return None
