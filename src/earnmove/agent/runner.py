"""One full earnings-move run: resources, universe, batch.

`pipeline_resources()` builds every collaborator from a Settings object
and tears them down on exit, so nothing lives at module scope.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from redis.asyncio import Redis

from earnmove.config import Settings
from earnmove.core.exceptions import (
    ConfigurationError,
    RedisConnectionError,
    UniverseUnavailableError,
)
from earnmove.core.logging import get_logger, run_context
from earnmove.processing.batch import BatchReport, BatchRunner
from earnmove.processing.earnings.estimator import EarningsMoveEstimator
from earnmove.processing.earnings.processor import EarningsMoveProcessor
from earnmove.providers.base import SymbolProvider
from earnmove.providers.eodhd import EODHDClient
from earnmove.storage.redis import close_redis, create_redis
from earnmove.storage.summary_cache import SummaryCache

logger = get_logger(__name__)


@dataclass
class PipelineState:
    """Holds references to all resources of one run."""

    settings: Settings
    redis: Redis
    client: EODHDClient
    cache: SummaryCache
    processor: EarningsMoveProcessor
    runner: BatchRunner


@asynccontextmanager
async def pipeline_resources(settings: Settings) -> AsyncIterator[PipelineState]:
    """Create the Redis client, provider client, cache, processor and batch runner."""
    api_key = settings.require_api_key()
    redis = await create_redis(settings.redis_url)
    client = EODHDClient(
        api_key=api_key,
        base_url=settings.eodhd_api_url,
        exchange=settings.exchange,
        timeout=settings.request_timeout_seconds,
        max_concurrent_requests=settings.max_concurrent_requests,
    )
    try:
        cache = SummaryCache(
            redis=redis,
            prefix=settings.cache_prefix,
            ttl_seconds=settings.cache_ttl_seconds,
        )
        processor = EarningsMoveProcessor(
            calendar=client,
            prices=client,
            cache=cache,
            estimator=EarningsMoveEstimator(min_price_points=settings.min_price_points),
            history_years=settings.history_years,
            lookahead_years=settings.lookahead_years,
        )
        runner = BatchRunner(
            processor,
            group_size=settings.batch_size,
            cooldown_seconds=settings.batch_cooldown_seconds,
        )
        yield PipelineState(
            settings=settings,
            redis=redis,
            client=client,
            cache=cache,
            processor=processor,
            runner=runner,
        )
    finally:
        await client.close()
        await close_redis(redis)


async def load_universe(settings: Settings, provider: SymbolProvider) -> list[str]:
    """Configured symbols when set, otherwise the provider's full exchange list."""
    if settings.symbols:
        logger.info("Using configured symbol list", count=len(settings.symbols))
        return list(settings.symbols)
    return await provider.list_symbols()


async def run_batch(state: PipelineState) -> BatchReport:
    """Load the universe and process it. Raises UniverseUnavailableError."""
    universe = await load_universe(state.settings, state.client)
    report = await state.runner.run(universe)
    logger.info(
        "Batch processing complete",
        processed=report.processed,
        successful=report.successful,
        failed=report.failed,
    )
    return report


async def run_once(settings: Settings) -> int:
    """Run one batch and return the process exit status.

    Non-zero only when the run cannot start. Per-symbol failures never
    change the status.
    """
    with run_context():
        try:
            async with pipeline_resources(settings) as state:
                await run_batch(state)
        except UniverseUnavailableError as e:
            logger.error("Failed to fetch symbol list, aborting batch", error=e.message)
            return 1
        except (ConfigurationError, RedisConnectionError) as e:
            logger.error("Startup failed, aborting batch", error=e.message)
            return 1
        return 0
