"""Rate-limited batch execution over a symbol universe.

The universe is cut into contiguous groups. Each group is processed
concurrently and fully settled before the next one starts, with a
cooldown in between so the provider's per-minute request window resets.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from pydantic import BaseModel

from earnmove.core.constants import (
    DEFAULT_BATCH_COOLDOWN_SECONDS,
    DEFAULT_BATCH_SIZE,
    EODHD_RATE_LIMIT_CALLS_PER_MINUTE,
    EODHD_REQUESTS_PER_SYMBOL,
)
from earnmove.core.logging import get_logger
from earnmove.processing.earnings.models import SymbolOutcome

logger = get_logger(__name__)


class SymbolProcessor(Protocol):
    async def process_symbol(self, symbol: str) -> SymbolOutcome: ...


class BatchReport(BaseModel):
    """Running totals for one batch run."""

    total: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0
    groups: int = 0


def partition(universe: Sequence[str], group_size: int) -> list[list[str]]:
    """Split ``universe`` into contiguous groups of at most ``group_size``."""
    if group_size < 1:
        raise ValueError("group_size must be at least 1")
    return [list(universe[i : i + group_size]) for i in range(0, len(universe), group_size)]


class BatchRunner:
    """Runs a SymbolProcessor over a universe, one group at a time.

    Usage:
        runner = BatchRunner(processor, group_size=900, cooldown_seconds=60)
        report = await runner.run(symbols)
    """

    def __init__(
        self,
        processor: SymbolProcessor,
        group_size: int = DEFAULT_BATCH_SIZE,
        cooldown_seconds: float = DEFAULT_BATCH_COOLDOWN_SECONDS,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._processor = processor
        self._group_size = group_size
        self._cooldown_seconds = cooldown_seconds
        self._sleep = sleep

    async def run(
        self,
        universe: Sequence[str],
        group_size: int | None = None,
        cooldown_seconds: float | None = None,
    ) -> BatchReport:
        """Process every symbol in ``universe`` and return the totals.

        Args:
            universe: Symbols in processing order
            group_size: Override for the configured group size
            cooldown_seconds: Override for the configured pause between groups

        Returns:
            BatchReport; a symbol counts as successful only if it produced a summary
        """
        size = group_size if group_size is not None else self._group_size
        cooldown = cooldown_seconds if cooldown_seconds is not None else self._cooldown_seconds
        groups = partition(universe, size)
        report = BatchReport(total=len(universe))

        requests_per_group = size * EODHD_REQUESTS_PER_SYMBOL
        if requests_per_group > EODHD_RATE_LIMIT_CALLS_PER_MINUTE:
            logger.warning(
                "Group size exceeds provider rate limit",
                group_size=size,
                requests_per_group=requests_per_group,
                limit_per_minute=EODHD_RATE_LIMIT_CALLS_PER_MINUTE,
            )

        logger.info(
            "Starting batch processing",
            symbols=len(universe),
            groups=len(groups),
            group_size=size,
        )

        for index, group in enumerate(groups, start=1):
            logger.info("Processing group", group=index, groups=len(groups), symbols=len(group))

            results = await asyncio.gather(
                *(self._processor.process_symbol(symbol) for symbol in group),
                return_exceptions=True,
            )

            successful = 0
            for symbol, result in zip(group, results, strict=True):
                if isinstance(result, BaseException):
                    logger.warning(
                        "Symbol task raised",
                        symbol=symbol,
                        error=str(result) or type(result).__name__,
                    )
                elif isinstance(result, SymbolOutcome) and result.succeeded:
                    successful += 1

            report.groups += 1
            report.processed += len(group)
            report.successful += successful
            report.failed += len(group) - successful

            logger.info(
                "Progress",
                processed=report.processed,
                total=report.total,
                successful=report.successful,
                failed=report.failed,
            )

            if index < len(groups):
                logger.info("Waiting before next group", seconds=cooldown)
                await self._sleep(cooldown)

        return report
