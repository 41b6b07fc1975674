"""Storage layer: Redis connection and the earnings summary cache."""

from earnmove.storage.redis import close_redis, create_redis
from earnmove.storage.summary_cache import SummaryCache

__all__ = [
    "SummaryCache",
    "close_redis",
    "create_redis",
]
