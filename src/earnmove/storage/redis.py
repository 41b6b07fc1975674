"""Redis client connection."""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from earnmove.core.exceptions import RedisConnectionError
from earnmove.core.logging import get_logger

logger = get_logger(__name__)


async def create_redis(redis_url: str) -> Redis:
    """Create a Redis client and verify the connection."""
    redis = Redis.from_url(redis_url, decode_responses=False)
    try:
        pong = redis.ping()
        if hasattr(pong, "__await__"):
            await pong
    except RedisError as e:
        await redis.aclose()
        raise RedisConnectionError(f"Failed to connect to Redis: {e}") from e
    logger.info("Redis connected")
    return redis


async def close_redis(redis: Redis | None) -> None:
    """Close a Redis client created by ``create_redis``."""
    if redis is not None:
        await redis.aclose()
        logger.info("Redis disconnected")
