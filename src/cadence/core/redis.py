"""Redis client helper."""
from redis import asyncio as aioredis

from cadence.core.config import settings

_redis = None


def get_redis():
    """Lazy init and return Redis client, or None when REDIS_URL is not set."""
    global _redis  # noqa: PLW0603
    if settings.redis_url is None:
        return None
    if _redis is None:
        _redis = aioredis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis
