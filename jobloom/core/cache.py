"""
Optional Redis handle.

The client is created at startup when REDIS_URL is set. Request handlers do
not read or write it; the detailed health check only pings it.
"""

import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


def create_cache_client(url: Optional[str]) -> Optional[redis.Redis]:
    """
    Create a Redis client for the given URL.

    The connection is lazy, so an unreachable server does not block startup.

    Returns:
        Redis client, or None when no URL is configured
    """
    if not url:
        logger.info("REDIS_URL not set, running without cache")
        return None

    return redis.Redis.from_url(url, decode_responses=True)


def ping_cache(client: Optional[redis.Redis]) -> dict:
    """Report cache reachability in the shape used by the health endpoint"""
    if client is None:
        return {"status": "disabled", "message": "No cache configured"}

    try:
        client.ping()
    except redis.RedisError as e:
        logger.error(f"Cache health check failed: {e}")
        return {"status": "unhealthy", "message": "Cache unreachable"}

    return {"status": "healthy", "message": "Cache reachable"}
