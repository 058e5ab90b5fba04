import json
from typing import Any, Optional

import redis
import structlog

from ..config import settings

logger = structlog.get_logger()

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client


def get_cache(key: str) -> Optional[Any]:
    """Return the cached value for key, or None on a miss or when Redis is down."""
    try:
        client = get_redis()
        value = client.get(key)
        if value:
            return json.loads(value)
    except Exception as exc:
        logger.debug("cache_unavailable", op="get", key=key, error=str(exc))
    return None


def set_cache(key: str, value: Any, ttl: int = None) -> bool:
    try:
        client = get_redis()
        ttl = ttl or settings.CACHE_TTL
        client.setex(key, ttl, json.dumps(value, ensure_ascii=False, default=str))
        return True
    except Exception as exc:
        logger.debug("cache_unavailable", op="set", key=key, error=str(exc))
        return False


def delete_cache_pattern(pattern: str) -> int:
    """Drop every key matching pattern; returns how many were removed."""
    try:
        client = get_redis()
        keys = client.keys(pattern)
        if keys:
            return client.delete(*keys)
        return 0
    except Exception as exc:
        logger.debug("cache_unavailable", op="delete", pattern=pattern, error=str(exc))
        return 0
