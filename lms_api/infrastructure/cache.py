import redis
import structlog
from typing import Optional

from ..config import settings
from ..domain.errors import BackendFailure

logger = structlog.get_logger(__name__)

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
    return _redis_client


class RedisCache:
    """String key/value cache with per-key TTL.

    Every redis error is re-raised as BackendFailure; callers decide whether
    a failure is fatal (reads) or only worth a log line (writes, removals).
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            logger.error("cache_get_failed", key=key, error=str(e))
            raise BackendFailure(f"cache read failed for {key}") from e

    def set(self, key: str, value: str, ttl: int) -> None:
        try:
            self.client.setex(key, ttl, value)
        except redis.RedisError as e:
            raise BackendFailure(f"cache write failed for {key}") from e

    def delete(self, key: str) -> bool:
        try:
            return bool(self.client.delete(key))
        except redis.RedisError as e:
            raise BackendFailure(f"cache delete failed for {key}") from e

    def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern."""
        try:
            keys = list(self.client.scan_iter(match=pattern))
            if keys:
                return self.client.delete(*keys)
            return 0
        except redis.RedisError as e:
            raise BackendFailure(f"cache delete failed for {pattern}") from e


def get_cache() -> RedisCache:
    return RedisCache(get_redis())
