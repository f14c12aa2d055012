"""Cache-aside reads.

Look the key up in the cache; on a hit return the deserialized value without
touching the store. On a miss call the loader and, when it produced
something, write it back with the configured TTL. Absence (None or an empty
list) is never cached so a later insert becomes visible immediately.
"""
from typing import Any, Callable, TypeVar

import structlog
from pydantic import TypeAdapter

from ..domain.errors import BackendFailure
from ..infrastructure.metrics import cache_hits_total, cache_misses_total, db_queries_total

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _entity_of(key: str) -> str:
    return key.split("_", 1)[0]


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, list) and not value)


class CacheAside:
    def __init__(self, cache, ttl: int):
        self.cache = cache
        self.ttl = ttl

    def read(self, key: str, loader: Callable[[], T], adapter: TypeAdapter) -> T:
        entity = _entity_of(key)
        cached = self.cache.get(key)
        if cached is not None:
            cache_hits_total.labels(entity=entity).inc()
            logger.debug("cache_hit", key=key)
            return adapter.validate_json(cached)

        cache_misses_total.labels(entity=entity).inc()
        db_queries_total.inc()
        logger.debug("cache_miss", key=key)
        value = loader()
        if _is_absent(value):
            return value

        try:
            self.cache.set(key, adapter.dump_json(value).decode("utf-8"), self.ttl)
        except BackendFailure as e:
            # the value is still good; the next read just misses again
            logger.warning("cache_populate_failed", key=key, error=str(e))
        return value
