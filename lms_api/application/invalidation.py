from typing import Iterable

import structlog

from ..domain.errors import BackendFailure
from ..infrastructure.metrics import cache_invalidation_failures_total
from .cache_keys import collection_key, entity_key

logger = structlog.get_logger(__name__)


class InvalidationPolicy:
    """Removes cache entries after a successful write.

    Best effort: the write is already committed, so a failed removal is
    logged and counted but never raised. Staleness is bounded by the TTL.
    """

    def __init__(self, cache):
        self.cache = cache

    def invalidate(self, keys: Iterable[str]) -> list[str]:
        keys = list(dict.fromkeys(keys))
        failed = []
        for key in keys:
            try:
                if "*" in key:
                    self.cache.delete_pattern(key)
                else:
                    self.cache.delete(key)
            except BackendFailure as e:
                failed.append(key)
                cache_invalidation_failures_total.inc()
                logger.error("cache_invalidation_failed", key=key, error=str(e))
        logger.debug("cache_invalidated", keys=keys, failed=failed)
        return failed

    def on_created(self, entity: str, derived: Iterable[str] = ()) -> list[str]:
        return self.invalidate([collection_key(entity), *derived])

    def on_changed(self, entity: str, entity_id: int, derived: Iterable[str] = ()) -> list[str]:
        """Update and delete clear the same keys."""
        return self.invalidate([entity_key(entity, entity_id), collection_key(entity), *derived])
