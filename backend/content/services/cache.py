"""
Query result cache for the public content endpoints.

Keys are derived from the logical query (bucket + parameters) and carry the
bucket's current generation. Invalidating a bucket bumps its generation, so a
key computed before the invalidation can never be read again, even if a slow
request stores its result afterwards.
"""
import hashlib
import json
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional

from django.apps import apps
from django.conf import settings
from django.core.cache import caches
from django.core.cache.backends.locmem import LocMemCache

logger = logging.getLogger(__name__)

# Cache key prefix and buckets
PREFIX = "content"
BUCKET_SHOWCASE = "showcase"
BUCKET_SHARED_FIELDS = "shared_fields"

# Buckets whose cached payloads embed data from another bucket's rows.
CACHE_DEPENDENTS = {
    "program": (BUCKET_SHOWCASE,),
    "lookup": ("program", BUCKET_SHOWCASE, BUCKET_SHARED_FIELDS),
}

_MISSING = object()


def _get_ttl(name: str, default: int = 60) -> int:
    """Get TTL from settings with fallback."""
    setting_name = f"CACHE_TTL_{name.upper()}"
    return getattr(settings, setting_name, default)


def make_key(*parts) -> str:
    """Create a cache key from parts."""
    return ":".join(str(p) for p in parts)


def make_hash_key(*parts) -> str:
    """Create a hashed cache key for long/complex keys."""
    raw = ":".join(str(p) for p in parts)
    return hashlib.md5(raw.encode()).hexdigest()


def _parse_key(key: str):
    # content:<bucket>:<epoch>.<generation>:<digest>
    try:
        _, bucket, version, _ = key.split(":", 3)
        epoch, generation = (int(part) for part in version.split("."))
    except ValueError:
        return None, None, None
    return bucket, epoch, generation


class QueryCache:
    def __init__(
        self,
        backend=None,
        *,
        enabled: bool = True,
        default_ttl: int = 300,
        max_entries: Optional[int] = None,
    ):
        self._backend = backend if backend is not None else LocMemCache(
            f"query-cache-{uuid.uuid4().hex}", {}
        )
        self.enabled = enabled
        self.default_ttl = default_ttl
        # The ledger never tracks more keys than the backend can hold.
        self.max_entries = max_entries or getattr(self._backend, "_max_entries", 300)
        self._lock = threading.Lock()
        self._epoch = 0
        self._generations: Dict[str, int] = {}
        self._entries: Dict[str, tuple] = {}
        self._hits = 0
        self._misses = 0
        self._invalidations = 0
        self._clears = 0

    @classmethod
    def from_settings(cls) -> "QueryCache":
        alias = getattr(settings, "CONTENT_CACHE_ALIAS", "default")
        return cls(
            caches[alias],
            enabled=getattr(settings, "CONTENT_CACHE_ENABLED", True),
            default_ttl=_get_ttl("content_list", 300),
        )

    def make_key(self, bucket: str, **params) -> str:
        """Deterministic key for a logical query in `bucket`."""
        signature = json.dumps(params, sort_keys=True, default=str, ensure_ascii=False)
        with self._lock:
            version = f"{self._epoch}.{self._generations.get(bucket, 0)}"
        return make_key(PREFIX, bucket, version, make_hash_key(bucket, signature))

    def _is_current(self, bucket, epoch, generation) -> bool:
        return (
            bucket is not None
            and epoch == self._epoch
            and generation == self._generations.get(bucket, 0)
        )

    def get(self, key: str, default=None):
        if not self.enabled:
            return default
        bucket, epoch, generation = _parse_key(key)
        with self._lock:
            current = self._is_current(bucket, epoch, generation)
        value = self._backend.get(key, _MISSING) if current else _MISSING
        with self._lock:
            if value is _MISSING:
                self._misses += 1
                self._entries.pop(key, None)
            else:
                self._hits += 1
        if value is _MISSING:
            logger.debug("Query cache miss %s", key)
            return default
        logger.debug("Query cache hit %s", key)
        return value

    def put(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store `value`; returns False when the key's bucket was invalidated meanwhile."""
        if not self.enabled:
            return False
        ttl = self.default_ttl if ttl is None else ttl
        bucket, epoch, generation = _parse_key(key)
        now = time.monotonic()
        with self._lock:
            if not self._is_current(bucket, epoch, generation):
                return False
            self._entries.pop(key, None)
            self._entries[key] = (bucket, now + ttl)
            if len(self._entries) > self.max_entries:
                self._drop_expired(now)
            while len(self._entries) > self.max_entries:
                # Oldest first; the backend culls on its own.
                del self._entries[next(iter(self._entries))]
        self._backend.set(key, value, ttl)
        return True

    def _drop_expired(self, now: float) -> None:
        for key in [k for k, (_, expires) in self._entries.items() if expires <= now]:
            del self._entries[key]

    def invalidate(self, entity_type: str, entity_id: Optional[str] = None) -> int:
        """
        Drop every cached entry of `entity_type`. `entity_id` is accepted for
        callers that know which row changed; the whole bucket is rotated.
        """
        with self._lock:
            self._generations[entity_type] = self._generations.get(entity_type, 0) + 1
            stale = [key for key, (bucket, _) in self._entries.items() if bucket == entity_type]
            for key in stale:
                del self._entries[key]
            self._invalidations += 1
        if stale:
            self._backend.delete_many(stale)
        logger.info(
            "Invalidated query cache bucket=%s id=%s entries=%d",
            entity_type,
            entity_id or "*",
            len(stale),
        )
        return len(stale)

    def clear(self) -> int:
        with self._lock:
            self._epoch += 1
            stale = list(self._entries)
            self._entries.clear()
            self._clears += 1
        if stale:
            self._backend.delete_many(stale)
        logger.info("Cleared query cache entries=%d", len(stale))
        return len(stale)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            self._drop_expired(time.monotonic())
            tracked = list(self._entries)
        present = self._backend.get_many(tracked) if tracked else {}
        with self._lock:
            # Keys the backend culled to stay under its own MAX_ENTRIES.
            for key in tracked:
                if key not in present:
                    self._entries.pop(key, None)
            buckets: Dict[str, int] = {}
            for bucket, _ in self._entries.values():
                buckets[bucket] = buckets.get(bucket, 0) + 1
            lookups = self._hits + self._misses
            return {
                "enabled": self.enabled,
                "size": len(self._entries),
                "buckets": buckets,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups, 4) if lookups else 0.0,
                "invalidations": self._invalidations,
                "clears": self._clears,
            }


def get_query_cache() -> QueryCache:
    return apps.get_app_config("content").query_cache


# Batch invalidation helpers
def invalidate_on_content_change(
    query_cache: QueryCache, entity_type: str, entity_id: Optional[str] = None
) -> None:
    """Invalidate caches when an entity or its translations change."""
    query_cache.invalidate(entity_type, entity_id)
    for dependent in CACHE_DEPENDENTS.get(entity_type, ()):
        query_cache.invalidate(dependent)


def invalidate_on_lookup_change(query_cache: QueryCache) -> None:
    """Invalidate caches that embed lookup display names."""
    for bucket in CACHE_DEPENDENTS["lookup"]:
        query_cache.invalidate(bucket)
