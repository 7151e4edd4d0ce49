"""Type descriptor caching.

CachedTypeProvider memoises descriptors of a wrapped TypeProvider. Cache
backends may fail; a failure is logged and treated as a miss, it never
surfaces as a mapping error.
"""

from __future__ import annotations

import logging
import threading

from json_mapper.types.descriptor import TypeDescriptor
from json_mapper.types.protocol import TypeCache, TypeProvider

logger = logging.getLogger(__name__)


def cache_key(cls: type, property_name: str) -> str:
    """Deterministic cache key for a (class, property) pair."""
    return f"{cls.__module__}.{cls.__qualname__}::{property_name}"


class InMemoryTypeCache:
    """Thread-safe dictionary backed TypeCache."""

    def __init__(self) -> None:
        self._items: dict[str, TypeDescriptor] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> TypeDescriptor | None:
        with self._lock:
            return self._items.get(key)

    def put(self, key: str, descriptor: TypeDescriptor) -> None:
        with self._lock:
            self._items[key] = descriptor

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class CachedTypeProvider:
    """TypeProvider decorator caching ``get_property_type`` results.

    Args:
        provider: The provider doing the actual annotation inspection.
        cache: Backend storing descriptors. Defaults to an InMemoryTypeCache.
    """

    def __init__(self, provider: TypeProvider, cache: TypeCache | None = None) -> None:
        self._provider = provider
        self._cache = cache if cache is not None else InMemoryTypeCache()

    @property
    def provider(self) -> TypeProvider:
        return self._provider

    def get_properties(self, cls: type) -> list[str]:
        return self._provider.get_properties(cls)

    def has_default(self, cls: type, property_name: str) -> bool:
        return self._provider.has_default(cls, property_name)

    def get_property_type(self, cls: type, property_name: str) -> TypeDescriptor:
        key = cache_key(cls, property_name)

        try:
            cached = self._cache.get(key)
        except Exception:
            logger.warning("Type cache lookup failed for %s, treating as miss", key, exc_info=True)
            cached = None

        if cached is not None:
            return cached

        descriptor = self._provider.get_property_type(cls, property_name)

        try:
            self._cache.put(key, descriptor)
        except Exception:
            logger.warning("Type cache write failed for %s", key, exc_info=True)

        return descriptor
