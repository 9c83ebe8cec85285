"""In-memory cache with per-entry TTL for fetched API documents.

Not thread-safe, but safe for asyncio single-threaded concurrency: the
lookup and the registration of an in-flight fetch happen without yielding
to the event loop, so each key has at most one producer running at a time.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Any]]


class InMemoryCache:
    """TTL cache with single-flight ``get_or_set``."""

    def __init__(self):
        self._store: dict[str, tuple[float, Any]] = {}
        self._pending: dict[str, asyncio.Task] = {}

    def _lookup(self, key: str) -> tuple[bool, Any]:
        entry = self._store.get(key)
        if entry is None:
            return False, None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._store[key]
            return False, None
        return True, value

    def get(self, key: str) -> Optional[Any]:
        """Get value if exists and not expired."""
        _, value = self._lookup(key)
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value for ``ttl`` milliseconds."""
        self._store[key] = (time.monotonic() + ttl / 1000.0, value)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __bool__(self) -> bool:
        # An empty cache is still a cache.
        return True

    async def get_or_set(self, key: str, ttl: int, producer: Producer) -> Any:
        """
        Return the live value for ``key``, or compute it with ``producer``.

        Concurrent callers for the same key share one in-flight computation.
        The expiry is stamped when the computation completes. A failed
        computation is not cached and its error is raised to every waiter.
        """
        found, value = self._lookup(key)
        if found:
            return value

        task = self._pending.get(key)
        if task is None:
            logger.debug("Cache miss for %s", key)
            task = asyncio.ensure_future(self._produce(key, ttl, producer))
            self._pending[key] = task
        return await asyncio.shield(task)

    async def _produce(self, key: str, ttl: int, producer: Producer) -> Any:
        try:
            value = await producer()
        finally:
            self._pending.pop(key, None)
        self.set(key, value, ttl)
        return value


default_cache = InMemoryCache()
