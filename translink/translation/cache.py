"""
In-memory FIFO cache of complete translation results.

Eviction drops the oldest *inserted* entry; reads never refresh an entry's
position. All map mutations happen under one mutex, so concurrent callers
cannot interleave a get/evict/put sequence. get_or_compute() additionally
coalesces concurrent misses on the same key within an event loop.
"""

import asyncio
import hashlib
import threading
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Optional

from translink.config import DEFAULT_CACHE_SIZE
from translink.logger import get_logger

logger = get_logger(__name__)


def make_cache_key(text: str, from_language: str, to_language: str) -> str:
    """
    Build the request fingerprint.

    The text is hashed so keys stay small; language codes are kept readable
    for log output.
    """
    digest = hashlib.sha256(text.encode('utf-8')).hexdigest()
    return f"{from_language}:{to_language}:{digest}"


class ResultCache:
    """Bounded key -> translation result store with FIFO eviction."""

    def __init__(self, capacity: int = DEFAULT_CACHE_SIZE):
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self._inflight: Dict[str, asyncio.Future] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: str, value: Any) -> None:
        """Store value; a new key evicts the oldest entry when the cache is full."""
        with self._lock:
            if key in self._entries:
                # Updating in place keeps the original insertion position
                self._entries[key] = value
                return
            if len(self._entries) >= self.capacity:
                evicted_key, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache full ({self.capacity}), evicted {evicted_key[:40]}")
            self._entries[key] = value

    async def get_or_compute(self, key: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        Concurrent callers on the same event loop that miss on the same key
        wait for the first caller's result instead of computing it again.

        Args:
            key: Cache key
            factory: Coroutine function producing the value

        Returns:
            Cached or freshly computed value
        """
        value = self.get(key)
        if value is not None:
            return value

        loop = asyncio.get_running_loop()
        with self._lock:
            pending = self._inflight.get(key)
            owner = pending is None or pending.get_loop() is not loop
            if owner:
                pending = loop.create_future()
                self._inflight[key] = pending

        if not owner:
            logger.debug(f"Waiting for in-flight computation of {key[:40]}")
            return await asyncio.shield(pending)

        try:
            value = await factory()
        except BaseException as e:
            self._finish(key, pending)
            if isinstance(e, asyncio.CancelledError):
                pending.cancel()
            elif not pending.done():
                pending.set_exception(e)
                # Mark retrieved so an unawaited future does not log a warning
                pending.exception()
            raise

        self.put(key, value)
        self._finish(key, pending)
        if not pending.done():
            pending.set_result(value)
        return value

    def _finish(self, key: str, pending: asyncio.Future) -> None:
        with self._lock:
            if self._inflight.get(key) is pending:
                del self._inflight[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.info("Translation cache cleared")

    def keys(self) -> list:
        """Keys in insertion order (oldest first)."""
        with self._lock:
            return list(self._entries.keys())

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
