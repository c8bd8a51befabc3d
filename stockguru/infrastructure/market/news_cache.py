"""
Adapter: In-process news cache.

Implements NewsCachePort with a lock-guarded LRU map. Freshness is decided
by the caller from the stored timestamp; this adapter only bounds memory.
It holds at most ``max_entries`` keys and drops entries older than
``retention`` whenever a new batch is stored.
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Optional

from stockguru.domain.market.entities import MarketNews
from stockguru.domain.market.ports import NewsCachePort

logger = logging.getLogger(__name__)


class InMemoryNewsCache(NewsCachePort):
    """Thread-safe, size-bounded map of cache key -> (stored_at, news batch).

    Args:
        max_entries: Maximum number of keys kept; least recently used go first.
        retention: Age after which an entry is purged on the next ``set``.
            Must outlive the freshness TTL so stale batches can still be
            served while the provider is down.
        clock: Time source, injectable for tests.
    """

    def __init__(
        self,
        max_entries: int = 256,
        retention: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._entries: OrderedDict[str, tuple[datetime, MarketNews]] = OrderedDict()
        self._max_entries = max_entries
        self._retention = retention
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[tuple[datetime, MarketNews]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def set(self, key: str, value: MarketNews) -> None:
        now = self._clock()
        with self._lock:
            self._entries[key] = (now, value)
            self._entries.move_to_end(key)
            self._purge_expired(now)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("News cache full; evicted key '%s'", evicted)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _purge_expired(self, now: datetime) -> None:
        expired = [
            key
            for key, (stored_at, _) in self._entries.items()
            if now - stored_at > self._retention
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired news cache entries", len(expired))
