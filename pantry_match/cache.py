"""
In-memory TTL cache for search results, keyed by the canonical filter serialization.

Entries live for `ttl` after insertion and are dropped lazily on access or by clean_expired().
Stored and returned lists are copies, so callers may mutate what they get back.
An optional max_entries bound evicts the least recently used entry. All operations are
thread-safe; get_or_compute() runs at most one computation per live key at a time.
"""
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from pantry_match.models import RecipeMatchResult

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)

Clock = Callable[[], datetime]


@dataclass
class CachedSearch:
    """Results of one search and when they were stored."""
    results: list[RecipeMatchResult]
    timestamp: datetime


class SearchCache:
    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        max_entries: Optional[int] = None,
        clock: Clock = datetime.now,
    ):
        if max_entries is not None and max_entries <= 0:
            max_entries = None
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CachedSearch] = OrderedDict()
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def _is_live(self, entry: CachedSearch, now: datetime) -> bool:
        return now - entry.timestamp < self.ttl

    def get(self, key: str) -> Optional[list[RecipeMatchResult]]:
        """Cached results for key, or None if missing or expired (expired entries are removed)."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not self._is_live(entry, self._clock()):
                del self._entries[key]
                logger.debug("Search cache entry expired: %s", key)
                return None
            self._entries.move_to_end(key)
            return list(entry.results)

    def put(self, key: str, results: list[RecipeMatchResult]) -> None:
        with self._lock:
            self._entries[key] = CachedSearch(results=list(results), timestamp=self._clock())
            self._entries.move_to_end(key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Search cache full, evicted: %s", evicted)

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], list[RecipeMatchResult]],
    ) -> list[RecipeMatchResult]:
        """
        Return cached results for key, computing and storing them on a miss.
        Concurrent callers with the same key wait for the first computation instead of repeating it.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("Search cache hit: %s", key)
            return cached
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        try:
            with key_lock:
                cached = self.get(key)
                if cached is not None:
                    logger.debug("Search cache hit after wait: %s", key)
                    return cached
                logger.debug("Search cache miss: %s", key)
                results = compute()
                self.put(key, results)
                return results
        finally:
            with self._lock:
                if self._key_locks.get(key) is key_lock and not key_lock.locked():
                    del self._key_locks[key]

    def clean_expired(self) -> int:
        """Remove every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, entry in self._entries.items() if not self._is_live(entry, now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("Removed %d expired search cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cleared search cache (%d entries)", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._is_live(entry, self._clock())
