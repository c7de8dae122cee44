# src/core/cache.py

"""In-memory TTL cache with request deduplication.

One ``CacheStore`` is created at process start and shared by every service.
Entries are timestamped on insertion and checked against a TTL on read, so
different namespaces (profiles, resolved IDs, library totals, images) can
keep the same entry map with their own lifetimes.

``with_dedup`` guarantees at most one concurrent upstream fetch per key:
callers arriving while a fetch is in flight block on the same future and
receive the same result (or the same exception).

Entries are never evicted. Memory grows with the number of distinct keys
seen during the process lifetime, which is acceptable for low-cardinality
traffic only; higher-scale deployments need a size cap.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from src.config import DEFAULT_CACHE_TTLS

logger = logging.getLogger("steamcard.cache")

__all__ = ["CacheEntry", "CacheStore", "make_key"]

T = TypeVar("T")


def make_key(namespace: str, *parts: object) -> str:
    """Builds a composite cache key such as ``games_alice_US``.

    Args:
        namespace: Key prefix (``user``, ``steamid``, ``games``, ``img``).
        *parts: Request inputs that distinguish entries in the namespace.

    Returns:
        The joined key string.
    """
    return "_".join([namespace, *(str(part) for part in parts)])


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the time it was stored.

    Attributes:
        value: The cached value.
        inserted_at: Unix timestamp (seconds) of insertion.
    """

    value: Any
    inserted_at: float


class CacheStore:
    """Thread-safe key/value store with per-namespace TTLs.

    Attributes:
        ttls: Mapping of TTL class name to lifetime in seconds.
    """

    def __init__(
        self,
        ttls: dict[str, int] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initializes an empty store.

        Args:
            ttls: TTL overrides merged on top of the defaults.
            clock: Time source returning seconds; injectable for tests.
        """
        self.ttls: dict[str, int] = dict(DEFAULT_CACHE_TTLS)
        if ttls:
            self.ttls.update(ttls)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, Future] = {}
        self._lock = threading.Lock()

    def ttl(self, name: str) -> int:
        """Returns the TTL in seconds for a TTL class name."""
        return self.ttls[name]

    def get(self, key: str) -> CacheEntry | None:
        """Returns the raw entry for ``key`` regardless of age."""
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: Any) -> CacheEntry:
        """Stores ``value`` under ``key`` stamped with the current time."""
        entry = CacheEntry(value=value, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def is_valid(self, entry: CacheEntry | None, ttl: float) -> bool:
        """Checks whether an entry is younger than ``ttl`` seconds."""
        if entry is None:
            return False
        return self._clock() - entry.inserted_at < ttl

    def is_in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._in_flight

    def with_dedup(self, key: str, ttl: float, producer: Callable[[], T]) -> T:
        """Returns a fresh cached value or runs ``producer`` exactly once.

        Order of checks:
        1. A valid cached entry is returned directly.
        2. If another thread is already producing ``key``, wait for its
           result and return it.
        3. Otherwise run ``producer``; on success store the result.

        The in-flight marker is removed whether the producer succeeds or
        fails. Failures are re-raised to every waiting caller and are not
        cached.

        Args:
            key: Composite cache key.
            ttl: Lifetime of a cached result in seconds.
            producer: Zero-argument callable performing the upstream fetch.

        Returns:
            The cached or freshly produced value.
        """
        with self._lock:
            entry = self._entries.get(key)
            if self.is_valid(entry, ttl):
                return entry.value

            pending = self._in_flight.get(key)
            if pending is None:
                pending = Future()
                self._in_flight[key] = pending
                owner = True
            else:
                owner = False

        if not owner:
            logger.debug("Joining in-flight fetch for %s", key)
            return pending.result()

        try:
            value = producer()
        except BaseException as exc:
            with self._lock:
                self._in_flight.pop(key, None)
            pending.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())
            self._in_flight.pop(key, None)
        pending.set_result(value)
        return value

    def clear(self) -> None:
        """Drops all entries. In-flight fetches are left to finish."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
