from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .base import RateTable

"""In-memory rate cache.

Purpose:
    Keep the last rate table fetched for each base currency together with the
    epoch-millisecond timestamp of the fetch.

Design:
    - One entry per base currency ever requested; no eviction. The supported
      currency set keeps it small, but nothing here assumes a bound.
    - Entries are frozen and only ever replaced wholesale.
    - An entry is fresh while now - fetched_at_ms < ttl_ms. Stale entries stay
      in place as fallback data for when the feed is unreachable.
    - Reads and replacements take a lock since blocking fetches run in the
      server's thread pool.
"""

DAY_MS = 24 * 60 * 60 * 1000


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry:
    base_currency: str
    rates: RateTable
    fetched_at_ms: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.fetched_at_ms


class RateCache:
    def __init__(self, ttl_ms: int = DAY_MS):
        if ttl_ms <= 0:
            raise ValueError("cache ttl must be positive")
        self._ttl_ms = ttl_ms
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def get(self, base: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(base)

    def put(self, base: str, rates: RateTable, timestamp_ms: int) -> CacheEntry:
        # Copy so later mutation of the caller's dict cannot leak into the cache
        entry = CacheEntry(base_currency=base, rates=dict(rates), fetched_at_ms=timestamp_ms)
        with self._lock:
            self._entries[base] = entry
        return entry

    def is_fresh(self, entry: CacheEntry, now_ms: int) -> bool:
        return entry.age_ms(now_ms) < self._ttl_ms

    def entries(self) -> List[CacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
