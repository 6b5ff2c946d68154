from __future__ import annotations

"""Rate service: fetcher + cache orchestration.

get_rates(base):
    1. fresh cache entry  -> served from memory (from_cache=True, stale=False)
    2. otherwise fetch    -> stored with timestamp=now (from_cache=False)
    3. fetch failed       -> prior entry if any (from_cache=True, stale=True),
                             else the typed RateFeedError propagates

Every fetch is stamped with a sequence number. Only the most recently started
fetch for a base may write the cache; late completions of older fetches are
handed back to their caller but never stored.
"""
import itertools
import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Optional

from starlette.concurrency import run_in_threadpool

from fxboard.core.config import Settings, get_settings
from fxboard.services.http_client import RateFeedError
from .base import RateSource, RateTable
from .cache import RateCache, now_millis
from .fetcher import make_rate_source

logger = logging.getLogger("fxboard.rates")


@dataclass(frozen=True)
class RateResult:
    base: str
    table: RateTable
    fetched_at_ms: int
    from_cache: bool
    stale: bool = False


class RateService:
    def __init__(
        self,
        source: RateSource,
        cache: RateCache | None = None,
        clock: Callable[[], int] = now_millis,
    ):
        self._source = source
        self._cache = cache if cache is not None else RateCache()
        self._clock = clock
        self._counter = itertools.count(1)
        self._latest_seq: Dict[str, int] = {}
        self._seq_lock = threading.Lock()

    @property
    def cache(self) -> RateCache:
        return self._cache

    def now(self) -> int:
        return self._clock()

    def _begin_fetch(self, base: str) -> int:
        with self._seq_lock:
            seq = next(self._counter)
            self._latest_seq[base] = seq
            return seq

    def _is_latest(self, base: str, seq: int) -> bool:
        with self._seq_lock:
            return self._latest_seq.get(base) == seq

    def get_rates(self, base: str, now_ms: Optional[int] = None) -> RateResult:
        base = base.lower()
        now_ms = self.now() if now_ms is None else now_ms
        cached = self._cache.get(base)
        if cached is not None and self._cache.is_fresh(cached, now_ms):
            return RateResult(base, dict(cached.rates), cached.fetched_at_ms, from_cache=True)

        seq = self._begin_fetch(base)
        try:
            table = self._source.fetch(base)
        except RateFeedError as e:
            # Re-read: a newer fetch may have stored data meanwhile
            fallback = self._cache.get(base) or cached
            if fallback is None:
                logger.error(
                    "rate fetch failed with no cached data: %s", e,
                    extra={"base": base, "seq": seq},
                )
                raise
            logger.warning(
                "rate fetch failed, serving cached data: %s", e,
                extra={"base": base, "seq": seq, "stale": True},
            )
            return RateResult(
                base,
                dict(fallback.rates),
                fallback.fetched_at_ms,
                from_cache=True,
                stale=not self._cache.is_fresh(fallback, now_ms),
            )

        if self._is_latest(base, seq):
            self._cache.put(base, table, now_ms)
            logger.info("rates refreshed", extra={"base": base, "seq": seq})
        else:
            logger.info(
                "discarding out-of-order rate response", extra={"base": base, "seq": seq}
            )
        return RateResult(base, dict(table), now_ms, from_cache=False)

    async def get_rates_async(self, base: str) -> RateResult:
        return await run_in_threadpool(self.get_rates, base)


def build_rate_service(settings: Settings) -> RateService:
    source = make_rate_source(settings.rate_source, settings)
    cache = RateCache(ttl_ms=settings.rates_cache_ttl_seconds * 1000)
    return RateService(source, cache)


# Singleton dependency helper used by FastAPI DI
@lru_cache
def get_rate_service() -> RateService:
    return build_rate_service(get_settings())
