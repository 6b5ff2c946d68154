from __future__ import annotations

"""Concrete rate sources and factory.

'http' reads the daily JSON feed: GET {base_url}/{base}.json returns
{"date": "...", "<base>": {"usd": 0.0067, ...}}; only the nested object keyed
by the base code is used. 'static' serves fixed jpy-pivot rates for offline
use and demos.
"""
import logging
import math
import numbers
from typing import Any, Dict

from .base import RateSource, RateTable
from fxboard.services.http_client import MalformedResponseError, get_json

logger = logging.getLogger("fxboard.rates")

# 1 JPY = x units
_STATIC_JPY_RATES: Dict[str, float] = {
    "usd": 0.0067,
    "eur": 0.0061,
    "gbp": 0.0052,
    "aud": 0.0101,
    "cad": 0.0092,
    "chf": 0.0058,
    "cny": 0.0476,
    "krw": 9.21,
}


def parse_rate_document(base: str, document: Any) -> RateTable:
    """Extract the rate table for `base` from a feed document."""
    if not isinstance(document, dict):
        raise MalformedResponseError("rate document is not a JSON object")
    nested = document.get(base)
    if nested is None:
        raise MalformedResponseError(f"rate document has no '{base}' key")
    if not isinstance(nested, dict):
        raise MalformedResponseError(f"'{base}' rates are not a JSON object")
    table: RateTable = {}
    for code, value in nested.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise MalformedResponseError(f"rate for '{code}' is not a number")
        code = str(code).lower()
        if code == base:
            continue
        if not math.isfinite(value) or value <= 0:
            logger.debug("dropping unusable rate for %s", code, extra={"base": base})
            continue
        table[code] = float(value)
    if not table:
        raise MalformedResponseError(f"no usable rates for '{base}'")
    return table


class RateFetcher(RateSource):
    """Fetches one base currency's table from the JSON feed. No retries by default."""

    def __init__(self, base_url: str, *, timeout: float = 5.0, retries: int = 0):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._retries = retries

    def url_for(self, base: str) -> str:
        return f"{self._base_url}/{base}.json"

    def fetch(self, base: str) -> RateTable:
        base = base.lower()
        url = self.url_for(base)
        logger.debug("fetching rates", extra={"base": base, "url": url})
        document = get_json(url, timeout=self._timeout, retries=self._retries)
        return parse_rate_document(base, document)


class StaticRateSource(RateSource):
    """Fixed rates; cross rates for non-jpy bases are derived through jpy."""

    def __init__(self, jpy_rates: Dict[str, float] | None = None):
        self._jpy_rates = dict(jpy_rates or _STATIC_JPY_RATES)

    def fetch(self, base: str) -> RateTable:
        base = base.lower()
        full = {"jpy": 1.0, **self._jpy_rates}
        if base not in full:
            raise MalformedResponseError(f"no static rates for '{base}'")
        pivot_value = full[base]
        return {code: value / pivot_value for code, value in full.items() if code != base}


_SOURCE_REGISTRY = {
    "http": RateFetcher,
    "static": StaticRateSource,
}


def make_rate_source(kind: str, settings=None) -> RateSource:
    cls = _SOURCE_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate source kind '{kind}'")
    if cls is RateFetcher:
        if settings is None:
            raise ValueError("http rate source requires settings")
        return RateFetcher(
            settings.feed_base_url,
            timeout=settings.http_timeout_seconds,
            retries=settings.http_retries,
        )
    return cls()
