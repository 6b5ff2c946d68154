"""Smoke script for the rate cache and converter.

Demonstrates, against the offline static source:
 1. First access triggers a fetch (from_cache=False).
 2. A second access inside the TTL is served from memory (from_cache=True).
 3. Advancing the clock past the TTL with a failing source falls back to the
    stale entry (stale=True).
 4. A jpy-pivot conversion and the formatted rate table.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

from pprint import pprint

from fxboard.services.formatting import format_amount, format_last_updated
from fxboard.services.http_client import NetworkError
from fxboard.services.rates.cache import DAY_MS, RateCache
from fxboard.services.rates.conversion import convert, rate_rows
from fxboard.services.rates.fetcher import StaticRateSource
from fxboard.services.rates.service import RateService


class _FlakySource(StaticRateSource):
    def __init__(self):
        super().__init__()
        self.down = False

    def fetch(self, base):
        if self.down:
            raise NetworkError("simulated outage")
        return super().fetch(base)


def run():
    clock = {"now": 1_700_000_000_000}
    source = _FlakySource()
    svc = RateService(source, RateCache(), clock=lambda: clock["now"])
    out = {}

    first = svc.get_rates("jpy")
    second = svc.get_rates("jpy")
    out["initial"] = {"from_cache": first.from_cache, "fetched_at_ms": first.fetched_at_ms}
    out["second"] = {"from_cache": second.from_cache, "fetched_at_ms": second.fetched_at_ms}

    clock["now"] += DAY_MS
    source.down = True
    fallback = svc.get_rates("jpy")
    out["after_ttl_outage"] = {
        "from_cache": fallback.from_cache,
        "stale": fallback.stale,
        "footer": format_last_updated(fallback.fetched_at_ms, fallback.from_cache),
    }

    result = convert("usd", "eur", 100, fallback.table)
    out["100 usd -> eur"] = {
        "result": format_amount(result.result_amount),
        "rate": format_amount(result.effective_rate),
    }
    out["table x100"] = [
        (r.currency.code, r.rates.forward.display, r.rates.reverse.display)
        for r in rate_rows("jpy", fallback.table, 100)
    ]

    pprint(out)


if __name__ == "__main__":
    run()
