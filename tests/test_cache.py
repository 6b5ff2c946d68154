import threading

import pytest

from fxboard.services.rates.cache import DAY_MS, RateCache

T0 = 1_700_000_000_000


def test_get_missing_is_none():
    assert RateCache().get("jpy") is None


def test_put_replaces_wholesale():
    cache = RateCache()
    cache.put("jpy", {"usd": 0.0067, "eur": 0.0062}, T0)
    cache.put("jpy", {"usd": 0.0068}, T0 + 5)
    entry = cache.get("jpy")
    assert entry.rates == {"usd": 0.0068}
    assert entry.fetched_at_ms == T0 + 5
    assert entry.base_currency == "jpy"
    assert len(cache) == 1


def test_put_copies_table():
    cache = RateCache()
    table = {"usd": 0.0067}
    cache.put("jpy", table, T0)
    table["usd"] = 99.0
    assert cache.get("jpy").rates == {"usd": 0.0067}


@pytest.mark.parametrize(
    "age, fresh",
    [(0, True), (DAY_MS - 1, True), (DAY_MS, False), (DAY_MS + 1, False), (10 * DAY_MS, False)],
)
def test_freshness_boundary(age, fresh):
    cache = RateCache()
    entry = cache.put("usd", {"jpy": 150.0}, T0)
    assert cache.is_fresh(entry, T0 + age) is fresh


def test_custom_ttl():
    cache = RateCache(ttl_ms=1000)
    entry = cache.put("usd", {"jpy": 150.0}, T0)
    assert cache.is_fresh(entry, T0 + 999)
    assert not cache.is_fresh(entry, T0 + 1000)


def test_invalid_ttl():
    with pytest.raises(ValueError):
        RateCache(ttl_ms=0)


def test_entries_one_per_base():
    cache = RateCache()
    for i, base in enumerate(["jpy", "usd", "eur", "jpy"]):
        cache.put(base, {"x": 1.0 + i}, T0 + i)
    assert sorted(e.base_currency for e in cache.entries()) == ["eur", "jpy", "usd"]


def test_concurrent_replacement_keeps_whole_tables():
    cache = RateCache()

    def writer(n):
        for i in range(200):
            cache.put("jpy", {"usd": float(n), "eur": float(n)}, T0 + i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(1, 5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    rates = cache.get("jpy").rates
    assert rates["usd"] == rates["eur"]
