from fxboard.services.http_client import HttpError, NetworkError
from fxboard.services.rates.cache import DAY_MS

from .conftest import T0


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert "x-request-id" in r.headers


def test_currencies(client):
    data = client.get("/currencies").json()
    assert [c["code"] for c in data][:3] == ["jpy", "usd", "eur"]
    assert data[1] == {"code": "usd", "name": "US Dollar", "symbol": "$"}


def test_rate_table(client, source):
    r = client.get("/rates/JPY", params={"multiplier": 100})
    assert r.status_code == 200
    data = r.json()
    assert data["base"] == "jpy"
    assert data["multiplier"] == 100
    assert data["from_cache"] is False
    assert data["stale"] is False
    assert data["fetched_at_ms"] == T0
    usd = next(row for row in data["rows"] if row["currency"]["code"] == "usd")
    assert usd["forward"]["from"] == "jpy"
    assert usd["forward"]["display"] == "0.6700 $"
    assert usd["reverse"]["display"] == "14,925.37 ¥"
    assert source.calls == ["jpy"]


def test_second_request_served_from_cache(client, source):
    client.get("/rates/jpy")
    data = client.get("/rates/jpy").json()
    assert data["from_cache"] is True
    assert data["last_updated"].endswith("(cached)")
    assert source.calls == ["jpy"]


def test_invalid_multiplier(client):
    r = client.get("/rates/jpy", params={"multiplier": 7})
    assert r.status_code == 422


def test_unsupported_base(client):
    r = client.get("/rates/xyz")
    assert r.status_code == 404
    assert r.json()["error"] == "unsupported_currency"


def test_feed_failure_without_cache(client, source):
    source.error = HttpError(503)
    r = client.get("/rates/jpy")
    assert r.status_code == 502
    assert r.json()["error"] == "rate_feed_unavailable"
    assert r.json()["upstream_status"] == 503


def test_feed_failure_with_stale_cache(client, source, clock):
    client.get("/rates/jpy")
    clock.advance(DAY_MS + 1)
    source.error = NetworkError("down")
    data = client.get("/rates/jpy").json()
    assert data["from_cache"] is True
    assert data["stale"] is True
    assert data["fetched_at_ms"] == T0


def test_suggested_multiplier(client):
    data = client.get("/rates/jpy/suggested-multiplier").json()
    assert data["multipliers"]["usd"] == 10000
    assert data["multipliers"]["krw"] == 10


def test_cache_status(client, clock):
    client.get("/rates/jpy")
    clock.advance(1000)
    data = client.get("/rates/cache").json()
    assert len(data) == 1
    assert data[0]["base"] == "jpy"
    assert data[0]["fresh"] is True
    assert data[0]["age_seconds"] == 1.0


def test_convert_from_pivot(client):
    r = client.get("/convert", params={"from": "jpy", "to": "usd", "amount": "1000"})
    assert r.status_code == 200
    data = r.json()
    assert data["from"] == "jpy"
    assert data["result_display"] == "6.7"
    assert data["rate_display"] == "0.0067"


def test_convert_cross_pair_uses_pivot_table(client, source):
    client.get("/rates/jpy")
    data = client.get("/convert", params={"from": "USD", "to": "eur", "amount": "100"}).json()
    assert abs(data["result"] - 100 / 0.0067 * 0.0062) < 1e-9
    assert source.calls == ["jpy"]


def test_convert_invalid_amount(client, source):
    for amount in ("", "0", "-1", "abc"):
        r = client.get("/convert", params={"from": "jpy", "to": "usd", "amount": amount})
        assert r.status_code == 422
        assert r.json()["error"] == "invalid_amount"
    assert source.calls == []


def test_convert_unknown_currency_in_table(client, source):
    source.tables["jpy"] = {"usd": 0.0067}
    r = client.get("/convert", params={"from": "jpy", "to": "eur", "amount": "1"})
    assert r.status_code == 500
    assert r.json()["error"] == "unknown_currency"


def test_root_reports_default_base_and_pivot(client):
    data = client.get("/").json()
    assert data["default_base"] == "jpy"
    assert data["pivot"] == "jpy"

