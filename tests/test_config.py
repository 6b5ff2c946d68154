import pytest

from fxboard.core.config import Settings
from fxboard.models.constants import UnsupportedCurrencyError
from fxboard.services.rates.fetcher import StaticRateSource
from fxboard.services.rates.service import build_rate_service


def test_defaults():
    s = Settings()
    s.init_post_load()
    assert s.rates_cache_ttl_seconds == 86400
    assert s.pivot_currency == "jpy"
    assert s.http_retries == 0
    assert s.feed_base_url.endswith("/v1/currencies")


def test_codes_are_normalized():
    s = Settings(pivot_currency="USD", default_base_currency="Eur")
    s.init_post_load()
    assert (s.pivot_currency, s.default_base_currency) == ("usd", "eur")


def test_env_override(monkeypatch):
    monkeypatch.setenv("RATE_SOURCE", "static")
    monkeypatch.setenv("RATES_CACHE_TTL_SECONDS", "60")
    s = Settings()
    assert s.rate_source == "static"
    assert s.rates_cache_ttl_seconds == 60


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"rate_source": "ftp"}, ValueError),
        ({"pivot_currency": "xyz"}, UnsupportedCurrencyError),
        ({"rates_cache_ttl_seconds": 0}, ValueError),
    ],
)
def test_invalid(kwargs, error):
    with pytest.raises(error):
        Settings(**kwargs).init_post_load()


def test_build_rate_service_from_settings():
    s = Settings(rate_source="static", rates_cache_ttl_seconds=60)
    s.init_post_load()
    svc = build_rate_service(s)
    assert svc.cache.ttl_ms == 60_000
    assert svc.get_rates("jpy").from_cache is False
    assert isinstance(svc._source, StaticRateSource)
