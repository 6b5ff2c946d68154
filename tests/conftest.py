"""Shared fixtures: a controllable clock, a scripted rate source and an API client."""

from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from fxboard.core.config import Settings
from fxboard.main import create_app
from fxboard.services.http_client import NetworkError
from fxboard.services.rates.base import RateSource
from fxboard.services.rates.cache import RateCache
from fxboard.services.rates.service import RateService

T0 = 1_700_000_000_000

JPY_TABLE: Dict[str, float] = {
    "usd": 0.0067,
    "eur": 0.0062,
    "gbp": 0.0053,
    "aud": 0.0102,
    "cad": 0.0093,
    "chf": 0.0059,
    "cny": 0.048,
    "krw": 9.2,
}


class Clock:
    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class ScriptedSource(RateSource):
    """Serves per-base tables; flip `error` to make every fetch fail."""

    def __init__(self, tables: Dict[str, Dict[str, float]] | None = None):
        self.tables = tables if tables is not None else {"jpy": dict(JPY_TABLE)}
        self.error: Exception | None = None
        self.calls: List[str] = []

    def fetch(self, base: str):
        self.calls.append(base)
        if self.error is not None:
            raise self.error
        if base not in self.tables:
            raise NetworkError(f"no table for {base}")
        return dict(self.tables[base])


@pytest.fixture
def jpy_table():
    return dict(JPY_TABLE)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def source():
    return ScriptedSource()


@pytest.fixture
def service(source, clock):
    return RateService(source, RateCache(), clock=clock)


@pytest.fixture
def client(service):
    settings = Settings(rate_source="static", debug=False)
    settings.init_post_load()
    app = create_app(settings_override=settings, rate_service=service)
    return TestClient(app)
