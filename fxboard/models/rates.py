from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from .constants import CURRENCIES


class CurrencyOut(BaseModel):
    code: str
    name: str
    symbol: str


class RateLegOut(BaseModel):
    from_code: str = Field(..., alias="from")
    to_code: str = Field(..., alias="to")
    rate: float = Field(..., gt=0)
    display: str

    model_config = {"populate_by_name": True}


class RateRowOut(BaseModel):
    currency: CurrencyOut
    forward: RateLegOut
    reverse: RateLegOut


class RateTableOut(BaseModel):
    base: str
    multiplier: int
    fetched_at: datetime
    fetched_at_ms: int
    from_cache: bool
    stale: bool
    last_updated: str
    rows: List[RateRowOut]

    @field_validator("base")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        if v not in CURRENCIES:
            raise ValueError("unsupported currency")
        return v


class SuggestedMultipliersOut(BaseModel):
    base: str
    multipliers: Dict[str, int]


class CacheEntryOut(BaseModel):
    base: str
    fetched_at: datetime
    age_seconds: float
    fresh: bool
    currencies: int


class ConversionOut(BaseModel):
    from_code: str = Field(..., alias="from")
    to_code: str = Field(..., alias="to")
    amount: float = Field(..., gt=0)
    result: float
    rate: float
    result_display: str
    rate_display: str
    fetched_at: datetime
    from_cache: bool
    stale: bool

    model_config = {"populate_by_name": True}

    @field_validator("from_code", "to_code")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        if v not in CURRENCIES:
            raise ValueError("unsupported currency")
        return v
