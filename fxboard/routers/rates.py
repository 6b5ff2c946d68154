from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from fxboard.models.constants import MULTIPLIERS, SUPPORTED_CURRENCIES, normalize_code
from fxboard.models.rates import (
    CacheEntryOut,
    CurrencyOut,
    RateLegOut,
    RateRowOut,
    RateTableOut,
    SuggestedMultipliersOut,
)
from fxboard.services.formatting import format_last_updated, optimal_multiplier
from fxboard.services.rates.conversion import RateLeg, rate_rows
from fxboard.services.rates.service import RateService, get_rate_service

"""Rates router.

Endpoints:
    - GET /currencies                           -> supported currencies in display order
    - GET /rates/cache                          -> cached tables with age / freshness
    - GET /rates/{base}?multiplier=N            -> bidirectional rate table for base
    - GET /rates/{base}/suggested-multiplier    -> readable multiplier per target
"""

router = APIRouter(tags=["rates"])


def _utc(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def _leg_out(leg: RateLeg) -> RateLegOut:
    return RateLegOut(from_code=leg.from_code, to_code=leg.to_code, rate=leg.rate, display=leg.display)


@router.get("/currencies", response_model=List[CurrencyOut], summary="Supported currencies")
async def list_currencies():
    return [CurrencyOut(code=c.code, name=c.name, symbol=c.symbol) for c in SUPPORTED_CURRENCIES]


@router.get("/rates/cache", response_model=List[CacheEntryOut], summary="Cached rate tables")
async def cache_status(svc: RateService = Depends(get_rate_service)):
    now_ms = svc.now()
    cache = svc.cache
    return [
        CacheEntryOut(
            base=e.base_currency,
            fetched_at=_utc(e.fetched_at_ms),
            age_seconds=e.age_ms(now_ms) / 1000,
            fresh=cache.is_fresh(e, now_ms),
            currencies=len(e.rates),
        )
        for e in sorted(cache.entries(), key=lambda e: e.base_currency)
    ]


@router.get("/rates/{base}", response_model=RateTableOut, summary="Bidirectional rate table")
async def get_rate_table(
    base: str,
    multiplier: int = Query(1, description="Display multiplier: 1, 10, 100, 1000 or 10000"),
    svc: RateService = Depends(get_rate_service),
):
    if multiplier not in MULTIPLIERS:
        raise HTTPException(status_code=422, detail=f"multiplier must be one of {list(MULTIPLIERS)}")
    base = normalize_code(base)
    result = await svc.get_rates_async(base)
    rows = [
        RateRowOut(
            currency=CurrencyOut(code=r.currency.code, name=r.currency.name, symbol=r.currency.symbol),
            forward=_leg_out(r.rates.forward),
            reverse=_leg_out(r.rates.reverse),
        )
        for r in rate_rows(base, result.table, multiplier)
    ]
    return RateTableOut(
        base=base,
        multiplier=multiplier,
        fetched_at=_utc(result.fetched_at_ms),
        fetched_at_ms=result.fetched_at_ms,
        from_cache=result.from_cache,
        stale=result.stale,
        last_updated=format_last_updated(result.fetched_at_ms, result.from_cache),
        rows=rows,
    )


@router.get(
    "/rates/{base}/suggested-multiplier",
    response_model=SuggestedMultipliersOut,
    summary="Readable display multiplier per target currency",
)
async def suggested_multipliers(base: str, svc: RateService = Depends(get_rate_service)):
    base = normalize_code(base)
    result = await svc.get_rates_async(base)
    return SuggestedMultipliersOut(
        base=base,
        multipliers={
            c.code: optimal_multiplier(result.table[c.code])
            for c in SUPPORTED_CURRENCIES
            if c.code != base and c.code in result.table
        },
    )
