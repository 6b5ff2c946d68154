from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fxboard.core.config import Settings, app_settings
from fxboard.models.constants import normalize_code
from fxboard.models.rates import ConversionOut
from fxboard.services.formatting import format_amount
from fxboard.services.rates.conversion import convert, validate_amount
from fxboard.services.rates.service import RateService, get_rate_service

"""Conversion router.

GET /convert?from=usd&to=eur&amount=100

Conversions always use the pivot currency's table (settings.pivot_currency),
whatever base the client is currently displaying. Amount is validated before
any rate lookup so empty or non-positive input never reaches the engine.
"""

router = APIRouter(tags=["convert"])


@router.get("/convert", response_model=ConversionOut, summary="Convert an amount between currencies")
async def convert_amount(
    from_code: str = Query(..., alias="from", description="Source currency code"),
    to_code: str = Query(..., alias="to", description="Target currency code"),
    amount: Optional[str] = Query(None, description="Positive amount in source currency"),
    svc: RateService = Depends(get_rate_service),
    settings: Settings = Depends(app_settings),
):
    value = validate_amount(amount)
    from_code = normalize_code(from_code)
    to_code = normalize_code(to_code)
    pivot = settings.pivot_currency
    result = await svc.get_rates_async(pivot)
    converted = convert(from_code, to_code, value, result.table, pivot)
    return ConversionOut(
        from_code=from_code,
        to_code=to_code,
        amount=value,
        result=converted.result_amount,
        rate=converted.effective_rate,
        result_display=format_amount(converted.result_amount),
        rate_display=format_amount(converted.effective_rate),
        fetched_at=datetime.fromtimestamp(result.fetched_at_ms / 1000, tz=timezone.utc),
        from_cache=result.from_cache,
        stale=result.stale,
    )
