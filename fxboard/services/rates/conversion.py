from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from fxboard.models.constants import DEFAULT_PIVOT, SUPPORTED_CURRENCIES, Currency
from fxboard.services.formatting import format_rate_display
from .base import RateTable

"""Conversion arithmetic over a single rate table.

All functions are pure. A table maps code -> units of that code per 1 unit of
its pivot; the pivot itself is implicitly 1.0 and never a key. Plain floats
throughout, rounding happens only when formatting for display.
"""


class UnknownCurrencyError(KeyError):
    """A non-pivot code is missing from the active rate table."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"currency '{self.code}' is not in the active rate table"


class EmptyOrInvalidAmountError(ValueError):
    pass


@dataclass(frozen=True)
class ConversionResult:
    result_amount: float
    effective_rate: float


@dataclass(frozen=True)
class RateLeg:
    from_code: str
    to_code: str
    rate: float
    display: str


@dataclass(frozen=True)
class BidirectionalRate:
    forward: RateLeg
    reverse: RateLeg


@dataclass(frozen=True)
class RateRow:
    currency: Currency
    rates: BidirectionalRate


def bidirectional_rates(
    pivot: str, target: str, table: RateTable, multiplier: int = 1
) -> Optional[BidirectionalRate]:
    rate = table.get(target)
    if not rate:
        return None
    forward = rate * multiplier
    reverse = (1 / rate) * multiplier
    return BidirectionalRate(
        forward=RateLeg(pivot, target, forward, format_rate_display(forward, target)),
        reverse=RateLeg(target, pivot, reverse, format_rate_display(reverse, pivot)),
    )


def rate_rows(base: str, table: RateTable, multiplier: int = 1) -> List[RateRow]:
    rows: List[RateRow] = []
    for currency in SUPPORTED_CURRENCIES:
        if currency.code == base:
            continue
        pair = bidirectional_rates(base, currency.code, table, multiplier)
        if pair is not None:
            rows.append(RateRow(currency=currency, rates=pair))
    return rows


def _rate_for(code: str, table: RateTable) -> float:
    try:
        return table[code]
    except KeyError:
        raise UnknownCurrencyError(code) from None


def convert(
    from_code: str,
    to_code: str,
    amount: float,
    table: RateTable,
    pivot: str = DEFAULT_PIVOT,
) -> ConversionResult:
    if from_code == to_code:
        return ConversionResult(result_amount=amount, effective_rate=1.0)
    if from_code == pivot:
        rate = _rate_for(to_code, table)
        return ConversionResult(result_amount=amount * rate, effective_rate=rate)
    from_rate = _rate_for(from_code, table)
    if to_code == pivot:
        return ConversionResult(
            result_amount=amount / from_rate, effective_rate=1 / from_rate
        )
    to_rate = _rate_for(to_code, table)
    return ConversionResult(
        result_amount=(amount / from_rate) * to_rate,
        effective_rate=to_rate / from_rate,
    )


def validate_amount(raw: Union[str, float, int, None]) -> float:
    """Parse a user-entered amount; empty, non-numeric or non-positive is rejected."""
    if raw is None or isinstance(raw, bool):
        raise EmptyOrInvalidAmountError("amount is required")
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            raise EmptyOrInvalidAmountError("amount is required")
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        raise EmptyOrInvalidAmountError(f"amount '{raw}' is not a number") from None
    if not math.isfinite(amount) or amount <= 0:
        raise EmptyOrInvalidAmountError("amount must be a positive number")
    return amount
