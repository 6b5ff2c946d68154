"""Application view state and reducers.

Replaces DOM event wiring: a rendering client keeps one AppState, feeds user
actions and fetch completions through the reducers below and renders whatever
comes out. Reducers never mutate; each returns a new AppState.

Rate loads are tagged with the sequence number handed out by `select_base`
(or `request_rates`). A completion whose number is not the current
`pending_seq` belongs to an abandoned selection and is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from fxboard.models.constants import DEFAULT_PIVOT, MULTIPLIERS, normalize_code
from fxboard.services.formatting import format_last_updated
from fxboard.services.rates.base import RateTable
from fxboard.services.rates.conversion import (
    ConversionResult,
    EmptyOrInvalidAmountError,
    RateRow,
    convert,
    rate_rows,
    validate_amount,
)
from fxboard.services.rates.service import RateResult


@dataclass(frozen=True)
class AppState:
    base_currency: str = DEFAULT_PIVOT
    multiplier: int = 1
    rates: RateTable = field(default_factory=dict)
    last_updated_ms: Optional[int] = None
    from_cache: bool = False
    is_loading: bool = False
    error: Optional[str] = None
    pending_seq: int = 0
    from_currency: str = "usd"
    to_currency: str = DEFAULT_PIVOT
    amount_text: str = ""


def request_rates(state: AppState) -> Tuple[AppState, int]:
    seq = state.pending_seq + 1
    return replace(state, is_loading=True, error=None, pending_seq=seq), seq


def select_base(state: AppState, code: str) -> Tuple[AppState, int]:
    return request_rates(replace(state, base_currency=normalize_code(code)))


def select_multiplier(state: AppState, multiplier: int) -> AppState:
    if multiplier not in MULTIPLIERS:
        raise ValueError(f"multiplier must be one of {MULTIPLIERS}")
    return replace(state, multiplier=multiplier)


def rates_loaded(state: AppState, seq: int, result: RateResult) -> AppState:
    if seq != state.pending_seq or result.base != state.base_currency:
        return state
    return replace(
        state,
        rates=dict(result.table),
        last_updated_ms=result.fetched_at_ms,
        from_cache=result.from_cache,
        is_loading=False,
        error=None,
    )


def rates_failed(state: AppState, seq: int, message: str) -> AppState:
    if seq != state.pending_seq:
        return state
    return replace(
        state, is_loading=False, error=f"Failed to load exchange rates: {message}"
    )


def set_amount(state: AppState, text: str) -> AppState:
    return replace(state, amount_text=text)


def set_pair(state: AppState, from_code: str, to_code: str) -> AppState:
    return replace(
        state,
        from_currency=normalize_code(from_code),
        to_currency=normalize_code(to_code),
    )


def swap_currencies(state: AppState) -> AppState:
    return replace(state, from_currency=state.to_currency, to_currency=state.from_currency)


def rate_table(state: AppState) -> List[RateRow]:
    if not state.rates:
        return []
    return rate_rows(state.base_currency, state.rates, state.multiplier)


def footer_text(state: AppState) -> Optional[str]:
    if state.last_updated_ms is None:
        return None
    return format_last_updated(state.last_updated_ms, state.from_cache)


def conversion(
    state: AppState, pivot_table: RateTable, pivot: str = DEFAULT_PIVOT
) -> Optional[ConversionResult]:
    """Convert the current input against the pivot table; None when the amount is unusable."""
    try:
        amount = validate_amount(state.amount_text)
    except EmptyOrInvalidAmountError:
        return None
    return convert(state.from_currency, state.to_currency, amount, pivot_table, pivot)
