"""Display formatting helpers.

Pure functions only; the rate table and converter share them so every number
on screen follows the same precision and grouping rules.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from fxboard.models.constants import find_currency

_GROUPING = re.compile(r"\B(?=(\d{3})+(?!\d))")


def select_precision(rate: float) -> int:
    if rate > 100:
        return 2
    if rate > 10:
        return 3
    if rate < 0.01:
        return 6
    return 4


def group_thousands(numeric_string: str) -> str:
    """Insert commas every three digits of the integer part; fraction untouched."""
    integer, sep, fraction = numeric_string.partition(".")
    return _GROUPING.sub(",", integer) + sep + fraction


def optimal_multiplier(rate: float) -> int:
    if rate < 0.01:
        return 10000
    if rate < 0.1:
        return 1000
    if rate < 1:
        return 100
    if rate < 10:
        return 10
    return 1


def format_rate_display(rate: float, currency_code: str) -> str:
    currency = find_currency(currency_code)
    symbol = currency.symbol if currency else currency_code.upper()
    fixed = f"{rate:.{select_precision(rate)}f}"
    return f"{group_thousands(fixed)} {symbol}"


def format_amount(value: float) -> str:
    # six decimals, trailing zeros and a dangling point removed
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_last_updated(fetched_at_ms: int, from_cache: bool = False) -> str:
    stamp = datetime.fromtimestamp(fetched_at_ms / 1000, tz=timezone.utc)
    text = f"Last updated: {stamp:%Y-%m-%d %H:%M:%S} UTC"
    if from_cache:
        text += " (cached)"
    return text


__all__ = [
    "select_precision",
    "group_thousands",
    "optimal_multiplier",
    "format_rate_display",
    "format_amount",
    "format_last_updated",
]
