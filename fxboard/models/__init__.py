"""Pydantic and plain data models for FX Board."""

from .constants import (
    CURRENCIES,
    CURRENCY_CODES,
    DEFAULT_PIVOT,
    MULTIPLIERS,
    SUPPORTED_CURRENCIES,
    Currency,
    UnsupportedCurrencyError,
    find_currency,
    normalize_code,
)  # re-export
from .rates import (
    CacheEntryOut,
    ConversionOut,
    CurrencyOut,
    RateLegOut,
    RateRowOut,
    RateTableOut,
    SuggestedMultipliersOut,
)

__all__ = [
    "CURRENCIES",
    "CURRENCY_CODES",
    "DEFAULT_PIVOT",
    "MULTIPLIERS",
    "SUPPORTED_CURRENCIES",
    "Currency",
    "UnsupportedCurrencyError",
    "find_currency",
    "normalize_code",
    "CacheEntryOut",
    "ConversionOut",
    "CurrencyOut",
    "RateLegOut",
    "RateRowOut",
    "RateTableOut",
    "SuggestedMultipliersOut",
]
