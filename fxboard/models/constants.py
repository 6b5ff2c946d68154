"""Supported currencies and display multipliers.

Adding a currency is a data change only: append it to SUPPORTED_CURRENCIES.
Order matters, the rate table lists rows in this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    symbol: str


SUPPORTED_CURRENCIES: Tuple[Currency, ...] = (
    Currency("jpy", "Japanese Yen", "¥"),
    Currency("usd", "US Dollar", "$"),
    Currency("eur", "Euro", "€"),
    Currency("gbp", "British Pound", "£"),
    Currency("aud", "Australian Dollar", "A$"),
    Currency("cad", "Canadian Dollar", "C$"),
    Currency("chf", "Swiss Franc", "CHF"),
    Currency("cny", "Chinese Yuan", "¥"),
    Currency("krw", "South Korean Won", "₩"),
)

CURRENCIES: Dict[str, Currency] = {c.code: c for c in SUPPORTED_CURRENCIES}
CURRENCY_CODES: Tuple[str, ...] = tuple(CURRENCIES)
MULTIPLIERS: Tuple[int, ...] = (1, 10, 100, 1000, 10000)
DEFAULT_PIVOT = "jpy"


class UnsupportedCurrencyError(ValueError):
    def __init__(self, code: str):
        super().__init__(f"unsupported currency '{code}'")
        self.code = code


def normalize_code(code: str) -> str:
    """Lowercase and validate a currency code coming from outside."""
    normalized = (code or "").strip().lower()
    if normalized not in CURRENCIES:
        raise UnsupportedCurrencyError(code)
    return normalized


def find_currency(code: str) -> Optional[Currency]:
    return CURRENCIES.get((code or "").lower())
