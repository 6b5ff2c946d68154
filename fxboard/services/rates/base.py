from __future__ import annotations

"""Rate source abstraction.

A rate source returns the rate table for one base currency:
{code: units of code per 1 unit of base}. The base itself is never a key.
"""
from abc import ABC, abstractmethod
from typing import Dict

RateTable = Dict[str, float]


class RateSource(ABC):
    @abstractmethod
    def fetch(self, base: str) -> RateTable:
        """Return the rate table for `base` or raise a RateFeedError."""
        raise NotImplementedError
