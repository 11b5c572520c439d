"""Conversion of fractional rates into display percentages."""
from __future__ import annotations

from decimal import Decimal

_HUNDRED = Decimal("100")


class RateConverter:
    """Turns 0.0325 into 3.25; absent rates stay absent."""

    @staticmethod
    def to_percentage(rate: Decimal | None) -> Decimal | None:
        if rate is None:
            return None
        return rate * _HUNDRED
