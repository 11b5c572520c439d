"""Ports to the systems the aggregator depends on."""
from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from .models import ConfirmationRecord, DateRange, RawActivityRecord


class TradeSystemClient(Protocol):
    """Reads trade activities from the booking system."""

    def query(
        self,
        status_filter: Sequence[str],
        customer_id: int,
        asset_class: str,
        date_range: DateRange | None = None,
    ) -> Sequence[RawActivityRecord]:
        ...


class ConfirmationStore(Protocol):
    """Provides confirmation documents for advances."""

    def lookup(self, institution_id: int, advance_numbers: Sequence[str]) -> Sequence[ConfirmationRecord]:
        ...


class InstitutionSizeOracle(Protocol):
    def is_large(self, institution_id: int) -> bool:
        ...


class ReferenceClock(Protocol):
    """Supplies "today" so classification can be pinned in tests."""

    def today(self) -> date:
        ...

    def now(self) -> datetime:
        ...
