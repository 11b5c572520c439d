"""Partitioning of trade system queries."""
from __future__ import annotations

from typing import Sequence

from . import statuses
from .models import DateRange, QuerySpec


class TradeQueryPlanner:
    """Decides whether to query every status at once or one status at a time.

    The trade system silently truncates large result sets, so institutions above
    the size threshold are queried per status.
    """

    def __init__(self, active_statuses: Sequence[str] = statuses.ACTIVE_ADVANCE_STATUSES) -> None:
        if not active_statuses:
            raise ValueError("at least one active status is required")
        self._active_statuses = tuple(active_statuses)

    @property
    def active_statuses(self) -> tuple[str, ...]:
        return self._active_statuses

    def plan(
        self,
        institution_id: int,
        instrument_filter: str,
        is_large_institution: bool,
        date_range: DateRange | None = None,
    ) -> list[QuerySpec]:
        if not is_large_institution:
            return [QuerySpec(institution_id, instrument_filter, self._active_statuses, date_range)]
        return [
            QuerySpec(institution_id, instrument_filter, (status,), date_range)
            for status in self._active_statuses
        ]
