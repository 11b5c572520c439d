"""Adapters that serve generated data when no live system is configured."""
from __future__ import annotations

from typing import Sequence

from credit_activity.domain.models import ConfirmationRecord, DateRange, RawActivityRecord
from credit_activity.domain.repositories import (
    ConfirmationStore,
    InstitutionSizeOracle,
    ReferenceClock,
    TradeSystemClient,
)
from credit_activity.infrastructure.fallback.generator import FallbackGenerator

# Asset classes the trade system accepts, mapped to the instrument type they return.
ASSET_CLASS_INSTRUMENTS = {"ADVS": "ADVANCE", "ADVANCE": "ADVANCE", "LC": "LC"}


class FallbackTradeSystemClient(TradeSystemClient):
    def __init__(self, clock: ReferenceClock, generator: FallbackGenerator | None = None) -> None:
        self._clock = clock
        self._generator = generator or FallbackGenerator()

    def query(
        self,
        status_filter: Sequence[str],
        customer_id: int,
        asset_class: str,
        date_range: DateRange | None = None,
    ) -> Sequence[RawActivityRecord]:
        if date_range is None:
            generated = self._generator.generate(customer_id, self._clock.today())
        else:
            generated = self._generator.generate_historic(customer_id, date_range.start, date_range.end)
        wanted = set(status_filter)
        instrument = ASSET_CLASS_INSTRUMENTS.get(asset_class)
        return [
            record
            for record in generated
            if record.status in wanted and (instrument is None or record.instrument_type == instrument)
        ]


class FallbackConfirmationStore(ConfirmationStore):
    def __init__(self, clock: ReferenceClock, generator: FallbackGenerator | None = None) -> None:
        self._clock = clock
        self._generator = generator or FallbackGenerator()

    def lookup(self, institution_id: int, advance_numbers: Sequence[str]) -> Sequence[ConfirmationRecord]:
        today = self._clock.today()
        confirmations: list[ConfirmationRecord] = []
        for advance_number in advance_numbers:
            confirmations.extend(self._generator.generate_confirmations(institution_id, advance_number, today))
        return confirmations


class SmallInstitutionOracle(InstitutionSizeOracle):
    """Without a deal store every institution is treated as small."""

    def is_large(self, institution_id: int) -> bool:
        return False
