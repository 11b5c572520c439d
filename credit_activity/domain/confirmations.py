"""Matching of confirmation documents onto classified activities."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from .models import ClassifiedActivityRecord, ConfirmationRecord
from .repositories import ConfirmationStore

logger = logging.getLogger(__name__)


class ConfirmationMatcher:
    """Fetches confirmations for a batch of advances and attaches them by number."""

    def __init__(self, store: ConfirmationStore) -> None:
        self._store = store

    def fetch(self, institution_id: int, advance_numbers: Iterable[str]) -> Sequence[ConfirmationRecord]:
        distinct = list(dict.fromkeys(advance_numbers))
        if not distinct:
            return ()
        return self._store.lookup(institution_id, distinct)

    def attach(
        self,
        records: Sequence[ClassifiedActivityRecord],
        confirmations: Sequence[ConfirmationRecord],
    ) -> list[ClassifiedActivityRecord]:
        by_advance = self._group(confirmations)
        known = {record.advance_number for record in records}
        for advance_number in sorted(by_advance.keys() - known):
            logger.debug("Dropping confirmations for unknown advance %s", advance_number)
        return [
            replace(record, confirmations=tuple(by_advance.get(record.advance_number, ())))
            for record in records
        ]

    def match(self, institution_id: int, records: Sequence[ClassifiedActivityRecord]) -> list[ClassifiedActivityRecord]:
        confirmations = self.fetch(institution_id, (record.advance_number for record in records))
        return self.attach(records, confirmations)

    def find(self, institution_id: int, advance_number: str, confirmation_number: str) -> ConfirmationRecord | None:
        for confirmation in self.fetch(institution_id, [advance_number]):
            if confirmation.advance_number == advance_number and confirmation.confirmation_number == str(
                confirmation_number
            ):
                return confirmation
        return None

    @staticmethod
    def _group(confirmations: Sequence[ConfirmationRecord]) -> Mapping[str, list[ConfirmationRecord]]:
        grouped: dict[str, list[ConfirmationRecord]] = defaultdict(list)
        for confirmation in confirmations:
            grouped[confirmation.advance_number].append(confirmation)
        return grouped
