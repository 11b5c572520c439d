"""Institution size determination backed by a deal count."""
from __future__ import annotations

from typing import Callable

from credit_activity.domain.repositories import InstitutionSizeOracle
from credit_activity.domain.statuses import LARGE_INSTITUTION_THRESHOLD


class DealCountSizeOracle(InstitutionSizeOracle):
    """Large means more outstanding advance deals than the threshold."""

    def __init__(self, count_deals: Callable[[int], int], threshold: int = LARGE_INSTITUTION_THRESHOLD) -> None:
        self._count_deals = count_deals
        self._threshold = threshold

    def is_large(self, institution_id: int) -> bool:
        return int(self._count_deals(institution_id)) > self._threshold
