"""Classification rules for raw trade activities."""
from __future__ import annotations

from datetime import date

from . import statuses
from .models import ClassifiedActivityRecord, InstrumentType, RawActivityRecord, StatusBucket

TERMINATION_DESCRIPTION = "TERMINATION"


def is_stale_amended_advance(raw: RawActivityRecord, today: date) -> bool:
    """True for an old advance that was amended rather than prepaid.

    Such records must not enter a feed. The same rule serves both today's and
    historic credit activity.
    """
    if raw.status not in statuses.TODAYS_CREDIT_STATUSES:
        return False
    return (
        raw.instrument_kind is InstrumentType.ADVANCE
        and raw.status != statuses.EXERCISED
        and raw.termination_par is None
        and raw.funding_date is not None
        and raw.funding_date < today
    )


class ActivityClassifier:
    """Maps raw records onto a status bucket and product description."""

    def __init__(self, today: date) -> None:
        self._today = today

    def classify(self, raw: RawActivityRecord) -> ClassifiedActivityRecord:
        bucket = self.bucket_for(raw)
        interest_rate = None if bucket is StatusBucket.EXERCISED else raw.interest_rate
        return ClassifiedActivityRecord(
            raw=raw,
            bucket=bucket,
            product_description=self.describe(raw, bucket),
            interest_rate=interest_rate,
        )

    def bucket_for(self, raw: RawActivityRecord) -> StatusBucket:
        if raw.status in statuses.TODAYS_ADVANCE_STATUSES:
            if raw.trade_date.date() < self._today:
                return StatusBucket.OUTSTANDING
            return StatusBucket.PROCESSING
        if raw.status == statuses.TERMINATED:
            return StatusBucket.TERMINATED
        if raw.status == statuses.EXERCISED:
            return StatusBucket.EXERCISED
        # MATURED and anything unrecognised.
        return StatusBucket.OTHER

    @staticmethod
    def describe(raw: RawActivityRecord, bucket: StatusBucket) -> str:
        kind = raw.instrument_kind
        if (kind is InstrumentType.ADVANCE and bucket is StatusBucket.EXERCISED) or (
            kind in (InstrumentType.ADVANCE, InstrumentType.LETTER_OF_CREDIT) and bucket is StatusBucket.TERMINATED
        ):
            return raw.termination_full_partial or ""
        if raw.status == statuses.TERMINATED and kind is InstrumentType.OTHER:
            return TERMINATION_DESCRIPTION
        if raw.termination_par is not None and raw.termination_full_partial is not None:
            # amended, not prepaid
            return raw.instrument_type
        if kind is InstrumentType.ADVANCE:
            if raw.sub_product:
                return f"{raw.instrument_type} {raw.sub_product}"
            return raw.instrument_type
        return raw.instrument_type
