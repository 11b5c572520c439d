"""Seeded stand-in data for environments without a trade booking system.

Every record is drawn from its own ``random.Random`` seeded by stable business
keys, so the same institution, date and index always produce the same record.
"""
from __future__ import annotations

import random
import zlib
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Sequence

from credit_activity.domain import statuses
from credit_activity.domain.models import ConfirmationRecord, InstrumentType, RawActivityRecord

DEFAULT_DOCUMENT_REFERENCE = "fakes/advance_confirmation.pdf"

SUB_PRODUCTS = ("FX CONSTANT", "VR S-I FLTR", "O/N VRC", "OPEN VRC", "ARC", "AMORTIZING")
OPEN_ENDED_SUB_PRODUCTS = {"OPEN VRC", "O/N VRC"}
TERMINATION_KINDS = ("FULL PREPAYMENT", "PARTIAL PREPAYMENT", "FULL REPAYMENT", "PARTIAL REPAYMENT")

PAR_RANGE = (10**6, 10**9)
RATE_BASIS_POINTS_RANGE = (10, 600)
HISTORIC_COUNT_RANGE = (1, 18)
CONFIRMATION_COUNT_RANGE = (0, 2)
CONFIRMATION_AGE_DAYS = (1, 50)
CONFIRMATION_NUMBER_RANGE = (1000, 999999)


def daily_record_count(as_of: date) -> int:
    """Sunday yields 1 record, Monday 2, ... Saturday 7."""
    return as_of.isoweekday() % 7 + 1


def record_seed(institution_id: int, as_of: date, index: int) -> int:
    return institution_id * 10**10 + as_of.toordinal() * 1000 + index


def historic_count_seed(institution_id: int, start: date) -> int:
    return institution_id * 10**10 + start.toordinal()


def historic_record_seed(institution_id: int, start: date, index: int) -> int:
    return (institution_id * 10**10 + start.toordinal()) * 100 + index


def confirmation_seed(institution_id: int, advance_number: str) -> int:
    if advance_number.isdigit():
        return institution_id + int(advance_number)
    return institution_id + zlib.crc32(advance_number.encode("utf-8"))


class FallbackGenerator:
    def __init__(
        self,
        status_choices: Sequence[str] = statuses.TODAYS_CREDIT_STATUSES,
        document_reference: str = DEFAULT_DOCUMENT_REFERENCE,
    ) -> None:
        self._status_choices = tuple(status_choices)
        self._document_reference = document_reference

    def generate(self, institution_id: int, as_of_date: date, count: int | None = None) -> list[RawActivityRecord]:
        if count is None:
            count = daily_record_count(as_of_date)
        return [self.generate_record(institution_id, as_of_date, index) for index in range(count)]

    def generate_record(self, institution_id: int, as_of_date: date, index: int) -> RawActivityRecord:
        rng = random.Random(record_seed(institution_id, as_of_date, index))
        trade_day = as_of_date - timedelta(days=rng.randint(0, 3))
        funding_date = as_of_date + timedelta(days=rng.randint(0, 5))
        return self._draw_record(rng, index, trade_day, funding_date, as_of_date)

    def generate_historic(self, institution_id: int, start: date, end: date) -> list[RawActivityRecord]:
        """Activity traded inside ``[start, end]``, funded one to three days after trading."""
        if end < start:
            return []
        count = random.Random(historic_count_seed(institution_id, start)).randint(*HISTORIC_COUNT_RANGE)
        span = (end - start).days
        records = []
        for index in range(count):
            rng = random.Random(historic_record_seed(institution_id, start, index))
            trade_day = start + timedelta(days=rng.randint(0, span))
            funding_date = min(trade_day + timedelta(days=rng.randint(1, 3)), end)
            termination_date = min(funding_date + timedelta(days=rng.randint(0, 30)), end)
            records.append(self._draw_record(rng, index, trade_day, funding_date, termination_date))
        return records

    def _draw_record(
        self,
        rng: random.Random,
        index: int,
        trade_day: date,
        funding_date: date,
        termination_day: date,
    ) -> RawActivityRecord:
        status = rng.choice(self._status_choices)
        instrument = InstrumentType.LETTER_OF_CREDIT.value if rng.random() < 0.2 else InstrumentType.ADVANCE.value
        sub_product = rng.choice(SUB_PRODUCTS) if instrument == InstrumentType.ADVANCE.value else None

        trade_time = time(rng.randint(7, 16), rng.randint(0, 59), rng.randint(0, 59))
        maturity_date = None
        if sub_product not in OPEN_ENDED_SUB_PRODUCTS:
            maturity_date = funding_date + timedelta(days=rng.randint(30, 3650))

        par = Decimal(rng.randint(*PAR_RANGE))
        rate = Decimal(rng.randint(*RATE_BASIS_POINTS_RANGE)) / Decimal(10000)

        termination_par = termination_fee = termination_full_partial = termination_date = None
        if status in (statuses.TERMINATED, statuses.EXERCISED):
            termination_full_partial = rng.choice(TERMINATION_KINDS)
            fraction = Decimal(1) if termination_full_partial.startswith("FULL") else Decimal(rng.randint(10, 90)) / 100
            termination_par = par * fraction
            termination_fee = Decimal(rng.randint(0, 50000))
            termination_date = termination_day

        return RawActivityRecord(
            instrument_type=instrument,
            status=status,
            trade_date=datetime.combine(trade_day, trade_time),
            advance_number=str(rng.randint(1000, 9999) * 100 + index),
            current_par=par,
            funding_date=funding_date,
            maturity_date=maturity_date,
            interest_rate=rate,
            product="ADVS" if instrument == InstrumentType.ADVANCE.value else "LC",
            sub_product=sub_product,
            termination_par=termination_par,
            termination_fee=termination_fee,
            termination_full_partial=termination_full_partial,
            termination_date=termination_date,
        )

    def generate_confirmations(
        self,
        institution_id: int,
        advance_number: str,
        as_of_date: date,
    ) -> list[ConfirmationRecord]:
        rng = random.Random(confirmation_seed(institution_id, advance_number))
        confirmations = []
        seen: set[int] = set()
        for _ in range(rng.randint(*CONFIRMATION_COUNT_RANGE)):
            confirmation_date = as_of_date - timedelta(days=rng.randint(*CONFIRMATION_AGE_DAYS))
            number = rng.randint(*CONFIRMATION_NUMBER_RANGE)
            while number in seen:
                number += 1
            seen.add(number)
            confirmations.append(
                ConfirmationRecord(
                    confirmation_date=confirmation_date,
                    confirmation_number=str(number),
                    advance_number=advance_number,
                    document_reference=self._document_reference,
                )
            )
        return confirmations
