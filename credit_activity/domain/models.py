"""Domain models for the credit activity feed.

Raw records arrive from the trade booking system (or the fallback generator),
are classified into display-ready records and finally collected into an
``ActivityFeed`` together with their confirmation documents.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence

from .errors import InvalidActivityRecord


class InstrumentType(str, Enum):
    ADVANCE = "ADVANCE"
    LETTER_OF_CREDIT = "LC"
    OTHER = "OTHER"

    @classmethod
    def from_code(cls, code: str) -> InstrumentType:
        for member in (cls.ADVANCE, cls.LETTER_OF_CREDIT):
            if member.value == code:
                return member
        return cls.OTHER


class StatusBucket(str, Enum):
    OUTSTANDING = "Outstanding"
    PROCESSING = "Processing"
    TERMINATED = "Terminated"
    EXERCISED = "Exercised"
    OTHER = "Other"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class QuerySpec:
    """One request against the trade booking system."""

    institution_id: int
    asset_class: str
    statuses: tuple[str, ...]
    date_range: DateRange | None = None


@dataclass(frozen=True)
class RawActivityRecord:
    """A trade activity exactly as reported upstream, with typed fields."""

    instrument_type: str
    status: str
    trade_date: datetime
    advance_number: str
    current_par: Decimal
    funding_date: date | None = None
    maturity_date: date | None = None
    interest_rate: Decimal | None = None
    product: str | None = None
    sub_product: str | None = None
    termination_par: Decimal | None = None
    termination_fee: Decimal | None = None
    termination_full_partial: str | None = None
    termination_date: date | None = None

    def __post_init__(self) -> None:
        if not self.advance_number:
            raise InvalidActivityRecord("advance number is required")
        if not self.instrument_type:
            raise InvalidActivityRecord(f"instrument type is required for {self.advance_number}")
        if not self.status:
            raise InvalidActivityRecord(f"status is required for {self.advance_number}")
        if not isinstance(self.trade_date, datetime):
            raise InvalidActivityRecord(f"trade date must be a datetime for {self.advance_number}")
        if self.trade_date.tzinfo is not None:
            object.__setattr__(self, "trade_date", _naive_utc(self.trade_date))

    @property
    def instrument_kind(self) -> InstrumentType:
        return InstrumentType.from_code(self.instrument_type)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> RawActivityRecord:
        """Build a record from the trade system's field names.

        Blank values are treated as absent. Raises ``InvalidActivityRecord`` when a
        field cannot be parsed.
        """
        trade_date = _parse_datetime(payload.get("tradeDate"))
        if trade_date is None:
            raise InvalidActivityRecord(f"tradeDate missing for trade {payload.get('tradeID')!r}")
        return cls(
            instrument_type=_text(payload.get("instrumentType")) or "",
            status=_text(payload.get("status")) or "",
            trade_date=trade_date,
            advance_number=_text(payload.get("tradeID")) or "",
            current_par=_decimal(payload.get("amount")) or Decimal("0"),
            funding_date=_parse_date(payload.get("fundingDate")),
            maturity_date=_parse_date(payload.get("maturityDate")),
            interest_rate=_decimal(payload.get("rate")),
            product=_text(payload.get("product")),
            sub_product=_text(payload.get("subProduct")),
            termination_par=_decimal(payload.get("terminationPar")),
            termination_fee=_decimal(payload.get("terminationFee")),
            termination_full_partial=_text(payload.get("terminationFullPartial")),
            termination_date=_parse_date(payload.get("terminationDate")),
        )


@dataclass(frozen=True)
class ConfirmationRecord:
    """A confirmation document evidencing execution of an advance."""

    confirmation_number: str
    confirmation_date: date
    advance_number: str
    document_reference: str


@dataclass(frozen=True)
class ClassifiedActivityRecord:
    """Display-ready activity with its bucket, description and confirmations."""

    raw: RawActivityRecord
    bucket: StatusBucket
    product_description: str
    interest_rate: Decimal | None
    confirmations: tuple[ConfirmationRecord, ...] = ()

    @property
    def advance_number(self) -> str:
        return self.raw.advance_number

    @property
    def trade_date(self) -> datetime:
        return self.raw.trade_date

    @property
    def funding_date(self) -> date | None:
        return self.raw.funding_date

    @property
    def maturity_date(self) -> date | None:
        return self.raw.maturity_date

    @property
    def is_open_ended(self) -> bool:
        return self.raw.maturity_date is None

    @property
    def current_par(self) -> Decimal:
        return self.raw.current_par


@dataclass(frozen=True)
class ActivityFeed:
    records: Sequence[ClassifiedActivityRecord] = field(default_factory=tuple)
    generated_at: datetime | None = None

    def __iter__(self) -> Iterator[ClassifiedActivityRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def advance_numbers(self) -> list[str]:
        return [record.advance_number for record in self.records]


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _decimal(value: Any) -> Decimal | None:
    text = _text(value)
    if text is None:
        return None
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise InvalidActivityRecord(f"not a number: {value!r}") from exc


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    text = _text(value)
    if text is None:
        return None
    try:
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return _naive_utc(datetime.fromisoformat(text))
    except ValueError as exc:
        raise InvalidActivityRecord(f"not a timestamp: {value!r}") from exc


def _naive_utc(value: datetime) -> datetime:
    """Offset timestamps are stored as naive UTC so mixed feeds stay comparable."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _text(value)
    if text is None:
        return None
    for fmt in ("%Y-%m-%d", "%m/%d/%Y"):
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    raise InvalidActivityRecord(f"not a date: {value!r}")
