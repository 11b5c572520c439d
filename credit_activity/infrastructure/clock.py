"""Reference clocks."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo


@dataclass(frozen=True)
class SystemClock:
    timezone: tzinfo | None = None

    def now(self) -> datetime:
        return datetime.now(self.timezone)

    def today(self) -> date:
        return self.now().date()


@dataclass(frozen=True)
class FixedClock:
    """Always reports the same day; used for reproducible runs and tests."""

    day: date

    def now(self) -> datetime:
        return datetime.combine(self.day, time())

    def today(self) -> date:
        return self.day
