"""Error taxonomy for credit activity aggregation."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import QuerySpec


class CreditActivityError(Exception):
    """Base class for errors raised by this package."""


class TransportFault(CreditActivityError):
    """The trade system or confirmation store call failed at the protocol level.

    Never retried here; callers decide whether to try again.
    """

    def __init__(self, message: str, query: QuerySpec | None = None) -> None:
        super().__init__(message)
        self.query = query


class ConfigurationAbsent(CreditActivityError):
    """An external system has no endpoint configured for this environment."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} is not configured")
        self.setting = setting


class ConfigurationError(CreditActivityError, ValueError):
    """A configured value could not be parsed."""


class InvalidActivityRecord(CreditActivityError, ValueError):
    """A record could not be constructed from the supplied fields."""
