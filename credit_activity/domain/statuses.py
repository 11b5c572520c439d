"""Lifecycle status codes reported by the trade booking system."""
from __future__ import annotations

VERIFIED = "VERIFIED"
OPS_REVIEW = "OPS_REVIEW"
OPS_VERIFIED = "OPS_VERIFIED"
SEC_REVIEWED = "SEC_REVIEWED"
SEC_REVIEW = "SEC_REVIEW"
COLLATERAL_AUTH = "COLLATERAL_AUTH"
AUTH_TERM = "AUTH_TERM"
PEND_TERM = "PEND_TERM"
TERMINATED = "TERMINATED"
EXERCISED = "EXERCISED"
MATURED = "MATURED"

TODAYS_ADVANCE_STATUSES: tuple[str, ...] = (
    VERIFIED,
    OPS_REVIEW,
    OPS_VERIFIED,
    SEC_REVIEWED,
    SEC_REVIEW,
    COLLATERAL_AUTH,
    AUTH_TERM,
    PEND_TERM,
)

# Ordered; large institutions get one query per entry.
ACTIVE_ADVANCE_STATUSES: tuple[str, ...] = (
    VERIFIED,
    OPS_REVIEW,
    OPS_VERIFIED,
    COLLATERAL_AUTH,
    AUTH_TERM,
    PEND_TERM,
)

TODAYS_CREDIT_STATUSES: tuple[str, ...] = TODAYS_ADVANCE_STATUSES + (TERMINATED, EXERCISED, MATURED)

LARGE_INSTITUTION_THRESHOLD = 300


def is_known_status(status: str) -> bool:
    return status in TODAYS_CREDIT_STATUSES
