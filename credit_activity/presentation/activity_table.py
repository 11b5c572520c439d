"""Tabular views of an activity feed."""
from __future__ import annotations

import pandas as pd

from credit_activity.domain.models import ActivityFeed

OPEN_MATURITY = "Open"

COLUMNS = [
    "trade_date",
    "funding_date",
    "maturity_date",
    "advance_number",
    "product_description",
    "status",
    "interest_rate",
    "current_par",
    "confirmations",
]


def feed_to_rows(feed: ActivityFeed) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for record in feed:
        rows.append(
            {
                "trade_date": record.trade_date.isoformat(sep=" "),
                "funding_date": record.funding_date.isoformat() if record.funding_date else "",
                "maturity_date": OPEN_MATURITY if record.is_open_ended else record.maturity_date.isoformat(),
                "advance_number": record.advance_number,
                "product_description": record.product_description,
                "status": record.bucket.value,
                "interest_rate": "" if record.interest_rate is None else str(record.interest_rate),
                "current_par": str(record.current_par),
                "confirmations": ", ".join(c.confirmation_number for c in record.confirmations),
            }
        )
    return rows


def feed_to_dataframe(feed: ActivityFeed) -> pd.DataFrame:
    return pd.DataFrame(feed_to_rows(feed), columns=COLUMNS)
