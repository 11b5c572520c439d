from datetime import date, datetime
from decimal import Decimal

from credit_activity.domain.classification import ActivityClassifier
from credit_activity.domain.models import ActivityFeed
from credit_activity.presentation.activity_table import COLUMNS, feed_to_dataframe, feed_to_rows

from factories import TODAY, make_raw


def test_open_ended_maturity_renders_as_open():
    classifier = ActivityClassifier(TODAY)
    feed = ActivityFeed(
        records=(
            classifier.classify(make_raw("100002", maturity_date=None, sub_product="OPEN VRC")),
            classifier.classify(make_raw("100001", maturity_date=date(2029, 3, 4), interest_rate=None)),
        ),
        generated_at=datetime(2024, 3, 4),
    )

    rows = feed_to_rows(feed)

    assert rows[0]["maturity_date"] == "Open"
    assert rows[0]["product_description"] == "ADVANCE OPEN VRC"
    assert rows[1]["maturity_date"] == "2029-03-04"
    assert rows[1]["interest_rate"] == ""
    assert rows[0]["current_par"] == str(Decimal("1000000"))


def test_dataframe_has_stable_columns_even_when_empty():
    frame = feed_to_dataframe(ActivityFeed())

    assert list(frame.columns) == COLUMNS
    assert frame.empty
