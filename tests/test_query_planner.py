from datetime import date

import pytest

from credit_activity.domain import statuses
from credit_activity.domain.models import DateRange
from credit_activity.domain.planning import TradeQueryPlanner


def test_small_institution_gets_single_query():
    plans = TradeQueryPlanner().plan(750, "ADVS", is_large_institution=False)

    assert len(plans) == 1
    assert plans[0].statuses == statuses.ACTIVE_ADVANCE_STATUSES
    assert plans[0].institution_id == 750
    assert plans[0].asset_class == "ADVS"


def test_large_institution_gets_one_query_per_status():
    plans = TradeQueryPlanner().plan(750, "ADVS", is_large_institution=True)

    assert len(plans) == len(statuses.ACTIVE_ADVANCE_STATUSES)
    assert [plan.statuses for plan in plans] == [(status,) for status in statuses.ACTIVE_ADVANCE_STATUSES]


def test_date_range_is_carried_into_every_query():
    window = DateRange(date(2023, 1, 1), date(2024, 3, 4))

    plans = TradeQueryPlanner(["TERMINATED", "MATURED"]).plan(1, "LC", True, window)

    assert [plan.date_range for plan in plans] == [window, window]


def test_empty_status_set_is_rejected():
    with pytest.raises(ValueError):
        TradeQueryPlanner([])
