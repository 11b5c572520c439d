"""Application services orchestrating the credit activity feed."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from credit_activity.domain import statuses
from credit_activity.domain.classification import ActivityClassifier, is_stale_amended_advance
from credit_activity.domain.confirmations import ConfirmationMatcher
from credit_activity.domain.models import (
    ActivityFeed,
    ClassifiedActivityRecord,
    DateRange,
    QuerySpec,
    RawActivityRecord,
    StatusBucket,
)
from credit_activity.domain.planning import TradeQueryPlanner
from credit_activity.domain.rates import RateConverter
from credit_activity.domain.repositories import (
    ConfirmationStore,
    InstitutionSizeOracle,
    ReferenceClock,
    TradeSystemClient,
)

logger = logging.getLogger(__name__)

HISTORIC_LOOKBACK = relativedelta(months=18)


@dataclass(slots=True)
class ActivityAggregationContext:
    trade_client: TradeSystemClient
    confirmation_store: ConfirmationStore
    size_oracle: InstitutionSizeOracle
    clock: ReferenceClock
    planner: TradeQueryPlanner = field(default_factory=TradeQueryPlanner)
    max_workers: int = 4


def sort_feed(records: Iterable[ClassifiedActivityRecord]) -> list[ClassifiedActivityRecord]:
    """Newest trade first, then highest advance number; ties keep input order."""
    return sorted(records, key=lambda record: (record.trade_date, record.advance_number), reverse=True)


class ActivityAggregator:
    """Builds the activity feed for one institution per call.

    Planned queries run in parallel and are concatenated in plan order. Any
    transport failure aborts the whole call; nothing is returned partially.
    """

    def __init__(self, context: ActivityAggregationContext) -> None:
        self._context = context
        self._historic_planner = TradeQueryPlanner(statuses.TODAYS_CREDIT_STATUSES)

    def aggregate(
        self,
        institution_id: int,
        instrument_filter: str,
        reference_clock: ReferenceClock | None = None,
    ) -> ActivityFeed:
        clock = reference_clock or self._context.clock
        is_large = self._context.size_oracle.is_large(institution_id)
        plan = self._context.planner.plan(institution_id, instrument_filter, is_large)
        logger.info(
            "Aggregating activity for institution %s (%s, %d queries)",
            institution_id,
            "large" if is_large else "small",
            len(plan),
        )
        return self._build_feed(institution_id, plan, clock)

    def historic_activity(
        self,
        institution_id: int,
        instrument_filter: str,
        since: date | None = None,
        reference_clock: ReferenceClock | None = None,
    ) -> ActivityFeed:
        clock = reference_clock or self._context.clock
        today = clock.today()
        start = since or today - HISTORIC_LOOKBACK
        is_large = self._context.size_oracle.is_large(institution_id)
        plan = self._historic_planner.plan(institution_id, instrument_filter, is_large, DateRange(start, today))
        logger.info("Aggregating historic activity for institution %s since %s", institution_id, start)
        return self._build_feed(institution_id, plan, clock)

    @staticmethod
    def daily_total(feed: ActivityFeed) -> Decimal:
        return sum(
            (record.current_par for record in feed if record.bucket is StatusBucket.PROCESSING),
            Decimal("0"),
        )

    def _build_feed(self, institution_id: int, plan: Sequence[QuerySpec], clock: ReferenceClock) -> ActivityFeed:
        today = clock.today()
        raw_records = self._execute(plan)

        kept: list[RawActivityRecord] = []
        for raw in raw_records:
            if is_stale_amended_advance(raw, today):
                logger.debug("Skipping amended advance %s funded %s", raw.advance_number, raw.funding_date)
                continue
            kept.append(raw)

        classifier = ActivityClassifier(today)
        classified = []
        for raw in kept:
            if not statuses.is_known_status(raw.status):
                logger.warning(
                    "No classification rule for status %r on %s %s",
                    raw.status,
                    raw.instrument_type,
                    raw.advance_number,
                )
            classified.append(classifier.classify(raw))

        matcher = ConfirmationMatcher(self._context.confirmation_store)
        matched = matcher.match(institution_id, classified)
        displayed = [
            replace(record, interest_rate=RateConverter.to_percentage(record.interest_rate)) for record in matched
        ]
        return ActivityFeed(records=tuple(sort_feed(displayed)), generated_at=clock.now())

    def _execute(self, plan: Sequence[QuerySpec]) -> list[RawActivityRecord]:
        client = self._context.trade_client
        if len(plan) == 1:
            return list(self._query(client, plan[0]))

        results: list[RawActivityRecord] = []
        workers = max(1, min(self._context.max_workers, len(plan)))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [ex.submit(self._query, client, query) for query in plan]
            for fut in futures:
                results.extend(fut.result())
        return results

    @staticmethod
    def _query(client: TradeSystemClient, query: QuerySpec) -> Sequence[RawActivityRecord]:
        return client.query(query.statuses, query.institution_id, query.asset_class, query.date_range)
