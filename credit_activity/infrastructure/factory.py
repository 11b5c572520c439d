"""Selects live or fallback adapters once, from settings."""
from __future__ import annotations

import logging
from typing import Callable

from credit_activity.application.use_cases import ActivityAggregationContext
from credit_activity.config import Settings
from credit_activity.domain.errors import ConfigurationAbsent
from credit_activity.domain.repositories import (
    ConfirmationStore,
    InstitutionSizeOracle,
    ReferenceClock,
    TradeSystemClient,
)
from credit_activity.infrastructure.clock import SystemClock
from credit_activity.infrastructure.fallback.generator import FallbackGenerator
from credit_activity.infrastructure.repositories.fallback_repositories import (
    FallbackConfirmationStore,
    FallbackTradeSystemClient,
    SmallInstitutionOracle,
)
from credit_activity.infrastructure.repositories.http_repositories import (
    HttpConfirmationStore,
    HttpTradeSystemClient,
)
from credit_activity.infrastructure.repositories.size_oracle import DealCountSizeOracle

logger = logging.getLogger(__name__)


def require_endpoint(value: str | None, setting: str) -> str:
    if not value:
        raise ConfigurationAbsent(setting)
    return value


def build_trade_client(settings: Settings, clock: ReferenceClock, generator: FallbackGenerator) -> TradeSystemClient:
    try:
        endpoint = require_endpoint(settings.trade_endpoint, "trade_endpoint")
    except ConfigurationAbsent as exc:
        logger.info("%s; serving generated trade activity", exc)
        return FallbackTradeSystemClient(clock, generator)
    return HttpTradeSystemClient(endpoint, settings.caller_id, timeout=settings.request_timeout)


def build_confirmation_store(
    settings: Settings, clock: ReferenceClock, generator: FallbackGenerator
) -> ConfirmationStore:
    try:
        endpoint = require_endpoint(settings.confirmation_endpoint, "confirmation_endpoint")
    except ConfigurationAbsent as exc:
        logger.info("%s; serving generated confirmations", exc)
        return FallbackConfirmationStore(clock, generator)
    return HttpConfirmationStore(endpoint, timeout=settings.request_timeout)


def build_size_oracle(settings: Settings, count_deals: Callable[[int], int] | None = None) -> InstitutionSizeOracle:
    if count_deals is None:
        return SmallInstitutionOracle()
    return DealCountSizeOracle(count_deals, threshold=settings.large_threshold)


def build_context(
    settings: Settings,
    clock: ReferenceClock | None = None,
    count_deals: Callable[[int], int] | None = None,
) -> ActivityAggregationContext:
    clock = clock or SystemClock()
    generator = FallbackGenerator()
    return ActivityAggregationContext(
        trade_client=build_trade_client(settings, clock, generator),
        confirmation_store=build_confirmation_store(settings, clock, generator),
        size_oracle=build_size_oracle(settings, count_deals),
        clock=clock,
        max_workers=settings.max_workers,
    )
