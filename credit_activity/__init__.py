"""Credit and advance activity aggregation for member institutions."""
from credit_activity.application.use_cases import ActivityAggregationContext, ActivityAggregator
from credit_activity.domain.classification import ActivityClassifier
from credit_activity.domain.confirmations import ConfirmationMatcher
from credit_activity.domain.planning import TradeQueryPlanner
from credit_activity.domain.rates import RateConverter
from credit_activity.infrastructure.fallback.generator import FallbackGenerator

__all__ = [
    "ActivityAggregationContext",
    "ActivityAggregator",
    "ActivityClassifier",
    "ConfirmationMatcher",
    "FallbackGenerator",
    "RateConverter",
    "TradeQueryPlanner",
]
