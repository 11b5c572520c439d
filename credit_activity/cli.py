"""Command-line entrypoint for the credit activity feed."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from credit_activity.application.use_cases import ActivityAggregator
from credit_activity.config import load_settings
from credit_activity.domain.errors import TransportFault
from credit_activity.infrastructure.clock import FixedClock, SystemClock
from credit_activity.infrastructure.factory import build_context
from credit_activity.presentation.activity_table import feed_to_dataframe

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the credit activity feed for a member institution")
    parser.add_argument("institution_id", type=int, help="Member institution id")
    parser.add_argument("--instrument", default="ADVS", help="Asset class to query (default: ADVS)")
    parser.add_argument("--as-of", type=date.fromisoformat, help="Pin today's date (YYYY-MM-DD)")
    parser.add_argument(
        "--historic-since", type=date.fromisoformat, help="Show historic activity since this date (YYYY-MM-DD)"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    clock = FixedClock(args.as_of) if args.as_of else SystemClock()
    aggregator = ActivityAggregator(build_context(settings, clock=clock))

    try:
        if args.historic_since:
            feed = aggregator.historic_activity(
                args.institution_id, args.instrument, since=args.historic_since
            )
        else:
            feed = aggregator.aggregate(args.institution_id, args.instrument)
    except TransportFault as exc:
        logger.error("Trade system unavailable: %s", exc)
        print("Data unavailable")
        return 2

    print(f"Credit activity for institution {args.institution_id}")
    print("=" * 40)
    if not len(feed):
        print("No activity.")
        return 0
    print(feed_to_dataframe(feed).to_string(index=False))
    print(f"\nProcessing today: {aggregator.daily_total(feed)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
