"""CLI wrapper for the cashier staffing gap pipeline.

Usage (from repo root):

    workforce-staffing \
        --pings data/a_raw/geolocation/geolocation.csv \
        --sales data/a_raw/sales/log_sales.csv \
        --out staffing_gap.csv

All core logic is in workforce_core.staffing.api.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from workforce_core.exceptions import WorkforceAPIError
from workforce_core.staffing.api import run_staffing_gap
from workforce_core.staffing.config import (
    MIN_SESSION_MINUTES,
    SESSION_GAP_MINUTES,
    StaffingConfig,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Compare required and observed cashier registers per weekday and hour."
    )
    p.add_argument("--pings", type=Path, required=True, help="Geolocation pings CSV")
    p.add_argument("--sales", type=Path, required=True, help="Sales log CSV")
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output CSV path (default: print to stdout)",
    )
    p.add_argument(
        "--gap-minutes",
        type=int,
        default=SESSION_GAP_MINUTES,
        help=f"Inactivity gap that closes a session (default: {SESSION_GAP_MINUTES})",
    )
    p.add_argument(
        "--min-session-minutes",
        type=int,
        default=MIN_SESSION_MINUTES,
        help=f"Shortest session kept (default: {MIN_SESSION_MINUTES})",
    )
    p.add_argument(
        "--cashiers-at-registers",
        action="store_true",
        help="Only count cashiers seen in the register area",
    )
    p.add_argument("--timezone", default="UTC", help="Zone for weekday/hour buckets")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--quiet", action="store_true", help="Less logging")
    g.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)

    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    for path in (args.pings, args.sales):
        if not path.exists():
            logger.error("Input file not found: %s", path)
            return 2

    try:
        config = StaffingConfig(
            session_gap_minutes=args.gap_minutes,
            min_session_minutes=args.min_session_minutes,
            cashiers_at_registers_only=args.cashiers_at_registers,
            timezone=args.timezone,
        )
        pings_df = pd.read_csv(args.pings, encoding="utf-8-sig", dtype=str)
        sales_df = pd.read_csv(args.sales, encoding="utf-8-sig", dtype=str)

        sink = args.out if args.out is not None else sys.stdout
        result = run_staffing_gap(pings_df, sales_df, config, sink=sink)
    except WorkforceAPIError as e:
        logger.error("Pipeline failed: %s", e)
        return 1

    meta = result.metadata
    logger.info(
        "Done: %s bucket(s), %s dropped, %s ping(s) and %s sale(s) rejected",
        meta["report_rows"],
        meta["dropped_buckets"],
        meta["rejected_pings"],
        meta["rejected_sales"],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
