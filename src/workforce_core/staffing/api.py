"""Public API for the cashier staffing gap pipeline.

This module runs the whole pipeline on in-memory DataFrames:

1. clean pings and sales (malformed timestamps are rejected with a warning)
2. reconstruct customer sessions in the checkout area
3. reduce sessions to dwell times and average them per bucket (supply)
4. count sales per bucket (demand)
5. count cashiers per bucket (actual staffing)
6. join the three into the staffing gap report
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from workforce_core.geolocation.transform import clean_pings
from workforce_core.sales.transform import clean_sales
from workforce_core.staffing.actual import count_actual_staffing
from workforce_core.staffing.config import StaffingConfig
from workforce_core.staffing.demand import estimate_demand
from workforce_core.staffing.durations import aggregate_session_durations
from workforce_core.staffing.gap import compute_staffing_gap
from workforce_core.staffing.sessions import select_customer_pings, tag_sessions
from workforce_core.staffing.sinks import ReportSink, write_report
from workforce_core.staffing.supply import estimate_supply

logger = logging.getLogger(__name__)


@dataclass
class StaffingGapResult:
    """Result of the staffing gap pipeline.

    Attributes:
        report: One row per (day_of_week, hour) bucket with columns
            day_of_week, day_name, hour, customers_demand, avg_process_time,
            optimal_registers_needed, actual_registers_open, staffing_gap.
        dropped_buckets: Demand buckets left out of the report because no
            checkout session was observed for them.
        metadata: Row counts per stage, including rejected_pings and
            rejected_sales.
    """

    report: pd.DataFrame
    dropped_buckets: pd.DataFrame
    metadata: Dict[str, object] = field(default_factory=dict)


def run_staffing_gap(
    pings_df: pd.DataFrame,
    sales_df: pd.DataFrame,
    config: Optional[StaffingConfig] = None,
    sink: Optional[ReportSink] = None,
) -> StaffingGapResult:
    """Compute the staffing gap report from raw pings and sales.

    This function:
    - does NOT read files (pass DataFrames in),
    - writes only to ``sink`` when one is given,
    - MAY log progress via the logging module.

    Args:
        pings_df: Geolocation pings with columns device_id, timestamp, area, role.
        sales_df: Sales log with columns sale_id, timestamp.
        config: Pipeline configuration. Defaults to ``StaffingConfig()``.
        sink: Optional destination for the report, see ``write_report``.

    Returns:
        StaffingGapResult with the ordered report.

    Raises:
        DataQualityError: If an input table misses required columns.
        DataIntegrityError: If an average process time is not positive.
    """
    if config is None:
        config = StaffingConfig()

    pings, rejected_pings = clean_pings(pings_df, config.timezone)
    sales, rejected_sales = clean_sales(sales_df, config.timezone)

    customer_pings = select_customer_pings(pings, config)
    tagged = tag_sessions(customer_pings, config.session_gap_minutes)
    durations = aggregate_session_durations(tagged, config.min_session_minutes)
    supply = estimate_supply(durations)

    demand = estimate_demand(sales)

    area = config.checkout_area if config.cashiers_at_registers_only else None
    actual = count_actual_staffing(pings, config.cashier_role, area)

    report, dropped = compute_staffing_gap(demand, supply, actual)

    metadata: Dict[str, object] = {
        "rejected_pings": rejected_pings,
        "rejected_sales": rejected_sales,
        "customer_pings": len(customer_pings),
        "sessions": len(tagged[["device_id", "session_id"]].drop_duplicates()),
        "qualifying_sessions": len(durations),
        "supply_buckets": len(supply),
        "demand_buckets": len(demand),
        "dropped_buckets": len(dropped),
        "report_rows": len(report),
    }
    logger.info(
        "Staffing gap report: %d bucket(s), %d dropped for lack of checkout data",
        len(report),
        len(dropped),
    )

    if sink is not None:
        write_report(report, sink)

    return StaffingGapResult(report=report, dropped_buckets=dropped, metadata=metadata)
