"""Cashier staffing gap domain module.

Pipeline stages, each feeding the next:

- ``sessions``: checkout-area customer pings -> visit sessions
- ``durations``: sessions -> dwell time per session, bucketed by start
- ``supply``: average dwell time per (day_of_week, hour)
- ``demand``: sales per (day_of_week, hour)
- ``actual``: distinct cashiers per (day_of_week, hour)
- ``gap``: demand x supply x actual -> staffing gap report

Example:
    >>> from workforce_core.staffing import StaffingConfig, run_staffing_gap
    >>>
    >>> result = run_staffing_gap(pings_df, sales_df, StaffingConfig(session_gap_minutes=20))
    >>> result.report.head()
"""

from workforce_core.staffing.actual import count_actual_staffing
from workforce_core.staffing.api import StaffingGapResult, run_staffing_gap
from workforce_core.staffing.config import StaffingConfig
from workforce_core.staffing.demand import estimate_demand
from workforce_core.staffing.durations import aggregate_session_durations
from workforce_core.staffing.gap import compute_staffing_gap
from workforce_core.staffing.sessions import iter_session_tags, tag_sessions
from workforce_core.staffing.sinks import write_report
from workforce_core.staffing.supply import estimate_supply

__all__ = [
    "StaffingConfig",
    "StaffingGapResult",
    "aggregate_session_durations",
    "compute_staffing_gap",
    "count_actual_staffing",
    "estimate_demand",
    "estimate_supply",
    "iter_session_tags",
    "run_staffing_gap",
    "tag_sessions",
    "write_report",
]
