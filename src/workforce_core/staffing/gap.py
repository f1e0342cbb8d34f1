"""Join demand, supply and observed staffing into the staffing gap report.

Join semantics per ``(day_of_week, hour)`` bucket:

- demand drives the report;
- supply is required: a demand bucket without an average process time is
  dropped, because no register count can be derived for it;
- actual staffing is optional and defaults to 0 registers.

Required registers are the number of parallel checkouts whose combined
hourly throughput (60 / avg minutes per customer, per register) covers the
demand::

    optimal_registers_needed = ceil(customers_demand / (60 / avg_process_time))
    staffing_gap = actual_registers_open - optimal_registers_needed

A positive gap means overstaffing, a negative gap understaffing.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from workforce_core.buckets import BUCKET_KEY, day_name
from workforce_core.exceptions import DataIntegrityError
from workforce_core.staffing.config import REPORT_COLUMNS

logger = logging.getLogger(__name__)

# absorbs float noise such as 10.000000000000002 before taking the ceiling
_CEIL_DECIMALS = 9


def required_registers(customers_demand: pd.Series, avg_process_time: pd.Series) -> pd.Series:
    """Registers needed so that hourly throughput meets demand.

    Raises:
        DataIntegrityError: If any average process time is zero, negative
            or not finite.
    """
    avg = avg_process_time.astype("float64")
    invalid = ~np.isfinite(avg) | (avg <= 0)
    if invalid.any():
        raise DataIntegrityError(
            f"Average process time must be a positive number of minutes; "
            f"got {avg[invalid].tolist()} in {int(invalid.sum())} bucket(s)"
        )

    throughput = 60.0 / avg
    needed = np.ceil(np.round(customers_demand.astype("float64") / throughput, _CEIL_DECIMALS))
    return needed.astype("int64")


def _keyed(df: pd.DataFrame) -> pd.DataFrame:
    return df.astype({col: "int64" for col in BUCKET_KEY})


def compute_staffing_gap(
    demand: pd.DataFrame,
    supply: pd.DataFrame,
    actual: pd.DataFrame,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Build the staffing gap report.

    Args:
        demand: day_of_week, hour, customers_demand.
        supply: day_of_week, hour, avg_process_time_minutes.
        actual: day_of_week, hour, actual_registers_open.

    Returns:
        Tuple of (report, dropped_buckets). The report has the columns in
        ``REPORT_COLUMNS`` ordered by day_of_week, hour. ``dropped_buckets``
        lists the demand buckets that had no supply estimate.

    Raises:
        DataIntegrityError: If a supply estimate is not a positive number.
    """
    demand, supply, actual = _keyed(demand), _keyed(supply), _keyed(actual)
    joined = demand.merge(
        supply,
        on=BUCKET_KEY,
        how="left",
        validate="one_to_one",
        indicator="_supply",
    )
    has_supply = joined["_supply"] == "both"

    dropped = (
        joined.loc[~has_supply, BUCKET_KEY + ["customers_demand"]]
        .sort_values(BUCKET_KEY)
        .reset_index(drop=True)
    )
    if not dropped.empty:
        logger.info("Dropped %d demand bucket(s) with no checkout time estimate", len(dropped))

    report = joined.loc[has_supply].drop(columns="_supply")
    report = report.merge(actual, on=BUCKET_KEY, how="left", validate="one_to_one")
    report["actual_registers_open"] = report["actual_registers_open"].fillna(0).astype("int64")

    report["optimal_registers_needed"] = required_registers(
        report["customers_demand"], report["avg_process_time_minutes"]
    )
    report["staffing_gap"] = report["actual_registers_open"] - report["optimal_registers_needed"]
    report["avg_process_time"] = report["avg_process_time_minutes"].round(2)
    report["day_name"] = day_name(report["day_of_week"])

    report = report.sort_values(BUCKET_KEY).reset_index(drop=True)
    return report.loc[:, REPORT_COLUMNS], dropped
