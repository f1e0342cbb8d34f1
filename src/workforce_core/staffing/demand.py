"""Demand side: customers (sales) per (day_of_week, hour) bucket."""

from __future__ import annotations

import logging

import pandas as pd

from workforce_core.buckets import BUCKET_KEY, add_bucket_columns

logger = logging.getLogger(__name__)


def estimate_demand(sales: pd.DataFrame) -> pd.DataFrame:
    """Count sales per bucket.

    Only non-null ``sale_id`` values are counted, so a bucket whose rows all
    lack a sale id is kept with a demand of 0.

    Args:
        sales: Cleaned sales with ``sale_id`` and a parsed ``timestamp``.

    Returns:
        DataFrame with columns day_of_week, hour, customers_demand.
    """
    bucketed = add_bucket_columns(sales, "timestamp")
    demand = (
        bucketed.groupby(BUCKET_KEY, sort=True)["sale_id"]
        .count()
        .reset_index(name="customers_demand")
    )
    demand["customers_demand"] = demand["customers_demand"].astype("int64")
    logger.debug("Demand covers %d bucket(s)", len(demand))
    return demand
