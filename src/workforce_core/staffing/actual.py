"""Observed staffing: distinct cashier devices per (day_of_week, hour) bucket."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from workforce_core.buckets import BUCKET_KEY, add_bucket_columns
from workforce_core.staffing.config import CASHIER_ROLE


def count_actual_staffing(
    pings: pd.DataFrame,
    cashier_role: str = CASHIER_ROLE,
    area: Optional[str] = None,
) -> pd.DataFrame:
    """Count distinct devices holding ``cashier_role`` seen in each bucket.

    Args:
        pings: Cleaned pings.
        cashier_role: Role that staffs a register.
        area: If given, only count cashiers seen in this area. By default a
            cashier seen anywhere in the store counts as an open register.

    Returns:
        DataFrame with columns day_of_week, hour, actual_registers_open.
    """
    mask = pings["role"] == cashier_role
    if area is not None:
        mask &= pings["area"] == area
    cashiers = add_bucket_columns(pings.loc[mask.fillna(False).astype(bool)], "timestamp")

    actual = (
        cashiers.groupby(BUCKET_KEY, sort=True)["device_id"]
        .nunique()
        .reset_index(name="actual_registers_open")
    )
    actual["actual_registers_open"] = actual["actual_registers_open"].astype("int64")
    return actual
