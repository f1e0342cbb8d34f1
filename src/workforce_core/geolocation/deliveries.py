"""Missed delivery detection.

Suppliers are expected on fixed weekdays, early in the morning. A delivery
counts as missed on an expected day when the store was operating (some
non-security staff or customer device was seen) but nobody was recorded in
the warehouse during the supply window.
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

import pandas as pd

from workforce_core.buckets import DAY_NAMES, add_bucket_columns

logger = logging.getLogger(__name__)

WAREHOUSE_AREA = "WAREHOUSE"

# Monday and Thursday (Sunday = 1)
DELIVERY_DAYS = (2, 5)

# Inclusive hours of the supply window
DELIVERY_WINDOW = (5, 7)

# Roles whose presence does not prove the store was open
HEARTBEAT_EXCLUDED_ROLES = ("security_guy",)


def detect_missed_deliveries(
    pings: pd.DataFrame,
    delivery_days: Iterable[int] = DELIVERY_DAYS,
    warehouse_area: str = WAREHOUSE_AREA,
    window: Tuple[int, int] = DELIVERY_WINDOW,
    excluded_roles: Iterable[str] = HEARTBEAT_EXCLUDED_ROLES,
) -> pd.DataFrame:
    """Find operating delivery days with no warehouse activity in the window.

    Args:
        pings: Cleaned pings with device_id, timestamp, area, role.
        delivery_days: Expected delivery weekdays (Sunday = 1 ... Saturday = 7).
        warehouse_area: Area where deliveries are received.
        window: First and last hour (inclusive) of the supply window.
        excluded_roles: Roles ignored when deciding the store was open.

    Returns:
        DataFrame with columns missed_date, day_name ordered by date.
    """
    df = add_bucket_columns(pings, "timestamp")
    df["date"] = df["timestamp"].dt.date

    first_hour, last_hour = window
    delivered = set(
        df.loc[
            (df["area"] == warehouse_area).fillna(False).astype(bool)
            & df["hour"].between(first_hour, last_hour),
            "date",
        ]
    )

    role_known = df["role"].notna()
    operating = df.loc[
        df["day_of_week"].isin(list(delivery_days))
        & role_known
        & ~df["role"].isin(list(excluded_roles)),
        ["date", "day_of_week"],
    ].drop_duplicates()

    missed = operating.loc[~operating["date"].isin(delivered)]
    logger.info("Found %d missed delivery day(s)", len(missed))

    result = pd.DataFrame(
        {
            "missed_date": missed["date"].to_list(),
            "day_name": missed["day_of_week"].map(DAY_NAMES).to_list(),
        },
        columns=["missed_date", "day_name"],
    )
    return result.sort_values("missed_date").reset_index(drop=True)
