"""Day-of-week / hour bucketing shared by every aggregate.

Supply, demand and actual staffing are joined on ``(day_of_week, hour)``,
so all three must derive the key through the helpers in this module.

Days are numbered Sunday = 1 through Saturday = 7.
"""

from __future__ import annotations

import pandas as pd

BUCKET_KEY = ["day_of_week", "hour"]

DAY_NAMES = {
    1: "Sunday",
    2: "Monday",
    3: "Tuesday",
    4: "Wednesday",
    5: "Thursday",
    6: "Friday",
    7: "Saturday",
}


def day_of_week(timestamps: pd.Series) -> pd.Series:
    """Return the 1-7 day number (Sunday = 1) for each timestamp.

    Examples:
        >>> s = pd.Series(pd.to_datetime(["2024-03-03", "2024-03-04"]))
        >>> day_of_week(s).tolist()
        [1, 2]
    """
    # pandas numbers Monday = 0 ... Sunday = 6
    return ((timestamps.dt.dayofweek + 1) % 7 + 1).astype("int64")


def day_name(day_numbers: pd.Series) -> pd.Series:
    """Map 1-7 day numbers to English day names."""
    return day_numbers.map(DAY_NAMES)


def add_bucket_columns(
    df: pd.DataFrame,
    timestamp_column: str = "timestamp",
    *,
    with_day_name: bool = False,
) -> pd.DataFrame:
    """Return a copy of ``df`` with ``day_of_week`` and ``hour`` columns added.

    Args:
        df: Table with a tz-aware or naive datetime column.
        timestamp_column: Column the bucket is derived from.
        with_day_name: Also add a ``day_name`` column.

    Returns:
        New DataFrame with the bucket columns.
    """
    df = df.copy()
    df["day_of_week"] = day_of_week(df[timestamp_column])
    if with_day_name:
        df["day_name"] = day_name(df["day_of_week"])
    df["hour"] = df[timestamp_column].dt.hour.astype("int64")
    return df
