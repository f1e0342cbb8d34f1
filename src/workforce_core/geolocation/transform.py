"""Silver layer: clean geolocation pings.

A ping is one observation of a device: ``device_id``, ``timestamp``,
``area`` and the ``role`` of the device holder (a staff role or a
customer category). Pings arrive unordered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import pandas as pd

if TYPE_CHECKING:
    from workforce_core.config import DataPaths

from workforce_core.utils import (
    drop_malformed_timestamps,
    filter_window,
    read_csv_dir,
    require_columns,
)

logger = logging.getLogger(__name__)

PING_COLUMNS = ["device_id", "timestamp", "area", "role"]


def clean_pings(pings_df: pd.DataFrame, timezone: str = "UTC") -> tuple[pd.DataFrame, int]:
    """Validate and normalise a raw pings table.

    - Checks the required columns are present.
    - Strips whitespace from ``device_id``, ``area`` and ``role``.
    - Rejects rows without a ``device_id``, since they cannot be assigned to
      a device session.
    - Parses ``timestamp`` into tz-aware instants and rejects rows where it is
      absent or unparsable.

    The original row order is preserved; downstream stages rely on it as the
    tie-breaker for pings sharing a timestamp.

    Args:
        pings_df: Raw pings.
        timezone: Zone the timestamps are converted to.

    Returns:
        Tuple of (cleaned pings, number of rejected rows).

    Raises:
        DataQualityError: If a required column is missing.
    """
    require_columns(pings_df, PING_COLUMNS, "pings")

    df = pings_df.loc[:, PING_COLUMNS].reset_index(drop=True)
    for col in ["device_id", "area", "role"]:
        df[col] = df[col].astype("string").str.strip()

    no_device = (df["device_id"].isna() | (df["device_id"] == "")).fillna(True).astype(bool)
    missing_devices = int(no_device.sum())
    if missing_devices:
        logger.warning(
            "Rejected %d of %d pings record(s) with a missing device_id",
            missing_devices,
            len(df),
        )
        df = df.loc[~no_device]

    df, rejected = drop_malformed_timestamps(df, "timestamp", "pings", timezone)
    rejected += missing_devices
    logger.debug("Cleaned %d ping(s), rejected %d", len(df), rejected)
    return df.reset_index(drop=True), rejected


def load_pings(
    paths: DataPaths,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    timezone: str = "UTC",
) -> tuple[pd.DataFrame, int]:
    """Read bronze ping CSVs, clean them and optionally restrict to a date window.

    Args:
        paths: DataPaths configuration.
        start_date: Start date in YYYY-MM-DD format (inclusive).
        end_date: End date in YYYY-MM-DD format (inclusive).
        timezone: Zone the timestamps are converted to.

    Returns:
        Tuple of (cleaned pings, number of rejected rows).

    Raises:
        FileNotFoundError: If no ping CSVs exist.
    """
    raw = read_csv_dir(paths.raw_geolocation, "pings")
    df, rejected = clean_pings(raw, timezone)
    if start_date and end_date:
        df = filter_window(df, start_date, end_date).reset_index(drop=True)
    return df, rejected
