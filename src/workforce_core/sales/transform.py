"""Silver layer: clean the sales log."""

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

SALE_COLUMNS = ["sale_id", "timestamp"]


def clean_sales(sales_df: pd.DataFrame, timezone: str = "UTC") -> tuple[pd.DataFrame, int]:
    """Validate a raw sales table and reject rows with a malformed timestamp.

    Args:
        sales_df: Raw sales with ``sale_id`` and ``timestamp``.
        timezone: Zone the timestamps are converted to.

    Returns:
        Tuple of (cleaned sales, number of rejected rows).

    Raises:
        DataQualityError: If a required column is missing.
    """
    require_columns(sales_df, SALE_COLUMNS, "sales")

    df = sales_df.loc[:, SALE_COLUMNS].reset_index(drop=True)
    df, rejected = drop_malformed_timestamps(df, "timestamp", "sales", timezone)
    logger.debug("Cleaned %d sale(s), rejected %d", len(df), rejected)
    return df.reset_index(drop=True), rejected


def load_sales(
    paths: DataPaths,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    timezone: str = "UTC",
) -> tuple[pd.DataFrame, int]:
    """Read bronze sales CSVs, clean them and optionally restrict to a date window.

    Raises:
        FileNotFoundError: If no sales CSVs exist.
    """
    raw = read_csv_dir(paths.raw_sales, "sales")
    df, rejected = clean_sales(raw, timezone)
    if start_date and end_date:
        df = filter_window(df, start_date, end_date).reset_index(drop=True)
    return df, rejected
