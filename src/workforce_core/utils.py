"""Shared helpers for validating and normalising input tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd
from pandas.api.types import is_datetime64_any_dtype

from workforce_core.exceptions import DataQualityError

logger = logging.getLogger(__name__)


def require_columns(df: pd.DataFrame, required: Iterable[str], table: str) -> None:
    """Raise DataQualityError if ``df`` lacks any of the ``required`` columns.

    Args:
        df: Input table.
        required: Column names that must be present.
        table: Table name used in the error message.

    Raises:
        DataQualityError: If one or more columns are missing.
    """
    required = list(required)
    missing = sorted(set(required) - set(df.columns))
    if missing:
        raise DataQualityError(
            f"Missing required columns in {table}: {missing}. Required: {required}"
        )


def parse_timestamps(values: pd.Series, timezone: str = "UTC") -> pd.Series:
    """Parse a column into tz-aware instants in ``timezone``.

    Naive values are interpreted as UTC. Unparsable or absent values
    become ``NaT``.
    """
    if is_datetime64_any_dtype(values):
        parsed = values
        if parsed.dt.tz is None:
            parsed = parsed.dt.tz_localize("UTC")
    else:
        parsed = pd.to_datetime(values, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_convert(timezone)


def drop_malformed_timestamps(
    df: pd.DataFrame,
    column: str,
    table: str,
    timezone: str = "UTC",
) -> tuple[pd.DataFrame, int]:
    """Parse ``column`` and drop rows whose timestamp is absent or unparsable.

    Rejected rows are excluded from every downstream stage. Their count is
    logged as a warning and returned to the caller.

    Args:
        df: Input table (not modified).
        column: Name of the timestamp column.
        table: Table name used in log messages.
        timezone: IANA zone the parsed instants are converted to.

    Returns:
        Tuple of (cleaned DataFrame, number of rejected rows).
    """
    df = df.copy()
    df[column] = parse_timestamps(df[column], timezone)

    malformed = df[column].isna()
    rejected = int(malformed.sum())
    if rejected:
        logger.warning(
            "Rejected %d of %d %s record(s) with a missing or unparsable %s",
            rejected,
            len(df),
            table,
            column,
        )
        df = df.loc[~malformed]

    return df, rejected


def whole_minutes(deltas: pd.Series) -> pd.Series:
    """Convert timedeltas to elapsed whole minutes, truncating partial minutes.

    Missing deltas stay missing (nullable integer dtype).
    """
    seconds = deltas.dt.total_seconds()
    minutes = np.floor(seconds / 60.0)
    return minutes.astype("Int64")


def read_csv_dir(directory: Path, table: str) -> pd.DataFrame:
    """Read and concatenate every CSV under ``directory``.

    Raises:
        FileNotFoundError: If the directory holds no CSV files.
    """
    csv_files = sorted(directory.rglob("*.csv"))
    if not csv_files:
        raise FileNotFoundError(f"No {table} CSVs found in {directory}")

    logger.info("Reading %d %s CSV file(s) from %s", len(csv_files), table, directory)
    dfs = [pd.read_csv(f, encoding="utf-8-sig", dtype=str) for f in csv_files]
    return pd.concat(dfs, ignore_index=True)


def filter_window(
    df: pd.DataFrame,
    start_date: str,
    end_date: str,
    column: str = "timestamp",
) -> pd.DataFrame:
    """Keep rows whose local calendar date lies in ``[start_date, end_date]``.

    ``column`` must already hold parsed datetimes.
    """
    start = pd.to_datetime(start_date).date()
    end = pd.to_datetime(end_date).date()
    dates = df[column].dt.date
    return df.loc[(dates >= start) & (dates <= end)]
