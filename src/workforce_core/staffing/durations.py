"""Reduce session-tagged pings to one dwell time per session."""

from __future__ import annotations

import logging

import pandas as pd

from workforce_core.buckets import add_bucket_columns
from workforce_core.staffing.config import MIN_SESSION_MINUTES
from workforce_core.utils import whole_minutes

logger = logging.getLogger(__name__)

DURATION_COLUMNS = [
    "device_id",
    "session_id",
    "day_of_week",
    "day_name",
    "hour",
    "duration_minutes",
]


def summarize_sessions(tagged: pd.DataFrame) -> pd.DataFrame:
    """Collapse tagged pings into one row per ``(device_id, session_id)``.

    Returns:
        DataFrame with columns device_id, session_id, start, end,
        duration_minutes (whole minutes between first and last ping).
    """
    if tagged.empty:
        return pd.DataFrame(
            {
                "device_id": pd.Series(dtype=tagged["device_id"].dtype),
                "session_id": pd.Series(dtype="int64"),
                "start": pd.Series(dtype=tagged["timestamp"].dtype),
                "end": pd.Series(dtype=tagged["timestamp"].dtype),
                "duration_minutes": pd.Series(dtype="int64"),
            }
        )

    sessions = (
        tagged.groupby(["device_id", "session_id"], sort=True)
        .agg(start=("timestamp", "min"), end=("timestamp", "max"))
        .reset_index()
    )
    sessions["duration_minutes"] = whole_minutes(sessions["end"] - sessions["start"]).astype(
        "int64"
    )
    return sessions


def aggregate_session_durations(
    tagged: pd.DataFrame,
    min_session_minutes: int = MIN_SESSION_MINUTES,
) -> pd.DataFrame:
    """Compute the dwell time of each session and bucket it by its start.

    Sessions shorter than ``min_session_minutes`` (a lone ping, or two
    near-simultaneous pings) are dropped.

    Args:
        tagged: Output of :func:`~workforce_core.staffing.sessions.tag_sessions`.
        min_session_minutes: Minimum duration a session must reach.

    Returns:
        DataFrame with columns device_id, session_id, day_of_week, day_name,
        hour, duration_minutes.
    """
    sessions = summarize_sessions(tagged)
    qualifying = sessions.loc[sessions["duration_minutes"] >= min_session_minutes]

    logger.info(
        "Kept %d of %d session(s) lasting at least %d minute(s)",
        len(qualifying),
        len(sessions),
        min_session_minutes,
    )

    durations = add_bucket_columns(qualifying, "start", with_day_name=True)
    return durations.loc[:, DURATION_COLUMNS].reset_index(drop=True)
