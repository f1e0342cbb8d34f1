"""Supply side: average checkout time per (day_of_week, hour) bucket."""

from __future__ import annotations

import pandas as pd

from workforce_core.buckets import BUCKET_KEY


def estimate_supply(durations: pd.DataFrame) -> pd.DataFrame:
    """Average ``duration_minutes`` per bucket.

    Buckets without any qualifying session get no row at all. They mean
    "no data", not a zero process time.

    Args:
        durations: Output of ``aggregate_session_durations``.

    Returns:
        DataFrame with columns day_of_week, hour, avg_process_time_minutes.
    """
    return (
        durations.astype({"duration_minutes": "float64"})
        .groupby(BUCKET_KEY, sort=True)["duration_minutes"]
        .mean()
        .reset_index(name="avg_process_time_minutes")
    )
