"""Session reconstruction from checkout-area pings.

A session is a maximal run of one device's pings in which no two
consecutive pings are more than ``gap_minutes`` whole minutes apart. The
first ping of a device always opens a session, and session ids are a
per-device running count of session starts (1, 2, 3, ...).

Example:
    A device seen at minute offsets 0, 5, 30 and 32 with a 20 minute gap
    threshold yields session 1 = {0, 5} and session 2 = {30, 32}.
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterator, Tuple

import pandas as pd

from workforce_core.staffing.config import SESSION_GAP_MINUTES, StaffingConfig

logger = logging.getLogger(__name__)

SessionTag = Tuple[Hashable, pd.Timestamp, int]

TAG_COLUMNS = ["device_id", "timestamp", "session_id"]


def select_customer_pings(pings: pd.DataFrame, config: StaffingConfig) -> pd.DataFrame:
    """Keep the pings of customer devices inside the checkout area."""
    mask = (pings["area"] == config.checkout_area) & pings["role"].isin(config.customer_roles)
    selected = pings.loc[mask.fillna(False).astype(bool)]
    logger.debug(
        "Selected %d customer ping(s) in %s out of %d",
        len(selected),
        config.checkout_area,
        len(pings),
    )
    return selected


def _sort_pings(pings: pd.DataFrame) -> pd.DataFrame:
    # arrival position breaks timestamp ties so the order is total
    ordered = pings.loc[:, ["device_id", "timestamp"]].copy()
    ordered["_arrival"] = range(len(ordered))
    return ordered.sort_values(["device_id", "timestamp", "_arrival"])


def _gap_minutes(current: pd.Timestamp, previous: pd.Timestamp) -> int:
    return int((current - previous).total_seconds() // 60)


def iter_session_tags(
    pings: pd.DataFrame,
    gap_minutes: int = SESSION_GAP_MINUTES,
) -> Iterator[SessionTag]:
    """Yield ``(device_id, timestamp, session_id)`` for every ping.

    Pings are sorted by device, then timestamp, then arrival order, and
    scanned once while tracking the last timestamp and the session counter
    of each device. Each call starts a fresh scan, so the result can be
    iterated again and is identical for identical input.

    Args:
        pings: Cleaned pings with ``device_id`` and ``timestamp`` columns.
        gap_minutes: Whole minutes of inactivity after which the next ping
            opens a new session.

    Yields:
        Session tags in device, timestamp order.
    """
    ordered = _sort_pings(pings)

    last_seen: dict = {}
    sessions: dict = {}
    for device_id, timestamp in zip(ordered["device_id"], ordered["timestamp"]):
        previous = last_seen.get(device_id)
        if previous is None or _gap_minutes(timestamp, previous) > gap_minutes:
            sessions[device_id] = sessions.get(device_id, 0) + 1
        last_seen[device_id] = timestamp
        yield device_id, timestamp, sessions[device_id]


def tag_sessions(
    pings: pd.DataFrame,
    gap_minutes: int = SESSION_GAP_MINUTES,
) -> pd.DataFrame:
    """Materialise :func:`iter_session_tags` as a DataFrame.

    Returns:
        DataFrame with columns device_id, timestamp, session_id.
    """
    tags = list(iter_session_tags(pings, gap_minutes))
    if not tags:
        return pd.DataFrame(
            {
                "device_id": pd.Series(dtype=pings["device_id"].dtype),
                "timestamp": pd.Series(dtype=pings["timestamp"].dtype),
                "session_id": pd.Series(dtype="int64"),
            }
        )

    tagged = pd.DataFrame(tags, columns=TAG_COLUMNS)
    tagged["session_id"] = tagged["session_id"].astype("int64")
    logger.debug(
        "Tagged %d ping(s) into %d session(s)",
        len(tagged),
        len(tagged[["device_id", "session_id"]].drop_duplicates()),
    )
    return tagged
