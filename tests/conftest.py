"""Shared fixtures for building small ping and sales tables."""

from __future__ import annotations

from typing import Callable, Iterable

import pandas as pd
import pytest

# Monday 2024-03-04 10:00 UTC
MONDAY_10AM = pd.Timestamp("2024-03-04 10:00:00")


def _fmt(ts: pd.Timestamp) -> str:
    return ts.strftime("%Y-%m-%d %H:%M:%S")


@pytest.fixture
def make_pings() -> Callable[..., pd.DataFrame]:
    """Build a raw pings table from (device_id, minute_offset, area, role) tuples.

    Offsets are minutes after Monday 2024-03-04 10:00 UTC; timestamps are
    written as strings the way they arrive from CSV exports.
    """

    def _make(rows: Iterable[tuple], base: pd.Timestamp = MONDAY_10AM) -> pd.DataFrame:
        records = [
            {
                "device_id": device_id,
                "timestamp": _fmt(base + pd.Timedelta(minutes=offset)),
                "area": area,
                "role": role,
            }
            for device_id, offset, area, role in rows
        ]
        return pd.DataFrame(records, columns=["device_id", "timestamp", "area", "role"])

    return _make


@pytest.fixture
def make_sales() -> Callable[..., pd.DataFrame]:
    """Build a raw sales table with ``count`` sales spaced 20 seconds apart from ``start``."""

    def _make(count: int, start: pd.Timestamp = MONDAY_10AM, first_id: int = 1) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "sale_id": [f"S{first_id + i}" for i in range(count)],
                "timestamp": [_fmt(start + pd.Timedelta(seconds=20 * i)) for i in range(count)],
            }
        )

    return _make
