"""Department roster: staff devices with the headcount of their role."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

# Manager, checkout, butchery, operations, security and supplier staff
STAFF_ROLES = [
    "manager",
    "cashier",
    "butcher",
    "general_worker",
    "senior_general_worker",
    "security_guy",
    "delivery_guy",
]


def build_department_roster(
    pings: pd.DataFrame,
    roles: Iterable[str] = STAFF_ROLES,
) -> pd.DataFrame:
    """List every staff device next to the size of its department.

    A device seen under two roles appears once per role.

    Args:
        pings: Cleaned pings with device_id and role.
        roles: Roles that count as staff departments.

    Returns:
        DataFrame with columns device_id, role, total_in_department, ordered
        by role then device_id.
    """
    staff = pings.loc[pings["role"].isin(list(roles)), ["device_id", "role"]]
    roster = staff.drop_duplicates().copy()
    roster["total_in_department"] = (
        roster.groupby("role")["device_id"].transform("nunique").astype("int64")
    )
    return roster.sort_values(["role", "device_id"]).reset_index(drop=True)
