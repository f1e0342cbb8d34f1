"""Configuration for the cashier staffing gap pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from workforce_core.exceptions import ConfigError

# Physical zone where checkout dwell time is observed
CHECKOUT_AREA = "CASH_REGISTERS"

# Device roles that represent shoppers rather than staff
CUSTOMER_ROLES = ["repeat_customer", "one_time_customer", "no_phone"]

CASHIER_ROLE = "cashier"

# Inactivity gap (minutes) that closes a visit session
SESSION_GAP_MINUTES = 20

# Sessions shorter than this (minutes) are treated as noise
MIN_SESSION_MINUTES = 1

REPORT_COLUMNS = [
    "day_of_week",
    "day_name",
    "hour",
    "customers_demand",
    "avg_process_time",
    "optimal_registers_needed",
    "actual_registers_open",
    "staffing_gap",
]


@dataclass
class StaffingConfig:
    """Configuration for the staffing gap computation.

    Attributes:
        session_gap_minutes: A ping more than this many whole minutes after
            the previous ping of the same device starts a new session.
        min_session_minutes: Sessions shorter than this are discarded.
        checkout_area: Area whose pings are used to measure dwell time.
        customer_roles: Roles whose pings count as customers.
        cashier_role: Role counted as an open register.
        cashiers_at_registers_only: Only count cashiers seen in
            ``checkout_area`` (default counts cashiers in any area).
        timezone: Zone used to derive day-of-week and hour buckets.
    """

    session_gap_minutes: int = SESSION_GAP_MINUTES
    min_session_minutes: int = MIN_SESSION_MINUTES
    checkout_area: str = CHECKOUT_AREA
    customer_roles: List[str] = field(default_factory=lambda: list(CUSTOMER_ROLES))
    cashier_role: str = CASHIER_ROLE
    cashiers_at_registers_only: bool = False
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if self.session_gap_minutes <= 0:
            raise ConfigError(
                f"session_gap_minutes must be positive, got {self.session_gap_minutes}"
            )
        if self.min_session_minutes < 1:
            # a zero-minute session would mean a zero average process time
            raise ConfigError(
                f"min_session_minutes must be at least 1, got {self.min_session_minutes}"
            )
        if not self.customer_roles:
            raise ConfigError("customer_roles must not be empty")
