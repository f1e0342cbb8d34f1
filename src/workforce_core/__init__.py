"""Workforce Core - batch workforce analytics over store geolocation and sales data.

Module Structure:
    workforce_core.geolocation: ping cleaning, department roster, missed deliveries
    workforce_core.sales: sales log cleaning
    workforce_core.staffing: cashier staffing gap pipeline and its gold mart
    workforce_core.config: DataPaths configuration

Quick Start:
    >>> from workforce_core import DataPaths
    >>> from workforce_core.staffing import run_staffing_gap
    >>> from workforce_core.staffing import marts as staffing_marts
    >>>
    >>> # In memory
    >>> result = run_staffing_gap(pings_df, sales_df)
    >>> print(result.report)
    >>>
    >>> # From bronze CSVs, cached as a gold mart
    >>> paths = DataPaths.from_root("data")
    >>> report = staffing_marts.fetch_gap_report(paths, "2025-01-01", "2025-03-31")

Grain Reference:
    Geolocation:
        - silver: one row per ping (device x timestamp)
    Sales:
        - silver: one row per sale
    Staffing:
        - marts.gap: mart_staffing_gap - day_of_week x hour
"""

__version__ = "0.1.0"

from workforce_core.config import DataPaths
from workforce_core.exceptions import (
    ConfigError,
    DataIntegrityError,
    DataQualityError,
    ETLError,
    WorkforceAPIError,
)

__all__ = [
    "ConfigError",
    "DataIntegrityError",
    "DataPaths",
    "DataQualityError",
    "ETLError",
    "WorkforceAPIError",
    "__version__",
]
