"""Example: Cashier staffing gap from geolocation pings and sales

This example shows both ways of running the staffing gap pipeline:

1. In memory, on DataFrames you already have
2. From bronze CSVs under a data root, cached as a gold mart

Prerequisites:
- Geolocation export with columns device_id, timestamp, area, role
- Sales log export with columns sale_id, timestamp
"""

from pathlib import Path

import pandas as pd

from workforce_core import DataPaths
from workforce_core.geolocation import build_department_roster, clean_pings, detect_missed_deliveries
from workforce_core.staffing import StaffingConfig, run_staffing_gap
from workforce_core.staffing import marts as staffing_marts

pings_file = Path("data/a_raw/geolocation/geolocation.csv")
sales_file = Path("data/a_raw/sales/log_sales.csv")

print("=" * 80)
print("Example 1: In-memory staffing gap")
print("=" * 80)

if pings_file.exists() and sales_file.exists():
    pings_df = pd.read_csv(pings_file)
    sales_df = pd.read_csv(sales_file)

    config = StaffingConfig(
        session_gap_minutes=20,  # inactivity that closes a checkout visit
        cashiers_at_registers_only=True,  # only count cashiers seen at the registers
    )
    result = run_staffing_gap(pings_df, sales_df, config)

    print(result.report.to_string(index=False))
    print(f"\nBuckets without checkout data: {len(result.dropped_buckets)}")
    print(f"Rejected pings: {result.metadata['rejected_pings']}")

    print("\nUnderstaffed hours:")
    print(result.report[result.report["staffing_gap"] < 0].to_string(index=False))

    pings, _ = clean_pings(pings_df)
    print("\nDepartment roster:")
    print(build_department_roster(pings).to_string(index=False))
    print("\nMissed deliveries:")
    print(detect_missed_deliveries(pings).to_string(index=False))
else:
    print(f"\nData files not found: {pings_file}, {sales_file}")

print("\n" + "=" * 80)
print("Example 2: Gold mart for a date window")
print("=" * 80)

paths = DataPaths.from_root("data")
if paths.raw_geolocation.exists() and paths.raw_sales.exists():
    report = staffing_marts.fetch_gap_report(paths, "2025-01-01", "2025-03-31")
    print(report.head(24).to_string(index=False))
    print(f"\nSaved to {staffing_marts.mart_path(paths, '2025-01-01', '2025-03-31')}")
else:
    print(f"\nBronze directories not found under {paths.data_root}")
