"""Gold layer: staffing gap mart (mart_staffing_gap).

This module builds the staffing gap report from the bronze ping and sales
CSVs for a date window, stores it under ``c_processed/staffing`` and tracks
the build with stage metadata so reruns can reuse it.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import pandas as pd

if TYPE_CHECKING:
    from workforce_core.config import DataPaths

from workforce_core.exceptions import ConfigError, ETLError
from workforce_core.geolocation.transform import load_pings
from workforce_core.metadata import (
    StageMetadata,
    read_metadata,
    should_run_stage,
    write_metadata,
)
from workforce_core.sales.transform import load_sales
from workforce_core.staffing.api import run_staffing_gap
from workforce_core.staffing.config import StaffingConfig

logger = logging.getLogger(__name__)

STAGE_VERSION = "staffing_gap_v1"


def stage_version(config: StaffingConfig) -> str:
    """Stage version tagged with a digest of the config that built the mart."""
    payload = json.dumps(asdict(config), sort_keys=True)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]
    return f"{STAGE_VERSION}+{digest}"


def mart_path(paths: DataPaths, start_date: str, end_date: str) -> Path:
    """Location of the staffing gap mart for a date window."""
    return paths.mart_staffing / f"mart_staffing_gap_{start_date}_{end_date}.csv"


def _write_stage(
    paths: DataPaths,
    start_date: str,
    end_date: str,
    version: str,
    status: str,
    stats: Optional[dict] = None,
) -> None:
    metadata = StageMetadata(
        start_date=start_date,
        end_date=end_date,
        version=version,
        last_run=datetime.now().isoformat(),
        status=status,
        stats=stats or {},
    )
    write_metadata(paths.mart_staffing, start_date, end_date, metadata)


def fetch_gap_report(
    paths: DataPaths,
    start_date: str,
    end_date: str,
    config: Optional[StaffingConfig] = None,
    *,
    mode: str = "missing",
) -> pd.DataFrame:
    """Ensure the staffing gap mart exists for the window, then return it.

    - mode="missing" (default): reuse an existing mart built by the current
      stage version with the same config, otherwise build it
    - mode="force": always rebuild

    Args:
        paths: DataPaths configuration.
        start_date: Start date in YYYY-MM-DD format (inclusive).
        end_date: End date in YYYY-MM-DD format (inclusive).
        config: Pipeline configuration.
        mode: Processing mode - "missing" (default) or "force".

    Returns:
        DataFrame with the staffing gap report.

    Raises:
        ConfigError: If mode is not "missing" or "force".
        ETLError: If no bronze pings or sales exist.
    """
    if mode not in ("missing", "force"):
        raise ConfigError(f"Invalid mode '{mode}'. Must be 'missing' or 'force'.")

    if config is None:
        config = StaffingConfig()

    version = stage_version(config)
    paths.ensure_dirs()
    output_path = mart_path(paths, start_date, end_date)

    if (
        mode == "missing"
        and output_path.exists()
        and not should_run_stage(paths.mart_staffing, start_date, end_date, version)
    ):
        logger.debug("Loading existing mart_staffing_gap for %s to %s", start_date, end_date)
        return pd.read_csv(output_path, encoding="utf-8-sig")

    logger.info("Building mart_staffing_gap for %s to %s", start_date, end_date)

    try:
        pings, rejected_pings = load_pings(paths, start_date, end_date, config.timezone)
        sales, rejected_sales = load_sales(paths, start_date, end_date, config.timezone)

        result = run_staffing_gap(pings, sales, config, sink=output_path)
    except FileNotFoundError as e:
        logger.error("Error building staffing gap mart: %s", e)
        _write_stage(paths, start_date, end_date, version, "failed")
        raise ETLError(str(e)) from e
    except Exception as e:
        logger.error("Error building staffing gap mart: %s", e)
        _write_stage(paths, start_date, end_date, version, "failed")
        raise

    stats = dict(result.metadata)
    # rejections happen while loading, before run_staffing_gap sees the rows
    stats["rejected_pings"] = rejected_pings
    stats["rejected_sales"] = rejected_sales
    _write_stage(paths, start_date, end_date, version, "ok", stats)

    return result.report


def load_gap_report(paths: DataPaths, start_date: str, end_date: str) -> pd.DataFrame:
    """Load the staffing gap mart from disk without running the pipeline.

    Raises:
        FileNotFoundError: If the mart is missing or its last build failed.
    """
    output_path = mart_path(paths, start_date, end_date)
    meta = read_metadata(paths.mart_staffing, start_date, end_date)

    if not output_path.exists() or meta is None or meta.status != "ok":
        raise FileNotFoundError(
            f"Staffing gap mart not found for range {start_date} to {end_date}. "
            f"Use staffing.marts.fetch_gap_report() to build the mart."
        )

    return pd.read_csv(output_path, encoding="utf-8-sig")
