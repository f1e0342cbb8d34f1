"""Tests for the staffing gap gold mart and its stage metadata."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pandas as pd
import pytest

from workforce_core import DataPaths
from workforce_core.exceptions import ConfigError, ETLError
from workforce_core.metadata import (
    StageMetadata,
    read_metadata,
    should_run_stage,
    write_metadata,
)
from workforce_core.staffing import StaffingConfig, marts

START, END = "2024-03-04", "2024-03-10"


def _write_bronze(paths: DataPaths, make_pings, make_sales) -> None:
    paths.ensure_dirs()
    pings = make_pings(
        [
            ("c1", 0, "CASH_REGISTERS", "repeat_customer"),
            ("c1", 6, "CASH_REGISTERS", "repeat_customer"),
            ("k1", 5, "CASH_REGISTERS", "cashier"),
        ]
    )
    # outside the window
    late = make_pings(
        [("k2", 0, "CASH_REGISTERS", "cashier")],
        base=pd.Timestamp("2024-03-18 10:00:00"),
    )
    pd.concat([pings, late]).to_csv(paths.raw_geolocation / "geolocation.csv", index=False)
    make_sales(25).to_csv(paths.raw_sales / "log_sales.csv", index=False)


def test_fetch_builds_mart_and_metadata(make_pings, make_sales) -> None:
    with TemporaryDirectory() as tmpdir:
        paths = DataPaths.from_root(tmpdir)
        _write_bronze(paths, make_pings, make_sales)

        report = marts.fetch_gap_report(paths, START, END)

        # 25 customers at 6 minutes -> 10 per register per hour -> 3 registers
        assert report[["customers_demand", "optimal_registers_needed", "actual_registers_open"]].values.tolist() == [
            [25, 3, 1]
        ]
        assert marts.mart_path(paths, START, END).exists()

        meta = read_metadata(paths.mart_staffing, START, END)
        assert meta is not None
        assert meta.status == "ok"
        assert meta.version == marts.stage_version(StaffingConfig())
        assert meta.stats["report_rows"] == 1


def test_fetch_reuses_existing_mart(make_pings, make_sales, monkeypatch) -> None:
    with TemporaryDirectory() as tmpdir:
        paths = DataPaths.from_root(tmpdir)
        _write_bronze(paths, make_pings, make_sales)
        first = marts.fetch_gap_report(paths, START, END)

        def _fail(*args, **kwargs):
            raise AssertionError("pipeline should not rerun in missing mode")

        monkeypatch.setattr(marts, "run_staffing_gap", _fail)
        second = marts.fetch_gap_report(paths, START, END)

        assert first.to_dict(orient="records") == second.to_dict(orient="records")

        with pytest.raises(AssertionError):
            marts.fetch_gap_report(paths, START, END, mode="force")


def test_load_requires_built_mart(tmp_path) -> None:
    paths = DataPaths.from_root(tmp_path)

    with pytest.raises(FileNotFoundError, match="fetch_gap_report"):
        marts.load_gap_report(paths, START, END)

    assert not (paths.mart_staffing / "_meta").exists()


def test_config_change_rebuilds_mart(make_pings, make_sales, tmp_path) -> None:
    paths = DataPaths.from_root(tmp_path)
    _write_bronze(paths, make_pings, make_sales)
    # an in-window cashier who never visits the registers
    stocker = make_pings([("k3", 20, "WAREHOUSE", "cashier")])
    stocker.to_csv(paths.raw_geolocation / "geolocation_warehouse.csv", index=False)

    broad = marts.fetch_gap_report(paths, START, END)
    strict = marts.fetch_gap_report(
        paths, START, END, StaffingConfig(cashiers_at_registers_only=True)
    )

    assert broad["actual_registers_open"].tolist() == [2]
    assert strict["actual_registers_open"].tolist() == [1], "mart built for another config was reused"
    meta = read_metadata(paths.mart_staffing, START, END)
    assert meta.version == marts.stage_version(StaffingConfig(cashiers_at_registers_only=True))
    assert meta.version != marts.stage_version(StaffingConfig())


def test_load_returns_built_mart(make_pings, make_sales, tmp_path) -> None:
    paths = DataPaths.from_root(tmp_path)
    _write_bronze(paths, make_pings, make_sales)
    marts.fetch_gap_report(paths, START, END)

    loaded = marts.load_gap_report(paths, START, END)

    assert loaded["staffing_gap"].tolist() == [-2]


def test_missing_bronze_marks_stage_failed(tmp_path) -> None:
    paths = DataPaths.from_root(tmp_path)

    with pytest.raises(ETLError):
        marts.fetch_gap_report(paths, START, END)

    meta = read_metadata(paths.mart_staffing, START, END)
    assert meta is not None and meta.status == "failed"


def test_invalid_mode(tmp_path) -> None:
    with pytest.raises(ConfigError, match="Invalid mode"):
        marts.fetch_gap_report(DataPaths.from_root(tmp_path), START, END, mode="sometimes")


def test_metadata_skip_logic() -> None:
    """Test metadata skip vs force logic with temp directories."""
    with TemporaryDirectory() as tmpdir:
        stage_dir = Path(tmpdir) / "mart_staffing"
        stage_dir.mkdir(parents=True)
        version = marts.STAGE_VERSION

        # No metadata exists - should run
        assert should_run_stage(stage_dir, START, END, version) is True

        ok = StageMetadata(
            start_date=START,
            end_date=END,
            version=version,
            last_run="2024-03-11T00:00:00",
            status="ok",
        )
        write_metadata(stage_dir, START, END, ok)
        assert should_run_stage(stage_dir, START, END, version) is False

        # Version bump - should run
        assert should_run_stage(stage_dir, START, END, "staffing_gap_v2") is True

        failed = StageMetadata(
            start_date=START,
            end_date=END,
            version=version,
            last_run="2024-03-11T00:00:00",
            status="failed",
        )
        write_metadata(stage_dir, START, END, failed)
        assert should_run_stage(stage_dir, START, END, version) is True


def test_corrupt_metadata_is_ignored(tmp_path) -> None:
    meta_dir = tmp_path / "_meta"
    meta_dir.mkdir()
    (meta_dir / f"{START}_{END}.json").write_text("{not json")

    assert read_metadata(tmp_path, START, END) is None
