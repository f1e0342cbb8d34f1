"""End-to-end tests for run_staffing_gap on in-memory tables."""

import io

import pandas as pd
import pytest

from workforce_core.exceptions import DataQualityError
from workforce_core.staffing import StaffingConfig, StaffingGapResult, run_staffing_gap

REGISTERS = "CASH_REGISTERS"


@pytest.fixture
def pings_df(make_pings) -> pd.DataFrame:
    """Monday 10h: two customer sessions (4 and 6 min), 8 cashiers at registers, 1 elsewhere."""
    rows = [
        ("c1", 0, REGISTERS, "repeat_customer"),
        ("c1", 4, REGISTERS, "repeat_customer"),
        ("c2", 10, REGISTERS, "one_time_customer"),
        ("c2", 16, REGISTERS, "one_time_customer"),
        # lone ping, zero-length session
        ("c3", 20, REGISTERS, "no_phone"),
        # staff inside the register area are not customers
        ("m1", 0, REGISTERS, "manager"),
        ("m1", 30, REGISTERS, "manager"),
    ]
    rows += [(f"k{i}", 30, REGISTERS, "cashier") for i in range(8)]
    rows += [("k9", 45, "WAREHOUSE", "cashier")]
    df = make_pings(rows)
    malformed = pd.DataFrame(
        [{"device_id": "c9", "timestamp": "not a time", "area": REGISTERS, "role": "no_phone"}]
    )
    return pd.concat([df, malformed], ignore_index=True)


@pytest.fixture
def sales_df(make_sales) -> pd.DataFrame:
    """120 sales on Monday 10h, 5 on Tuesday 9h (no checkout data), one malformed."""
    monday = make_sales(120)
    tuesday = make_sales(5, start=pd.Timestamp("2024-03-05 09:00:00"), first_id=500)
    malformed = pd.DataFrame([{"sale_id": "S999", "timestamp": None}])
    return pd.concat([monday, tuesday, malformed], ignore_index=True)


def test_run_staffing_gap_report(pings_df, sales_df) -> None:
    result = run_staffing_gap(pings_df, sales_df)

    assert isinstance(result, StaffingGapResult)
    assert result.report.to_dict(orient="records") == [
        {
            "day_of_week": 2,
            "day_name": "Monday",
            "hour": 10,
            "customers_demand": 120,
            "avg_process_time": 5.0,
            "optimal_registers_needed": 10,
            "actual_registers_open": 9,
            "staffing_gap": -1,
        }
    ]


def test_strict_cashier_definition(pings_df, sales_df) -> None:
    config = StaffingConfig(cashiers_at_registers_only=True)

    report = run_staffing_gap(pings_df, sales_df, config).report

    assert report["actual_registers_open"].tolist() == [8]
    assert report["staffing_gap"].tolist() == [-2]


def test_dropped_buckets_and_metadata(pings_df, sales_df) -> None:
    result = run_staffing_gap(pings_df, sales_df)

    assert result.dropped_buckets.to_dict(orient="records") == [
        {"day_of_week": 3, "hour": 9, "customers_demand": 5}
    ]
    meta = result.metadata
    assert meta["rejected_pings"] == 1
    assert meta["rejected_sales"] == 1
    assert meta["sessions"] == 3
    assert meta["qualifying_sessions"] == 2
    assert meta["report_rows"] == 1
    assert meta["dropped_buckets"] == 1


def test_rejections_are_logged_as_warnings(pings_df, sales_df, caplog) -> None:
    with caplog.at_level("WARNING", logger="workforce_core"):
        run_staffing_gap(pings_df, sales_df)

    warnings = [r.getMessage() for r in caplog.records if r.levelname == "WARNING"]
    assert any("pings" in msg for msg in warnings)
    assert any("sales" in msg for msg in warnings)


def test_pipeline_is_idempotent(pings_df, sales_df) -> None:
    first = run_staffing_gap(pings_df, sales_df).report.to_csv(index=False)
    second = run_staffing_gap(pings_df, sales_df).report.to_csv(index=False)

    assert first == second


def test_input_order_does_not_change_report(pings_df, sales_df) -> None:
    shuffled_pings = pings_df.sample(frac=1.0, random_state=7).reset_index(drop=True)
    shuffled_sales = sales_df.sample(frac=1.0, random_state=11).reset_index(drop=True)

    expected = run_staffing_gap(pings_df, sales_df).report
    actual = run_staffing_gap(shuffled_pings, shuffled_sales).report

    pd.testing.assert_frame_equal(expected, actual)


def test_sinks(pings_df, sales_df, tmp_path) -> None:
    rows: list = []
    run_staffing_gap(pings_df, sales_df, sink=rows)
    assert rows[0]["staffing_gap"] == -1

    buffer = io.StringIO()
    run_staffing_gap(pings_df, sales_df, sink=buffer)
    assert buffer.getvalue().splitlines()[0].startswith("day_of_week,day_name,hour")

    captured = []
    run_staffing_gap(pings_df, sales_df, sink=captured.append)
    assert len(captured) == 1 and isinstance(captured[0], pd.DataFrame)

    out = tmp_path / "reports" / "gap.csv"
    run_staffing_gap(pings_df, sales_df, sink=out)
    written = pd.read_csv(out, encoding="utf-8-sig")
    assert written["optimal_registers_needed"].tolist() == [10]


def test_unsupported_sink(pings_df, sales_df) -> None:
    with pytest.raises(TypeError):
        run_staffing_gap(pings_df, sales_df, sink=42)


def test_missing_columns_raise(sales_df) -> None:
    with pytest.raises(DataQualityError):
        run_staffing_gap(pd.DataFrame({"device_id": ["a"]}), sales_df)
