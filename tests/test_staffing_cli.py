"""Tests for the workforce-staffing command line entry point."""

import pandas as pd

from workforce_core.staffing.pipeline import main


def test_cli_writes_report(make_pings, make_sales, tmp_path) -> None:
    pings_csv = tmp_path / "pings.csv"
    sales_csv = tmp_path / "sales.csv"
    out_csv = tmp_path / "out" / "gap.csv"
    make_pings(
        [
            ("c1", 0, "CASH_REGISTERS", "no_phone"),
            ("c1", 3, "CASH_REGISTERS", "no_phone"),
        ]
    ).to_csv(pings_csv, index=False)
    make_sales(40).to_csv(sales_csv, index=False)

    code = main(["--pings", str(pings_csv), "--sales", str(sales_csv), "--out", str(out_csv), "--quiet"])

    assert code == 0
    report = pd.read_csv(out_csv, encoding="utf-8-sig")
    # 40 customers at 3 minutes -> 20 per register per hour -> 2 registers, none open
    assert report[["optimal_registers_needed", "staffing_gap"]].values.tolist() == [[2, -2]]


def test_cli_missing_input(tmp_path) -> None:
    code = main(["--pings", str(tmp_path / "nope.csv"), "--sales", str(tmp_path / "nope.csv")])

    assert code == 2


def test_cli_invalid_config(make_pings, make_sales, tmp_path) -> None:
    pings_csv = tmp_path / "pings.csv"
    sales_csv = tmp_path / "sales.csv"
    make_pings([("c1", 0, "CASH_REGISTERS", "no_phone")]).to_csv(pings_csv, index=False)
    make_sales(1).to_csv(sales_csv, index=False)

    code = main(["--pings", str(pings_csv), "--sales", str(sales_csv), "--gap-minutes", "0"])

    assert code == 1
