"""Tests for import_logic module - validation and Excel loading."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pandas as pd
from import_logic import (
    validate_settlement_excel, load_rows, load_report_rows,
    read_report_frame, missing_report_columns,
)


def write_report(path, rows, columns=None):
    pd.DataFrame(rows, columns=columns).to_excel(path, index=False)
    return str(path)


FORWARD_ROWS = [
    {" end_customer_state ": "Delhi", "state": "Delhi", "gst_rate": 5,
     "meesho_price": 100, "gst_amount": 5, "order_status": "Delivered",
     "month": "April", "financial_year": 2024},
    {" end_customer_state ": "Goa", "state": "Delhi", "gst_rate": "12",
     "meesho_price": "bad", "gst_amount": 24, "order_status": None,
     "month": "April", "financial_year": 2024},
]


def test_validate_settlement_excel():
    assert validate_settlement_excel("forward.xlsx")[0]
    assert validate_settlement_excel("REVERSE.XLS")[0]


def test_validate_settlement_excel_wrong_type():
    is_valid, msg = validate_settlement_excel("report.zip")
    assert not is_valid
    assert "Excel" in msg
    assert not validate_settlement_excel("")[0]
    assert not validate_settlement_excel(None)[0]


def test_read_report_frame_strips_headers_and_coerces_numbers(tmp_path):
    path = write_report(tmp_path / "forward.xlsx", FORWARD_ROWS)
    df = read_report_frame(path)
    assert "end_customer_state" in df.columns
    assert df["gst_rate"].tolist() == [5, 12]
    assert pd.isna(df["meesho_price"].iloc[1])
    assert missing_report_columns(df) == []


def test_load_rows_from_path(tmp_path):
    path = write_report(tmp_path / "forward.xlsx", FORWARD_ROWS)
    rows = load_rows(path)
    assert len(rows) == 2
    first, second = rows
    assert first.customer_state == "Delhi"
    assert first.supplier_state == "Delhi"
    assert first.gst_rate == 5.0
    assert first.taxable_amount == 100.0
    assert first.financial_year == "2024"
    assert second.gst_rate == 12.0
    assert second.taxable_amount is None
    assert second.order_status is None


def test_load_rows_from_bytes(tmp_path):
    path = write_report(tmp_path / "forward.xlsx", FORWARD_ROWS)
    with open(path, "rb") as f:
        rows = load_rows(f.read())
    assert [row.customer_state for row in rows] == ["Delhi", "Goa"]


def test_load_rows_empty_sheet(tmp_path):
    path = write_report(tmp_path / "empty.xlsx", [], columns=["end_customer_state", "gst_rate"])
    assert load_rows(path) == []


def test_load_rows_missing_columns_gives_skippable_rows(tmp_path):
    path = write_report(tmp_path / "other.xlsx", [{"Product ID": 1, "Current Stock": 4}])
    df = read_report_frame(path)
    assert missing_report_columns(df) == ["end_customer_state", "gst_rate"]
    rows = load_rows(path)
    assert rows[0].customer_state is None
    assert rows[0].gst_rate is None


def test_load_report_rows_forward_then_reverse(tmp_path):
    forward = write_report(tmp_path / "forward.xlsx", FORWARD_ROWS)
    reverse = write_report(tmp_path / "reverse.xlsx", [
        {"end_customer_state": "Kerala", "state": "Delhi", "gst_rate": 5,
         "meesho_price": -100, "gst_amount": -5},
    ])
    rows = load_report_rows(forward, reverse)
    assert [row.customer_state for row in rows] == ["Delhi", "Goa", "Kerala"]
    assert rows[-1].taxable_amount == -100.0
