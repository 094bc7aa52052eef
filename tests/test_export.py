"""Tests for JSON and CSV exports."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import json
import pandas as pd
from export import gstr1_json_filename, write_gstr1_json, generate_summary_csv
from logic import transform_to_gstr1
from models import TransactionRow

ROWS = [
    TransactionRow(order_status="Delivered", month="April", financial_year="2024",
                   supplier_state="Delhi", customer_state="Delhi", gst_rate=5,
                   taxable_amount=100.0, gst_amount=5.0),
    TransactionRow(order_status="Delivered", month="April", financial_year="2024",
                   supplier_state="Delhi", customer_state="Maharashtra", gst_rate=5,
                   taxable_amount=200.0, gst_amount=10.0),
]


def test_gstr1_json_filename():
    assert gstr1_json_filename("April-2024") == "gstr1-b2cs-April-2024.json"
    assert gstr1_json_filename("Q1-2024") == "gstr1-b2cs-Q1-2024.json"


def test_write_gstr1_json(tmp_path):
    payload = transform_to_gstr1(ROWS, "07ABCDE1234F1Z5", "042024")
    path = write_gstr1_json(payload, "April-2024", str(tmp_path))
    assert path == os.path.join(str(tmp_path), "gstr1-b2cs-April-2024.json")

    with open(path, encoding="utf-8") as f:
        text = f.read()
    assert text.startswith('{\n  "gstin": "07ABCDE1234F1Z5"')
    data = json.loads(text)
    assert data == payload.to_dict()
    assert list(data) == ["gstin", "fp", "version", "hash", "b2cs", "supeco"]


def test_write_gstr1_json_accepts_dict(tmp_path):
    path = write_gstr1_json({"gstin": "x", "b2cs": []}, "Q2-2024", str(tmp_path))
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"gstin": "x", "b2cs": []}


def test_generate_summary_csv(tmp_path):
    output_path = str(tmp_path / "summary.csv")
    assert generate_summary_csv(ROWS, output_path) == output_path

    df = pd.read_csv(output_path)
    assert list(df.columns) == ['Section', 'Key', 'Orders', 'Amount', 'GST Amount']
    total = df[df['Section'] == 'Total'].iloc[0]
    assert total['Orders'] == 2
    assert total['Amount'] == 300.0
    states = df[df['Section'] == 'State']['Key'].tolist()
    assert states == ["Delhi", "Maharashtra"]


def test_generate_summary_csv_empty(tmp_path):
    output_path = str(tmp_path / "summary.csv")
    generate_summary_csv([], output_path)
    df = pd.read_csv(output_path)
    assert len(df) == 1
    assert df.iloc[0]['Orders'] == 0
