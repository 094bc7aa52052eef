"""Tests for the general row summary."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from analytics import summarize_rows, summary_rows_for_export
from models import TransactionRow


def sample_rows():
    return [
        TransactionRow(order_status="Delivered", month="April", financial_year="2024",
                       customer_state="Delhi", gst_rate=5, taxable_amount=100.0, gst_amount=5.0),
        TransactionRow(order_status="Delivered", month="April", financial_year="2024",
                       customer_state="Goa", gst_rate=12, taxable_amount=200.0, gst_amount=24.0),
        TransactionRow(order_status="RTO", month="May", financial_year="2024",
                       customer_state="Delhi", gst_rate=5, taxable_amount=50.0, gst_amount=2.5),
    ]


def test_totals():
    summary = summarize_rows(sample_rows())
    assert summary['total_orders'] == 3
    assert summary['total_amount'] == pytest.approx(350.0)
    assert summary['gst_summary']['total_gst_amount'] == pytest.approx(31.5)
    assert summary['gst_summary']['total_taxable_amount'] == pytest.approx(350.0)


def test_rate_wise_breakdown():
    rate_wise = summarize_rows(sample_rows())['gst_summary']['rate_wise']
    assert set(rate_wise) == {"5", "12"}
    assert rate_wise["5"] == {'count': 2, 'taxable_amount': 150.0, 'gst_amount': 7.5}


def test_state_status_and_month_breakdowns():
    summary = summarize_rows(sample_rows())
    assert summary['state_wise']["Delhi"] == {'count': 2, 'amount': 150.0, 'gst_amount': 7.5}
    assert summary['order_status'] == {"Delivered": 2, "RTO": 1}
    assert summary['monthly_trends']["April 2024"] == {'orders': 2, 'amount': 300.0, 'gst_amount': 29.0}
    assert summary['monthly_trends']["May 2024"]['orders'] == 1


def test_missing_fields_fall_back():
    summary = summarize_rows([TransactionRow()])
    assert summary['total_orders'] == 1
    assert summary['total_amount'] == 0
    assert summary['gst_summary']['rate_wise'] == {"0": {'count': 1, 'taxable_amount': 0.0, 'gst_amount': 0.0}}
    assert summary['state_wise'] == {"Unknown": {'count': 1, 'amount': 0.0, 'gst_amount': 0.0}}
    assert summary['order_status'] == {"Unknown": 1}
    assert list(summary['monthly_trends']) == ["Unknown Unknown"]


def test_nan_amounts_count_as_zero():
    rows = [
        TransactionRow(customer_state="Goa", gst_rate=5, taxable_amount=float("nan"), gst_amount=5.0),
        TransactionRow(customer_state="Goa", gst_rate=5, taxable_amount=100.0, gst_amount=float("nan")),
    ]
    summary = summarize_rows(rows)
    assert summary['total_amount'] == 100.0
    assert summary['gst_summary']['total_gst_amount'] == 5.0
    assert summary['state_wise']["Goa"] == {'count': 2, 'amount': 100.0, 'gst_amount': 5.0}


def test_zero_amount_groups_are_kept():
    rows = [
        TransactionRow(customer_state="Goa", gst_rate=5, taxable_amount=100.0),
        TransactionRow(customer_state="Goa", gst_rate=5, taxable_amount=-100.0),
    ]
    summary = summarize_rows(rows)
    assert summary['state_wise']["Goa"]['count'] == 2
    assert summary['state_wise']["Goa"]['amount'] == 0.0


def test_no_rounding_applied():
    rows = [TransactionRow(gst_rate=5, taxable_amount=0.004)] * 3
    summary = summarize_rows(rows)
    assert summary['total_amount'] == pytest.approx(0.012)


def test_empty_input():
    summary = summarize_rows([])
    assert summary['total_orders'] == 0
    assert summary['total_amount'] == 0
    assert summary['gst_summary']['rate_wise'] == {}
    assert summary['state_wise'] == {}
    assert summary['order_status'] == {}
    assert summary['monthly_trends'] == {}


def test_summary_rows_for_export():
    rows = summary_rows_for_export(summarize_rows(sample_rows()))
    assert rows[0]['Section'] == 'Total'
    assert rows[0]['Orders'] == 3
    sections = {row['Section'] for row in rows}
    assert sections == {'Total', 'GST Rate', 'State', 'Order Status', 'Month'}
    assert {'Section': 'Order Status', 'Key': 'RTO', 'Orders': 1, 'Amount': '', 'GST Amount': ''} in rows
