"""
analytics.py - General summary of settlement rows (order counts and GST totals).
"""

from collections import defaultdict

from constants import UNKNOWN_CATEGORY, format_rate_key


def _amount_bucket():
    return {'count': 0, 'amount': 0.0, 'gst_amount': 0.0}


def summarize_rows(rows):
    """
    Summarize settlement rows without rounding.

    Returns total orders and amount plus four independent breakdowns:
    - gst_summary: totals and a rate-wise breakdown keyed by rate text ("5", "18")
    - state_wise: keyed by customer state
    - order_status: status -> order count
    - monthly_trends: keyed by "<month> <financial year>"

    Missing amounts count as zero and missing labels fall back to "Unknown".
    """
    rate_wise = defaultdict(lambda: {'count': 0, 'taxable_amount': 0.0, 'gst_amount': 0.0})
    state_wise = defaultdict(_amount_bucket)
    order_status = defaultdict(int)
    monthly_trends = defaultdict(lambda: {'orders': 0, 'amount': 0.0, 'gst_amount': 0.0})

    total_orders = 0
    total_amount = 0.0
    total_gst_amount = 0.0
    total_taxable_amount = 0.0

    for row in rows or []:
        amount = row.taxable_amount or 0
        gst_amount = row.gst_amount or 0

        total_orders += 1
        total_amount += amount
        total_gst_amount += gst_amount
        total_taxable_amount += amount

        rate = rate_wise[format_rate_key(row.gst_rate)]
        rate['count'] += 1
        rate['taxable_amount'] += amount
        rate['gst_amount'] += gst_amount

        state = state_wise[row.customer_state or UNKNOWN_CATEGORY]
        state['count'] += 1
        state['amount'] += amount
        state['gst_amount'] += gst_amount

        order_status[row.order_status or UNKNOWN_CATEGORY] += 1

        month_key = f"{row.month or UNKNOWN_CATEGORY} {row.financial_year or UNKNOWN_CATEGORY}"
        month = monthly_trends[month_key]
        month['orders'] += 1
        month['amount'] += amount
        month['gst_amount'] += gst_amount

    return {
        'total_orders': total_orders,
        'total_amount': total_amount,
        'gst_summary': {
            'total_gst_amount': total_gst_amount,
            'total_taxable_amount': total_taxable_amount,
            'rate_wise': dict(rate_wise),
        },
        'state_wise': dict(state_wise),
        'order_status': dict(order_status),
        'monthly_trends': dict(monthly_trends),
    }


def summary_rows_for_export(summary):
    """Flatten a summarize_rows() result into table rows for CSV export."""
    rows = [{
        'Section': 'Total',
        'Key': 'All Orders',
        'Orders': summary['total_orders'],
        'Amount': summary['total_amount'],
        'GST Amount': summary['gst_summary']['total_gst_amount'],
    }]
    for rate, data in summary['gst_summary']['rate_wise'].items():
        rows.append({'Section': 'GST Rate', 'Key': f"{rate}%", 'Orders': data['count'],
                     'Amount': data['taxable_amount'], 'GST Amount': data['gst_amount']})
    for state, data in summary['state_wise'].items():
        rows.append({'Section': 'State', 'Key': state, 'Orders': data['count'],
                     'Amount': data['amount'], 'GST Amount': data['gst_amount']})
    for status, count in summary['order_status'].items():
        rows.append({'Section': 'Order Status', 'Key': status, 'Orders': count,
                     'Amount': '', 'GST Amount': ''})
    for month, data in summary['monthly_trends'].items():
        rows.append({'Section': 'Month', 'Key': month, 'Orders': data['orders'],
                     'Amount': data['amount'], 'GST Amount': data['gst_amount']})
    return rows
