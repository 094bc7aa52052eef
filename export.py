"""
export.py - Writes the GSTR-1 JSON and summary CSV files.
"""

import json
import os
import pandas as pd

from analytics import summarize_rows, summary_rows_for_export
from constants import Config


def gstr1_json_filename(label: str) -> str:
    """File name for a return label, e.g. "April-2024" -> gstr1-b2cs-April-2024.json"""
    return f"{Config.OUTPUT_PREFIX}-{label}.json"


def write_gstr1_json(payload, label, output_folder=None):
    """
    Write a FilingPayload as UTF-8 JSON with 2-space indentation.

    Args:
        payload: FilingPayload (or an already serialized dict)
        label: Period label used in the file name ("April-2024", "Q1-2024")
        output_folder: Target folder (current directory when not given)

    Returns:
        Path of the written file
    """
    data = payload.to_dict() if hasattr(payload, "to_dict") else payload
    output_path = os.path.join(output_folder or "", gstr1_json_filename(label))
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=Config.JSON_INDENT, ensure_ascii=False)
    return output_path


def generate_summary_csv(rows, output_path):
    """
    Generate the general summary CSV (totals, rate/state/status/month breakdowns).
    Columns: Section, Key, Orders, Amount, GST Amount
    """
    summary = summarize_rows(rows)
    df_out = pd.DataFrame(summary_rows_for_export(summary),
                          columns=['Section', 'Key', 'Orders', 'Amount', 'GST Amount'])
    df_out.to_csv(output_path, index=False)
    return output_path
