import io
import os
import logging
import pandas as pd

from constants import Config, ErrorMessages
from models import TransactionRow

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ["gst_rate", "meesho_price", "gst_amount"]

# Columns the GSTR-1 transformation cannot work without
REQUIRED_COLUMNS = ["end_customer_state", "gst_rate"]


# ============================================================================
# FILE VALIDATION FUNCTIONS - Prevent wrong files from being uploaded
# ============================================================================

def validate_settlement_excel(filepath) -> tuple[bool, str]:
    """Validate that the selected file is a Meesho forward/reverse Excel report."""
    if not filepath:
        return False, "❌ No file selected!"

    if not str(filepath).lower().endswith(Config.EXCEL_EXTENSIONS):
        return False, f"❌ Wrong file type! {ErrorMessages.WRONG_EXTENSION}."

    return True, "✅ Valid Meesho settlement Excel"


def missing_report_columns(df: pd.DataFrame) -> list:
    """Return the required report columns absent from a loaded sheet."""
    return [col for col in REQUIRED_COLUMNS if col not in df.columns]


# ============================================================================
# LOADERS
# ============================================================================

def read_report_frame(source) -> pd.DataFrame:
    """
    Read the first sheet of a settlement report into a DataFrame.

    Args:
        source: Path to an .xlsx/.xls file or the raw bytes of one

    Returns:
        DataFrame with stripped column names and numeric amount columns
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    df = pd.read_excel(source, sheet_name=0)
    df.columns = [str(c).strip() for c in df.columns]

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    return df


def load_rows(source) -> list:
    """
    Load a Meesho forward or reverse settlement report as TransactionRows.

    Rows keep the sheet order. Blank cells become None so the transformation
    can skip rows without a customer state or GST rate.
    """
    df = read_report_frame(source)
    name = os.path.basename(source) if isinstance(source, str) else "uploaded file"

    if df.empty:
        logger.warning(f"{name}: sheet has headers but no data rows")
        return []

    missing = missing_report_columns(df)
    if missing:
        logger.warning(f"{name}: missing columns {', '.join(missing)}; affected rows will be skipped")

    # object dtype so NaN can be swapped for None in numeric columns too
    records = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")
    rows = [TransactionRow.from_record(record) for record in records]

    logger.info(f"{name}: loaded {len(rows)} rows")
    return rows


def load_report_rows(forward_file, reverse_file) -> list:
    """Combined rows of a forward and reverse report (forward first)."""
    return load_rows(forward_file) + load_rows(reverse_file)
