import logging

from constants import (
    Config, ErrorMessages, MONTHS, QUARTERS, ReturnType, SupplyType,
    build_etin, format_filing_period, get_state_code, is_valid_gstin,
    quarter_filing_period,
)
from error_handler import InputDataError, OperationContext, log_operation
from export import write_gstr1_json
from import_logic import load_report_rows, validate_settlement_excel
from models import FilingPayload, OperatorTaxSummary, new_b2cs_entry

logger = logging.getLogger(__name__)


def transform_to_gstr1(rows, gstin, period):
    """
    Build the GSTR-1 B2CS + e-commerce operator payload from settlement rows.

    Rows are grouped by (place of supply, GST rate, supply type). Supply is
    intra-state when the customer and supplier state codes match; the tax is
    then split equally into central and state tax, otherwise it is all
    integrated tax. Every running total is rounded to 2 decimals after each
    row, so totals can differ from rounding the plain sum once.

    Rows without a customer state or GST rate are skipped and logged.

    Args:
        rows: Sequence of TransactionRow (forward and reverse rows together)
        gstin: Seller GSTIN
        period: Filing period, MMYYYY

    Returns:
        FilingPayload with b2cs sorted by place of supply
    """
    payload = FilingPayload(gstin=gstin, period=period)
    rows = list(rows or [])

    if not rows:
        logger.warning("No data provided for transformation")
        return payload

    logger.info(f"Starting transformation: {len(rows)} rows, GSTIN {gstin}, period {period}")

    entries = {}
    operator = OperatorTaxSummary(etin=build_etin(gstin))
    skipped = 0

    for index, row in enumerate(rows):
        if not row.customer_state or not row.gst_rate:
            logger.warning(f"Skipping row {index} due to missing customer state or GST rate: {row}")
            skipped += 1
            continue

        state_code = get_state_code(row.customer_state)
        supplier_state_code = get_state_code(row.supplier_state)
        supply_type = SupplyType.INTRA if state_code == supplier_state_code else SupplyType.INTER
        taxable_amount = row.taxable_amount or 0
        gst_amount = row.gst_amount or 0

        key = (state_code, row.gst_rate, supply_type)
        entry = entries.get(key)
        if entry is None:
            entry = new_b2cs_entry(supply_type, row.gst_rate, state_code)
            entries[key] = entry

        entry.add(taxable_amount, gst_amount)
        operator.add(supply_type, taxable_amount, gst_amount)

    payload.b2cs = sorted(
        (entry for entry in entries.values() if entry.taxable_value != 0),
        key=lambda entry: entry.place_of_supply,
    )
    if operator.total_supply_value != 0:
        payload.operator_summaries.append(operator)

    logger.info(
        f"Transformation done: {len(payload.b2cs)} B2CS entries from {len(entries)} groups, "
        f"{skipped} rows skipped, supply value {operator.total_supply_value}"
    )
    log_operation("GSTR-1 transformation", period, len(rows) - skipped)
    return payload


# ============================================================================
# RETURN BUILDERS - load reports, validate inputs, transform
# ============================================================================

def _validate_seller(gstin, year):
    if not is_valid_gstin(gstin):
        raise InputDataError(ErrorMessages.INVALID_GSTIN)
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise InputDataError(f"Invalid year: {year}")
    if not Config.YEAR_MIN <= year <= Config.YEAR_MAX:
        raise InputDataError(f"Year must be between {Config.YEAR_MIN} and {Config.YEAR_MAX}")
    return year


def _validate_report_files(*files, missing_message):
    for path in files:
        if not path:
            raise InputDataError(missing_message)
        is_valid, msg = validate_settlement_excel(path)
        if not is_valid:
            raise InputDataError(msg)


def build_monthly_return(gstin, year, month, forward_file, reverse_file):
    """
    Build a monthly GSTR-1 payload from one forward and one reverse report.

    Returns:
        (FilingPayload, label) where label is "<Month>-<year>"

    Raises:
        InputDataError: Missing/invalid inputs, or no data processed at all
    """
    year = _validate_seller(gstin, year)
    try:
        period = format_filing_period(month, year)
    except (TypeError, ValueError) as e:
        raise InputDataError(str(e))
    _validate_report_files(forward_file, reverse_file,
                           missing_message=ErrorMessages.MISSING_MONTHLY_FILES)

    with OperationContext(f"Loading reports for {period}"):
        rows = load_report_rows(forward_file, reverse_file)

    payload = transform_to_gstr1(rows, gstin, period)
    if payload.is_empty:
        raise InputDataError(ErrorMessages.NO_DATA_PROCESSED)

    month_name = MONTHS[int(period[:2]) - 1]
    return payload, f"{month_name}-{year}"


def build_quarterly_return(gstin, year, quarter, files_by_month):
    """
    Build a quarterly GSTR-1 payload from the forward/reverse reports of all
    three months of the quarter. The filing period is the quarter's last month.

    Args:
        files_by_month: {"April": (forward_file, reverse_file), ...}

    Returns:
        (FilingPayload, label) where label is "<quarter>-<year>"
    """
    year = _validate_seller(gstin, year)
    if quarter not in QUARTERS:
        raise InputDataError(f"Please select a quarter ({', '.join(QUARTERS)})")

    files_by_month = files_by_month or {}
    for month in QUARTERS[quarter]:
        forward_file, reverse_file = files_by_month.get(month) or (None, None)
        _validate_report_files(forward_file, reverse_file,
                               missing_message=ErrorMessages.MISSING_QUARTERLY_FILES)

    rows = []
    for month in QUARTERS[quarter]:
        forward_file, reverse_file = files_by_month[month]
        with OperationContext(f"Loading {month} reports"):
            rows.extend(load_report_rows(forward_file, reverse_file))

    period = quarter_filing_period(quarter, year)
    return transform_to_gstr1(rows, gstin, period), f"{quarter}-{year}"


def generate_gstr1_json(gstin, year, return_type, period_choice, files, output_folder=None):
    """
    Build a monthly or quarterly return and write it as JSON.

    Args:
        return_type: ReturnType.MONTHLY or ReturnType.QUARTERLY
        period_choice: Month name for monthly returns, "Q1".."Q4" for quarterly
        files: (forward_file, reverse_file) for monthly returns,
               {month: (forward_file, reverse_file)} for quarterly returns

    Returns:
        (status message, output path)
    """
    if return_type == ReturnType.MONTHLY:
        forward_file, reverse_file = files or (None, None)
        payload, label = build_monthly_return(gstin, year, period_choice, forward_file, reverse_file)
    elif return_type == ReturnType.QUARTERLY:
        payload, label = build_quarterly_return(gstin, year, period_choice, files)
    else:
        raise InputDataError(f"Unknown return type: {return_type}")

    output_path = write_gstr1_json(payload, label, output_folder)
    message = (f"✅ GSTR-1 JSON written to {output_path} with {len(payload.b2cs)} B2CS entries "
               f"and {len(payload.operator_summaries)} e-commerce operator entries.")
    log_operation("GSTR-1 JSON", payload.period, output_path=output_path)
    return message, output_path
