"""
Application-wide constants and enumerations.
"""

import math
import re
import sys

# =============================================================================
# GSTR-1 JSON FORMAT
# =============================================================================

GSTR1_VERSION = "GST3.1.6"
GSTR1_HASH_PLACEHOLDER = "hash"
B2CS_ENTRY_TYPE = "OE"  # Other than E-commerce (offline tool's "typ")

# E-commerce operator (Meesho) ETIN suffix; the state prefix comes from the seller GSTIN
ECO_ETIN_SUFFIX = "AACCF6368D1CV"
ECO_FLAG = "N"

UNKNOWN_STATE_CODE = "00"
UNKNOWN_CATEGORY = "Unknown"

GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$")


# =============================================================================
# CONFIGURATION
# =============================================================================

class Config:
    """File locations and output settings."""
    CONFIG_FILE = "config.json"
    LOG_FILE = "gstr1_json.log"
    OUTPUT_PREFIX = "gstr1-b2cs"
    JSON_INDENT = 2
    EXCEL_EXTENSIONS = ('.xlsx', '.xls')
    YEAR_MIN = 2000
    YEAR_MAX = 2100


class UIConstants:
    """Status icons used in dialogs and the log pane."""
    ICON_SUCCESS = "✅"
    ICON_ERROR = "❌"
    ICON_WARNING = "⚠️"
    ICON_LOADING = "⏳"


class ErrorMessages:
    FILE_NOT_FOUND = "File not found. Please check the selected path."
    PERMISSION_DENIED = "Permission denied. Close the file if it is open in Excel and retry."
    WRONG_EXTENSION = "Please upload only Excel files (.xlsx or .xls)"
    MISSING_MONTHLY_FILES = "Please upload both forward and reverse Excel files"
    MISSING_QUARTERLY_FILES = "Please upload all required Excel files for the selected quarter"
    NO_DATA_PROCESSED = "No data was processed. Please check the Excel files format."
    INVALID_GSTIN = "Please enter a valid 15-character GST number"


# =============================================================================
# TRANSACTION TYPES
# =============================================================================

class SupplyType:
    """Supply type of a B2CS entry."""
    INTER = 'INTER'  # Different states - integrated tax
    INTRA = 'INTRA'  # Same state - central + state tax


class ReturnType:
    MONTHLY = 'monthly'
    QUARTERLY = 'quarterly'


# =============================================================================
# PERIODS
# =============================================================================

MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

QUARTERS = {
    'Q1': ['April', 'May', 'June'],
    'Q2': ['July', 'August', 'September'],
    'Q3': ['October', 'November', 'December'],
    'Q4': ['January', 'February', 'March'],
}


# =============================================================================
# STATE CODE MAPPING (Complete List)
# =============================================================================

STATE_CODE_MAPPING = {
    # Official GST State/UT Codes as written in Meesho settlement reports
    "Jammu and Kashmir": "01",
    "Himachal Pradesh": "02",
    "Punjab": "03",
    "Chandigarh": "04",
    "Uttarakhand": "05",
    "Haryana": "06",
    "Delhi": "07",
    "Rajasthan": "08",
    "Uttar Pradesh": "09",
    "Bihar": "10",
    "Sikkim": "11",
    "Arunachal Pradesh": "12",
    "Nagaland": "13",
    "Manipur": "14",
    "Mizoram": "15",
    "Tripura": "16",
    "Meghalaya": "17",
    "Assam": "18",
    "West Bengal": "19",
    "Jharkhand": "20",
    "Odisha": "21",
    "Chhattisgarh": "22",
    "Madhya Pradesh": "23",
    "Gujarat": "24",
    "Daman and Diu": "25",
    "Dadra and Nagar Haveli": "26",
    "Maharashtra": "27",
    "Karnataka": "29",
    "Goa": "30",
    "Lakshadweep": "31",
    "Kerala": "32",
    "Tamil Nadu": "33",
    "Puducherry": "34",
    "Andaman and Nicobar Islands": "35",
    "Telangana": "36",
    "Andhra Pradesh": "37",
    "Ladakh": "38",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def safe_float(value):
    try:
        return float(value)
    except (ValueError, TypeError):
        return 0.0


def round2(value: float) -> float:
    """
    Round to 2 decimal places, halves rounding up.

    The machine epsilon is added first so values such as 1.005, stored as
    1.00499999..., still round to 1.01.

    Example:
        >>> round2(1.005)
        1.01
        >>> round2(2.344)
        2.34
    """
    return math.floor((value + sys.float_info.epsilon) * 100 + 0.5) / 100


def get_state_code(state_name) -> str:
    """
    Get the 2-digit GST state code for a state name.

    Args:
        state_name: Full state/UT name exactly as in the report (e.g. "Delhi")

    Returns:
        Code like "07", or "00" if the name is not recognised
    """
    return STATE_CODE_MAPPING.get(state_name, UNKNOWN_STATE_CODE) if state_name else UNKNOWN_STATE_CODE


def format_rate_key(rate) -> str:
    """Render a GST rate as a grouping label: 5.0 -> "5", 12.5 -> "12.5", None -> "0"."""
    if not rate:
        return "0"
    rate = float(rate)
    if rate.is_integer():
        return str(int(rate))
    return str(rate)


def month_number(month) -> int:
    """
    Resolve a month name ("April") or number (4, "04") to 1-12.

    Raises:
        ValueError: If the month cannot be resolved
    """
    if isinstance(month, str) and not month.strip().isdigit():
        name = month.strip().capitalize()
        if name not in MONTHS:
            raise ValueError(f"Unknown month: {month}")
        return MONTHS.index(name) + 1
    number = int(month)
    if not 1 <= number <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return number


def format_filing_period(month, year) -> str:
    """
    Build the GSTR-1 filing period (MMYYYY).

    Example:
        >>> format_filing_period("April", 2024)
        '042024'
    """
    return f"{month_number(month):02d}{int(year):04d}"


def quarter_filing_period(quarter: str, year) -> str:
    """Filing period of a quarterly return: the last month of the quarter."""
    if quarter not in QUARTERS:
        raise ValueError(f"Unknown quarter: {quarter}")
    return format_filing_period(QUARTERS[quarter][-1], year)


def is_valid_gstin(gstin) -> bool:
    return bool(gstin) and GSTIN_PATTERN.match(gstin) is not None


def build_etin(gstin: str) -> str:
    """E-commerce operator identifier for the seller's state."""
    return (gstin or "")[:2] + ECO_ETIN_SUFFIX
