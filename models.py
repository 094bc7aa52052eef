"""
models.py - Data records flowing through the GSTR-1 pipeline.

TransactionRow is one line of a Meesho forward/reverse settlement report.
B2CS entries and the e-commerce operator summary are accumulators rebuilt on
every transformation; FilingPayload is the JSON document handed to the portal.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from constants import (
    B2CS_ENTRY_TYPE, ECO_FLAG, GSTR1_HASH_PLACEHOLDER, GSTR1_VERSION,
    SupplyType, round2, safe_float,
)


def _rate_value(rate):
    # 5.0 -> 5 so the JSON reads "rt": 5 like the offline tool
    rate = float(rate)
    return int(rate) if rate.is_integer() else rate


def _is_missing(value):
    """None, NaN and empty cells count as missing; other strings are kept."""
    if value is None or (isinstance(value, str) and value == ""):
        return True
    return not isinstance(value, str) and bool(pd.isna(value))


@dataclass(frozen=True)
class TransactionRow:
    """One settlement record (forward shipment or return)."""
    order_status: Optional[str] = None
    month: Optional[str] = None
    financial_year: Optional[str] = None
    supplier_state: Optional[str] = None
    customer_state: Optional[str] = None
    gst_rate: Optional[float] = None
    taxable_amount: Optional[float] = None
    gst_amount: Optional[float] = None
    sub_order_num: Optional[str] = None
    hsn_code: Optional[str] = None

    def __post_init__(self):
        # pandas marks empty cells with NaN, which is truthy; store None instead
        for name in self.__dataclass_fields__:
            if _is_missing(getattr(self, name)):
                object.__setattr__(self, name, None)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TransactionRow":
        """
        Build a row from a report record keyed by Meesho column names.

        Args:
            record: Mapping such as a DataFrame row dict

        Returns:
            TransactionRow with missing cells as None
        """
        def text(column):
            value = record.get(column)
            if _is_missing(value):
                return None
            if isinstance(value, float) and value.is_integer():
                value = int(value)  # 2024.0 read from Excel -> "2024"
            return str(value).strip() or str(value)

        def number(column):
            value = record.get(column)
            return None if _is_missing(value) else safe_float(value)

        return cls(
            order_status=text("order_status"),
            month=text("month"),
            financial_year=text("financial_year"),
            supplier_state=text("state"),
            customer_state=text("end_customer_state"),
            gst_rate=number("gst_rate"),
            taxable_amount=number("meesho_price"),
            gst_amount=number("gst_amount"),
            sub_order_num=text("sub_order_num"),
            hsn_code=text("hsn_code"),
        )


@dataclass
class B2CSEntry:
    """Base for one (place of supply, rate, supply type) group in table 7."""
    rate: float
    place_of_supply: str
    taxable_value: float = 0.0
    cess: float = 0.0
    supply_type = None

    def add(self, taxable_amount: float, gst_amount: float) -> None:
        self.taxable_value = round2(self.taxable_value + taxable_amount)
        self._add_tax(gst_amount)

    def _add_tax(self, gst_amount: float) -> None:
        raise NotImplementedError

    def _base_dict(self) -> Dict[str, Any]:
        return {
            "sply_ty": self.supply_type,
            "rt": _rate_value(self.rate),
            "typ": B2CS_ENTRY_TYPE,
            "pos": self.place_of_supply,
            "txval": self.taxable_value,
            "csamt": self.cess,
        }


@dataclass
class InterStateEntry(B2CSEntry):
    """Inter-state supply: the whole tax is integrated tax."""
    integrated_tax: float = 0.0
    supply_type = SupplyType.INTER

    def _add_tax(self, gst_amount: float) -> None:
        self.integrated_tax = round2(self.integrated_tax + gst_amount)

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data["iamt"] = self.integrated_tax
        return data


@dataclass
class IntraStateEntry(B2CSEntry):
    """Intra-state supply: tax split equally into central and state tax."""
    central_tax: float = 0.0
    state_tax: float = 0.0
    supply_type = SupplyType.INTRA

    def _add_tax(self, gst_amount: float) -> None:
        half = round2(gst_amount / 2)
        self.central_tax = round2(self.central_tax + half)
        self.state_tax = round2(self.state_tax + half)

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data["camt"] = self.central_tax
        data["samt"] = self.state_tax
        return data


def new_b2cs_entry(supply_type: str, rate: float, place_of_supply: str) -> B2CSEntry:
    """Create the entry variant matching the supply type."""
    if supply_type == SupplyType.INTRA:
        return IntraStateEntry(rate=rate, place_of_supply=place_of_supply)
    return InterStateEntry(rate=rate, place_of_supply=place_of_supply)


@dataclass
class OperatorTaxSummary:
    """Supplies made through the e-commerce operator (supeco.clttx)."""
    etin: str
    total_supply_value: float = 0.0
    integrated_tax: float = 0.0
    central_tax: float = 0.0
    state_tax: float = 0.0
    cess: float = 0.0
    flag: str = ECO_FLAG

    def add(self, supply_type: str, taxable_amount: float, gst_amount: float) -> None:
        self.total_supply_value = round2(self.total_supply_value + taxable_amount)
        if supply_type == SupplyType.INTRA:
            half = round2(gst_amount / 2)
            self.central_tax = round2(self.central_tax + half)
            self.state_tax = round2(self.state_tax + half)
        else:
            self.integrated_tax = round2(self.integrated_tax + gst_amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "etin": self.etin,
            "suppval": self.total_supply_value,
            "igst": self.integrated_tax,
            "cgst": self.central_tax,
            "sgst": self.state_tax,
            "cess": self.cess,
            "flag": self.flag,
        }


@dataclass
class FilingPayload:
    """GSTR-1 JSON document (B2CS + e-commerce operator sections)."""
    gstin: str
    period: str
    version: str = GSTR1_VERSION
    hash: str = GSTR1_HASH_PLACEHOLDER
    b2cs: List[B2CSEntry] = field(default_factory=list)
    operator_summaries: List[OperatorTaxSummary] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.b2cs and not self.operator_summaries

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gstin": self.gstin,
            "fp": self.period,
            "version": self.version,
            "hash": self.hash,
            "b2cs": [entry.to_dict() for entry in self.b2cs],
            "supeco": {
                "clttx": [summary.to_dict() for summary in self.operator_summaries],
            },
        }
