"""Catalog audit: barcode quality of every catalog record.

For each record the audit shows the digits-only barcode, whether the
original barcode contains anything but digits ("suspicious") and whether
its check digit is valid.
"""

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from .catalog import Catalog
from .check_digit import digits_only, is_valid_gtin
from .config import AUDIT_COLUMNS, AUDIT_INVALID, AUDIT_SUSPICIOUS, AUDIT_VALID, LOG_SEPARATOR
from .csv_parser import format_line
from .models import ProductRecord


@dataclass
class AuditRow:
    """Audit result for one catalog record."""
    record: ProductRecord

    @property
    def digits(self) -> str:
        return digits_only(self.record.original_barcode)

    @property
    def is_suspicious(self) -> bool:
        """Barcode contains non-digit characters."""
        return not self.record.original_barcode.isdigit()

    @property
    def is_valid(self) -> bool:
        return is_valid_gtin(self.record.original_barcode)

    def to_list(self) -> list:
        """Values in audit column order."""
        stock = self.record.stock_count
        return [
            self.record.original_barcode,
            self.digits,
            AUDIT_SUSPICIOUS if self.is_suspicious else "",
            AUDIT_VALID if self.is_valid else AUDIT_INVALID,
            self.record.name,
            self.record.publisher,
            "" if stock is None else stock,
            self.record.product_id,
        ]


def audit_catalog(catalog: Catalog) -> list[AuditRow]:
    """Audit rows for every record, collisions included."""
    return [AuditRow(record) for record in catalog.records()]


def audit_dataframe(rows: list[AuditRow]) -> pd.DataFrame:
    return pd.DataFrame([row.to_list() for row in rows], columns=AUDIT_COLUMNS)


def write_audit(rows: list[AuditRow], path) -> Path:
    """
    Write the audit file.

    ".xlsx" paths produce an Excel workbook, anything else a tab-delimited,
    quoted UTF-8 text file with CRLF line endings.

    Args:
        rows: Audit rows
        path: Output path

    Returns:
        The written path
    """
    path = Path(path)
    if path.suffix.lower() == ".xlsx":
        audit_dataframe(rows).to_excel(path, index=False)
        return path

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(format_line(AUDIT_COLUMNS, separator=LOG_SEPARATOR) + "\r\n")
        for row in rows:
            f.write(format_line(row.to_list(), separator=LOG_SEPARATOR) + "\r\n")
    return path
