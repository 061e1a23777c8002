#!/usr/bin/env python3
"""
Script 3: Check the barcodes of the product catalog

For each product:
- Digits-only barcode
- Marks barcodes with non-digit characters as suspicious (GYANÚS)
- Checks the GTIN/ISBN check digit (OK / ÉRVÉNYTELEN)
Output is tab-separated text, or Excel if the output name ends with .xlsx
"""

import logging
import sys

from config import LOG_LEVEL
from stocktake import Catalog, IngestError, audit_catalog, write_audit


def validate_catalog(input_file: str, output_file: str):
    """
    Main validation function

    Args:
        input_file: Path to the catalog CSV
        output_file: Path to the audit file (.csv/.txt or .xlsx)
    """
    print(f"Loading {input_file}...")
    warnings: list = []
    try:
        catalog = Catalog.build(input_file, warnings)
    except IngestError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    rows = audit_catalog(catalog)
    write_audit(rows, output_file)

    # Summary
    print(f"\n=== Summary ===")
    print(f"Products: {len(rows)}")
    print(f"Suspicious barcodes: {sum(1 for r in rows if r.is_suspicious)}")
    print(f"Invalid check digits: {sum(1 for r in rows if not r.is_valid)}")
    print(f"Warnings while loading: {len(warnings)}")
    print(f"Created: {output_file}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Bemeneti és kimeneti fájlnév paraméter megadása kötelező")
        print("Usage: python validate_catalog.py <database.csv> <output.csv|output.xlsx>")
        sys.exit(1)

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    validate_catalog(sys.argv[1], sys.argv[2])
