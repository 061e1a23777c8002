#!/usr/bin/env python3
"""
Script 2: Merge session logs and compare counts with the recorded stock

- Concatenates every log file of the log directory into one detail file
- Sums the counted quantity per barcode
- Writes a report with recorded stock, counted quantity and OK/ELTÉR status
"""

import logging
import sys

from config import DATABASE_FILE, LOG_DIR, LOG_LEVEL, REPORT_DIR, REPORT_EXCEL
from stocktake import load_catalog, run_reconciliation


def create_reports(database_file: str, log_dir: str = LOG_DIR, report_dir: str = REPORT_DIR):
    """
    Main reconciliation function

    Args:
        database_file: Path to the catalog CSV
        log_dir: Directory with the session logs
        report_dir: Directory for the merged file and the report
    """
    print(f"Loading {database_file}...")
    catalog, error = load_catalog(database_file)
    if error:
        print(f"Warning: {error}")
        print("Continuing without catalog, stock counts will be 0")
    else:
        print(f"Products: {catalog.record_count}")

    output = run_reconciliation(log_dir, report_dir, catalog, excel=REPORT_EXCEL)
    if output is None:
        print(f"No log directory found at {log_dir}, nothing to do")
        return None

    report = output.report
    print(f"\nNaplófájlok összefűzve: {output.merged_path}")
    print(f"Kimutatás elkészült: {output.report_path}")
    if output.excel_path:
        print(f"  Excel: {output.excel_path}")

    # Summary
    print(f"\n=== Summary ===")
    print(f"Barcodes counted: {len(report)}")
    print(f"Discrepancies: {len(report.discrepancies)}")
    if report.issues:
        print(f"Skipped lines: {len(report.issues)}")
        for issue in report.issues:
            print(f"  {issue.message}")

    return output


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    database_file = sys.argv[1] if len(sys.argv) > 1 else DATABASE_FILE
    log_dir = sys.argv[2] if len(sys.argv) > 2 else LOG_DIR
    report_dir = sys.argv[3] if len(sys.argv) > 3 else REPORT_DIR

    create_reports(database_file, log_dir, report_dir)
