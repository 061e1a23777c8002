"""Merge session logs and reconcile counted quantities with recorded stock."""

import csv
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.dataframe import dataframe_to_rows

from .catalog import Catalog
from .csv_parser import parse_line, read_lines
from .config import (
    LOG_DATE_FORMAT,
    LOG_ROW_SLOTS,
    LOG_SEPARATOR,
    MERGED_FILENAME_TEMPLATE,
    REPORT_COLUMNS,
    REPORT_FILENAME_TEMPLATE,
    STATUS_DISCREPANCY,
)
from .errors import ParseSkip
from .models import AggregateRecord, ParseFailed, ReconciliationRow, parse_number

logger = logging.getLogger(__name__)

# Log row slots
BARCODE_SLOT = 1
COUNT_SLOT = 2
COMMENT_SLOT = 3
YEAR_SLOT = 4

REPORT_SHEET_TITLE = "Eredmény"
DISCREPANCY_FILL = "FFC7CE"


def parse_log_line(line: str, slots: int = LOG_ROW_SLOTS) -> list[str]:
    """
    Split one session log row into a fixed number of slots.

    Uses the quoting of the log writer: values are quoted and a doubled
    quote is a literal quote; unquoted values are read as they are.
    Missing slots are filled with "" and extra fields are dropped, so a
    damaged row never shifts or aborts the merge.

    Args:
        line: Raw log row
        slots: Number of slots to return

    Returns:
        List of exactly `slots` strings
    """
    values = parse_line(line.rstrip("\r\n"), LOG_SEPARATOR)[:slots]
    return values + [""] * (slots - len(values))


@dataclass
class ReconciliationReport:
    """Aggregated counts and the per-barcode comparison."""
    aggregates: dict[str, AggregateRecord] = field(default_factory=dict)
    issues: list[ParseSkip] = field(default_factory=list)

    @property
    def rows(self) -> list[ReconciliationRow]:
        """Report rows in first-seen barcode order."""
        return [ReconciliationRow.from_aggregate(item) for item in self.aggregates.values()]

    @property
    def discrepancies(self) -> list[ReconciliationRow]:
        return [row for row in self.rows if row.is_discrepancy]

    def __len__(self) -> int:
        return len(self.aggregates)

    def to_dataframe(self) -> pd.DataFrame:
        """Report as a DataFrame with the output column headers."""
        return pd.DataFrame([row.to_list() for row in self.rows], columns=REPORT_COLUMNS)

    def write_csv(self, path) -> Path:
        """Write the report as a tab-delimited, fully quoted UTF-8 file."""
        path = Path(path)
        self.to_dataframe().to_csv(
            path,
            sep=LOG_SEPARATOR,
            index=False,
            quoting=csv.QUOTE_ALL,
            encoding="utf-8",
        )
        return path

    def write_excel(self, path) -> Path:
        """Write the report as an Excel workbook, discrepancy rows highlighted."""
        path = Path(path)
        wb = Workbook()
        ws = wb.active
        ws.title = REPORT_SHEET_TITLE

        for row in dataframe_to_rows(self.to_dataframe(), index=False, header=True):
            ws.append(row)

        for col in range(1, len(REPORT_COLUMNS) + 1):
            ws.cell(row=1, column=col).font = Font(bold=True)

        # Row 1 is the header
        status_col = len(REPORT_COLUMNS)
        for excel_row in range(2, ws.max_row + 1):
            if ws.cell(row=excel_row, column=status_col).value == STATUS_DISCREPANCY:
                for col in range(1, status_col + 1):
                    ws.cell(row=excel_row, column=col).fill = PatternFill("solid", fgColor=DISCREPANCY_FILL)

        wb.save(path)
        return path


def find_log_files(log_dir) -> list[Path]:
    """
    Session log files of a directory in lexicographic order.

    A missing directory yields an empty list.
    """
    log_dir = Path(log_dir)
    if not log_dir.is_dir():
        return []
    return sorted(
        (p for p in log_dir.iterdir() if p.is_file() and p.suffix.lower() == ".csv"),
        key=lambda p: p.name,
    )


def _aggregate_line(
    report: ReconciliationReport,
    values: list[str],
    catalog: Catalog,
    source: str,
    line_number: int
):
    barcode = values[BARCODE_SLOT]
    count = parse_number(values[COUNT_SLOT])
    if isinstance(count, ParseFailed):
        issue = ParseSkip(
            code="invalid_count",
            message=f"{source} {line_number}. sor: érvénytelen darabszám {values[COUNT_SLOT]!r}",
            source=source,
            line=line_number,
        )
        logger.warning(issue.message)
        report.issues.append(issue)
        return

    item = report.aggregates.get(barcode)
    if item is not None:
        item.count += count
        return

    report.aggregates[barcode] = AggregateRecord(
        barcode=barcode,
        count=count,
        comment=values[COMMENT_SLOT],
        publication_year=values[YEAR_SLOT],
        record=catalog.find_exact(barcode),
    )


def reconcile(log_paths: Iterable, catalog: Catalog) -> tuple[str, ReconciliationReport]:
    """
    Merge session logs and sum counted quantities per barcode.

    Files are read in lexicographic order. Counts of the same raw barcode
    string are summed; the first comment and publication year seen win.
    Catalog records are matched by their original (not normalized) barcode.

    Args:
        log_paths: Session log files
        catalog: Product catalog

    Returns:
        Tuple of (merged_text, report)
        merged_text holds every line of every file, newline-terminated.
    """
    report = ReconciliationReport()
    merged: list[str] = []

    for path in sorted((Path(p) for p in log_paths), key=str):
        try:
            # Invalid bytes are decoded as U+FFFD
            lines = read_lines(path, errors="replace")
        except OSError as e:
            issue = ParseSkip(
                code="unreadable_file",
                message=f"{path.name} nem olvasható: {e}",
                source=path.name,
            )
            logger.warning(issue.message)
            report.issues.append(issue)
            continue
        logger.debug("Merging %s (%d lines)", path, len(lines))

        for line_number, line in enumerate(lines, start=1):
            merged.append(line + "\n")
            if not line.strip():
                continue
            _aggregate_line(report, parse_log_line(line), catalog, path.name, line_number)

    logger.info(
        "Reconciled %d barcodes, %d discrepancies, %d skipped lines",
        len(report), len(report.discrepancies), len(report.issues),
    )
    return "".join(merged), report


@dataclass
class ReconciliationOutput:
    """Files written by a reconciliation run."""
    merged_path: Path
    report_path: Path
    report: ReconciliationReport
    excel_path: Optional[Path] = None


def run_reconciliation(
    log_dir,
    report_dir,
    catalog: Catalog,
    day: Optional[date] = None,
    excel: bool = False
) -> Optional[ReconciliationOutput]:
    """
    Reconcile every log of a directory and write the output files.

    Writes "<day>_leltár_részletes_adatok.csv" (all log lines merged) and
    "<day>_leltár_eredmény.csv" (the report) into report_dir.

    Args:
        log_dir: Directory with the session logs
        report_dir: Output directory; created if missing
        catalog: Product catalog
        day: Date used in the file names (default: today)
        excel: Also write the report as .xlsx

    Returns:
        ReconciliationOutput, or None if log_dir does not exist
    """
    log_dir = Path(log_dir)
    if not log_dir.is_dir():
        logger.info("No log directory at %s, nothing to reconcile", log_dir)
        return None

    day_str = (day or date.today()).strftime(LOG_DATE_FORMAT)
    report_dir = Path(report_dir)
    report_dir.mkdir(parents=True, exist_ok=True)

    merged_text, report = reconcile(find_log_files(log_dir), catalog)

    merged_path = report_dir / MERGED_FILENAME_TEMPLATE.format(day=day_str)
    merged_path.write_text(merged_text, encoding="utf-8")

    report_path = report.write_csv(report_dir / REPORT_FILENAME_TEMPLATE.format(day=day_str))

    excel_path = None
    if excel:
        excel_path = report.write_excel(report_path.with_suffix(".xlsx"))

    return ReconciliationOutput(
        merged_path=merged_path,
        report_path=report_path,
        report=report,
        excel_path=excel_path,
    )
