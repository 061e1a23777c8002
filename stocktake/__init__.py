"""Core module for stock-taking: catalog, input classification, logs, reconciliation."""

from .config import SessionConfig, load_locations
from .errors import (
    StocktakeError,
    IngestError,
    LogWriteError,
    EntryCommittedError,
    ValidationWarning,
    IngestIssue,
    ParseSkip,
)
from .models import (
    ProductRecord,
    LogEntry,
    AggregateRecord,
    ReconciliationRow,
    Found,
    NotFound,
    Ambiguous,
    ParseFailed,
    LookupResult,
    normalize_barcode,
    normalize_input,
    parse_number,
)
from .csv_parser import (
    parse_line,
    format_line,
    quote_field,
    detect_separator,
    read_lines,
)
from .check_digit import (
    gtin_check_digit,
    isbn10_check_digit,
    is_valid_gtin,
)
from .catalog import Catalog
from .log_store import LogStore, log_filename
from .classifier import (
    InputClassifier,
    describe_input,
    is_barcode_token,
    is_numeric_token,
)
from .session import StocktakeSession, load_catalog
from .reconciler import (
    ReconciliationReport,
    ReconciliationOutput,
    parse_log_line,
    find_log_files,
    reconcile,
    run_reconciliation,
)
from .audit import AuditRow, audit_catalog, write_audit

__all__ = [
    # Config
    "SessionConfig",
    "load_locations",
    # Errors
    "StocktakeError",
    "IngestError",
    "LogWriteError",
    "EntryCommittedError",
    "ValidationWarning",
    "IngestIssue",
    "ParseSkip",
    # Models
    "ProductRecord",
    "LogEntry",
    "AggregateRecord",
    "ReconciliationRow",
    "Found",
    "NotFound",
    "Ambiguous",
    "ParseFailed",
    "LookupResult",
    "normalize_barcode",
    "normalize_input",
    "parse_number",
    # CSV
    "parse_line",
    "format_line",
    "quote_field",
    "detect_separator",
    "read_lines",
    # Check digits
    "gtin_check_digit",
    "isbn10_check_digit",
    "is_valid_gtin",
    # Catalog and session
    "Catalog",
    "LogStore",
    "log_filename",
    "InputClassifier",
    "describe_input",
    "is_barcode_token",
    "is_numeric_token",
    "StocktakeSession",
    "load_catalog",
    # Reconciliation
    "ReconciliationReport",
    "ReconciliationOutput",
    "parse_log_line",
    "find_log_files",
    "reconcile",
    "run_reconciliation",
    # Audit
    "AuditRow",
    "audit_catalog",
    "write_audit",
]
