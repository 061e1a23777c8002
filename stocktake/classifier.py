"""Operator input classification.

Every token typed or scanned by the operator is one of:
- a new barcode (8+ digits): commits the open entry and opens a new one
- a count (short number below 1900) for the open entry
- a publication year (1900-2099) for the open entry
- a comment (anything non-numeric) for the open entry
"""

import logging
import re
from typing import Optional

from .catalog import Catalog
from .check_digit import is_valid_gtin
from .config import MAX_YEAR, MIN_BARCODE_LENGTH, MIN_YEAR, ZERO_GLYPH
from .errors import ValidationWarning
from .log_store import LogStore
from .models import (
    Ambiguous,
    Found,
    LogEntry,
    ParseFailed,
    ProductRecord,
    normalize_input,
    parse_number,
)

logger = logging.getLogger(__name__)

NUMERIC_TOKEN_RE = re.compile(rf"^[-_{ZERO_GLYPH}0-9]+$")
YEAR_RE = re.compile(r"^(?:19|20)[0-9]{2}$")

# Input hints
HINT_COUNT = "Darabszám módosítás"
HINT_YEAR = "Kiadási évszám megadása"
HINT_COMMENT = "Megjegyzés hozzáadása"
HINT_UNKNOWN_PRODUCT = "Ismeretlen termék"
HINT_MULTIPLE_PRODUCTS = "Több termék azonos vonalkóddal: {count}"
HINT_INVALID_ISBN = " (ÉRVÉNYTELEN ISBN!)"
HINT_UNKNOWN = "?"


def is_numeric_token(text: str) -> bool:
    """Whether the token consists of digits, hyphens, underscores and the zero glyph."""
    return bool(NUMERIC_TOKEN_RE.match(text))


def is_barcode_token(text: str) -> bool:
    """Whether the token would open a new entry."""
    return is_numeric_token(text) and len(normalize_input(text)) >= MIN_BARCODE_LENGTH


class InputClassifier:
    """
    Turns raw operator tokens into log entries.

    The state lives in the log store: the head entry, when uncommitted, is
    the open entry. Commits lag one token behind, an entry is written only
    when the next barcode arrives or the store is closed.
    """

    def __init__(
        self,
        catalog: Catalog,
        store: LogStore,
        warnings: Optional[list] = None
    ):
        self.catalog = catalog
        self.store = store
        self.warnings = warnings if warnings is not None else []

    @property
    def open_entry(self) -> Optional[LogEntry]:
        return self.store.open_entry

    def classify(self, token: str, record: Optional[ProductRecord] = None) -> Optional[LogEntry]:
        """
        Process one token.

        Args:
            token: Raw input text
            record: Catalog record already chosen by the caller (e.g. from
                several candidates); used only when the token is a barcode

        Returns:
            The open entry after processing (unchanged when the token could
            not be applied), or None if nothing is open

        Raises:
            LogWriteError: If committing the previous entry fails
        """
        if not token:
            return None

        open_entry = self.open_entry

        if is_numeric_token(token):
            code = normalize_input(token)
            if is_barcode_token(token):
                return self._open_entry(code, record)
            if open_entry is None:
                return None
            return self._adjust(open_entry, code)

        if open_entry is not None:
            open_entry.set_comment(token)
        return open_entry

    def _open_entry(self, code: str, record: Optional[ProductRecord]) -> LogEntry:
        # New barcode: flush the previous one first
        self.store.commit()

        if record is None:
            record = self.resolve(code)

        entry = LogEntry(
            barcode=record.original_barcode if record else code,
            record=record,
        )
        self.store.push(entry)

        if record is None and not is_valid_gtin(code):
            self._warn(ValidationWarning(
                code="invalid_check_digit",
                message=f"{code} nem található az adatbázisban. (ÉRVÉNYTELEN ISBN)",
                barcode=code,
            ))
        if record is not None and record.stock_count == 0:
            self._warn(ValidationWarning(
                code="zero_stock",
                message=f"A nyilvántartás szerint ebből a termékből nincs készletünk: {record.original_barcode}",
                barcode=record.original_barcode,
            ))
        return entry

    def _adjust(self, entry: LogEntry, code: str) -> LogEntry:
        value = parse_number(code)
        if isinstance(value, ParseFailed):
            logger.debug("Ignoring unparsable number %r", value.text)
            return entry

        if value < MIN_YEAR:
            entry.set_count(value)
        elif value <= MAX_YEAR:
            entry.set_publication_year(str(value))
        return entry

    def resolve(self, code: str) -> Optional[ProductRecord]:
        """
        Catalog record for a barcode when it is unambiguous.

        Zero or several matches give None; choosing among several is up to
        the caller, who passes the choice back to classify().
        """
        result = self.catalog.lookup(code)
        if isinstance(result, Found):
            return result.record
        if isinstance(result, Ambiguous):
            logger.info("%d products share barcode %s", len(result.candidates), code)
        return None

    def _warn(self, warning: ValidationWarning):
        logger.warning(warning.message)
        self.warnings.append(warning)


def describe_input(text: str, catalog: Catalog) -> str:
    """
    Short hint about what a partially typed token would do.

    Args:
        text: Current content of the input field
        catalog: Catalog used to name the product

    Returns:
        Product name or an explanation; empty string for empty input
    """
    if not text:
        return ""
    if not is_numeric_token(text):
        return HINT_COMMENT

    code = normalize_input(text)
    if len(code) >= MIN_BARCODE_LENGTH:
        result = catalog.lookup(code)
        if isinstance(result, Found):
            hint = result.record.name
        elif isinstance(result, Ambiguous):
            hint = HINT_MULTIPLE_PRODUCTS.format(count=len(result.candidates))
        else:
            hint = HINT_UNKNOWN_PRODUCT
        if not is_valid_gtin(code):
            hint += HINT_INVALID_ISBN
        return hint

    if len(code) < 4:
        return HINT_COUNT
    if YEAR_RE.match(code):
        return HINT_YEAR
    return HINT_UNKNOWN
