"""Data models for stock-taking."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union
import re

from .config import DISPLAY_TIME_FORMAT, STATUS_DISCREPANCY, STATUS_OK, ZERO_GLYPH
from .errors import EntryCommittedError

# Publisher/volume suffix appended to a base code, e.g. "9789631234566-01"
_SUFFIX_RE = re.compile(r"-(?:[0-9]{2}|[0-9]{5})$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_INTEGER_RE = re.compile(r"-?[0-9]+")


def normalize_barcode(barcode: str) -> str:
    """
    Reduce a catalog barcode to its digits-only lookup key.

    A trailing "-NN" or "-NNNNN" suffix is dropped first, then every
    remaining non-digit character is removed.

    Example: "9789631234566-01" -> "9789631234566"
    Example: "978-963-1234-566" -> "9789631234566"
    """
    if not barcode:
        return ""
    return _NON_DIGIT_RE.sub("", _SUFFIX_RE.sub("", barcode))


def normalize_input(text: str) -> str:
    """
    Clean an operator-typed numeric token.

    Replaces the alternate zero glyph with "0" and drops hyphens.
    Underscores are kept, so "12_3" never parses as a number.
    """
    return text.replace(ZERO_GLYPH, "0").replace("-", "")


@dataclass(frozen=True)
class ProductRecord:
    """One product row of the catalog. Immutable once created."""
    name: str
    publisher: str
    stock_count: Optional[int]   # None means "unknown", 0 means "known empty"
    product_id: str
    original_barcode: str
    normalized_barcode: str = field(init=False)

    def __post_init__(self):
        # Computed exactly once; the dataclass is frozen afterwards
        object.__setattr__(self, "normalized_barcode", normalize_barcode(self.original_barcode))


@dataclass(frozen=True)
class Found:
    """Exactly one catalog record matches the code."""
    record: ProductRecord


@dataclass(frozen=True)
class NotFound:
    """No catalog record matches the code."""
    code: str


@dataclass(frozen=True)
class Ambiguous:
    """Several catalog records share the code; a collaborator must choose."""
    code: str
    candidates: tuple[ProductRecord, ...]


LookupResult = Union[Found, NotFound, Ambiguous]


@dataclass(frozen=True)
class ParseFailed:
    """Numeric-looking input that is not a number (e.g. "1_0")."""
    text: str


def parse_number(text: str) -> Union[int, ParseFailed]:
    """
    Parse an integer written as ASCII digits with an optional leading "-".

    Stricter than int(), which also takes "1_0", "+3" and surrounding
    whitespace.
    """
    if not _INTEGER_RE.fullmatch(text):
        return ParseFailed(text)
    return int(text)


@dataclass
class LogEntry:
    """A single scanned item of a stock-taking session.

    Mutable while it is the open entry, frozen once committed.
    """
    barcode: str
    record: Optional[ProductRecord] = None
    count: int = 1
    comment: str = ""
    publication_year: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    committed: bool = False

    def _ensure_open(self):
        if self.committed:
            raise EntryCommittedError(f"A(z) {self.barcode} bejegyzés már naplózva van")

    def set_count(self, count: int):
        self._ensure_open()
        self.count = count

    def set_publication_year(self, year: str):
        self._ensure_open()
        self.publication_year = year

    def set_comment(self, comment: str):
        self._ensure_open()
        self.comment = comment

    def mark_committed(self):
        self.committed = True

    @property
    def time(self) -> str:
        """Time of day the entry was created, for display."""
        return self.timestamp.strftime(DISPLAY_TIME_FORMAT)

    @property
    def in_catalog(self) -> bool:
        return self.record is not None

    @property
    def name(self) -> str:
        return self.record.name if self.record else ""

    @property
    def publisher(self) -> str:
        return self.record.publisher if self.record else ""

    @property
    def stock_count(self) -> Optional[int]:
        return self.record.stock_count if self.record else None

    @property
    def product_id(self) -> str:
        return self.record.product_id if self.record else ""

    @property
    def normalized_barcode(self) -> str:
        return self.record.normalized_barcode if self.record else ""


@dataclass
class AggregateRecord:
    """Summed counts for one raw barcode across all session logs."""
    barcode: str
    count: int
    comment: str = ""
    publication_year: str = ""
    record: Optional[ProductRecord] = None

    @property
    def recorded_stock(self) -> int:
        """Stock count from the catalog, 0 when unknown or unmatched."""
        if self.record is None or self.record.stock_count is None:
            return 0
        return self.record.stock_count


@dataclass
class ReconciliationRow:
    """One row of the discrepancy report."""
    product_id: str
    barcode: str
    normalized_barcode: str
    name: str
    publisher: str
    recorded_stock: int
    counted_quantity: int

    @property
    def status(self) -> str:
        if self.recorded_stock == self.counted_quantity:
            return STATUS_OK
        return STATUS_DISCREPANCY

    @property
    def is_discrepancy(self) -> bool:
        return self.status == STATUS_DISCREPANCY

    @classmethod
    def from_aggregate(cls, item: AggregateRecord) -> "ReconciliationRow":
        record = item.record
        return cls(
            product_id=record.product_id if record else "",
            barcode=item.barcode,
            normalized_barcode=record.normalized_barcode if record else "",
            name=record.name if record else "",
            publisher=record.publisher if record else "",
            recorded_stock=item.recorded_stock,
            counted_quantity=item.count,
        )

    def to_list(self) -> list:
        """Values in report column order."""
        return [
            self.product_id,
            self.barcode,
            self.normalized_barcode,
            self.name,
            self.publisher,
            self.recorded_stock,
            self.counted_quantity,
            self.status,
        ]
