"""Product catalog built from a CSV export.

The catalog file may be tab, semicolon or comma separated, with or without
quoted values. Each line holds, in this order:
    barcode, name, publisher, stock count, product id
Stock count and product id are optional.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .config import DEFAULT_SEPARATOR, SEPARATOR_CANDIDATES
from .csv_parser import detect_separator, parse_line, read_lines
from .errors import IngestError, IngestIssue, ValidationWarning
from .models import (
    Ambiguous,
    Found,
    LookupResult,
    NotFound,
    ProductRecord,
    normalize_barcode,
    normalize_input,
)

logger = logging.getLogger(__name__)

MIN_FIELDS = 3


def parse_stock_count(value: str) -> Optional[int]:
    """Parse a stock count cell. Returns None (unknown) when not an integer."""
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None


def record_from_fields(fields: list[str]) -> Optional[ProductRecord]:
    """
    Build a ProductRecord from the fields of one catalog line.

    Args:
        fields: Parsed CSV fields

    Returns:
        ProductRecord, or None if the line has fewer than 3 fields
    """
    if len(fields) < MIN_FIELDS:
        return None

    barcode, name, publisher = fields[0], fields[1], fields[2]
    stock = fields[3] if len(fields) >= 4 else ""
    product_id = fields[4] if len(fields) >= 5 else ""

    return ProductRecord(
        name=name,
        publisher=publisher,
        stock_count=parse_stock_count(stock),
        product_id=product_id,
        original_barcode=barcode,
    )


class Catalog:
    """
    Product records indexed by normalized barcode.

    Several physical items can share a normalized code, so every code maps
    to a list of records in file order. Codes without records are never
    present. Built once, read-only afterwards.
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self._items: dict[str, list[ProductRecord]] = {}

    @classmethod
    def empty(cls) -> "Catalog":
        """Catalog without products (degraded mode: nothing is recognized)."""
        return cls()

    @classmethod
    def build(
        cls,
        path,
        warnings: Optional[list] = None
    ) -> "Catalog":
        """
        Read a catalog CSV file.

        The separator is detected on the first line only and used for the
        whole file. Lines with fewer than 3 fields are skipped.

        Args:
            path: Path to the UTF-8 catalog file
            warnings: Optional collector; receives IngestIssue for skipped
                lines and ValidationWarning for duplicate barcodes

        Returns:
            Catalog with at least one record

        Raises:
            IngestError: If the file cannot be read or holds no valid entry
        """
        path = Path(path)
        catalog = cls(source=str(path))

        try:
            lines = read_lines(path, encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise IngestError(
                f'"{path}" adatbázisfájl nem olvasható az alábbi útvonalon:\n'
                f"{path.absolute()}\n\n{e}",
                path=str(path),
            ) from e

        separator = DEFAULT_SEPARATOR
        if lines:
            separator = detect_separator(lines[0], SEPARATOR_CANDIDATES) or DEFAULT_SEPARATOR
        logger.debug("Catalog %s: separator %r", path, separator)

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue

            fields = parse_line(line, separator)
            record = record_from_fields(fields)
            if record is None:
                issue = IngestIssue(
                    code="too_few_fields",
                    message=f"{line_number}. sor kihagyva: {len(fields)} mező (legalább {MIN_FIELDS} kell)",
                    line=line_number,
                )
                logger.warning(issue.message)
                if warnings is not None:
                    warnings.append(issue)
                continue

            catalog.add(record, warnings)

        if not catalog:
            raise IngestError(
                f'"{path}" adatbázisfájl nem tartalmazott érvényes bejegyzést.',
                path=str(path),
            )

        logger.info(
            "Catalog %s loaded: %d records, %d barcodes",
            path, catalog.record_count, len(catalog),
        )
        return catalog

    def add(self, record: ProductRecord, warnings: Optional[list] = None):
        """Append a record under its normalized barcode."""
        code = record.normalized_barcode
        existing = self._items.get(code)
        if existing:
            warning = ValidationWarning(
                code="duplicate_barcode",
                message=f"Duplikált vonalkód: {record.original_barcode}",
                barcode=record.original_barcode,
            )
            logger.warning(warning.message)
            if warnings is not None:
                warnings.append(warning)
            existing.append(record)
        else:
            self._items[code] = [record]

    def get(self, normalized_barcode: str) -> list[ProductRecord]:
        """Records stored under a normalized barcode (empty list if none)."""
        return list(self._items.get(normalized_barcode, []))

    def lookup(self, code: str) -> LookupResult:
        """
        Resolve an operator-typed code.

        Args:
            code: Barcode as typed or scanned (zero glyph and hyphens allowed)

        Returns:
            Found, NotFound or Ambiguous with all candidates
        """
        key = normalize_input(code)
        records = self._items.get(key) if key else None
        if not records:
            return NotFound(code=key)
        if len(records) == 1:
            return Found(record=records[0])
        return Ambiguous(code=key, candidates=tuple(records))

    def find_exact(self, barcode: str) -> Optional[ProductRecord]:
        """
        Find a record whose stored original barcode equals the string.

        Equal strings normalize equally, so only the records under the
        normalized key need to be checked. The last match wins.
        """
        match = None
        for record in self._items.get(normalize_barcode(barcode), []):
            if record.original_barcode == barcode:
                match = record
        return match

    def search(self, text: str, limit: int = 20) -> list[ProductRecord]:
        """
        Autocomplete candidates for a partial input.

        Matches records whose name contains the text (case-insensitive) or,
        for numeric input, whose normalized barcode starts with it.

        Args:
            text: Partial input
            limit: Maximum number of candidates

        Returns:
            Matching records in catalog order
        """
        text = text.strip()
        if not text:
            return []

        needle = text.casefold()
        digits = normalize_input(text)
        results: list[ProductRecord] = []
        for code, records in self._items.items():
            for record in records:
                if (digits.isdigit() and code.startswith(digits)) or needle in record.name.casefold():
                    results.append(record)
                    if len(results) >= limit:
                        return results
        return results

    @property
    def record_count(self) -> int:
        """Total number of records, collisions included."""
        return sum(len(records) for records in self._items.values())

    def records(self) -> Iterator[ProductRecord]:
        """All records in insertion order."""
        for records in self._items.values():
            yield from records

    def __contains__(self, normalized_barcode: str) -> bool:
        return normalized_barcode in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[tuple[str, list[ProductRecord]]]:
        for code, records in self._items.items():
            yield code, list(records)
