"""Tests for data models and barcode normalization."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from stocktake.errors import EntryCommittedError
from stocktake.models import (
    AggregateRecord,
    LogEntry,
    ParseFailed,
    ProductRecord,
    ReconciliationRow,
    normalize_barcode,
    normalize_input,
    parse_number,
)


def make_record(barcode="9789631234565", stock=5):
    return ProductRecord(
        name="Budapest térkép",
        publisher="Cartographia",
        stock_count=stock,
        product_id="C-001",
        original_barcode=barcode,
    )


class TestNormalizeBarcode:
    """Tests for catalog barcode normalization."""

    def test_suffix_stripped(self):
        """Test that a two- or five-digit suffix is removed."""
        assert normalize_barcode("9789631234566-01") == "9789631234566"
        assert normalize_barcode("9789631234566-12345") == "9789631234566"

    def test_other_suffix_lengths_kept(self):
        """Test that a hyphen group of another length only loses the hyphen."""
        assert normalize_barcode("978-963-1234-566") == "9789631234566"
        assert normalize_barcode("12345678-123") == "12345678123"

    def test_non_digits_removed(self):
        assert normalize_barcode("ISBN 963 12") == "96312"
        assert normalize_barcode("") == ""

    def test_idempotent(self):
        for barcode in ["9789631234566-01", "978-963-1234-566", "abc-12"]:
            once = normalize_barcode(barcode)
            assert normalize_barcode(once) == once


class TestNormalizeInput:
    """Tests for operator input cleanup."""

    def test_zero_glyph(self):
        assert normalize_input("978ö3ö64ö6157") == "9780306406157"

    def test_hyphens_removed(self):
        assert normalize_input("978-0-306-40615-7") == "9780306406157"

    def test_underscore_kept(self):
        assert normalize_input("1_0") == "1_0"


class TestParseNumber:
    """Tests for strict integer parsing."""

    def test_digits(self):
        assert parse_number("0012") == 12
        assert parse_number("-2") == -2

    def test_rejected_forms(self):
        """Test that forms int() would accept are still rejected."""
        for text in ["1_0", "+3", " 3 ", "3\n", "", "-", "١٢"]:
            assert parse_number(text) == ParseFailed(text)


class TestProductRecord:
    """Tests for ProductRecord."""

    def test_normalized_barcode_computed(self):
        record = make_record("9789631234566-01")
        assert record.normalized_barcode == "9789631234566"

    def test_immutable(self):
        record = make_record()
        with pytest.raises(FrozenInstanceError):
            record.name = "Más"


class TestLogEntry:
    """Tests for LogEntry."""

    def test_defaults(self):
        entry = LogEntry("12345678")
        assert entry.count == 1
        assert entry.comment == ""
        assert entry.publication_year is None
        assert not entry.committed
        assert not entry.in_catalog
        assert entry.name == ""
        assert entry.stock_count is None

    def test_catalog_fields(self):
        entry = LogEntry("9789631234565", record=make_record())
        assert entry.in_catalog
        assert entry.name == "Budapest térkép"
        assert entry.publisher == "Cartographia"
        assert entry.product_id == "C-001"
        assert entry.normalized_barcode == "9789631234565"
        assert entry.stock_count == 5

    def test_time(self):
        entry = LogEntry("12345678", timestamp=datetime(2024, 1, 15, 9, 5, 7))
        assert entry.time == "09:05:07"

    def test_committed_entry_is_frozen(self):
        """Test that setters raise once the entry is committed."""
        entry = LogEntry("12345678")
        entry.set_count(4)
        entry.mark_committed()

        with pytest.raises(EntryCommittedError):
            entry.set_count(5)
        with pytest.raises(EntryCommittedError):
            entry.set_comment("x")
        with pytest.raises(EntryCommittedError):
            entry.set_publication_year("2001")
        assert entry.count == 4


class TestReconciliationRow:
    """Tests for aggregate and report rows."""

    def test_recorded_stock_defaults_to_zero(self):
        assert AggregateRecord("1", 2).recorded_stock == 0
        assert AggregateRecord("1", 2, record=make_record(stock=None)).recorded_stock == 0
        assert AggregateRecord("1", 2, record=make_record(stock=7)).recorded_stock == 7

    def test_status(self):
        row = ReconciliationRow.from_aggregate(AggregateRecord("9789631234565", 5, record=make_record()))
        assert row.status == "OK"
        assert not row.is_discrepancy

        row = ReconciliationRow.from_aggregate(AggregateRecord("9789631234565", 4, record=make_record()))
        assert row.status == "ELTÉR"
        assert row.is_discrepancy

    def test_unmatched_row(self):
        """Test that a barcode missing from the catalog has empty product fields."""
        row = ReconciliationRow.from_aggregate(AggregateRecord("12345678", 2))
        assert row.to_list() == ["", "12345678", "", "", "", 0, 2, "ELTÉR"]
