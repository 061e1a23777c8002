"""Tests for catalog loading and lookup."""

import pytest

from stocktake.catalog import Catalog, parse_stock_count, record_from_fields
from stocktake.errors import IngestError, IngestIssue, ValidationWarning
from stocktake.models import Ambiguous, Found, NotFound

from conftest import CATALOG_ROWS, write_catalog


class TestRecordFromFields:
    """Tests for building records from parsed fields."""

    def test_full_row(self):
        record = record_from_fields(["9789631234565", "Térkép", "Kiadó", "5", "C-001"])
        assert record.name == "Térkép"
        assert record.publisher == "Kiadó"
        assert record.stock_count == 5
        assert record.product_id == "C-001"
        assert record.original_barcode == "9789631234565"

    def test_optional_fields(self):
        """Test that stock count and product id may be missing."""
        record = record_from_fields(["12345678", "Név", "Kiadó"])
        assert record.stock_count is None
        assert record.product_id == ""

    def test_too_few_fields(self):
        assert record_from_fields(["12345678", "Név"]) is None

    def test_stock_count_unknown_vs_zero(self):
        """Test that 0 stays 0 and non-numbers mean unknown."""
        assert parse_stock_count("0") == 0
        assert parse_stock_count(" 12 ") == 12
        assert parse_stock_count("n/a") is None
        assert parse_stock_count("") is None


class TestCatalogBuild:
    """Tests for Catalog.build."""

    def test_semicolon_file(self, catalog):
        """Test loading the fixture catalog."""
        assert catalog.record_count == 5
        assert len(catalog) == 4
        assert "9789631234565" in catalog

    def test_tab_file(self, tmp_path):
        path = write_catalog(tmp_path / "tab.csv", CATALOG_ROWS, separator="\t")
        assert Catalog.build(path).record_count == 5

    def test_comma_file_with_quoted_comma(self, tmp_path):
        path = tmp_path / "comma.csv"
        path.write_text('"12345678","Név, vesszővel","Kiadó","1","X"\n', encoding="utf-8")

        record = Catalog.build(path).get("12345678")[0]
        assert record.name == "Név, vesszővel"

    def test_unquoted_file(self, tmp_path):
        path = tmp_path / "plain.csv"
        path.write_text("12345678;Név;Kiadó;2;X\n87654321;Más;Kiadó;0;Y\n", encoding="utf-8")

        catalog = Catalog.build(path)
        assert catalog.get("87654321")[0].stock_count == 0

    def test_bom_removed(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_text("12345678;Név;Kiadó\n", encoding="utf-8-sig")
        assert "12345678" in Catalog.build(path)

    def test_unicode_line_separators_in_values(self, tmp_path):
        """Test that only CR and LF end a catalog line."""
        path = tmp_path / "separators.csv"
        path.write_text(
            "12345678;Első\u2028kötet;Kiadó\x0cKft;2\r\n87654321;Más\x85név;Kiadó;1\n",
            encoding="utf-8",
        )

        warnings = []
        catalog = Catalog.build(path, warnings)

        assert warnings == []
        assert catalog.record_count == 2
        first = catalog.get("12345678")[0]
        assert first.name == "Első\u2028kötet"
        assert first.publisher == "Kiadó\x0cKft"
        assert first.stock_count == 2
        assert catalog.get("87654321")[0].name == "Más\x85név"

    def test_separator_from_first_line_only(self, tmp_path):
        """Test that the first line fixes the separator for the whole file."""
        path = tmp_path / "mixed.csv"
        path.write_text("12345678;Név;Kiadó;3\n87654321,Más,Kiadó,1\n", encoding="utf-8")

        warnings = []
        catalog = Catalog.build(path, warnings)

        assert catalog.get("12345678")[0].stock_count == 3
        assert "87654321" not in catalog
        assert [w.line for w in warnings] == [2]

    def test_unsplittable_first_line_means_comma(self, tmp_path):
        path = tmp_path / "header.csv"
        path.write_text("Termékek\n12345678,Név,Kiadó\n", encoding="utf-8")
        assert "12345678" in Catalog.build(path)

    def test_short_lines_skipped(self, tmp_path):
        """Test that lines with fewer than 3 fields are reported and skipped."""
        path = tmp_path / "short.csv"
        path.write_text("12345678;Név;Kiadó\n87654321;Csak név\n", encoding="utf-8")

        warnings = []
        catalog = Catalog.build(path, warnings)

        assert catalog.record_count == 1
        assert len(warnings) == 1
        assert isinstance(warnings[0], IngestIssue)
        assert warnings[0].code == "too_few_fields"
        assert warnings[0].line == 2

    def test_duplicates_kept_in_order(self, catalog_file):
        """Test that colliding barcodes keep every record in file order."""
        warnings = []
        catalog = Catalog.build(catalog_file, warnings)

        records = catalog.get("9789635521234")
        assert [r.product_id for r in records] == ["C-003", "C-004"]
        duplicates = [w for w in warnings if isinstance(w, ValidationWarning)]
        assert len(duplicates) == 1
        assert duplicates[0].code == "duplicate_barcode"
        assert duplicates[0].barcode == "9789635521234-02"

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestError) as exc_info:
            Catalog.build(tmp_path / "nincs.csv")
        assert exc_info.value.path.endswith("nincs.csv")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(IngestError):
            Catalog.build(path)

    def test_no_valid_rows(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("csak egy mező\nkettő;mező\n", encoding="utf-8")
        with pytest.raises(IngestError):
            Catalog.build(path)


class TestCatalogLookup:
    """Tests for lookup, find_exact and search."""

    def test_found(self, catalog):
        result = catalog.lookup("9789631234565")
        assert isinstance(result, Found)
        assert result.record.product_id == "C-001"

    def test_found_with_glyph_and_hyphens(self, catalog):
        """Test that typed input is normalized before lookup."""
        assert isinstance(catalog.lookup("978ö3ö64ö6157"), Found)
        assert isinstance(catalog.lookup("978-0-306-40615-7"), Found)

    def test_not_found(self, catalog):
        assert catalog.lookup("96385074") == NotFound(code="96385074")

    def test_empty_code(self, catalog):
        assert isinstance(catalog.lookup(""), NotFound)

    def test_ambiguous(self, catalog):
        result = catalog.lookup("9789635521234")
        assert isinstance(result, Ambiguous)
        assert [r.product_id for r in result.candidates] == ["C-003", "C-004"]

    def test_lookup_does_not_strip_suffix(self, catalog):
        """Test that typed input keeps its digits; only hyphens are dropped."""
        assert isinstance(catalog.lookup("9789635521234-01"), NotFound)

    def test_find_exact(self, catalog):
        """Test matching by the original barcode string."""
        assert catalog.find_exact("9789635521234-02").product_id == "C-004"
        assert catalog.find_exact("9789631234565").product_id == "C-001"

    def test_find_exact_needs_original_form(self, catalog):
        assert catalog.find_exact("9789635521234") is None
        assert catalog.find_exact("") is None

    def test_search_by_name(self, catalog):
        results = catalog.search("balaton")
        assert [r.product_id for r in results] == ["C-003", "C-004"]

    def test_search_by_barcode_prefix(self, catalog):
        results = catalog.search("97896355")
        assert [r.product_id for r in results] == ["C-003", "C-004"]

    def test_search_limit_and_empty(self, catalog):
        assert len(catalog.search("térkép")) == 3
        assert len(catalog.search("térkép", limit=2)) == 2
        assert catalog.search("  ") == []

    def test_iteration(self, catalog):
        codes = [code for code, _ in catalog]
        assert codes == ["9789631234565", "9780306406157", "9789635521234", "4006381333931"]
        assert [r.product_id for r in catalog.records()] == [row[4] for row in CATALOG_ROWS]

    def test_empty_catalog(self):
        catalog = Catalog.empty()
        assert len(catalog) == 0
        assert isinstance(catalog.lookup("9789631234565"), NotFound)
