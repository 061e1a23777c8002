"""Shared fixtures for stock-taking tests."""

from datetime import date

import pytest

from stocktake.catalog import Catalog
from stocktake.classifier import InputClassifier
from stocktake.log_store import LogStore

# Catalog rows used in tests: barcode, name, publisher, stock count, product id
CATALOG_ROWS = [
    ["9789631234565", "Budapest térkép", "Cartographia", "5", "C-001"],
    ["9780306406157", "Magyarország autóatlasz", "Cartographia", "0", "C-002"],
    ["9789635521234-01", "Balaton turistatérkép", "Cartographia", "3", "C-003"],
    ["9789635521234-02", "Balaton kerékpáros térkép", "Cartographia", "2", "C-004"],
    ["4006381333931", "Ceruza", "Stabilo", "n/a", "S-100"],
]

SESSION_DAY = date(2024, 1, 15)


def write_catalog(path, rows, separator=";"):
    """Write catalog rows to a file, quoting every value."""
    lines = []
    for row in rows:
        lines.append(separator.join('"' + v.replace('"', '""') + '"' for v in row))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def catalog_file(tmp_path):
    """Semicolon-separated catalog file with a barcode collision."""
    return write_catalog(tmp_path / "database.csv", CATALOG_ROWS)


@pytest.fixture
def catalog(catalog_file):
    return Catalog.build(catalog_file)


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "log"


@pytest.fixture
def store(log_dir):
    """Open session log; closed after the test."""
    log_store = LogStore.open(log_dir, "Péter", "raktár1", day=SESSION_DAY)
    yield log_store
    log_store.close()


@pytest.fixture
def classifier(catalog, store):
    return InputClassifier(catalog, store)


@pytest.fixture
def empty_classifier(store):
    """Classifier without any catalog match."""
    return InputClassifier(Catalog.empty(), store)


def read_log_rows(path):
    """Non-empty lines of a log file."""
    return [line for line in path.read_text(encoding="utf-8").splitlines() if line]
