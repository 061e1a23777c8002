"""Stock-taking session: catalog, log store and configuration in one place."""

import logging
from datetime import date
from typing import Callable, Optional

from .catalog import Catalog
from .classifier import InputClassifier, describe_input, is_barcode_token
from .config import SessionConfig
from .errors import IngestError
from .log_store import LogStore
from .models import Ambiguous, LogEntry, LookupResult, ProductRecord

logger = logging.getLogger(__name__)


def load_catalog(path, warnings: Optional[list] = None) -> tuple[Catalog, Optional[str]]:
    """
    Load the catalog, falling back to an empty one on failure.

    Stock-taking still works without a catalog, products are just not
    recognized.

    Args:
        path: Path to the catalog CSV
        warnings: Optional collector passed to Catalog.build

    Returns:
        Tuple of (catalog, error_message)
        If loaded: (catalog, None)
        If failed: (empty catalog, error_message)
    """
    try:
        return Catalog.build(path, warnings), None
    except IngestError as e:
        logger.error("Catalog not loaded: %s", e.message)
        return Catalog.empty(), e.message


class StocktakeSession:
    """
    One operator scanning at one location.

    Opens the session log on construction and must be closed explicitly
    (or used as a context manager); closing writes the entry still open.
    """

    def __init__(
        self,
        config: SessionConfig,
        catalog: Catalog,
        day: Optional[date] = None,
        on_change: Optional[Callable[[list[LogEntry]], None]] = None
    ):
        self.config = config
        self.catalog = catalog
        self.warnings: list = []
        self._on_change = on_change
        self.store = LogStore.open(
            config.log_path,
            config.operator,
            config.location,
            day=day,
            on_change=self._entries_changed,
        )
        self.classifier = InputClassifier(catalog, self.store, self.warnings)

    def handle(self, token: str, record: Optional[ProductRecord] = None) -> Optional[LogEntry]:
        """Classify one operator token. See InputClassifier.classify."""
        return self.classifier.classify(token.strip() if token else token, record)

    def lookup(self, token: str) -> LookupResult:
        """Catalog lookup for a barcode token, before it is handled."""
        return self.catalog.lookup(token)

    def ambiguous_candidates(self, token: str) -> tuple[ProductRecord, ...]:
        """
        Records the operator has to choose from before the token is handled.

        Empty unless the token is a barcode shared by several products.
        """
        if not is_barcode_token(token):
            return ()
        result = self.catalog.lookup(token)
        if isinstance(result, Ambiguous):
            return result.candidates
        return ()

    def hint(self, text: str) -> str:
        """Live hint for partially typed input."""
        return describe_input(text, self.catalog)

    def candidates(self, text: str, limit: int = 20) -> list[ProductRecord]:
        """Autocomplete candidates from the catalog."""
        return self.catalog.search(text, limit)

    @property
    def entries(self) -> list[LogEntry]:
        """Snapshot of the session entries, newest first."""
        return self.store.entries

    @property
    def open_entry(self) -> Optional[LogEntry]:
        return self.store.open_entry

    def close(self):
        """Write the open entry and close the log file."""
        self.store.close()

    def _entries_changed(self, store: LogStore):
        if self._on_change is not None:
            self._on_change(store.entries)

    def __enter__(self) -> "StocktakeSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
