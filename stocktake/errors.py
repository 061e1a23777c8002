"""Error and warning types shared by the stock-taking core.

Fatal conditions are exceptions. Recoverable, per-line problems are plain
records appended to a collector list supplied by the caller, so a batch
(catalog build, reconciliation) never aborts on one bad line.
"""

from dataclasses import dataclass
from typing import Optional


class StocktakeError(Exception):
    """Base class for stock-taking errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class IngestError(StocktakeError):
    """Catalog file missing, unreadable or without a single valid row."""


class LogWriteError(StocktakeError):
    """The session log could not be opened or written.

    Scanning must stop: later entries would be lost silently.
    """


class EntryCommittedError(StocktakeError):
    """A committed log entry was about to be modified."""


@dataclass(frozen=True)
class ValidationWarning:
    """Non-fatal finding: duplicate barcode, invalid check digit, zero stock."""
    code: str
    message: str
    barcode: str = ""


@dataclass(frozen=True)
class IngestIssue:
    """A catalog line that was skipped."""
    code: str
    message: str
    line: int = 0


@dataclass(frozen=True)
class ParseSkip:
    """A session log line that could not be aggregated."""
    code: str
    message: str
    source: str = ""
    line: int = 0
