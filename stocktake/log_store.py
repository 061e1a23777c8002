"""Append-only session log.

Entries are kept newest first. Only the head entry may still be open; it is
written to the log file at the moment it is committed, and the file is
flushed after every row so a crash loses at most the open entry.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .config import LOG_DATE_FORMAT, LOG_FILENAME_TEMPLATE, LOG_SEPARATOR, LOG_TIMESTAMP_FORMAT
from .csv_parser import format_line
from .errors import LogWriteError
from .models import LogEntry

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"


def log_filename(operator: str, location: str, day: Optional[date] = None) -> str:
    """
    Build the session log file name.

    Example: ("Péter", "raktár1", 2024-01-15) -> "2024-01-15_Péter_raktár1.csv"
    """
    day = day or date.today()
    return LOG_FILENAME_TEMPLATE.format(
        day=day.strftime(LOG_DATE_FORMAT),
        operator=operator,
        location=location,
    )


def format_log_row(entry: LogEntry, operator: str, location: str) -> str:
    """Serialize a log entry into one tab-delimited, quoted row."""
    return format_line(
        [
            entry.timestamp.strftime(LOG_TIMESTAMP_FORMAT),
            entry.barcode,
            entry.count,
            entry.comment,
            entry.publication_year or "",
            location,
            operator,
            entry.product_id,
            entry.name,
            entry.publisher,
            entry.normalized_barcode,
        ],
        separator=LOG_SEPARATOR,
    )


class LogStore:
    """
    Entries of one session, mirrored to an append-only file.

    Usage:
        with LogStore.open("log", "Péter", "raktár1") as store:
            store.push(LogEntry("9789631234566"))
            ...
    """

    def __init__(
        self,
        path,
        operator: str,
        location: str,
        on_change: Optional[Callable[["LogStore"], None]] = None
    ):
        self.path = Path(path)
        self.operator = operator
        self.location = location
        self.on_change = on_change
        self._entries: list[LogEntry] = []
        try:
            self._file = open(self.path, "a", encoding="utf-8", newline="")
        except OSError as e:
            raise LogWriteError(
                f"A naplófájlt nem sikerült létrehozni:\n{self.path}\n{e}",
                path=str(self.path),
            ) from e
        logger.info("Session log opened: %s", self.path)

    @classmethod
    def open(
        cls,
        log_dir,
        operator: str,
        location: str,
        day: Optional[date] = None,
        on_change: Optional[Callable[["LogStore"], None]] = None
    ) -> "LogStore":
        """
        Open (or continue) the log file of an operator at a location.

        Args:
            log_dir: Directory of the session logs; created if missing
            operator: Name of the operator
            location: Warehouse/shop name
            day: Date used in the file name (default: today)
            on_change: Called after every push and commit

        Raises:
            LogWriteError: If the directory or file cannot be created
        """
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LogWriteError(
                f"A naplómappát nem sikerült létrehozni:\n{log_dir}\n{e}",
                path=str(log_dir),
            ) from e
        path = log_dir / log_filename(operator, location, day)
        return cls(path, operator, location, on_change=on_change)

    @property
    def closed(self) -> bool:
        return self._file is None

    @property
    def head(self) -> Optional[LogEntry]:
        """Most recent entry, or None."""
        return self._entries[0] if self._entries else None

    @property
    def open_entry(self) -> Optional[LogEntry]:
        """Head entry if it is not committed yet."""
        head = self.head
        if head is not None and not head.committed:
            return head
        return None

    @property
    def entries(self) -> list[LogEntry]:
        """Snapshot of all entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: LogEntry):
        """
        Add a new open entry at the head.

        The previous head must already be committed.
        """
        if self.open_entry is not None:
            raise ValueError("The open entry must be committed before a new one is added")
        self._entries.insert(0, entry)
        self._notify()

    def commit(self) -> Optional[LogEntry]:
        """
        Write the open entry to the log file and mark it committed.

        Returns:
            The committed entry, or None if nothing was open

        Raises:
            LogWriteError: If writing fails. A failed write or flush leaves
                the entry open. A failed fsync comes after the row reached
                the file, so the entry is committed and is not written again.
        """
        entry = self.open_entry
        if entry is None:
            return None
        if self._file is None:
            raise LogWriteError("A naplófájl már le van zárva", path=str(self.path))

        try:
            self._file.write(format_log_row(entry, self.operator, self.location) + LINE_TERMINATOR)
            self._file.flush()
        except OSError as e:
            raise LogWriteError(f"Naplófájl írása sikertelen: {e}", path=str(self.path)) from e

        entry.mark_committed()
        try:
            os.fsync(self._file.fileno())
        except OSError as e:
            raise LogWriteError(f"Naplófájl lemezre írása sikertelen: {e}", path=str(self.path)) from e
        finally:
            self._notify()

        logger.debug("Committed %s x%d to %s", entry.barcode, entry.count, self.path)
        return entry

    def close(self):
        """Commit the open entry and close the file. Safe to call twice."""
        if self._file is None:
            return
        try:
            self.commit()
        finally:
            self._file.close()
            self._file = None
            logger.info("Session log closed: %s", self.path)

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self)

    def __enter__(self) -> "LogStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
