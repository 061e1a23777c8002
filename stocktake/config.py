"""Default configuration values."""

from dataclasses import dataclass, field
from pathlib import Path

# CSV parsing
DEFAULT_SEPARATOR = ","
DEFAULT_QUOTE = '"'
# Separators tried on the first line of the catalog file, in this order
SEPARATOR_CANDIDATES = ("\t", ";", ",")
LOG_SEPARATOR = "\t"

# Hungarian keyboards type "ö" on the key where the scanner expects "0"
ZERO_GLYPH = "ö"

# Input classification
MIN_BARCODE_LENGTH = 8    # Normalized numeric input this long is a new barcode
MIN_YEAR = 1900           # Short numbers below this set the count
MAX_YEAR = 2099           # Short numbers in [MIN_YEAR, MAX_YEAR] set the publication year

# Barcode validation
MIN_CODE_LENGTH = 8
MAX_CODE_LENGTH = 14
ISBN10_LENGTH = 10

# Log file rows are padded to this many slots when read back
LOG_ROW_SLOTS = 12

# Default location when locations.txt is missing or empty
DEFAULT_LOCATION = "raktár1"

# Timestamp formats
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DISPLAY_TIME_FORMAT = "%H:%M:%S"

# Output file names
LOG_FILENAME_TEMPLATE = "{day}_{operator}_{location}.csv"
MERGED_FILENAME_TEMPLATE = "{day}_leltár_részletes_adatok.csv"
REPORT_FILENAME_TEMPLATE = "{day}_leltár_eredmény.csv"

# Reconciliation status markers
STATUS_OK = "OK"
STATUS_DISCREPANCY = "ELTÉR"

# Catalog audit markers
AUDIT_SUSPICIOUS = "GYANÚS"
AUDIT_VALID = "OK"
AUDIT_INVALID = "ÉRVÉNYTELEN"

# Output columns for the reconciliation report
REPORT_COLUMNS = [
    "Cikkszám",
    "Vonalkód",
    "Norm. vonalkód",
    "Cikknév",
    "Kiadó",
    "Készlet sz. m.",
    "Talált db",
    "Eltérés",
]

# Output columns for the catalog audit
AUDIT_COLUMNS = [
    "Vonalkód",
    "Normalizált",
    "Gyanús?",
    "OK?",
    "Név",
    "Kiadó",
    "DB",
    "Id",
]


@dataclass
class SessionConfig:
    """Configuration for one stock-taking session."""
    operator: str
    location: str = DEFAULT_LOCATION
    log_dir: str = "log"

    @property
    def log_path(self) -> Path:
        """Directory the session log file is written to."""
        return Path(self.log_dir)

    def to_dict(self) -> dict:
        """Convert config to dictionary for JSON export."""
        return {
            "operator": self.operator,
            "location": self.location,
            "log_dir": self.log_dir,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionConfig":
        """Create config from dictionary (JSON import)."""
        return cls(
            operator=data.get("operator", ""),
            location=data.get("location", DEFAULT_LOCATION),
            log_dir=data.get("log_dir", "log"),
        )


def load_locations(path) -> list[str]:
    """Read the list of selectable locations.

    One location per line, UTF-8. Blank lines are skipped. A missing or
    empty file yields the single default location.

    Args:
        path: Path to the locations file

    Returns:
        List of location names (never empty)
    """
    locations: list[str] = []
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    locations.append(line)
    except OSError:
        pass

    if not locations:
        locations.append(DEFAULT_LOCATION)
    return locations


__all__ = [
    "SessionConfig",
    "load_locations",
]
