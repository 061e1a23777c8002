#!/usr/bin/env python3
"""
Script 1: Stock-taking session in the terminal

Reads one token per line from standard input:
- barcode (8+ digits): logs the previous item and starts a new one
- number below 1900: sets the count of the current item
- number 1900-2099: sets the publication year of the current item
- anything else: sets the comment of the current item
The last item is logged when the input ends (Ctrl+D) or on Ctrl+C.
"""

import logging
import sys

from config import DATABASE_FILE, LOCATIONS_FILE, LOG_DIR, LOG_LEVEL
from stocktake import (
    LogWriteError,
    SessionConfig,
    StocktakeSession,
    load_catalog,
    load_locations,
)


def format_entry(entry) -> str:
    """One-line summary of a log entry"""
    name = entry.name or "nem található az adatbázisban"
    parts = [entry.time, entry.barcode, f"{entry.count} db", name]
    if entry.publication_year:
        parts.append(f"kiadás: {entry.publication_year}")
    if entry.comment:
        parts.append(f"megjegyzés: {entry.comment}")
    return " | ".join(parts)


def choose_record(candidates):
    """Ask the operator which of several products with the same barcode is scanned"""
    print("Ebből a termékből több is található az adatbázisban. Melyiket leltározod éppen?")
    for i, record in enumerate(candidates, start=1):
        print(f"  {i}. {record.original_barcode}\t{record.name}\t{record.publisher}\t{record.product_id}")
    print("  0. Egyik sem (Írj hozzá megjegyzést!)")

    answer = sys.stdin.readline().strip()
    if answer.isdigit() and 1 <= int(answer) <= len(candidates):
        return candidates[int(answer) - 1]
    return None


def run_session(operator: str, location: str, database_file: str):
    catalog, error = load_catalog(database_file)
    if error:
        print(f"Nem sikerült beolvasni az adatbázist.\n{error}")
        print("Leltározni adatbázis nélkül is lehet, de a program nem fogja felismerni a termékeket.")

    config = SessionConfig(operator=operator, location=location, log_dir=LOG_DIR)
    try:
        session = StocktakeSession(config, catalog)
    except LogWriteError as e:
        print(e.message)
        sys.exit(1)

    print(f"Napló: {session.store.path}")
    print("Elkezdheted a leltározást.")

    try:
        with session:
            for line in sys.stdin:
                token = line.strip()
                if not token:
                    continue

                record = None
                candidates = session.ambiguous_candidates(token)
                if candidates:
                    record = choose_record(candidates)

                warnings_before = len(session.warnings)
                entry = session.handle(token, record)
                for warning in session.warnings[warnings_before:]:
                    print(f"FIGYELEM: {warning.message}")

                if entry is not None:
                    print(format_entry(entry))
                else:
                    print(session.hint(token))
    except KeyboardInterrupt:
        pass
    except LogWriteError as e:
        print(f"Naplófájl írása sikertelen!\n{e.message}")
        sys.exit(1)

    print(f"\nNaplózott tételek: {len(session.entries)}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scan_session.py <operator> [location] [database.csv]")
        print(f"  location = one of {LOCATIONS_FILE} (default: first)")
        sys.exit(1)

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    operator = sys.argv[1]
    locations = load_locations(LOCATIONS_FILE)
    location = sys.argv[2] if len(sys.argv) > 2 else locations[0]
    database_file = sys.argv[3] if len(sys.argv) > 3 else DATABASE_FILE

    if location not in locations:
        print(f"Error: location must be one of: {', '.join(locations)}")
        sys.exit(1)

    run_session(operator, location, database_file)
