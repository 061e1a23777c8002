"""Tolerant single-line CSV tokenizer.

Only what the catalog and log files need: a configurable separator, a quote
character, and quote doubling inside quoted values. Not a full RFC 4180
reader; records never span lines.
"""

from typing import Iterable, Optional

from .config import DEFAULT_QUOTE, DEFAULT_SEPARATOR, SEPARATOR_CANDIDATES


def parse_line(
    line: str,
    separator: str = DEFAULT_SEPARATOR,
    quote: str = DEFAULT_QUOTE
) -> list[str]:
    """
    Split one CSV line into fields.

    Outside quotes the separator ends a field, "\\r" is dropped and "\\n"
    stops parsing. A lone quote character toggles quoted mode; inside quotes
    a doubled quote yields one literal quote. Malformed input never raises,
    an unterminated quote simply runs to the end of the line.

    Args:
        line: Raw text of one line
        separator: Field separator (a blank falls back to ",")
        quote: Quote character (a blank falls back to '"')

    Returns:
        List of field values; at least one (possibly empty) field
    """
    if not line:
        return [""]

    if not quote or quote == " ":
        quote = DEFAULT_QUOTE
    if not separator or separator == " ":
        separator = DEFAULT_SEPARATOR

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        ch = line[i]

        if in_quotes:
            if ch == quote:
                # Doubled quote inside a quoted value is a literal quote
                if i + 1 < length and line[i + 1] == quote:
                    current.append(quote)
                    i += 2
                    continue
                in_quotes = False
            else:
                current.append(ch)
        elif ch == quote:
            in_quotes = True
        elif ch == separator:
            fields.append("".join(current))
            current = []
        elif ch == "\r":
            pass
        elif ch == "\n":
            break
        else:
            current.append(ch)
        i += 1

    # Last field has no trailing separator
    fields.append("".join(current))
    return fields


def read_lines(path, encoding: str = "utf-8", errors: str = "strict") -> list[str]:
    """
    Read a text file as a list of lines without terminators.

    Lines end at CR, LF or CRLF only. str.splitlines() would also split on
    form feeds, \\x85, \\u2028 and similar characters inside values.

    Args:
        path: Path to the file
        encoding: Text encoding
        errors: Decoding error handler ("replace" keeps bad bytes as U+FFFD)

    Returns:
        List of lines
    """
    with open(path, encoding=encoding, errors=errors) as f:
        return [line.rstrip("\n") for line in f]


def quote_field(value, quote: str = DEFAULT_QUOTE) -> str:
    """Wrap a value in quotes, doubling any quote it contains."""
    text = "" if value is None else str(value)
    return quote + text.replace(quote, quote * 2) + quote


def format_line(
    fields: Iterable,
    separator: str = "\t",
    quote: str = DEFAULT_QUOTE
) -> str:
    """
    Serialize fields into one line (without line terminator).

    Every field is quoted, so separators inside values survive a
    parse_line round trip with the same separator and quote.
    """
    return separator.join(quote_field(value, quote) for value in fields)


def detect_separator(
    line: str,
    candidates: Iterable[str] = SEPARATOR_CANDIDATES,
    quote: str = DEFAULT_QUOTE
) -> Optional[str]:
    """
    Find the separator used by a line.

    Args:
        line: Sample line (normally the first line of the file)
        candidates: Separators to try, in priority order
        quote: Quote character

    Returns:
        First candidate that splits the line into more than one field,
        or None if none does
    """
    for separator in candidates:
        if len(parse_line(line, separator, quote)) > 1:
            return separator
    return None
