"""Check-digit calculation for GTIN/EAN/ISBN codes."""

import re
from typing import Optional

from .config import ISBN10_LENGTH, MAX_CODE_LENGTH, MIN_CODE_LENGTH

_NON_DIGIT_RE = re.compile(r"[^0-9]")

GTIN_BASE_LENGTH = 13
MIN_GTIN_BASE_LENGTH = 7
ISBN10_BASE_LENGTH = 9


def digits_only(code: str) -> str:
    """Remove every non-digit character."""
    return _NON_DIGIT_RE.sub("", code or "")


def gtin_check_digit(base: str) -> Optional[int]:
    """
    Calculate the GS1 mod-10 check digit.

    Supports every GTIN length from 8 to 14 digits (7 to 13 without the
    check digit). The base is left-padded with zeros to 13 digits and
    weighted 3, 1, 3, 1, ... from the left.

    Args:
        base: Code without its check digit; non-digits are ignored

    Returns:
        Check digit 0-9, or None if the base length is out of range
    """
    digits = digits_only(base)
    if len(digits) < MIN_GTIN_BASE_LENGTH or len(digits) > GTIN_BASE_LENGTH:
        return None

    digits = digits.zfill(GTIN_BASE_LENGTH)
    total = sum(
        int(d) * (3 if position % 2 == 0 else 1)
        for position, d in enumerate(digits)
    )
    return (10 - total % 10) % 10


def isbn10_check_digit(base: str) -> Optional[int]:
    """
    Calculate the ISBN-10 mod-11 check digit.

    The result 10 is returned as the number 10, not as "X", so such codes
    never match a single trailing digit.

    Args:
        base: First 9 digits of the ISBN; non-digits are ignored

    Returns:
        Check digit 0-10, or None if the base is not exactly 9 digits
    """
    digits = digits_only(base)
    if len(digits) != ISBN10_BASE_LENGTH:
        return None

    total = sum(int(d) * weight for d, weight in zip(digits, range(10, 1, -1)))
    return (11 - total % 11) % 11


def is_valid_gtin(code: str) -> bool:
    """
    Validate a GTIN/EAN/ISBN code by its last digit.

    Non-digit characters are ignored. Ten-digit codes are checked as
    ISBN-10, every other length from 8 to 14 as GTIN.

    Args:
        code: Code to validate, including its check digit

    Returns:
        True if the length is valid and the computed check digit equals
        the last digit
    """
    digits = digits_only(code)
    if len(digits) < MIN_CODE_LENGTH or len(digits) > MAX_CODE_LENGTH:
        return False

    base = digits[:-1]
    if len(digits) == ISBN10_LENGTH:
        check = isbn10_check_digit(base)
    else:
        check = gtin_check_digit(base)

    if check is None:
        return False
    return check == int(digits[-1])
