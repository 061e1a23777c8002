"""Tests for GTIN/ISBN check-digit validation."""

import pytest

from stocktake.check_digit import (
    digits_only,
    gtin_check_digit,
    is_valid_gtin,
    isbn10_check_digit,
)


class TestGtinCheckDigit:
    """Tests for the mod-10 check digit."""

    def test_ean13(self):
        assert gtin_check_digit("400638133393") == 1
        assert gtin_check_digit("978030640615") == 7

    def test_gtin8(self):
        assert gtin_check_digit("9638507") == 4

    def test_gtin14(self):
        assert gtin_check_digit("1001234567890") == 2

    def test_non_digits_ignored(self):
        assert gtin_check_digit("978-0-306-40615") == 7

    def test_length_out_of_range(self):
        """Test that bases shorter than 7 or longer than 13 digits give None."""
        assert gtin_check_digit("123456") is None
        assert gtin_check_digit("12345678901234") is None
        assert gtin_check_digit("") is None


class TestIsbn10CheckDigit:
    """Tests for the mod-11 check digit."""

    def test_valid(self):
        assert isbn10_check_digit("030640615") == 2

    def test_ten_is_returned_as_number(self):
        """Test that the check value 10 is not turned into "X"."""
        assert isbn10_check_digit("080442957") == 10

    def test_wrong_length(self):
        assert isbn10_check_digit("12345") is None
        assert isbn10_check_digit("1234567890") is None


class TestIsValidGtin:
    """Tests for is_valid_gtin."""

    @pytest.mark.parametrize("code", [
        "4006381333931",
        "9780306406157",
        "9789631234565",
        "9780131103627",
        "96385074",
        "10012345678902",
        "0306406152",
    ])
    def test_valid_codes(self, code):
        assert is_valid_gtin(code)

    @pytest.mark.parametrize("code", [
        "4006381333932",
        "9789631234566",
        "12345678",
        "0306406151",
    ])
    def test_wrong_check_digit(self, code):
        assert not is_valid_gtin(code)

    def test_formatting_ignored(self):
        """Test that hyphens and spaces are ignored."""
        assert is_valid_gtin("978-0-306-40615-7")
        assert is_valid_gtin("4006381 333931")

    def test_length_out_of_range(self):
        assert not is_valid_gtin("1234567")
        assert not is_valid_gtin("123456789012345")
        assert not is_valid_gtin("")

    def test_isbn10_with_x_is_invalid(self):
        """Test that a trailing X leaves only 9 digits."""
        assert not is_valid_gtin("080442957X")

    def test_digits_only(self):
        assert digits_only("978-963 12a") == "97896312"
        assert digits_only(None) == ""
