"""Tests for shared utility functions."""

from saathi.utils import extract_digits, format_rupees


class TestExtractDigits:
    def test_joins_digit_runs(self):
        assert extract_digits("call me at 98765 43210") == "9876543210"

    def test_strips_dashes(self):
        assert extract_digits("98765-43210") == "9876543210"

    def test_no_digits(self):
        assert extract_digits("nau aath") == ""

    def test_clean_number_unchanged(self):
        assert extract_digits("9876543210") == "9876543210"


class TestFormatRupees:
    def test_whole_amount_has_no_decimals(self):
        assert format_rupees(770.0) == "770"

    def test_int_input(self):
        assert format_rupees(20) == "20"

    def test_fractional_amount(self):
        assert format_rupees(99.5) == "99.5"

    def test_negative(self):
        assert format_rupees(-225.0) == "-225"
