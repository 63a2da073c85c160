"""Unit tests for request value parsing in core.api_utils."""

from datetime import date

import pytest

from barbershop.core.api_utils import (
    parse_bool,
    parse_month_param,
    parse_number,
    parse_optional_int,
)


class TestParseOptionalInt:
    @pytest.mark.parametrize("value, expected", [(3, 3), (3.0, 3), ("4", 4), (None, None), ("", None)])
    def test_whole_numbers(self, value, expected):
        assert parse_optional_int(value, "count") == expected

    @pytest.mark.parametrize("value", [2.7, "2.7", "dois", True, [1]])
    def test_rejects_fractions_and_garbage(self, value):
        with pytest.raises(ValueError, match="count must be an integer"):
            parse_optional_int(value, "count")


class TestParseNumber:
    @pytest.mark.parametrize("value, expected", [(40, 40.0), (12.5, 12.5), ("40", 40.0), (" 39.90 ", 39.9)])
    def test_numbers_and_numeric_strings(self, value, expected):
        assert parse_number(value, "price") == expected

    @pytest.mark.parametrize("value", ["quarenta", True, "NaN", "Infinity", [40]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError, match="price must be a number"):
            parse_number(value, "price")

    def test_missing(self):
        with pytest.raises(ValueError, match="price is required"):
            parse_number(None, "price")


class TestParseBool:
    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (False, False), ("true", True), ("False", False), (None, False)],
    )
    def test_accepted_values(self, value, expected):
        assert parse_bool(value, "is_closed") is expected

    @pytest.mark.parametrize("value", ["yes", "0", 1, 0, "", []])
    def test_rejects_anything_else(self, value):
        with pytest.raises(ValueError, match="is_closed must be true or false"):
            parse_bool(value, "is_closed")


class TestParseMonth:
    def test_explicit_month(self):
        assert parse_month_param("2027-02") == (2027, 2)

    def test_defaults_to_current_month(self):
        today = date.today()
        assert parse_month_param(None) == (today.year, today.month)

    @pytest.mark.parametrize("value", ["2027-13", "2027", "fev/2027", "2027-00"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="expected YYYY-MM"):
            parse_month_param(value)
