"""Tests for month key helpers."""

from datetime import date

import pytest

from src.core.month_keys import (
    current_month_key,
    is_month_key,
    month_key,
    month_label,
    months_ago,
    normalize_month_key,
    parse_month_key,
    previous_month_key,
    shift_month_key,
    trailing_month_keys,
)


class TestMonthKeys:
    def test_month_key_zero_pads(self):
        assert month_key(date(2025, 3, 9)) == "2025-03"

    def test_parse_accepts_single_digit_month(self):
        assert parse_month_key("2025-1") == (2025, 1)

    @pytest.mark.parametrize("bad", ["", "2025", "2025-13", "2025-00", "25-01", "January"])
    def test_parse_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            parse_month_key(bad)

    def test_normalize(self):
        assert normalize_month_key("2025-1") == "2025-01"
        assert normalize_month_key(None) is None
        assert normalize_month_key("garbage") is None

    def test_is_month_key_is_strict(self):
        assert is_month_key("2025-01")
        assert not is_month_key("2025-1")

    def test_previous_month_wraps_year(self):
        assert previous_month_key("2025-01") == "2024-12"

    def test_shift_forward_across_year(self):
        assert shift_month_key("2024-11", 3) == "2025-02"

    def test_trailing_keys_oldest_first(self):
        keys = trailing_month_keys("2025-02", 3)
        assert keys == ["2024-12", "2025-01", "2025-02"]

    def test_trailing_twelve(self):
        keys = trailing_month_keys("2025-06", 12)
        assert len(keys) == 12
        assert keys[0] == "2024-07"
        assert keys[-1] == "2025-06"

    def test_months_ago_clamps_day(self):
        assert months_ago(date(2025, 3, 31), 1) == date(2025, 2, 28)
        assert months_ago(date(2024, 3, 31), 1) == date(2024, 2, 29)

    def test_months_ago_twelve(self):
        assert months_ago(date(2025, 6, 15), 12) == date(2024, 6, 15)

    def test_months_ago_from_leap_day(self):
        assert months_ago(date(2024, 2, 29), 12) == date(2023, 2, 28)

    def test_current_month_key(self):
        assert current_month_key(date(2025, 12, 31)) == "2025-12"

    def test_month_label(self):
        assert month_label("2025-01") == "January 2025"
