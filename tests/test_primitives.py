"""
tests.test_primitives
~~~~~~~~~~~~~~~~~~~~~

标量取值原语与格式化函数单元测试。
"""
from __future__ import annotations

import pytest

from live_viewer.normalize.primitives import (
    format_birthday,
    format_number,
    format_unix,
    pick_first_number,
    pick_first_string,
    pick_nullable_number,
)


class TestPickFirstString:
    """pick_first_string 的候选顺序与默认值。"""

    def test_returns_first_non_blank_string(self) -> None:
        assert pick_first_string(None, "", "   ", 12, "abc", "def") == "abc"

    def test_value_is_not_stripped(self) -> None:
        assert pick_first_string(" padded ") == " padded "

    def test_all_invalid_returns_empty(self) -> None:
        assert pick_first_string(None, 0, {}, [], "  ") == ""
        assert pick_first_string() == ""


class TestPickNumber:
    """pick_first_number / pick_nullable_number。"""

    def test_numbers_and_numeric_strings(self) -> None:
        assert pick_first_number(None, "x", "42") == 42
        assert pick_first_number(" 1.5 ") == 1.5
        assert pick_first_number(7, "8") == 7

    def test_integral_string_parses_to_int(self) -> None:
        value = pick_first_number("1200")
        assert value == 1200
        assert isinstance(value, int)

    def test_rejects_bool_and_non_finite(self) -> None:
        assert pick_first_number(True, float("nan"), "inf", float("inf"), 3) == 3

    def test_default_zero(self) -> None:
        assert pick_first_number(None, "", "abc") == 0

    def test_nullable_keeps_zero_distinct_from_missing(self) -> None:
        assert pick_nullable_number(None, "") is None
        assert pick_nullable_number(None, 0) == 0
        assert pick_nullable_number("0") == 0

    def test_zero_is_a_valid_candidate(self) -> None:
        """0 是有效数字，后面的候选不会被采用。"""
        assert pick_nullable_number(0, 5) == 0


class TestFormatNumber:
    """format_number 千位分组。"""

    def test_groups_thousands(self) -> None:
        assert format_number(1234567) == "1,234,567"
        assert format_number(None, "98765") == "98,765"

    def test_zero_and_missing_render_as_zero(self) -> None:
        assert format_number(0) == "0"
        assert format_number(None, "abc") == "0"

    def test_fraction_kept_up_to_three_digits(self) -> None:
        assert format_number(1234.5) == "1,234.5"
        assert format_number(0.12345) == "0.123"


class TestFormatUnix:
    """format_unix 使用配置的显示时区（默认 Asia/Tokyo）。"""

    def test_date_and_time(self) -> None:
        assert format_unix(1700000000) == "2023/11/15 07:13:20"

    def test_date_only(self) -> None:
        assert format_unix("1700000000", with_time=False) == "2023/11/15"

    @pytest.mark.parametrize("value", [None, 0, "0", "abc", 1e20])
    def test_invalid_renders_dash(self, value: object) -> None:
        assert format_unix(value) == "-"

    def test_beyond_year_9999_renders_dash(self) -> None:
        """datetime 只支持到 9999 年，超出范围的时间戳按非法值处理。"""
        assert format_unix(253402300799 - 9 * 3600) == "9999/12/31 23:59:59"
        assert format_unix(300000000000) == "-"


class TestFormatBirthday:
    """format_birthday 的公开 / 非公开处理。"""

    @pytest.mark.parametrize("visible", [False, 0, "0"])
    def test_hidden_regardless_of_value(self, visible: object) -> None:
        assert format_birthday("0601", visible) == "非公開"

    def test_mmdd_is_split(self) -> None:
        assert format_birthday("0601") == "06/01"
        assert format_birthday("1224", True) == "12/24"

    def test_empty_is_hidden(self) -> None:
        assert format_birthday(None) == "非公開"
        assert format_birthday("") == "非公開"

    def test_other_values_verbatim(self) -> None:
        assert format_birthday("6月1日") == "6月1日"
