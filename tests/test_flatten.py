"""
tests.test_flatten
~~~~~~~~~~~~~~~~~~

flatten_for_display 单元测试。
"""
from __future__ import annotations

import pytest

from live_viewer.debug.flatten import flatten_for_display
from live_viewer.schemas.records import FlatRow


def _as_pairs(rows: list[FlatRow]) -> list[tuple[str, str]]:
    return [(row.key, row.value) for row in rows]


class TestFlattenForDisplay:
    """路径拼接、值格式化与三个上限。"""

    def test_nested_object(self) -> None:
        assert FlatRow(key="a.b", value="1") in flatten_for_display({"a": {"b": 1}})

    def test_value_formatting(self) -> None:
        rows = flatten_for_display({"n": 1234567, "t": True, "f": False, "s": "x", "z": None})
        assert _as_pairs(rows) == [
            ("n", "1,234,567"),
            ("t", "true"),
            ("f", "false"),
            ("s", "x"),
            ("z", "-"),
        ]

    def test_empty_containers(self) -> None:
        assert _as_pairs(flatten_for_display({"a": [], "b": {}})) == [("a", "[]"), ("b", "{}")]
        assert flatten_for_display({}) == []

    def test_scalar_root(self) -> None:
        assert _as_pairs(flatten_for_display(5)) == [("value", "5")]
        assert _as_pairs(flatten_for_display([1, "x"])) == [("value[0]", "1"), ("value[1]", "x")]

    def test_array_limit(self) -> None:
        rows = flatten_for_display({"a": list(range(5))}, max_array=2)
        assert _as_pairs(rows) == [("a[0]", "0"), ("a[1]", "1"), ("a[+]", "+3 items")]

    def test_depth_limit(self) -> None:
        rows = flatten_for_display({"a": {"b": {"c": {"d": 1}}}}, max_depth=1)
        assert _as_pairs(rows) == [("a.b.c", "[depth]")]

    def test_entry_limit(self) -> None:
        rows = flatten_for_display({str(i): i for i in range(10)}, max_entries=3)
        assert [row.key for row in rows] == ["0", "1", "2"]

    def test_default_limits(self) -> None:
        rows = flatten_for_display({"items": list(range(20))})
        assert len(rows) == 9
        assert rows[-1] == FlatRow(key="items[+]", value="+12 items")

    def test_traversal_order(self) -> None:
        rows = flatten_for_display({"b": [{"x": 1}, {"y": 2}], "a": 0})
        assert [row.key for row in rows] == ["b[0].x", "b[1].y", "a"]

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValueError, match="展开上限不能为负数"):
            flatten_for_display({}, max_depth=-1)
