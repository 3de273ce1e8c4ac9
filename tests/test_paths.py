"""
tests.test_paths
~~~~~~~~~~~~~~~~

候选路径解析与列表提取单元测试。
"""
from __future__ import annotations

from live_viewer.normalize.paths import (
    extract_comments,
    extract_list,
    extract_lives,
    extract_meta,
    extract_ranking,
    extract_users,
    first_present,
    get_in,
    resolve_path,
)


class TestResolvePath:
    """安全下钻：任何一段缺失或类型不符都返回 None。"""

    def test_nested_mapping(self) -> None:
        assert get_in({"a": {"b": {"c": 1}}}, "a", "b", "c") == 1

    def test_missing_intermediate_short_circuits(self) -> None:
        assert get_in({"a": None}, "a", "b") is None
        assert get_in({"a": "text"}, "a", "b") is None
        assert get_in(None, "a") is None

    def test_list_index_segment(self) -> None:
        assert resolve_path({"a": [{"b": 1}, {"b": 2}]}, "a.1.b") == 2
        assert resolve_path({"a": [1]}, "a.5") is None

    def test_non_ascii_digit_segment_is_not_an_index(self) -> None:
        """上标数字不是十进制下标，应视为缺失而不是抛错。"""
        assert resolve_path({"a": [[1]]}, "a.²") is None
        assert extract_list({"a": [[1]]}, ["a.²", "a"]) == [[1]]

    def test_first_present_keeps_falsy_values(self) -> None:
        assert first_present(None, 0, 1) == 0
        assert first_present(None, "", "x") == ""
        assert first_present(None, None) is None


class TestExtractList:
    """extract_list 按顺序返回第一个数组。"""

    def test_dotted_candidates(self) -> None:
        assert extract_list({"a": {"b": [1, 2]}}, ["a.c", "a.b"]) == [1, 2]

    def test_skips_non_array_values(self) -> None:
        res = {"users": "oops", "data": {"users": [{"user_id": "1"}]}}
        assert extract_list(res, ["users", "data.users"]) == [{"user_id": "1"}]

    def test_no_match_returns_empty(self) -> None:
        assert extract_list({"x": 1}, ["a", "b.c"]) == []
        assert extract_list(None, ["a"]) == []

    def test_entity_extractors(self) -> None:
        assert extract_users({"data": {"search_result": [1]}}) == [1]
        assert extract_lives({"history": [2]}) == [2]
        assert extract_comments({"live_comments": [3]}) == [3]

    def test_ranking_envelopes(self) -> None:
        """礼物排行榜的多种外壳形状都能取到。"""
        assert extract_ranking({"ranking": [1]}) == [1]
        assert extract_ranking({"gift_ranking": {"ranks": [2]}}) == [2]
        assert extract_ranking({"data": {"gift_ranking": {"rankings": [3]}}}) == [3]
        assert extract_ranking({"items": [4]}) == [4]
        assert extract_ranking({"data": [5]}) == [5]
        assert extract_ranking({"data": {}}) == []


class TestExtractMeta:
    """分页信息：data 外壳优先，兼容 camelCase。"""

    def test_reads_data_wrapper(self) -> None:
        meta = extract_meta({"data": {"current_page": 2, "nextPage": 3, "total_entries": 40}})
        assert meta.current_page == 2
        assert meta.next_page == 3
        assert meta.total_entries == 40
        assert meta.previous_page is None

    def test_reads_top_level(self) -> None:
        meta = extract_meta({"currentCursor": "c1", "next_cursor": "c2"})
        assert meta.current_cursor == "c1"
        assert meta.next_cursor == "c2"

    def test_malformed_input(self) -> None:
        meta = extract_meta("not a dict")
        assert meta.current_page is None
        assert meta.next_cursor is None
