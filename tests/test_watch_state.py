"""
tests.test_watch_state
~~~~~~~~~~~~~~~~~~~~~~

CommentFeed 去重容器与 SearchState 单元测试。
"""
from __future__ import annotations

from typing import Any

import pytest

from live_viewer.normalize.broadcast import classify_broadcast_message
from live_viewer.normalize.paths import extract_meta
from live_viewer.services.watch_state import CommentFeed, SearchState


class TestCommentFeed:
    """按去重键收录。"""

    def test_duplicate_from_other_source_is_skipped(self, comment_message: dict[str, Any]) -> None:
        """同一条评论先来自 REST 拉取，再来自 socket，只收录一次。"""
        feed = CommentFeed(limit=10)
        fetched = {"comment_id": "987654", "user_id": "u-22", "comment": "こんにちは"}
        assert feed.add(fetched) is True
        assert feed.add(classify_broadcast_message(comment_message)) is False
        assert len(feed) == 1

    def test_notices_use_their_own_key(self, join_message: dict[str, Any]) -> None:
        feed = CommentFeed(limit=10)
        notice = classify_broadcast_message(join_message)
        assert feed.add(notice) is True
        assert feed.add(classify_broadcast_message(join_message)) is False
        assert notice in feed

    def test_keyless_items_are_always_added(self) -> None:
        feed = CommentFeed(limit=10)
        assert feed.add({}) is True
        assert feed.add({}) is True
        assert len(feed) == 2
        assert {} not in feed

    def test_extend_counts_new_items(self) -> None:
        feed = CommentFeed(limit=10)
        added = feed.extend([{"id": 1}, {"id": 2}, {"id": 1}])
        assert added == 2
        assert [item["id"] for item in feed.items] == [1, 2]

    def test_limit_evicts_oldest_and_forgets_key(self) -> None:
        feed = CommentFeed(limit=2)
        feed.extend([{"id": 1}, {"id": 2}, {"id": 3}])
        assert [item["id"] for item in feed.items] == [2, 3]
        assert {"id": 1} not in feed
        assert feed.add({"id": 1}) is True

    def test_default_limit_from_settings(self) -> None:
        assert CommentFeed().limit == 500

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError, match="limit 必须为正整数"):
            CommentFeed(limit=0)

    def test_clear(self) -> None:
        feed = CommentFeed(limit=5)
        feed.add({"id": 1})
        feed.clear()
        assert len(feed) == 0
        assert feed.add({"id": 1}) is True


class TestSearchState:
    """显式持有的搜索状态。"""

    def test_defaults(self) -> None:
        state = SearchState()
        assert state.mode == "live"
        assert state.results == []
        assert state.recommend_page == 1
        assert state.user_has_more is True
        assert state.next_cursor is None

    def test_instances_are_independent(self) -> None:
        a = SearchState()
        b = SearchState()
        a.results.append({"id": 1})
        assert b.results == []

    def test_apply_page_meta(self) -> None:
        state = SearchState(query="雑談", mode="user")
        state.apply_page_meta(extract_meta({"data": {"current_page": 1, "next_page": 2, "total_entries": 30}}))
        assert state.current_page == 1
        assert state.next_page == 2
        assert state.total_entries == 30
        assert state.user_has_more is True

        state.apply_page_meta(extract_meta({"current_page": 2}))
        assert state.next_page is None
        assert state.user_has_more is False

    def test_apply_cursor_meta(self) -> None:
        state = SearchState()
        state.apply_page_meta(extract_meta({"next_cursor": "abc"}))
        assert state.user_has_more is True
