"""
live_viewer.services.watch_state
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

由调用方显式创建、显式持有的状态容器（不提供模块级单例）。

- ``CommentFeed``  : 按去重键收录评论 / 系统通知，最多保留 ``limit`` 条最新记录。
- ``SearchState``  : 搜索页的可变状态（查询、结果、分页、推荐用户、用户详情等）。
"""
from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, Field

from live_viewer.core.config import settings
from live_viewer.core.logging import get_logger
from live_viewer.normalize.comments import get_comment_key
from live_viewer.schemas.records import PageMeta, SystemNoticeRecord

logger = get_logger(__name__)


def feed_key(item: Any) -> str | None:
    """系统通知自带非空 key，其它条目走评论去重键。"""
    if isinstance(item, SystemNoticeRecord):
        return item.key
    return get_comment_key(item)


class CommentFeed:
    """评论流容器，合并首次拉取、轮询与 socket 三个来源。

    去重键为 None 的条目无法去重，总是被收录。

    Attributes:
        limit: 最多保留的条目数，超出时淘汰最旧条目（其键也一并遗忘）。
    """

    def __init__(self, limit: int | None = None) -> None:
        self.limit: int = settings.COMMENT_HISTORY_LIMIT if limit is None else limit
        if self.limit <= 0:
            raise ValueError("limit 必须为正整数")
        self._items: deque[tuple[str | None, Any]] = deque()
        self._seen: set[str] = set()

    def add(self, item: Any) -> bool:
        """收录一条评论，重复时返回 False。"""
        key = feed_key(item)
        if key is not None:
            if key in self._seen:
                return False
            self._seen.add(key)
        self._items.append((key, item))

        while len(self._items) > self.limit:
            old_key, _ = self._items.popleft()
            if old_key is not None:
                self._seen.discard(old_key)
        return True

    def extend(self, items: Iterable[Any]) -> int:
        """批量收录，返回新增条数。"""
        added = sum(1 for item in items if self.add(item))
        if added:
            logger.debug("评论流新增 %d 条 | 当前 %d 条", added, len(self._items))
        return added

    def __contains__(self, item: Any) -> bool:
        key = feed_key(item)
        return key is not None and key in self._seen

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Any]:
        """按收录顺序返回当前条目。"""
        return [item for _, item in self._items]

    def clear(self) -> None:
        self._items.clear()
        self._seen.clear()


class SearchState(BaseModel):
    """搜索页状态。"""

    query: str = ""
    mode: Literal["live", "user"] = "live"
    results: list[Any] = Field(default_factory=list)
    searched: bool = False
    user_has_more: bool = True
    current_page: Any = None
    next_page: Any = None
    previous_page: Any = None
    total_entries: Any = None
    current_cursor: Any = None
    next_cursor: Any = None
    recommend_users: list[Any] = Field(default_factory=list)
    recommend_page: int = 1
    recommend_has_more: bool = True
    selected_user: Any = None
    selected_user_detail: Any = None
    selected_user_live_history: list[Any] = Field(default_factory=list)
    user_history_page: int = 1
    user_history_has_more: bool = True
    user_history_total: int | None = None
    user_history_current_page: int | None = None
    user_history_next_page: int | None = None
    user_history_previous_page: int | None = None
    user_detail_error: str = ""
    user_history_error: str = ""
    error: str = ""
    recommend_error: str = ""

    def apply_page_meta(self, meta: PageMeta) -> None:
        """写入分页信息；有下一页或下一游标时视为还有更多结果。"""
        self.current_page = meta.current_page
        self.next_page = meta.next_page
        self.previous_page = meta.previous_page
        self.total_entries = meta.total_entries
        self.current_cursor = meta.current_cursor
        self.next_cursor = meta.next_cursor
        self.user_has_more = meta.next_page is not None or bool(meta.next_cursor)
