"""
live_viewer.normalize.comments
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

评论的去重键与时间戳。

同一条评论可能同时来自首次拉取、轮询与广播 socket，外部状态容器用
``get_comment_key`` 的结果判断是否已收录。返回 None 表示“无法去重，
当作新评论处理”，调用方不应因此丢弃该评论。
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from live_viewer.normalize.paths import first_present, get_in
from live_viewer.normalize.primitives import pick_nullable_number

COMMENT_ID_PATHS: tuple[tuple[str, ...], ...] = (
    ("comment_id",),
    ("id",),
    ("comment", "id"),
    ("commentId",),
    ("comment_id_str",),
)


def key_text(value: Any) -> str:
    """把标量转为键文本：整数值的浮点数去掉 ``.0``，非标量视为空。"""
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_item(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump()
    return item


def get_comment_key(item: Any) -> str | None:
    """返回评论的去重键。

    优先级:
      1. ``comment_id`` / ``id`` / ``comment.id`` / ``commentId`` / ``comment_id_str``
      2. ``user_id|comment|created_at`` 组合键

    三个组合成分全部为空时返回 None（跳过去重）。
    """
    item = _as_item(item)
    raw = first_present(*(get_in(item, *path) for path in COMMENT_ID_PATHS))
    if raw is not None and raw != "":
        text = key_text(raw)
        if text:
            return text

    parts = [
        key_text(first_present(get_in(item, "user_id"), get_in(item, "user", "user_id"))),
        key_text(first_present(get_in(item, "comment"), get_in(item, "message"))),
        key_text(first_present(get_in(item, "created_at"), get_in(item, "createdAt"))),
    ]
    if not any(part.strip() for part in parts):
        return None
    return "|".join(parts)


def get_comment_timestamp(item: Any) -> int | float | None:
    """评论时间戳（Unix 秒），字段名因 API 版本而异；取不到时返回 None。"""
    item = _as_item(item)
    return pick_nullable_number(
        get_in(item, "created_at"),
        get_in(item, "createdAt"),
        get_in(item, "time"),
        get_in(item, "timestamp"),
    )
