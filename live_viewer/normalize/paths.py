"""
live_viewer.normalize.paths
~~~~~~~~~~~~~~~~~~~~~~~~~~~

按候选路径从任意 JSON 树中安全取值。

上游 API 没有可机读的版本号，同一字段在不同版本里可能位于顶层，
也可能被包进 ``data`` 之类的外壳。这里把已知形状编码为一个有序的候选路径表，
从上往下尝试，第一个命中的即为结果；全部落空时返回空列表，而不是报错。
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from live_viewer.schemas.records import PageMeta

USER_LIST_PATHS: tuple[str, ...] = (
    "users",
    "user_list",
    "result",
    "search_result",
    "data.users",
    "data.user_list",
    "data.result",
    "data.search_result",
)

LIVE_LIST_PATHS: tuple[str, ...] = ("lives", "live_list", "history", "data")

COMMENT_LIST_PATHS: tuple[str, ...] = ("comments", "live_comments", "data")

RANKING_LIST_PATHS: tuple[str, ...] = (
    "ranking",
    "rankings",
    "gift_ranking",
    "gift_ranking.ranking",
    "gift_ranking.rankings",
    "gift_ranking.ranks",
    "data.ranking",
    "data.rankings",
    "data.gift_ranking",
    "data.gift_ranking.ranking",
    "data.gift_ranking.rankings",
    "data.gift_ranking.ranks",
    "ranks",
    "items",
    "list",
    "results",
    "data",
)


def get_in(value: Any, *keys: str) -> Any:
    """沿 ``keys`` 逐段下钻，任何一段缺失或类型不符都返回 None。

    映射按键取值；列表/元组仅接受十进制数字段作为下标。
    """
    current = value
    for key in keys:
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, (list, tuple)) and key.isdecimal():
            index = int(key)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def resolve_path(value: Any, path: str) -> Any:
    """解析平铺键（``"users"``）或点分路径（``"data.users"``）。"""
    if "." in path:
        return get_in(value, *path.split("."))
    return get_in(value, path)


def first_present(*values: Any) -> Any:
    """返回第一个不为 None 的值（空串、0 也算“存在”）。"""
    for value in values:
        if value is not None:
            return value
    return None


def as_mapping(value: Any) -> Mapping[str, Any]:
    """非映射值一律视为空映射。"""
    return value if isinstance(value, Mapping) else {}


def extract_list(response: Any, paths: Iterable[str]) -> list[Any]:
    """按顺序尝试 ``paths``，返回第一个解析为数组的值；都不命中时返回 ``[]``。"""
    for path in paths:
        value = resolve_path(response, path)
        if isinstance(value, list):
            return value
        if isinstance(value, tuple):
            return list(value)
    return []


def extract_users(response: Any) -> list[Any]:
    return extract_list(response, USER_LIST_PATHS)


def extract_lives(response: Any) -> list[Any]:
    return extract_list(response, LIVE_LIST_PATHS)


def extract_comments(response: Any) -> list[Any]:
    return extract_list(response, COMMENT_LIST_PATHS)


def extract_ranking(response: Any) -> list[Any]:
    """提取礼物排行榜；其嵌套结构因 API 版本而异，候选路径最多。"""
    return extract_list(response, RANKING_LIST_PATHS)


def _pick_meta(meta: Mapping[str, Any], names: Sequence[str]) -> Any:
    return first_present(*(meta.get(name) for name in names))


def extract_meta(response: Any) -> PageMeta:
    """读取分页信息：优先 ``data`` 外壳，其次顶层；兼容 snake_case / camelCase。"""
    meta = as_mapping(first_present(get_in(response, "data"), response))
    return PageMeta(
        current_page=_pick_meta(meta, ("current_page", "currentPage")),
        next_page=_pick_meta(meta, ("next_page", "nextPage")),
        previous_page=_pick_meta(meta, ("previous_page", "previousPage")),
        total_entries=_pick_meta(meta, ("total_entries", "totalEntries")),
        current_cursor=_pick_meta(meta, ("current_cursor", "currentCursor")),
        next_cursor=_pick_meta(meta, ("next_cursor", "nextCursor")),
    )
