"""
live_viewer.services.live_view
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

直播间视图模型 —— 合并首次拉取的直播详情（静态快照）与周期轮询结果（轮询快照）。

合并规则:
- 易变计数（观众数、评论数、星星 / 礼物数、直播状态、连麦空位）轮询优先。
- 标题、主播、开播时间等不变字段静态快照优先，缺失时再看轮询。
- 关注状态只有静态快照携带。
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from live_viewer.normalize.paths import as_mapping, first_present, get_in
from live_viewer.normalize.primitives import pick_first_number, pick_first_string
from live_viewer.schemas.records import LiveSessionView

NO_TITLE: str = "タイトルなし"
UNKNOWN: str = "不明"
STATUS_LIVE: str = "配信中"
STATUS_ENDED: str = "終了"


def _unwrap_live(snapshot: Any) -> Mapping[str, Any]:
    """快照可能是 ``{"live": {...}}`` 外壳，也可能就是 live 对象本身。"""
    if snapshot is None:
        return {}
    return as_mapping(first_present(get_in(snapshot, "live"), snapshot))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _tri_state(*values: Any) -> bool | None:
    """取第一个数字或布尔值并转为布尔；都没有时返回 None（未知）。"""
    for value in values:
        if isinstance(value, bool):
            return value
        if _is_number(value):
            return bool(value)
    return None


def _resolve_is_live(snapshot: Any, src: Mapping[str, Any], poll_src: Mapping[str, Any]) -> bool:
    """轮询标志 → 静态标志 → 顶层标志 → ``ended_at == 0``。"""
    for flag in (poll_src.get("is_live"), src.get("is_live"), get_in(snapshot, "is_live")):
        if isinstance(flag, bool):
            return flag
    ended_at = src.get("ended_at")
    return _is_number(ended_at) and ended_at == 0


def build_live_info_view(live_info: Any, polling: Any) -> LiveSessionView | None:
    """合并静态快照与轮询快照，两者都缺失时返回 None。

    同样的输入总是得到相同的结果（无隐藏状态）。
    """
    if live_info is None and polling is None:
        return None
    src = _unwrap_live(live_info)
    poll_src = _unwrap_live(polling)

    title = pick_first_string(
        src.get("title"), src.get("name"), poll_src.get("title"), poll_src.get("name"),
    )
    owner = pick_first_string(
        get_in(src, "owner", "name"),
        get_in(src, "user", "name"),
        get_in(poll_src, "owner", "name"),
        get_in(poll_src, "user", "name"),
    )
    owner_user_id = pick_first_string(
        get_in(src, "owner", "user_id"),
        get_in(src, "user", "user_id"),
        get_in(poll_src, "owner", "user_id"),
        get_in(poll_src, "user", "user_id"),
    )
    # 易变计数：轮询优先
    total_viewers = pick_first_number(poll_src.get("total_viewer_num"), src.get("total_viewer_num"))
    online_viewers = pick_first_number(poll_src.get("online_user_num"), src.get("online_user_num"))
    comment_num = pick_first_number(poll_src.get("comment_num"), src.get("comment_num"))
    star_count = pick_first_number(poll_src.get("star_num"), src.get("star_num"))
    gift_count = pick_first_number(poll_src.get("gift_num"), src.get("gift_num"))
    # 开播时间不会变化：静态优先
    started_at = pick_first_number(src.get("started_at"), poll_src.get("started_at"))
    app_title = pick_first_string(
        src.get("app_title"),
        src.get("app_short_title"),
        poll_src.get("app_title"),
        poll_src.get("app_short_title"),
    )
    is_live = _resolve_is_live(live_info, src, poll_src)

    return LiveSessionView(
        title=title or NO_TITLE,
        owner=owner or UNKNOWN,
        owner_user_id=owner_user_id,
        is_following=_tri_state(get_in(src, "owner", "is_following"), src.get("is_following")),
        viewers=online_viewers or total_viewers,
        total_viewers=total_viewers,
        online_viewers=online_viewers,
        comment_num=comment_num,
        started_at=started_at,
        app_title=app_title or UNKNOWN,
        collab_vacancy=_tri_state(
            poll_src.get("collab_has_vacancy"), src.get("collab_has_vacancy"),
        ),
        status=STATUS_LIVE if is_live else STATUS_ENDED,
        is_live=is_live,
        star_count=star_count,
        gift_count=gift_count,
        live_id=pick_first_string(src.get("live_id"), poll_src.get("live_id")),
    )
