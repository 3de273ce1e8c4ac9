"""
live_viewer.normalize.entities
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

按实体类型的规范化函数：用户、排行榜条目、礼物排行榜 URL、广播配置、直播流 URL。

每个函数都是全函数：接受任意输入（包括 None、类型错误的值），
按固定优先级的候选路径取第一个存在且类型正确的值，输出规范化记录。
只有 ``BroadcastConfig`` 在必需字段成对缺失时整体作废（返回 None）。
"""
from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, urlsplit

from live_viewer.core.config import settings
from live_viewer.core.logging import get_logger
from live_viewer.normalize.paths import as_mapping, first_present, get_in
from live_viewer.normalize.primitives import format_number, pick_first_string
from live_viewer.schemas.records import BroadcastConfig, RankingEntry, UserRecord

logger = get_logger(__name__)

DEFAULT_USER_NAME: str = "ユーザー"

RANKING_USER_FIELDS: tuple[str, ...] = ("user", "owner", "sender", "viewer", "account")
RANKING_GIFT_FIELDS: tuple[str, ...] = ("gift", "gift_master", "gift_detail", "gift_item", "present")
RANKING_POINT_FIELDS: tuple[str, ...] = (
    "gift_point",
    "point",
    "amount",
    "total_point",
    "total",
    "points",
)


# ── 用户 ──────────────────────────────────────────────────────────────

def get_user_id(user: Any) -> str:
    return pick_first_string(
        get_in(user, "user_id"), get_in(user, "id"), get_in(user, "user", "user_id"),
    )


def get_user_name(user: Any) -> str:
    return pick_first_string(
        get_in(user, "name"),
        get_in(user, "user", "name"),
        get_in(user, "username"),
        get_in(user, "screen_name"),
        DEFAULT_USER_NAME,
    )


def get_user_avatar(user: Any) -> str:
    return pick_first_string(
        get_in(user, "profile_image_url"),
        get_in(user, "user", "profile_image_url"),
        get_in(user, "avatar_image_url"),
        get_in(user, "image_url"),
    )


def get_user_description(user: Any) -> str:
    return pick_first_string(
        get_in(user, "description"), get_in(user, "user", "description"), get_in(user, "bio"),
    )


def get_user_live_id(user: Any) -> str:
    """直播中的用户才会带 live ID。"""
    return pick_first_string(
        get_in(user, "onlive", "live_id"),
        get_in(user, "onlive", "id"),
        get_in(user, "live", "live_id"),
        get_in(user, "live_id"),
    )


def normalize_user(user: Any) -> UserRecord:
    """把搜索结果或引用中的用户对象转换为 ``UserRecord``。"""
    return UserRecord(
        id=get_user_id(user),
        name=get_user_name(user),
        avatar_url=get_user_avatar(user),
        description=get_user_description(user),
        live_id=get_user_live_id(user),
    )


# ── 排行榜条目 ────────────────────────────────────────────────────────

def _first_container(item: Any, fields: tuple[str, ...]) -> Any:
    return first_present(*(get_in(item, name) for name in fields))


def resolve_ranking_item(item: Any) -> RankingEntry:
    """吸收 API 结构差异，把排行榜条目规范化为 ``RankingEntry``。

    “谁送的”子对象依次取 ``user / owner / sender / viewer / account``，
    “送了什么”子对象依次取 ``gift / gift_master / gift_detail / gift_item / present``。
    """
    user = as_mapping(_first_container(item, RANKING_USER_FIELDS))
    gift = as_mapping(_first_container(item, RANKING_GIFT_FIELDS))
    rank = first_present(get_in(item, "rank"), get_in(item, "rank_no"), get_in(item, "rankNo"))
    if isinstance(rank, bool) or not isinstance(rank, (int, float, str)):
        rank = "-"

    return RankingEntry(
        rank=rank,
        user_name=pick_first_string(
            user.get("name"), get_in(item, "user_name"), get_in(item, "name"), DEFAULT_USER_NAME,
        ),
        user_id=pick_first_string(user.get("user_id"), get_in(item, "user_id")),
        points=format_number(*(get_in(item, name) for name in RANKING_POINT_FIELDS)),
        gift_name=pick_first_string(
            gift.get("name"),
            gift.get("title"),
            get_in(item, "gift_name"),
            get_in(item, "gift_title"),
            get_in(item, "present_name"),
        ),
        gift_image_url=pick_first_string(
            get_in(item, "gift_image_url"),
            gift.get("image_url"),
            gift.get("icon_url"),
            gift.get("thumbnail_url"),
            gift.get("image"),
            get_in(item, "image_url"),
            get_in(item, "thumbnail_url"),
        ),
        user_image_url=pick_first_string(
            user.get("profile_image_url"),
            user.get("avatar_image_url"),
            user.get("image_url"),
            get_in(item, "user_image_url"),
            get_in(item, "profile_image_url"),
        ),
    )


# ── 礼物排行榜 URL / 用户 ID ──────────────────────────────────────────

def get_gift_ranking_url(polling: Any, live_info: Any) -> str:
    """先看轮询结果，再看直播详情。"""
    return pick_first_string(
        get_in(polling, "gift_ranking_url"),
        get_in(polling, "giftRankingUrl"),
        get_in(polling, "gift_ranking", "url"),
        get_in(polling, "gift", "ranking_url"),
        get_in(polling, "live", "gift_ranking_url"),
        get_in(live_info, "gift_ranking_url"),
        get_in(live_info, "live", "gift_ranking_url"),
    )


def _query_param(url: str, name: str) -> str:
    """读取绝对 URL 的查询参数；URL 非法时视为没有值。"""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("无法解析礼物排行榜 URL: %s", url)
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    values = parse_qs(parts.query).get(name)
    return values[0] if values else ""


def get_obfuscated_user_id(polling: Any, live_info: Any, gift_ranking_url: str) -> str:
    """排行榜请求需要的 ``obfuscated_user_id``：轮询 → 直播详情 → URL 查询参数。"""
    return pick_first_string(
        get_in(polling, "obfuscated_user_id"),
        get_in(polling, "current_user_rank", "user", "obfuscated_user_id"),
        get_in(polling, "user", "obfuscated_user_id"),
        get_in(live_info, "owner", "obfuscated_user_id"),
        get_in(live_info, "user", "obfuscated_user_id"),
        get_in(live_info, "live", "owner", "obfuscated_user_id"),
        get_in(live_info, "live", "user", "obfuscated_user_id"),
        _query_param(gift_ranking_url, "obfuscated_user_id"),
    )


# ── 广播配置 ──────────────────────────────────────────────────────────

def extract_broadcast_config(info: Any) -> BroadcastConfig | None:
    """从直播详情或流状态中抽取 bcsvr 连接配置，缺少任一字段时返回 None。"""
    socket_key = pick_first_string(
        get_in(info, "bcsvr_key"),
        get_in(info, "broadcast_key"),
        get_in(info, "live", "bcsvr_key"),
        get_in(info, "live", "broadcast_key"),
        get_in(info, "data", "bcsvr_key"),
        get_in(info, "data", "broadcast_key"),
    )
    host = pick_first_string(
        get_in(info, "broadcast_host"),
        get_in(info, "live", "broadcast_host"),
        get_in(info, "data", "broadcast_host"),
    )
    if not socket_key or not host:
        return None
    return BroadcastConfig(socket_key=socket_key, host=host)


# ── 直播流 URL ────────────────────────────────────────────────────────

def get_stream_url(status: Any) -> str:
    """取 HLS 播放地址：先看直接字段，再看 URL 列表中第一个可用项。"""
    direct = pick_first_string(
        get_in(status, "streaming_url_hls"),
        get_in(status, "streaming_url"),
        get_in(status, "hls_url"),
        get_in(status, "playlist_url"),
    )
    if direct:
        return direct

    candidates = first_present(
        get_in(status, "streaming_url_list"),
        get_in(status, "streaming_urls"),
        get_in(status, "url_list"),
    )
    if not isinstance(candidates, (list, tuple)):
        return ""
    for entry in candidates:
        if isinstance(entry, str) and entry:
            return entry
        url = pick_first_string(
            get_in(entry, "url"), get_in(entry, "streaming_url"), get_in(entry, "hls_url"),
        )
        if url:
            return url
    return ""


def build_llstream_ws_url(edge: str, stream_key: str, suffix: str) -> str:
    """由 LLStream 的 edge 与 stream key 组装 WS 地址。

    ``ws://`` / ``wss://`` 开头的 edge 原样使用（去掉末尾斜杠），
    否则使用 ``ws://<edge>``，未带端口时补上默认端口。
    """
    if not edge or not stream_key:
        return ""
    if edge.startswith(("ws://", "wss://")):
        return f"{edge.rstrip('/')}/ws/{stream_key}/{suffix}"
    host = edge if ":" in edge else f"{edge}:{settings.LLSTREAM_DEFAULT_PORT}"
    return f"ws://{host}/ws/{stream_key}/{suffix}"


def _llstream_ws_url(status: Any, direct_field: str, suffix: str) -> str:
    direct = pick_first_string(
        get_in(status, direct_field),
        get_in(status, "live", direct_field),
        get_in(status, "data", direct_field),
    )
    if direct:
        return direct

    stream_key = pick_first_string(
        get_in(status, "streaming_key"),
        get_in(status, "live", "streaming_key"),
        get_in(status, "data", "streaming_key"),
    )
    edge = pick_first_string(
        get_in(status, "streaming_url_edge"),
        get_in(status, "live", "streaming_url_edge"),
        get_in(status, "data", "streaming_url_edge"),
    )
    return build_llstream_ws_url(edge, stream_key, suffix)


def get_llstream_video_ws_url(status: Any) -> str:
    return _llstream_ws_url(status, "streaming_url_llstream_video", "video/avc")


def get_llstream_audio_ws_url(status: Any) -> str:
    return _llstream_ws_url(status, "streaming_url_llstream_audio", "audio/aac")
