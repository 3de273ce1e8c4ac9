"""
live_viewer.normalize.broadcast
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

广播 socket（bcsvr）消息解析。

消息类型由数字字段 ``t``（或 ``type``）区分:

====  ==================  ===========================
t     类别                处理
====  ==================  ===========================
1     用户评论            → ``CommentRecord``
3     系统通知（入室）    → ``SystemNoticeRecord``
38    心跳                忽略
123   直播结束            忽略（由外部生命周期协作者处理）
====  ==================  ===========================

分类函数是纯函数，不抛异常；无法处理的消息一律返回 None。
"""
from __future__ import annotations

import json
import time
from collections.abc import Mapping
from enum import IntEnum
from typing import Any

from live_viewer.core.logging import get_logger, log, log_warn
from live_viewer.normalize.comments import key_text
from live_viewer.normalize.paths import first_present
from live_viewer.normalize.primitives import pick_first_string, pick_nullable_number
from live_viewer.schemas.records import BroadcastFrame, CommentRecord, SystemNoticeRecord

logger = get_logger(__name__)

JOIN_TEXT_TEMPLATE: str = "{name} が入室しました"
JOIN_PLACEHOLDER_TEXT: str = "入室通知"
SUMMARY_TEXT_LIMIT: int = 80


class BroadcastMessageType(IntEnum):
    COMMENT = 1
    SYSTEM_NOTICE = 3
    KEEPALIVE = 38
    SESSION_END = 123


def message_type(msg: Any) -> int | float | None:
    """读取消息类型（``t`` 优先，其次 ``type``）。"""
    if not isinstance(msg, Mapping):
        return None
    return pick_nullable_number(msg.get("t"), msg.get("type"))


def is_session_end(msg: Any) -> bool:
    """是否为直播结束通知，供外部会话生命周期协作者使用。"""
    return message_type(msg) == BroadcastMessageType.SESSION_END


def _optional_id(*values: Any) -> str | None:
    text = key_text(first_present(*values))
    return text or None


def _string_or_empty(*values: Any) -> str:
    value = first_present(*values)
    return value if isinstance(value, str) else key_text(value)


def to_broadcast_comment(msg: Any) -> CommentRecord | None:
    """把 t=1 的消息转换为评论；其它类型或正文为空时返回 None。"""
    if message_type(msg) != BroadcastMessageType.COMMENT:
        return None

    text = pick_first_string(msg.get("cm"), msg.get("comment"), msg.get("speech"), msg.get("message"))
    if not text:
        return None

    return CommentRecord(
        comment_id=_optional_id(msg.get("lci"), msg.get("comment_id")),
        user_id=_string_or_empty(msg.get("u"), msg.get("user_id")),
        user_name=_string_or_empty(msg.get("ac"), msg.get("user_name")),
        comment=text,
        created_at=pick_nullable_number(msg.get("created_at"), msg.get("createdAt")),
        profile_image_url=_string_or_empty(msg.get("iurl"), msg.get("profile_image_url")),
        is_moderator=first_present(msg.get("is_moderator"), 0),
        is_cheerleader=first_present(msg.get("is_cheerleader"), 0),
        vip_rank=first_present(msg.get("vip_rank"), 0),
        yell_rank=first_present(msg.get("yell_rank"), 0),
        yell_level=first_present(msg.get("yell_level"), 0),
        profile_frame_image_url=_string_or_empty(msg.get("profile_frame_image_url")),
        push_image_url=_string_or_empty(msg.get("push_image_url")),
        raw=dict(msg),
    )


def to_broadcast_system_notice(msg: Any, now: float | None = None) -> SystemNoticeRecord | None:
    """把 t=3 的消息转换为系统通知；其它类型返回 None。

    带用户名时合成入室文本，否则依次取 ``cm / message / speech / notice_text / text``，
    再不行就用占位文本。没有时间戳时取当前时间（``now`` 可注入，便于测试）。
    """
    if message_type(msg) != BroadcastMessageType.SYSTEM_NOTICE:
        return None

    user_name = pick_first_string(msg.get("ac"), msg.get("user_name"))
    user_id = pick_first_string(msg.get("u"), msg.get("user_id"))
    if user_name:
        text = JOIN_TEXT_TEMPLATE.format(name=user_name)
    else:
        text = pick_first_string(
            msg.get("cm"),
            msg.get("message"),
            msg.get("speech"),
            msg.get("notice_text"),
            msg.get("text"),
        ) or JOIN_PLACEHOLDER_TEXT

    created_at = pick_nullable_number(msg.get("created_at"), msg.get("createdAt"))
    if created_at is None:
        created_at = int(time.time() if now is None else now)

    comment_id = pick_first_string(msg.get("lci"), msg.get("comment_id"))
    key = comment_id or f"{key_text(created_at)}:{user_id}:{text}"

    return SystemNoticeRecord(
        key=key,
        text=text,
        user_name=user_name,
        user_id=user_id,
        profile_image_url=pick_first_string(msg.get("iurl"), msg.get("profile_image_url")),
        viewers=pick_nullable_number(
            msg.get("online_viewer_num"), msg.get("online_user_num"), msg.get("viewer_num"),
        ),
        created_at=created_at,
        raw=dict(msg),
    )


def classify_broadcast_message(msg: Any) -> CommentRecord | SystemNoticeRecord | None:
    """把一条 socket 消息分类为评论、系统通知或 None（本层不处理）。"""
    kind = message_type(msg)
    if kind == BroadcastMessageType.COMMENT:
        return to_broadcast_comment(msg)
    if kind == BroadcastMessageType.SYSTEM_NOTICE:
        return to_broadcast_system_notice(msg)
    if kind == BroadcastMessageType.SESSION_END:
        log("ws", "broadcast ended")
    elif kind != BroadcastMessageType.KEEPALIVE:
        logger.debug("忽略未知的广播消息类型: t=%s", kind)
    return None


# ── payload 解码 / 日志摘要 ──────────────────────────────────────────

def _split_frame(line: str) -> list[str]:
    """按前两个 tab / 空格切成至多三段。"""
    parts: list[str] = []
    rest = line
    while len(parts) < 2:
        positions = [pos for pos in (rest.find("\t"), rest.find(" ")) if pos >= 0]
        if not positions:
            break
        cut = min(positions)
        parts.append(rest[:cut])
        rest = rest[cut + 1:]
    parts.append(rest)
    return parts


def parse_broadcast_payload(payload: str) -> list[BroadcastFrame]:
    """把 socket 收到的文本 payload 解码为逐行的 ``BroadcastFrame``。

    每行形如 ``MSG<TAB>key<TAB>{json}``；非 MSG 行（ACK / ERR / PING）只保留命令。
    JSON 解码失败的 MSG 行保留，``message`` 为 None。
    """
    frames: list[BroadcastFrame] = []
    for raw_line in payload.splitlines():
        line = raw_line.strip().strip("\0").strip()
        if not line:
            continue
        parts = _split_frame(line)
        command = parts[0]
        key = parts[1] if len(parts) > 1 else ""
        body = parts[2] if len(parts) > 2 else ""

        message: dict[str, Any] | None = None
        if command == "MSG" and body:
            try:
                decoded = json.loads(body)
            except json.JSONDecodeError as e:
                log_warn("ws", f"broadcast: JSON error: {e}")
            else:
                if isinstance(decoded, dict):
                    message = decoded
        frames.append(BroadcastFrame(command=command, key=key, body=body, message=message))
    return frames


def _truncate(text: str, limit: int = SUMMARY_TEXT_LIMIT) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def summarize_broadcast_message(msg: Any) -> str:
    """生成一行诊断摘要，例如 ``MSG t=1 lci=.. u=.. ac=.. cm=..``。"""
    if not isinstance(msg, Mapping):
        return "MSG t=-1"
    kind = msg.get("t")
    if isinstance(kind, bool) or not isinstance(kind, int):
        kind = -1

    def _text(field: str) -> str:
        value = msg.get(field)
        return value if isinstance(value, str) else ""

    def _int(field: str) -> int:
        value = msg.get(field)
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    if kind == BroadcastMessageType.COMMENT:
        return (
            f"MSG t=1 lci={_int('lci')} u={_text('u')} ac={_text('ac')} "
            f"cm={_truncate(_text('cm'))}"
        )
    if kind == BroadcastMessageType.SYSTEM_NOTICE:
        viewers = _int("online_viewer_num")
        if _text("ac"):
            return f"MSG t=3 (join) u={_text('u')} ac={_text('ac')} viewers={viewers}"
        # 取第一个存在的字符串字段，空串也会终止回退
        text = next(
            (msg[f] for f in ("cm", "message", "speech") if isinstance(msg.get(f), str)), "",
        )
        if not text:
            return f"MSG t=3 viewers={viewers}"
        return f"MSG t=3 viewers={viewers} {_truncate(text)}"
    if kind == BroadcastMessageType.KEEPALIVE:
        return "MSG t=38 (keepalive)"
    if kind == BroadcastMessageType.SESSION_END:
        return "MSG t=123 (broadcast ended)"
    return f"MSG t={kind}"
