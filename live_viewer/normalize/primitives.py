"""
live_viewer.normalize.primitives
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

标量取值原语：从多个候选值中挑出第一个有效值，以及数字 / 时间 / 生日的显示格式化。

所有函数都是全函数（total），不会抛异常，找不到时返回约定的默认值：

- ``pick_first_string``   → ``""``
- ``pick_first_number``   → ``0``
- ``pick_nullable_number`` → ``None``（区分“未知”与“零”）
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from live_viewer.core.config import settings

HIDDEN_BIRTHDAY: str = "非公開"
NO_DATE: str = "-"


def pick_first_string(*values: Any) -> str:
    """返回第一个含非空白字符的字符串（原样返回，不做 strip）。"""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value
    return ""


def _parse_number(value: Any) -> int | float | None:
    """把单个候选值解析为有限数字，无法解析时返回 None。"""
    # bool 是 int 的子类，但不算数字
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if "_" in text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def pick_nullable_number(*values: Any) -> int | float | None:
    """返回第一个有限数字（数字或可解析为数字的字符串），找不到时返回 None。

    用于视听人数、时间戳等“0 也有意义”的字段。
    """
    for value in values:
        parsed = _parse_number(value)
        if parsed is not None:
            return parsed
    return None


def pick_first_number(*values: Any) -> int | float:
    """同 ``pick_nullable_number``，但找不到时返回 0。

    注意 0 同时表示“找到 0”和“什么都没找到”。
    """
    parsed = pick_nullable_number(*values)
    return 0 if parsed is None else parsed


def _group_digits(num: int | float) -> str:
    if isinstance(num, int) or float(num).is_integer():
        return f"{int(num):,}"
    # 最多保留三位小数
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def format_number(*values: Any) -> str:
    """取第一个有效数字并按千位分组格式化；0 与未找到都渲染为 ``"0"``。"""
    num = pick_first_number(*values)
    if not num:
        return "0"
    return _group_digits(num)


def _display_zone() -> ZoneInfo | None:
    try:
        return ZoneInfo(settings.DISPLAY_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def format_unix(*values: Any, with_time: bool = True) -> str:
    """把 Unix 秒格式化为本地日期（或日期 + 时间）。

    Args:
        values: 候选值，取第一个有效数字。
        with_time: 为 False 时只输出日期。

    Returns:
        ``YYYY/MM/DD HH:MM:SS`` 或 ``YYYY/MM/DD``；0 或非法值返回 ``"-"``。
    """
    seconds = pick_first_number(*values)
    if not seconds:
        return NO_DATE
    try:
        moment = datetime.fromtimestamp(seconds, tz=_display_zone())
    except (OverflowError, OSError, ValueError):
        return NO_DATE
    return moment.strftime("%Y/%m/%d %H:%M:%S" if with_time else "%Y/%m/%d")


def format_birthday(value: Any, visible: Any = None) -> str:
    """格式化生日。

    ``visible`` 为 False / 0 / "0" 时无论 ``value`` 为何都返回 ``"非公開"``；
    四位 ``MMDD`` 渲染为 ``MM/DD``，其它非空字符串原样返回。
    """
    if visible is False or visible == 0 or visible == "0":
        return HIDDEN_BIRTHDAY
    raw = pick_first_string(value)
    if not raw:
        return HIDDEN_BIRTHDAY
    if len(raw) == 4:
        return f"{raw[:2]}/{raw[2:]}"
    return raw
