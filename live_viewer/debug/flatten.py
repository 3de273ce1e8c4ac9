"""
live_viewer.debug.flatten
~~~~~~~~~~~~~~~~~~~~~~~~~

把任意嵌套结构展开为 ``路径 → 值`` 的行，供调试面板显示。

深度优先遍历，行顺序 = 对象插入顺序 + 数组下标顺序。三个上限互相独立:

- ``max_entries``: 输出行数达到上限后停止遍历
- ``max_depth``  : 超出深度时输出一行 ``[depth]``
- ``max_array``  : 每层数组最多展开的元素数，其余折叠为 ``<path>[+] → +N items``
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from live_viewer.core.config import settings
from live_viewer.normalize.primitives import format_number
from live_viewer.schemas.records import FlatRow

DEPTH_MARKER: str = "[depth]"
MISSING: str = "-"


class _Flattener:
    """单次展开的遍历状态。"""

    def __init__(self, max_entries: int, max_depth: int, max_array: int) -> None:
        self.max_entries = max_entries
        self.max_depth = max_depth
        self.max_array = max_array
        self.rows: list[FlatRow] = []

    @property
    def full(self) -> bool:
        return len(self.rows) >= self.max_entries

    def push(self, key: str, value: Any) -> None:
        if not key or self.full:
            return
        if isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, (int, float)):
            text = _format_scalar_number(value)
        elif value is None:
            text = MISSING
        else:
            text = str(value)
        self.rows.append(FlatRow(key=key, value=text))

    def walk(self, value: Any, path: str, depth: int) -> None:
        if self.full:
            return
        if depth > self.max_depth:
            self.push(path, DEPTH_MARKER)
            return
        if value is None:
            self.push(path, MISSING)
            return
        if isinstance(value, (str, int, float, bool)):
            self.push(path, value)
            return
        if isinstance(value, (list, tuple)):
            if not value:
                self.push(path, "[]")
                return
            limit = min(len(value), self.max_array)
            for index in range(limit):
                self.walk(value[index], f"{path}[{index}]", depth + 1)
            if len(value) > limit:
                self.push(f"{path}[+]", f"+{len(value) - limit} items")
            return
        if isinstance(value, Mapping):
            if not value:
                self.push(path, "{}")
                return
            for key, inner in value.items():
                self.walk(inner, f"{path}.{key}" if path else str(key), depth + 1)
                if self.full:
                    break
            return
        self.push(path, value)


def _format_scalar_number(value: int | float) -> str:
    # NaN / inf 按原样文本输出
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return format_number(value)


def flatten_for_display(
    value: Any,
    *,
    max_entries: int | None = None,
    max_depth: int | None = None,
    max_array: int | None = None,
) -> list[FlatRow]:
    """展开任意值为显示行。

    顶层为映射时直接以其键作为路径根，否则以 ``value`` 为根路径。

    Args:
        value: 任意 JSON 兼容值。
        max_entries: 最多输出行数（默认 240）。
        max_depth: 最大深度（默认 4）。
        max_array: 每层数组展开元素数（默认 8）。

    Returns:
        ``FlatRow`` 列表。
    """
    flattener = _Flattener(
        max_entries=settings.FLATTEN_MAX_ENTRIES if max_entries is None else max_entries,
        max_depth=settings.FLATTEN_MAX_DEPTH if max_depth is None else max_depth,
        max_array=settings.FLATTEN_MAX_ARRAY if max_array is None else max_array,
    )
    if flattener.max_entries < 0 or flattener.max_depth < 0 or flattener.max_array < 0:
        raise ValueError("展开上限不能为负数")

    if isinstance(value, Mapping):
        for key, inner in value.items():
            flattener.walk(inner, str(key), 0)
            if flattener.full:
                break
    else:
        flattener.walk(value, "value", 0)
    return flattener.rows
