"""
live_viewer.services.ranking
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

礼物排行榜合并 —— 以 ``base``（权威的前 N 名）为准，用 ``extra``（补充 / 实时增量拉取）补全。

合并键：``rank`` 存在时为 ``rank:<rank>``，否则 ``user_id`` 存在时为 ``user:<user_id>``，
都没有则该条目没有稳定键，不参与合并，直接追加到末尾。

输出顺序:
  1. ``base`` 原有顺序（命中的条目被 ``extra`` 的字段覆盖）
  2. 未被消费的有键 ``extra`` 条目（保持相对顺序）
  3. 无键的 ``extra`` 条目
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from live_viewer.core.logging import get_logger
from live_viewer.normalize.comments import key_text
from live_viewer.normalize.entities import resolve_ranking_item
from live_viewer.normalize.paths import first_present, get_in
from live_viewer.schemas.records import RankingEntry

logger = get_logger(__name__)


def ranking_key(item: Any) -> str:
    """条目的合并键，没有稳定键时返回空串。"""
    rank = first_present(get_in(item, "rank"), get_in(item, "rank_no"), get_in(item, "rankNo"))
    if rank is not None:
        return f"rank:{key_text(rank)}"
    user_id = first_present(get_in(item, "user", "user_id"), get_in(item, "user_id"))
    if user_id:
        return f"user:{key_text(user_id)}"
    return ""


def overlay_ranking_fields(base_item: Any, extra_item: Any) -> Any:
    """逐字段用 ``extra_item`` 覆盖 ``base_item``，冲突时 ``extra_item`` 胜出。

    两侧都必须是映射；否则以 ``extra_item`` 整体为准。不修改输入。
    """
    if not isinstance(base_item, Mapping) or not isinstance(extra_item, Mapping):
        return extra_item
    merged = dict(base_item)
    for field, value in extra_item.items():
        merged[field] = value
    return merged


def merge_ranking_lists(base: Sequence[Any], extra: Sequence[Any]) -> list[Any]:
    """合并基础排行榜与补充排行榜，保持 ``base`` 的相对顺序。"""
    if not base:
        return list(extra)
    if not extra:
        return list(base)

    extra_by_key: dict[str, Any] = {}
    extras_without_key: list[Any] = []
    for item in extra:
        key = ranking_key(item)
        if key:
            # 同键重复时保留首次出现的位置、最后一次出现的值
            extra_by_key[key] = item
        else:
            extras_without_key.append(item)

    used: set[str] = set()
    merged: list[Any] = []
    for item in base:
        key = ranking_key(item)
        if key and key in extra_by_key:
            used.add(key)
            merged.append(overlay_ranking_fields(item, extra_by_key[key]))
        else:
            merged.append(item)

    merged.extend(item for key, item in extra_by_key.items() if key not in used)
    merged.extend(extras_without_key)
    logger.debug(
        "排行榜合并完成 | base=%d | extra=%d | 命中=%d | 结果=%d",
        len(base), len(extra), len(used), len(merged),
    )
    return merged


def build_gift_ranking_view(gift_ranking: Any, gift_ranking_extra: Any) -> list[RankingEntry]:
    """合并基础 / 补充排行榜并规范化为显示用条目；非列表输入视为空列表。"""
    base = gift_ranking if isinstance(gift_ranking, (list, tuple)) else []
    extra = gift_ranking_extra if isinstance(gift_ranking_extra, (list, tuple)) else []
    return [resolve_ranking_item(item) for item in merge_ranking_lists(base, extra)]
