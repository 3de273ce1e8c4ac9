"""
live_viewer.schemas
~~~~~~~~~~~~~~~~~~~
Pydantic models for the canonical records produced by the normalizers.
"""
from live_viewer.schemas.records import (
    BroadcastConfig,
    BroadcastFrame,
    CommentRecord,
    FlatRow,
    LiveSessionView,
    PageMeta,
    RankingEntry,
    SystemNoticeRecord,
    UserRecord,
)

__all__ = [
    "BroadcastConfig",
    "BroadcastFrame",
    "CommentRecord",
    "FlatRow",
    "LiveSessionView",
    "PageMeta",
    "RankingEntry",
    "SystemNoticeRecord",
    "UserRecord",
]
