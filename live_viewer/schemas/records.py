"""
live_viewer.schemas.records
~~~~~~~~~~~~~~~~~~~~~~~~~~~

规范化后的只读记录（Pydantic 模型）。

每次原始 payload 变化都会重新构建一份新记录，记录本身不可变（``frozen=True``）。
保留旧视图模型、与新值做 diff 由外部状态容器负责。
"""
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class _Record(BaseModel):
    """所有规范化记录的基类：不可变。"""

    model_config = ConfigDict(frozen=True)


class UserRecord(_Record):
    """搜索结果 / 引用中的用户。"""

    id: str = Field(default="", description="用户 ID")
    name: str = Field(default="ユーザー", description="显示名")
    avatar_url: str = Field(default="", description="头像 URL，可能为空")
    description: str = Field(default="", description="简介，可能为空")
    live_id: str = Field(default="", description="正在直播时的 live ID，否则为空")


class LiveSessionView(_Record):
    """静态快照 + 轮询快照合并后的直播间视图模型。"""

    title: str = Field(default="タイトルなし", description="直播标题")
    owner: str = Field(default="不明", description="主播名")
    owner_user_id: str = Field(default="", description="主播用户 ID")
    is_following: bool | None = Field(default=None, description="是否已关注（None 表示未知）")
    viewers: Number = Field(default=0, description="在线人数非零时取在线人数，否则取累计人数")
    total_viewers: Number = Field(default=0, description="累计观众数")
    online_viewers: Number = Field(default=0, description="当前在线观众数")
    comment_num: Number = Field(default=0, description="评论数")
    started_at: Number = Field(default=0, description="开播时间（Unix 秒）")
    app_title: str = Field(default="不明", description="直播中的应用名")
    collab_vacancy: bool | None = Field(default=None, description="连麦是否有空位（None 表示未知）")
    status: Literal["配信中", "終了"] = Field(default="終了", description="显示用状态文本")
    is_live: bool = Field(default=False, description="是否直播中")
    star_count: Number = Field(default=0, description="星星数")
    gift_count: Number = Field(default=0, description="礼物数")
    live_id: str = Field(default="", description="直播 ID")


class CommentRecord(_Record):
    """广播 socket 中 t=1 的用户评论。"""

    comment_id: str | None = Field(default=None, description="评论 ID，缺失表示没有稳定标识")
    user_id: str = Field(default="", description="发送者用户 ID")
    user_name: str = Field(default="", description="发送者显示名")
    comment: str = Field(..., min_length=1, description="评论正文（非空）")
    created_at: Number | None = Field(default=None, description="发送时间（Unix 秒）")
    profile_image_url: str = Field(default="", description="头像 URL")
    is_moderator: Any = Field(default=0, description="管理员标记（原样透传）")
    is_cheerleader: Any = Field(default=0, description="应援团标记（原样透传）")
    vip_rank: Any = Field(default=0, description="VIP 等级（原样透传）")
    yell_rank: Any = Field(default=0, description="应援等级（原样透传）")
    yell_level: Any = Field(default=0, description="应援级别（原样透传）")
    profile_frame_image_url: str = Field(default="", description="头像框 URL")
    push_image_url: str = Field(default="", description="推送图片 URL")
    raw: dict[str, Any] = Field(default_factory=dict, repr=False, description="原始消息")


class SystemNoticeRecord(_Record):
    """广播 socket 中 t=3 的系统通知（目前只有入室）。"""

    key: str = Field(..., min_length=1, description="去重键，总是非空")
    type: Literal["join"] = Field(default="join", description="通知类别")
    text: str = Field(..., description="显示文本")
    user_name: str = Field(default="", description="用户名")
    user_id: str = Field(default="", description="用户 ID")
    profile_image_url: str = Field(default="", description="头像 URL")
    viewers: Number | None = Field(default=None, description="在线人数，未知为 None")
    created_at: Number = Field(..., description="发生时间（Unix 秒）")
    raw: dict[str, Any] = Field(default_factory=dict, repr=False, description="原始消息")


class RankingEntry(_Record):
    """礼物排行榜的一行。"""

    rank: Number | str = Field(default="-", description="名次，未知时为 ``-``")
    user_name: str = Field(default="ユーザー", description="用户名")
    user_id: str = Field(default="", description="用户 ID")
    points: str = Field(default="0", description="已格式化的积分")
    gift_name: str = Field(default="", description="礼物名")
    gift_image_url: str = Field(default="", description="礼物图片 URL")
    user_image_url: str = Field(default="", description="用户头像 URL")


class BroadcastConfig(_Record):
    """连接广播服务器所需的配置，两个字段缺一不可。"""

    socket_key: str = Field(..., min_length=1, description="bcsvr 连接键")
    host: str = Field(..., min_length=1, description="广播服务器主机名")


class PageMeta(_Record):
    """列表类 API 的分页信息。"""

    current_page: Any = Field(default=None, description="当前页")
    next_page: Any = Field(default=None, description="下一页")
    previous_page: Any = Field(default=None, description="上一页")
    total_entries: Any = Field(default=None, description="总条数")
    current_cursor: Any = Field(default=None, description="当前游标")
    next_cursor: Any = Field(default=None, description="下一游标")


class BroadcastFrame(_Record):
    """广播 socket 文本 payload 中的一行。"""

    command: str = Field(..., description="命令：MSG / ACK / ERR / PING ...")
    key: str = Field(default="", description="订阅键")
    body: str = Field(default="", description="命令之后的原始文本")
    message: dict[str, Any] | None = Field(default=None, description="MSG 行解码后的 JSON 对象")


class FlatRow(_Record):
    """调试展开后的一行。"""

    key: str
    value: str
