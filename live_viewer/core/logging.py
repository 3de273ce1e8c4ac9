"""
live_viewer.core.logging
~~~~~~~~~~~~~~~~~~~~~~~~

统一日志配置，根据环境自动设置日志级别和格式。

所有模块应通过 ``get_logger(__name__)`` 获取 logger 实例。

另外提供带子系统标签（ws / hls / api / join / relay）的 ``TaggedLogger``，
把前端诊断日志交给外部 sink。sink 的失败一律吞掉（fire-and-forget），
调用方永远不会感知。
"""
from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from live_viewer.core.config import settings

# 日志格式：时间 | 级别 | 模块名 | 消息
_LOG_FORMAT: str = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

FRONTEND_LOGGER_NAME: str = "live_viewer.frontend"

LogTag = Literal["ws", "hls", "api", "join", "relay"]
LogLevel = Literal["info", "warn", "error"]

_LEVEL_MAP: dict[str, int] = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging() -> None:
    """根据当前环境配置全局日志。应在应用启动时调用一次。"""
    level = getattr(logging, settings.effective_log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        datefmt=_DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # 覆盖可能已有的 basicConfig
    )


def get_logger(name: str) -> logging.Logger:
    """获取指定模块的 logger 实例。

    Args:
        name: 模块名，通常传 ``__name__``。

    Returns:
        配置好的 ``logging.Logger`` 实例。
    """
    return logging.getLogger(name)


class TaggedLogRecord(BaseModel):
    """交给外部日志 sink 的一条带标签日志。"""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(..., description="严重级别：info / warn / error")
    tag: LogTag = Field(..., description="子系统标签")
    message: str = Field(..., description="已格式化的消息文本")


LogSink = Callable[[TaggedLogRecord], None]


def _stringify_arg(value: Any) -> str:
    """字符串原样返回，其它值尽量 JSON 化，失败时依次退回 ``str()`` / ``repr()``。

    超深嵌套（``RecursionError``）或超长整数（``ValueError``）等都不会向外抛出。
    """
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except Exception:
        pass
    for render in (str, repr):
        try:
            return render(value)
        except Exception:
            continue
    return f"<unprintable {type(value).__name__}>"


def format_log_message(msg: str, args: tuple[Any, ...]) -> str:
    """把附加参数以空格拼接到消息末尾。"""
    if not args:
        return msg
    return msg + " " + " ".join(_stringify_arg(a) for a in args)


def stdlib_sink(record: TaggedLogRecord) -> None:
    """默认 sink：转发到标准库 logger ``live_viewer.frontend``。"""
    logging.getLogger(FRONTEND_LOGGER_NAME).log(
        _LEVEL_MAP[record.level], "[%s] %s", record.tag, record.message,
    )


class TaggedLogger:
    """带子系统标签的结构化 logger。

    Attributes:
        sink: 接收 ``TaggedLogRecord`` 的外部协作者。
    """

    def __init__(self, sink: LogSink | None = None) -> None:
        self.sink: LogSink = sink or stdlib_sink

    def emit(self, level: LogLevel, tag: LogTag, msg: str, *args: Any) -> None:
        """组装日志并投递给 sink；格式化或 sink 抛出的异常都不会传播。"""
        try:
            record = TaggedLogRecord(level=level, tag=tag, message=format_log_message(msg, args))
            self.sink(record)
        except Exception:
            # 日志故障不影响调用方
            pass

    def log(self, tag: LogTag, msg: str, *args: Any) -> None:
        """INFO 级别。"""
        self.emit("info", tag, msg, *args)

    def warn(self, tag: LogTag, msg: str, *args: Any) -> None:
        """WARN 级别。"""
        self.emit("warn", tag, msg, *args)

    def error(self, tag: LogTag, msg: str, *args: Any) -> None:
        """ERROR 级别。"""
        self.emit("error", tag, msg, *args)


_default_logger = TaggedLogger()


def log(tag: LogTag, msg: str, *args: Any) -> None:
    _default_logger.log(tag, msg, *args)


def log_warn(tag: LogTag, msg: str, *args: Any) -> None:
    _default_logger.warn(tag, msg, *args)


def log_err(tag: LogTag, msg: str, *args: Any) -> None:
    _default_logger.error(tag, msg, *args)
