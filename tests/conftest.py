"""
tests.conftest
~~~~~~~~~~~~~~

共享 pytest fixtures —— 各种已知 API 外壳形状的样例 payload。
"""
from __future__ import annotations

import os
from typing import Any

import pytest

# ── 在所有测试导入前设置环境变量 ─────────────────────────────────────
os.environ.setdefault("ENVIRONMENT", "test")  # 激活 .env.test 配置


# ── 直播详情 / 轮询 ───────────────────────────────────────────────────

@pytest.fixture()
def live_info() -> dict[str, Any]:
    """首次拉取的直播详情（带 ``live`` 外壳）。"""
    return {
        "is_live": True,
        "live": {
            "live_id": "L100",
            "title": "朝まで雑談",
            "owner": {
                "name": "ほしの",
                "user_id": "u-1",
                "is_following": 1,
                "obfuscated_user_id": "obf-owner",
            },
            "total_viewer_num": 1200,
            "online_user_num": 80,
            "comment_num": 300,
            "started_at": 1700000000,
            "app_title": "雑談",
            "collab_has_vacancy": 0,
            "star_num": 10,
            "gift_num": 5,
            "ended_at": 0,
            "bcsvr_key": "bc-key",
            "broadcast_host": "online.example.net",
        },
    }


@pytest.fixture()
def polling() -> dict[str, Any]:
    """周期轮询结果（无外壳）。"""
    return {
        "total_viewer_num": 1500,
        "online_user_num": "95",
        "comment_num": 320,
        "started_at": 1600000000,
        "collab_has_vacancy": 1,
        "is_live": True,
        "star_num": 12,
        "gift_num": 7,
        "gift_ranking_url": "https://api.example.net/gift/ranking?live_id=L100&obfuscated_user_id=obf-url",
    }


# ── 广播 socket ───────────────────────────────────────────────────────

@pytest.fixture()
def comment_message() -> dict[str, Any]:
    return {
        "t": 1,
        "lci": 987654,
        "u": "u-22",
        "ac": "Alice",
        "cm": "こんにちは",
        "created_at": 1700000100,
        "iurl": "https://img.example.net/a.png",
        "is_moderator": 1,
    }


@pytest.fixture()
def join_message() -> dict[str, Any]:
    return {
        "t": 3,
        "u": "u-33",
        "ac": "Bob",
        "iurl": "https://img.example.net/b.png",
        "online_viewer_num": 42,
        "created_at": 1700000200,
    }
