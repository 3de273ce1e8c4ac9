"""
live_viewer
~~~~~~~~~~~

直播观看客户端的规范化与合并层：把多版本 REST / 广播 socket 的 JSON
转换为稳定的、可直接渲染的视图模型。
"""
