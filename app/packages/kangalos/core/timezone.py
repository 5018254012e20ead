"""时区工具方法：数据库统一以 UTC 存储时间，响应中输出带偏移的 ISO-8601 字符串。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """将时间归一化为 UTC；无时区对象视为 UTC（SQLite 读出的值即如此）。"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """将时间格式化为带 UTC 偏移的 ISO-8601 字符串。"""
    normalized = to_utc(value)
    if normalized is None:
        return None
    return normalized.isoformat()
