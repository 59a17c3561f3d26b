from __future__ import annotations

from datetime import datetime

from config import constants


def now_ms() -> int:
    # 防缓存参数（rt / v）
    return int(datetime.now().timestamp() * 1000)


def with_close_time(date_str: str) -> str:
    """
    只有净值日期、没有估值时间的数据源：用收盘时间补齐
    "2026-01-30" -> "2026-01-30 15:00"
    """
    return f"{date_str} {constants.MARKET_CLOSE_HHMM}"
