# domain/history.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class HistoryRecord:
    date: str          # YYYY-MM-DD
    nav: float         # 单位净值
    acc_nav: float     # 累计净值
    change: float = 0.0  # 当日涨跌幅（%），缺失时为 0

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "nav": self.nav, "accNav": self.acc_nav, "change": self.change}


@dataclass(frozen=True)
class PeriodChanges:
    # 两位小数的字符串，例如 "1.23" / "-0.50"；数据不足时为 None
    day: Optional[str] = None
    week: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"day": self.day, "week": self.week, "month": self.month, "year": self.year}


@dataclass(frozen=True)
class HistoryResult:
    """
    单只基金的历史净值视图
    - history 按日期升序（最旧在前），长度 <= 请求天数
    """
    code: str
    history: Tuple[HistoryRecord, ...] = ()
    changes: PeriodChanges = field(default_factory=PeriodChanges)

    @staticmethod
    def from_recent_first(
        code: str, recent_first: List[HistoryRecord], days: int, changes: PeriodChanges
    ) -> "HistoryResult":
        # 数据源给的是最新在前，对外契约是最旧在前
        window = list(recent_first[:days])
        window.reverse()
        return HistoryResult(code=code, history=tuple(window), changes=changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "history": [r.to_dict() for r in self.history],
            "changes": self.changes.to_dict(),
        }
