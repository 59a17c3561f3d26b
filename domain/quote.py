# domain/quote.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import constants


@dataclass(frozen=True)
class Quote:
    """
    单只基金的当前估值快照（所有数据源统一输出这个形状）
    - net_value / estimate_value 保留数据源原始文本，精度各家不同，需要时再转 float
    - estimate_change 是百分比数值，例如 1.23 表示 +1.23%
    """
    code: str
    name: str
    net_value: str
    net_value_date: str
    estimate_value: str
    estimate_change: float
    update_time: str
    source: str
    scale: str = constants.SCALE_UNKNOWN

    def validate_basic(self) -> None:
        """
        领域约束：code / net_value / estimate_value 必须有值
        """
        for field_name in ("code", "net_value", "estimate_value"):
            value = getattr(self, field_name)
            if value is None or not str(value).strip():
                raise ValueError(f"Quote.validate_basic: {field_name} is required")

    def net_value_float(self) -> Optional[float]:
        return _parse_number(self.net_value)

    def estimate_value_float(self) -> Optional[float]:
        return _parse_number(self.estimate_value)

    def to_dict(self) -> Dict[str, Any]:
        """对外 JSON 形状（camelCase）"""
        return {
            "code": self.code,
            "name": self.name,
            "netValue": self.net_value,
            "netValueDate": self.net_value_date,
            "estimateValue": self.estimate_value,
            "estimateChange": self.estimate_change,
            "updateTime": self.update_time,
            "scale": self.scale,
            "source": self.source,
        }


def _parse_number(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
