from __future__ import annotations

from typing import Final


# 数据源 id（按默认优先级）
SOURCE_TIANTIAN: Final[str] = "tiantian"
SOURCE_EASTMONEY_MOBILE: Final[str] = "eastmoney_mobile"
SOURCE_EASTMONEY_LSJZ: Final[str] = "eastmoney_lsjz"
SOURCE_DANJUAN: Final[str] = "danjuan"
SOURCE_EASTMONEY_F10: Final[str] = "eastmoney_f10"

# 规模字段：当前所有数据源都拿不到
SCALE_UNKNOWN: Final[str] = "--"

# 没有盘中估值时间的数据源，用收盘时间补齐 updateTime
MARKET_CLOSE_HHMM: Final[str] = "15:00"

# 蛋卷 result_code 成功值
DANJUAN_RESULT_OK: Final[int] = 0

# 交易日偏移（按已发布的行数计，不是自然日）
OFFSET_DAY: Final[int] = 1
OFFSET_WEEK: Final[int] = 5
OFFSET_MONTH: Final[int] = 22
OFFSET_YEAR: Final[int] = 250

# 数据源展示名（适配器报错、注册表共用）
SOURCE_DISPLAY_NAMES: Final[dict] = {
    SOURCE_TIANTIAN: "天天基金",
    SOURCE_EASTMONEY_MOBILE: "东方财富(移动)",
    SOURCE_EASTMONEY_LSJZ: "东方财富(LSJZ)",
    SOURCE_DANJUAN: "蛋卷基金",
    SOURCE_EASTMONEY_F10: "东方财富(F10)",
}
