from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Union

from config import constants, settings
from datasources.eastmoney_f10 import fetch_f10_page, has_no_records, parse_history_rows
from datasources.fund_name import FetchText
from domain.errors import Failure, NotFoundError, ParseError, SourceError
from domain.history import HistoryRecord, HistoryResult, PeriodChanges

logger = logging.getLogger(__name__)


def overfetch_window(days: int) -> int:
    """
    数据源按行数分页，节假日不出行：多取 1.5 倍，上限 365 行
    """
    ratio = float(getattr(settings, "HISTORY_OVERFETCH_RATIO", 1.5))
    ceiling = int(getattr(settings, "HISTORY_MAX_PER", 365))
    return min(math.ceil(days * ratio), ceiling)


def calc_change(latest: Optional[float], target: Optional[float]) -> Optional[str]:
    if latest is None or not target:
        return None
    return f"{(latest - target) / target * 100:.2f}"


def _change_at(recent_first: Sequence[HistoryRecord], offset: int) -> Optional[str]:
    # 数据不够 offset 行就是 None，不拿更近的行凑数
    if len(recent_first) <= offset:
        return None
    return calc_change(recent_first[0].nav, recent_first[offset].nav)


def compute_changes(recent_first: Sequence[HistoryRecord]) -> PeriodChanges:
    """
    以 recent_first[0]（最新）为基准，对比 N 个交易日前的单位净值
    """
    return PeriodChanges(
        day=_change_at(recent_first, constants.OFFSET_DAY),
        week=_change_at(recent_first, constants.OFFSET_WEEK),
        month=_change_at(recent_first, constants.OFFSET_MONTH),
        year=_change_at(recent_first, constants.OFFSET_YEAR),
    )


def build_history(code: str, text: str, days: int) -> HistoryResult:
    recent_first: List[HistoryRecord] = parse_history_rows(text, days)
    if not recent_first:
        if has_no_records(text):
            raise NotFoundError(f"no history for {code}")
        raise ParseError(f"history table layout not recognized for {code}")

    logger.debug("%s: parsed %d history rows (requested %d)", code, len(recent_first), days)
    return HistoryResult.from_recent_first(code, recent_first, days, compute_changes(recent_first))


def fetch_history(code: str, days: int, fetch_text: Optional[FetchText] = None) -> Union[HistoryResult, Failure]:
    """
    单数据源（东方财富 F10），没有故障转移，失败直接返回 Failure
    """
    per = overfetch_window(days)
    try:
        text = fetch_f10_page(code, per, fetch_text)
        return build_history(code, text, days)
    except SourceError as e:
        failure = e.to_failure(constants.SOURCE_EASTMONEY_F10)
        logger.warning("history %s: %s", code, failure.describe())
        return failure
