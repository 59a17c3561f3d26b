from __future__ import annotations

import logging
import re
from typing import List, Optional

from config import constants, settings
from datasources import http_client
from datasources.base import QuoteSource
from datasources.fund_name import FetchText
from domain.errors import NotFoundError, ParseError, TransportError
from domain.history import HistoryRecord
from domain.quote import Quote
from utils.time_utils import with_close_time

logger = logging.getLogger(__name__)

F10_URL = "http://fund.eastmoney.com/f10/F10DataApi.aspx"

# 按固定表格结构做字面匹配；上游改版时匹配不到，直接失败
_DATE_CELL_RE = re.compile(r"<td[^>]*>(\d{4}-\d{2}-\d{2})</td>")
_NAV_CELL_RE = re.compile(r"<td[^>]*class='tor bold'[^>]*>([0-9.]+)</td>")
_CHANGE_CELL_RE = re.compile(r"<td[^>]*class='tor bold (grn|red)'[^>]*>([+-]?[0-9.]+)%</td>")
_NO_RECORDS_RE = re.compile(r"records\s*:\s*0\b")

# 一行：日期 / 单位净值 / 累计净值 / 日增长率（颜色 class 和数值都可能缺）
_HISTORY_ROW_RE = re.compile(
    r"<tr><td>(\d{4}-\d{2}-\d{2})</td>"
    r"<td class='tor bold'>([0-9.]+)</td>"
    r"<td class='tor bold'>([0-9.]+)</td>"
    r"<td class='tor bold ?(grn|red)?'>([+-]?[0-9.]+)?%?</td>"
)


def f10_params(code: str, per: int) -> dict:
    return {"type": "lsjz", "code": code, "page": 1, "per": per}


def fetch_f10_page(code: str, per: int, fetch_text: Optional[FetchText] = None) -> str:
    fetch = fetch_text or http_client.get_text
    resp = fetch(
        url=F10_URL,
        params=f10_params(code, per),
        headers=http_client.default_headers(getattr(settings, "HTTP_REFERER", None)),
    )
    if not resp.ok:
        raise TransportError(f"request failed: {resp.describe_error()}")
    return resp.text


def has_no_records(text: str) -> bool:
    return bool(_NO_RECORDS_RE.search(text or ""))


def parse_history_rows(text: str, limit: int) -> List[HistoryRecord]:
    """
    解析历史净值表格，最多取 limit 行。
    顺序保持数据源原样：最新在前。
    """
    out: List[HistoryRecord] = []
    if limit <= 0:
        return out

    for m in _HISTORY_ROW_RE.finditer(text or ""):
        try:
            out.append(
                HistoryRecord(
                    date=m.group(1),
                    nav=float(m.group(2)),
                    acc_nav=float(m.group(3)),
                    change=float(m.group(5)) if m.group(5) else 0.0,
                )
            )
        except ValueError:
            logger.debug("skip malformed history row: %s", m.group(0))
            continue
        if len(out) >= limit:
            break
    return out


class EastmoneyF10Source(QuoteSource):
    """
    东方财富 F10 净值表（HTML 片段），只取第一行
    """
    source_id = constants.SOURCE_EASTMONEY_F10

    def _fetch(self, code: str) -> Quote:
        text = fetch_f10_page(code, 1, self._fetch_text)
        if has_no_records(text):
            raise NotFoundError(f"no data for {code}")

        date_m = _DATE_CELL_RE.search(text)
        nav_m = _NAV_CELL_RE.search(text)
        if not date_m or not nav_m:
            raise ParseError("table layout not recognized")

        change_m = _CHANGE_CELL_RE.search(text)
        nav = nav_m.group(1)
        nav_date = date_m.group(1)
        return Quote(
            code=code,
            name=self._resolve_name(code),
            net_value=nav,
            net_value_date=nav_date,
            estimate_value=nav,
            estimate_change=float(change_m.group(2)) if change_m else 0.0,
            update_time=with_close_time(nav_date),
            source=self.source_id,
        )
