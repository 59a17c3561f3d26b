from __future__ import annotations

from config import constants
from datasources.base import QuoteSource, as_text, parse_pct
from datasources.jsonp import parse_callback_json
from domain.errors import NotFoundError, ParseError
from domain.quote import Quote
from utils.time_utils import with_close_time

LSJZ_URL = "http://api.fund.eastmoney.com/f10/lsjz"
LSJZ_CALLBACK = "jQuery"


class EastmoneyLsjzSource(QuoteSource):
    """
    东方财富历史净值分页接口（只取第一页第一行）：jQuery({"Data": {"LSJZList": [...]}})
    没有盘中估值，估值=最新净值
    """
    source_id = constants.SOURCE_EASTMONEY_LSJZ

    def _fetch(self, code: str) -> Quote:
        text = self._get(
            LSJZ_URL,
            params={
                "callback": LSJZ_CALLBACK,
                "fundCode": code,
                "pageIndex": 1,
                "pageSize": 1,
            },
        )
        obj = parse_callback_json(text, LSJZ_CALLBACK)
        if not isinstance(obj, dict):
            raise ParseError("payload is not an object")

        body = obj.get("Data") or {}
        rows = body.get("LSJZList") if isinstance(body, dict) else None
        if not rows:
            raise NotFoundError(f"no data for {code}")
        item = rows[0]

        nav = as_text(item.get("DWJZ"))
        nav_date = as_text(item.get("FSRQ"))
        return Quote(
            code=code,
            name=self._resolve_name(code),
            net_value=nav,
            net_value_date=nav_date,
            estimate_value=nav,
            estimate_change=parse_pct(item.get("JZZZL")),
            update_time=with_close_time(nav_date),
            source=self.source_id,
        )
