from __future__ import annotations

from config import constants
from datasources.base import QuoteSource, as_text, parse_pct
from domain.errors import NotFoundError, ParseError
from domain.quote import Quote
from utils.time_utils import with_close_time

DANJUAN_URL = "https://danjuanfunds.com/djapi/fund/nav-history/{code}"


class DanjuanSource(QuoteSource):
    """
    蛋卷基金净值历史：{"result_code": 0, "data": {"items": [{"date", "gr_nav", "gr_per"}]}}
    """
    source_id = constants.SOURCE_DANJUAN
    referer = None

    def _fetch(self, code: str) -> Quote:
        data = self._get_json(DANJUAN_URL.format(code=code), params={"size": 1, "page": 1})
        if not isinstance(data, dict):
            raise ParseError("payload is not an object")

        result_code = data.get("result_code")
        if result_code != constants.DANJUAN_RESULT_OK:
            raise NotFoundError(f"result_code={result_code} for {code}")

        body = data.get("data") or {}
        items = body.get("items") if isinstance(body, dict) else None
        if not items:
            raise NotFoundError(f"no data for {code}")
        item = items[0]

        nav = as_text(item.get("gr_nav"))
        nav_date = as_text(item.get("date"))
        return Quote(
            code=code,
            name=self._resolve_name(code),
            net_value=nav,
            net_value_date=nav_date,
            estimate_value=nav,
            estimate_change=parse_pct(item.get("gr_per")),
            update_time=with_close_time(nav_date),
            source=self.source_id,
        )
