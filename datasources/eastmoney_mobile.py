from __future__ import annotations

from config import constants
from datasources.base import QuoteSource, as_text, first_present, parse_pct
from domain.errors import NotFoundError, ParseError
from domain.quote import Quote

MOBILE_URL = "https://fundmobapi.eastmoney.com/FundMNewApi/FundMNFInfo"


class EastmoneyMobileSource(QuoteSource):
    """
    东方财富移动端聚合接口：{"Datas": [...], "Expansion": {...}}
    """
    source_id = constants.SOURCE_EASTMONEY_MOBILE
    referer = None

    def _fetch(self, code: str) -> Quote:
        data = self._get_json(
            MOBILE_URL,
            params={
                "plat": "Android",
                "appType": "ttjj",
                "product": "EFund",
                "Version": "1",
                "deviceid": "1",
                "Fcodes": code,
            },
        )
        if not isinstance(data, dict):
            raise ParseError("payload is not an object")

        datas = data.get("Datas")
        if not datas:
            raise NotFoundError(f"no data for {code}")
        item = datas[0]

        expansion = data.get("Expansion") or {}
        nav = as_text(item.get("NAV"))
        pdate = as_text(item.get("PDATE"))

        return Quote(
            code=as_text(item.get("FCODE")) or code,
            name=self._resolve_name(code, item.get("SHORTNAME")),
            net_value=nav,
            net_value_date=pdate,
            estimate_value=as_text(item.get("GSZ")) or nav,
            estimate_change=parse_pct(first_present(item.get("GSZZL"), item.get("NAVCHGRT"))),
            update_time=as_text(expansion.get("FSRQ")) or pdate,
            source=self.source_id,
        )
