from __future__ import annotations

from config import constants
from datasources.base import QuoteSource, as_text, parse_pct
from datasources.fund_name import FUNDGZ_CALLBACK, fetch_fundgz
from datasources.jsonp import parse_callback_json
from domain.errors import ParseError, TransportError
from domain.quote import Quote


class TiantianSource(QuoteSource):
    """
    天天基金实时估值：jsonpgz({...})
    字段：fundcode / name / dwjz / jzrq / gsz / gszzl / gztime
    """
    source_id = constants.SOURCE_TIANTIAN

    def _fetch(self, code: str) -> Quote:
        resp = fetch_fundgz(code, self._fetch_text)
        if not resp.ok:
            raise TransportError(f"request failed: {resp.describe_error()}")

        obj = parse_callback_json(resp.text, FUNDGZ_CALLBACK)
        if not isinstance(obj, dict):
            raise ParseError("payload is not an object")

        return Quote(
            code=as_text(obj.get("fundcode")) or code,
            name=as_text(obj.get("name")) or code,
            net_value=as_text(obj.get("dwjz")),
            net_value_date=as_text(obj.get("jzrq")),
            estimate_value=as_text(obj.get("gsz")),
            estimate_change=parse_pct(obj.get("gszzl")),
            update_time=as_text(obj.get("gztime")),
            source=self.source_id,
        )
