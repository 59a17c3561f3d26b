from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Optional, Union

from config import constants, settings
from datasources import http_client
from datasources.fund_name import FetchText, lookup_fund_name
from domain.errors import Failure, FailureKind, ParseError, SourceError, TransportError
from domain.quote import Quote

logger = logging.getLogger(__name__)

NameResolver = Callable[[str], Optional[str]]


class QuoteSource:
    """
    数据源适配器基类：fetch_quote(code) -> Quote | Failure
    子类只实现 _fetch()，里面可以直接抛 SourceError / 解析异常，
    在 fetch_quote 边界统一转成 Failure。
    """
    source_id: str = ""
    referer: Optional[str] = getattr(settings, "HTTP_REFERER", None)

    def __init__(
        self,
        fetch_text: Optional[FetchText] = None,
        name_resolver: Optional[NameResolver] = None,
    ) -> None:
        self._fetch_text = fetch_text or http_client.get_text
        self._name_resolver = name_resolver

    @property
    def display_name(self) -> str:
        return constants.SOURCE_DISPLAY_NAMES.get(self.source_id, self.source_id)

    def fetch_quote(self, code: str) -> Union[Quote, Failure]:
        try:
            quote = self._fetch(code)
            quote.validate_basic()
            return quote
        except SourceError as e:
            return e.to_failure(self.source_id)
        except (ValueError, KeyError, TypeError, AttributeError, IndexError) as e:
            return Failure(
                kind=FailureKind.PARSE,
                message=f"unexpected payload ({type(e).__name__}: {e})",
                source=self.source_id,
            )
        except Exception as e:
            logger.warning("[%s] %s: unexpected error: %r", self.source_id, code, e)
            return Failure(
                kind=FailureKind.TRANSPORT,
                message=f"unexpected error ({type(e).__name__}: {e})",
                source=self.source_id,
            )

    def _fetch(self, code: str) -> Quote:
        raise NotImplementedError

    # ---------- helpers ----------
    def _get(self, url: str, params: Optional[dict] = None) -> str:
        resp = self._fetch_text(url=url, params=params, headers=http_client.default_headers(self.referer))
        if not resp.ok:
            raise TransportError(f"request failed: {resp.describe_error()}")
        return resp.text

    def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        text = self._get(url, params)
        try:
            return json.loads(text)
        except ValueError as e:
            raise ParseError(f"invalid JSON: {e}") from e

    def _resolve_name(self, code: str, name: Any = None) -> str:
        """
        payload 里有名称就用；没有就查一次天天基金，再不行用基金代码
        """
        text = as_text(name)
        if text:
            return text
        resolver = self._name_resolver
        if resolver is None:
            return lookup_fund_name(code, self._fetch_text) or code
        try:
            return resolver(code) or code
        except Exception as e:
            logger.debug("[%s] name lookup %s failed: %s", self.source_id, code, e)
            return code


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def first_present(*values: Any) -> Any:
    for v in values:
        if as_text(v):
            return v
    return None


def parse_pct(value: Any, default: float = 0.0) -> float:
    s = as_text(value).rstrip("%")
    if not s:
        return default
    try:
        pct = float(s)
    except ValueError as e:
        raise ParseError(f"invalid percentage: {value!r}") from e
    if not math.isfinite(pct):
        raise ParseError(f"invalid percentage: {value!r}")
    return pct
