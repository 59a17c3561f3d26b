from __future__ import annotations

import logging
from typing import Callable, Optional

from config import settings
from datasources import http_client
from datasources.http_client import HttpResponse
from datasources.jsonp import parse_callback_json
from domain.errors import SourceError
from utils.time_utils import now_ms

logger = logging.getLogger(__name__)

FUNDGZ_URL = "http://fundgz.1234567.com.cn/js/{code}.js"
FUNDGZ_CALLBACK = "jsonpgz"

FetchText = Callable[..., HttpResponse]


def fetch_fundgz(code: str, fetch_text: Optional[FetchText] = None) -> HttpResponse:
    fetch = fetch_text or http_client.get_text
    return fetch(
        url=FUNDGZ_URL.format(code=code),
        params={"rt": now_ms()},
        headers=http_client.default_headers(getattr(settings, "HTTP_REFERER", None)),
    )


def lookup_fund_name(code: str, fetch_text: Optional[FetchText] = None) -> Optional[str]:
    """
    尽力而为：从天天基金估值接口取基金名称。
    失败不影响主流程，返回 None 由调用方回退到基金代码。
    """
    try:
        resp = fetch_fundgz(code, fetch_text)
        if not resp.ok:
            logger.debug("name lookup %s: %s", code, resp.describe_error())
            return None
        obj = parse_callback_json(resp.text, FUNDGZ_CALLBACK)
        name = str(obj.get("name") or "").strip()
        return name or None
    except (SourceError, AttributeError) as e:
        logger.debug("name lookup %s failed: %s", code, e)
        return None
