from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import settings

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    ok: bool
    status_code: int
    text: str
    error: str = ""

    def describe_error(self) -> str:
        if self.error:
            return self.error
        return f"HTTP {self.status_code}"


def _make_session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=int(getattr(settings, "HTTP_RETRIES", 0)),
        backoff_factor=0,
        status_forcelist=[],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s


_SESSION = _make_session()


def default_headers(referer: Optional[str] = None) -> dict:
    h = {"User-Agent": getattr(settings, "HTTP_USER_AGENT", "Mozilla/5.0")}
    if referer:
        h["Referer"] = referer
    return h


def get_text(
    *,
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout_sec: Optional[float] = None,
) -> HttpResponse:
    """
    GET(text)，不抛异常：
    - 网络异常/超时 -> ok=False, error=异常描述
    - status >= 400 -> ok=False, 保留响应文本便于排查
    """
    timeout = float(timeout_sec if timeout_sec is not None else getattr(settings, "HTTP_TIMEOUT_SEC", 6))

    logger.debug("GET %s params=%s", url, params)
    try:
        r = _SESSION.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("GET %s failed: %s", url, e)
        return HttpResponse(ok=False, status_code=0, text="", error=f"{type(e).__name__}: {e}")

    text = r.text or ""
    if r.status_code >= 400:
        return HttpResponse(ok=False, status_code=r.status_code, text=text)
    return HttpResponse(ok=True, status_code=r.status_code, text=text)
