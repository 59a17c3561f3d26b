# services/fund_service.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Union

from config import settings
from datasources.base import QuoteSource
from datasources.danjuan import DanjuanSource
from datasources.eastmoney_f10 import EastmoneyF10Source
from datasources.eastmoney_lsjz import EastmoneyLsjzSource
from datasources.eastmoney_mobile import EastmoneyMobileSource
from datasources.fund_name import FetchText
from datasources.tiantian import TiantianSource
from domain.errors import AggregateFailure, Failure
from domain.history import HistoryResult
from domain.quote import Quote
from services import history_service
from services.failover_service import FailoverService
from services.provider_registry import ProviderInfo, ProviderRegistry, default_registry

logger = logging.getLogger(__name__)


def default_sources(fetch_text: Optional[FetchText] = None) -> Dict[str, QuoteSource]:
    sources: List[QuoteSource] = [
        TiantianSource(fetch_text),
        EastmoneyMobileSource(fetch_text),
        EastmoneyLsjzSource(fetch_text),
        DanjuanSource(fetch_text),
        EastmoneyF10Source(fetch_text),
    ]
    return {s.source_id: s for s in sources}


def build_failover(
    registry: Optional[ProviderRegistry] = None,
    sources: Optional[Dict[str, QuoteSource]] = None,
) -> FailoverService:
    return FailoverService(registry or default_registry(), sources if sources is not None else default_sources())


def _clean_code(code: str) -> str:
    code = (code or "").strip()
    if not code:
        raise ValueError("code is required")
    return code


def resolve_quote(
    code: str,
    preferred: Optional[str] = None,
    *,
    failover: Optional[FailoverService] = None,
) -> Union[Quote, AggregateFailure]:
    """
    当前估值：偏好源优先，其余按优先级顺序故障转移
    """
    code = _clean_code(code)
    svc = failover or build_failover()
    return svc.resolve_quote(code, (preferred or "").strip() or None)


def resolve_many(
    codes: List[str],
    preferred: Optional[str] = None,
    *,
    max_workers: Optional[int] = None,
    failover: Optional[FailoverService] = None,
) -> Dict[str, Quote]:
    """
    批量查询（每只基金一次独立的顺序故障转移，基金之间并发）
    - 返回顺序与输入一致
    - 所有数据源都失败的基金不出现在结果里
    """
    codes = [c.strip() for c in (codes or []) if c and str(c).strip()]
    codes = list(dict.fromkeys(codes))
    if not codes:
        return {}

    svc = failover or build_failover()
    limit = max_workers if max_workers is not None else int(getattr(settings, "BATCH_MAX_WORKERS", 8))
    workers = max(1, min(limit, len(codes)))

    results: Dict[str, Union[Quote, AggregateFailure]] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_map = {executor.submit(svc.resolve_quote, code, preferred): code for code in codes}
        for future in as_completed(future_map):
            results[future_map[future]] = future.result()

    out: Dict[str, Quote] = {}
    for code in codes:
        r = results[code]
        if isinstance(r, Quote):
            out[code] = r
        else:
            logger.warning("batch: drop %s (%d source(s) failed)", code, len(r))
    return out


def list_providers(registry: Optional[ProviderRegistry] = None) -> List[ProviderInfo]:
    return (registry or default_registry()).list_providers()


def fetch_history(
    code: str,
    days: Optional[int] = None,
    *,
    fetch_text: Optional[FetchText] = None,
) -> Union[HistoryResult, Failure]:
    code = _clean_code(code)
    n = int(days if days is not None else getattr(settings, "HISTORY_DEFAULT_DAYS", 30))
    if n < 1:
        raise ValueError(f"days must be >= 1, got {n}")
    return history_service.fetch_history(code, n, fetch_text)
