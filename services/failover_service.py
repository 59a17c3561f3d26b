# services/failover_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Mapping, Optional, Tuple, Union

from datasources.base import QuoteSource
from domain.errors import AggregateFailure, Failure, FailureKind, ProviderAttempt
from domain.quote import Quote
from services.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TrialState:
    quote: Optional[Quote] = None
    attempts: Tuple[ProviderAttempt, ...] = ()


class FailoverService:
    """
    多数据源故障转移：按注册表顺序（偏好源优先）逐个尝试，拿到第一个成功结果即停。
    严格顺序执行，不并发打所有上游。
    """

    def __init__(self, registry: ProviderRegistry, sources: Mapping[str, QuoteSource]) -> None:
        self.registry = registry
        self.sources = dict(sources)

    def _try_source(self, source_id: str, code: str) -> Union[Quote, Failure]:
        source = self.sources.get(source_id)
        if source is None:
            return Failure(kind=FailureKind.NOT_FOUND, message=f"unknown source: {source_id}", source=source_id)
        return source.fetch_quote(code)

    def _step(self, code: str):
        def step(state: _TrialState, source_id: str) -> _TrialState:
            if state.quote is not None:
                return state

            outcome = self._try_source(source_id, code)
            if isinstance(outcome, Quote):
                logger.info("[%s] %s resolved after %d failed source(s)", source_id, code, len(state.attempts))
                return _TrialState(quote=outcome, attempts=state.attempts)

            logger.warning("[%s] %s: %s", source_id, code, outcome.describe())
            attempt = ProviderAttempt(
                source=source_id,
                display_name=self.registry.display_name(source_id),
                failure=outcome,
            )
            return _TrialState(quote=None, attempts=state.attempts + (attempt,))

        return step

    def resolve_quote(self, code: str, preferred: Optional[str] = None) -> Union[Quote, AggregateFailure]:
        order = self.registry.ordered_providers(preferred)
        final = reduce(self._step(code), order, _TrialState())
        if final.quote is not None:
            return final.quote

        failure = AggregateFailure(attempts=final.attempts)
        logger.error("%s: %s", code, failure.message)
        return failure
