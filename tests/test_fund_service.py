import pytest

from config import constants
from datasources.base import QuoteSource
from domain.errors import AggregateFailure, NotFoundError
from domain.history import HistoryResult
from domain.quote import Quote
from services import fund_service
from services.failover_service import FailoverService
from services.provider_registry import ProviderInfo, ProviderRegistry

from conftest import F10_HOST, TIANTIAN_HOST, FakeHttp, f10_page, history_rows, ok, tiantian_payload


class _ByCodeSource(QuoteSource):
    source_id = "stub"

    def __init__(self, known):
        super().__init__(fetch_text=lambda **kw: None, name_resolver=lambda code: None)
        self.known = set(known)

    def _fetch(self, code):
        if code not in self.known:
            raise NotFoundError(f"no data for {code}")
        return Quote(
            code=code,
            name=code,
            net_value="1.0",
            net_value_date="2026-01-29",
            estimate_value="1.0",
            estimate_change=0.0,
            update_time="2026-01-29 15:00",
            source=self.source_id,
        )


def _failover(known):
    reg = ProviderRegistry([ProviderInfo("stub", "桩", 1)])
    return FailoverService(reg, {"stub": _ByCodeSource(known)})


@pytest.mark.parametrize("code", ["", "   ", None])
def test_blank_code_rejected(code):
    with pytest.raises(ValueError):
        fund_service.resolve_quote(code, failover=_failover([]))
    with pytest.raises(ValueError):
        fund_service.fetch_history(code, 30, fetch_text=FakeHttp())


def test_resolve_quote_strips_code_and_uses_failover():
    out = fund_service.resolve_quote(" 000001 ", failover=_failover(["000001"]))
    assert isinstance(out, Quote)
    assert out.code == "000001"


def test_resolve_quote_with_default_sources_and_preferred():
    http = FakeHttp({TIANTIAN_HOST: ok(tiantian_payload())})
    failover = fund_service.build_failover(sources=fund_service.default_sources(http))
    out = fund_service.resolve_quote("161725", constants.SOURCE_TIANTIAN, failover=failover)
    assert isinstance(out, Quote)
    assert out.source == constants.SOURCE_TIANTIAN


def test_resolve_many_keeps_order_and_drops_failures():
    out = fund_service.resolve_many(
        ["000003", "bad", "000001", "000002", "000001"],
        max_workers=3,
        failover=_failover(["000001", "000002", "000003"]),
    )
    assert list(out) == ["000003", "000001", "000002"]
    assert all(isinstance(q, Quote) for q in out.values())


def test_resolve_many_empty():
    assert fund_service.resolve_many([], failover=_failover([])) == {}


def test_resolve_many_all_failed():
    assert fund_service.resolve_many(["x", "y"], failover=_failover([])) == {}


def test_list_providers_in_priority_order():
    ids = [p.id for p in fund_service.list_providers()]
    assert ids[0] == constants.SOURCE_TIANTIAN
    assert ids[-1] == constants.SOURCE_EASTMONEY_F10
    assert len(ids) == 5


def test_default_sources_cover_registry():
    sources = fund_service.default_sources()
    assert set(sources) == {p.id for p in fund_service.list_providers()}


def test_fetch_history_defaults_to_30_days():
    navs = [1.0 + i * 0.01 for i in range(60)]
    http = FakeHttp({F10_HOST: ok(f10_page(history_rows(navs)))})
    out = fund_service.fetch_history("161725", fetch_text=http)
    assert isinstance(out, HistoryResult)
    assert len(out.history) == 30
    assert http.calls_to(F10_HOST)[0]["params"]["per"] == 45


@pytest.mark.parametrize("days", [0, -5])
def test_fetch_history_rejects_non_positive_days(days):
    with pytest.raises(ValueError):
        fund_service.fetch_history("161725", days, fetch_text=FakeHttp())


def test_aggregate_failure_from_service():
    out = fund_service.resolve_quote("bad", failover=_failover([]))
    assert isinstance(out, AggregateFailure)
    assert out.message == "all sources failed: 桩: no data for bad"
