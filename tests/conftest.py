"""Shared fakes and payload builders; no test touches the network."""

from __future__ import annotations

import json
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Union

import pytest

from datasources.http_client import HttpResponse

Route = Union[HttpResponse, Callable[..., HttpResponse]]

TIANTIAN_HOST = "fundgz.1234567.com.cn"
MOBILE_HOST = "fundmobapi.eastmoney.com"
LSJZ_HOST = "api.fund.eastmoney.com/f10/lsjz"
DANJUAN_HOST = "danjuanfunds.com"
F10_HOST = "F10DataApi.aspx"


def ok(text: str) -> HttpResponse:
    return HttpResponse(ok=True, status_code=200, text=text)


def http_error(status: int = 503) -> HttpResponse:
    return HttpResponse(ok=False, status_code=status, text="")


def network_error() -> HttpResponse:
    return HttpResponse(ok=False, status_code=0, text="", error="ConnectTimeout: timed out")


class FakeHttp:
    """Stands in for http_client.get_text; routes on a URL substring."""

    def __init__(self, routes: Optional[Dict[str, Route]] = None) -> None:
        self.routes: Dict[str, Route] = dict(routes or {})
        self.calls: List[dict] = []

    def __call__(self, *, url: str, params=None, headers=None, timeout_sec=None) -> HttpResponse:
        self.calls.append({"url": url, "params": params or {}, "headers": headers or {}})
        for key, route in self.routes.items():
            if key in url:
                return route(url=url, params=params) if callable(route) else route
        return http_error(404)

    def calls_to(self, key: str) -> List[dict]:
        return [c for c in self.calls if key in c["url"]]


# ---------- payload builders ----------
def tiantian_payload(code: str = "161725", name: str = "招商中证白酒指数(LOF)A", **overrides) -> str:
    obj = {
        "fundcode": code,
        "name": name,
        "jzrq": "2026-01-29",
        "dwjz": "0.8123",
        "gsz": "0.8200",
        "gszzl": "0.95",
        "gztime": "2026-01-30 14:55",
    }
    obj.update(overrides)
    return f"jsonpgz({json.dumps(obj, ensure_ascii=False)});"


def mobile_payload(code: str = "161725", expansion: Optional[dict] = None, **overrides) -> str:
    item = {
        "FCODE": code,
        "SHORTNAME": "招商中证白酒指数(LOF)A",
        "PDATE": "2026-01-29",
        "NAV": "0.8123",
        "GSZ": "0.8200",
        "GSZZL": "0.95",
        "NAVCHGRT": "-1.20",
    }
    item.update(overrides)
    body = {"Datas": [item], "ErrCode": 0, "TotalCount": 1}
    if expansion is not None:
        body["Expansion"] = expansion
    return json.dumps(body, ensure_ascii=False)


def lsjz_payload(rows: Optional[Sequence[dict]] = None) -> str:
    if rows is None:
        rows = [{"FSRQ": "2026-01-29", "DWJZ": "0.8123", "LJJZ": "2.1543", "JZZZL": "-1.20"}]
    body = {"Data": {"LSJZList": list(rows)}, "ErrCode": 0, "TotalCount": len(rows)}
    return f"jQuery({json.dumps(body)})"


def danjuan_payload(result_code: int = 0, items: Optional[Sequence[dict]] = None) -> str:
    if items is None:
        items = [{"date": "2026-01-29", "nav": "0.8123", "gr_nav": "0.8123", "gr_per": "-1.20"}]
    return json.dumps({"result_code": result_code, "data": {"items": list(items)}})


def f10_row(day: str, nav: float, acc_nav: float, change: Optional[float]) -> str:
    if change is None:
        change_cell = "<td class='tor bold'></td>"
    else:
        css = "red" if change >= 0 else "grn"
        change_cell = f"<td class='tor bold {css}'>{change:.2f}%</td>"
    return (
        f"<tr><td>{day}</td><td class='tor bold'>{nav:.4f}</td><td class='tor bold'>{acc_nav:.4f}</td>"
        f"{change_cell}<td>开放申购</td><td>开放赎回</td><td class='red unbold'></td></tr>"
    )


def f10_page(rows: Sequence[str], records: Optional[int] = None) -> str:
    n = len(rows) if records is None else records
    content = (
        "<table class='w782 comm lsjz'><thead><tr><th class='first'>净值日期</th><th>单位净值</th>"
        "<th>累计净值</th><th>日增长率</th><th>申购状态</th><th>赎回状态</th><th class='tor last'>分红送配</th>"
        "</tr></thead><tbody>" + "".join(rows) + "</tbody></table>"
    )
    return f'var apidata={{ content:"{content}",records:{n},pages:{n},curpage:1}};'


def f10_empty_page() -> str:
    content = (
        "<table class='w782 comm lsjz'><thead><tr><th class='first'>净值日期</th></tr></thead>"
        "<tbody><tr><td colspan='7' align='center'>暂无数据!</td></tr></tbody></table>"
    )
    return f'var apidata={{ content:"{content}",records:0,pages:0,curpage:1}};'


def history_rows(navs: Sequence[float], latest: date = date(2026, 1, 30)) -> List[str]:
    """Most-recent-first rows; navs[0] is the latest day."""
    out = []
    for i, nav in enumerate(navs):
        day = (latest - timedelta(days=i)).isoformat()
        out.append(f10_row(day, nav, nav + 1.0, 0.1 if i % 2 else -0.1))
    return out


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()
