# scripts/fund_quote_cli.py
from __future__ import annotations

import argparse
import json
from typing import Any, List, Optional

from config import settings
from domain.history import HistoryResult
from domain.quote import Quote
from services import fund_service
from utils.log_utils import configure_logging


def _dump(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fund quote lookup with multi-source failover")
    parser.add_argument("--log-level", default=None, help="DEBUG / INFO / WARNING ...")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_quote = sub.add_parser("quote", help="resolve one fund's current valuation")
    p_quote.add_argument("code", type=str, help="fund code, e.g. 161725")
    p_quote.add_argument("--source", type=str, default=None, help="preferred source id, try it first")

    p_batch = sub.add_parser("batch", help="resolve several funds, failed ones are dropped")
    p_batch.add_argument("codes", nargs="+", help="fund codes")
    p_batch.add_argument("--source", type=str, default=None, help="preferred source id")

    sub.add_parser("sources", help="list data sources in priority order")

    p_hist = sub.add_parser("history", help="NAV history with day/week/month/year changes")
    p_hist.add_argument("code", type=str, help="fund code")
    p_hist.add_argument(
        "--days", type=int, default=getattr(settings, "HISTORY_DEFAULT_DAYS", 30), help="trading days to return"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.cmd == "sources":
        _dump([p.to_dict() for p in fund_service.list_providers()])
        return 0

    if args.cmd == "quote":
        result = fund_service.resolve_quote(args.code, args.source)
        if isinstance(result, Quote):
            _dump(result.to_dict())
            return 0
        print(result.message)
        return 1

    if args.cmd == "batch":
        quotes = fund_service.resolve_many(args.codes, args.source)
        _dump([q.to_dict() for q in quotes.values()])
        return 0 if quotes else 1

    if args.cmd == "history":
        result = fund_service.fetch_history(args.code, args.days)
        if isinstance(result, HistoryResult):
            _dump(result.to_dict())
            return 0
        print(result.message)
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
