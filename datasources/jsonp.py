from __future__ import annotations

import json
import re
from typing import Any, Dict

from domain.errors import NotFoundError, ParseError

_PATTERNS: Dict[str, "re.Pattern[str]"] = {}


def _callback_re(callback: str) -> "re.Pattern[str]":
    pat = _PATTERNS.get(callback)
    if pat is None:
        pat = re.compile(rf"{re.escape(callback)}\((.*)\)", re.S)
        _PATTERNS[callback] = pat
    return pat


def unwrap_callback(text: str, callback: str) -> str:
    """
    callback({...}) -> '{...}'
    - 没有包装：ParseError
    - 包装里是空的（例如 jsonpgz();）：NotFoundError，上游对无效代码就是这么返回的
    """
    m = _callback_re(callback).search(text or "")
    if not m:
        raise ParseError(f"{callback}(...) wrapper not found")
    inner = m.group(1).strip()
    if not inner:
        raise NotFoundError(f"empty {callback}() payload")
    return inner


def parse_callback_json(text: str, callback: str) -> Any:
    inner = unwrap_callback(text, callback)
    try:
        return json.loads(inner)
    except ValueError as e:
        raise ParseError(f"invalid JSON in {callback}(...): {e}") from e
