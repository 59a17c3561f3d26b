# domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class FailureKind(str, Enum):
    TRANSPORT = "TransportError"  # 网络异常 / 非 2xx
    PARSE = "ParseError"          # 形状不对：正则没匹配、JSON 坏了、字段缺失
    NOT_FOUND = "NotFound"        # 响应正常，但明确表示没有数据


@dataclass(frozen=True)
class Failure:
    """单个数据源（或历史接口）的失败结果"""
    kind: FailureKind
    message: str
    source: str = ""

    def describe(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class ProviderAttempt:
    source: str
    display_name: str
    failure: Failure

    def describe(self) -> str:
        return f"{self.display_name}: {self.failure.message}"


@dataclass(frozen=True)
class AggregateFailure:
    """按尝试顺序记录每个数据源为什么失败"""
    attempts: Tuple[ProviderAttempt, ...] = ()

    @property
    def entries(self) -> List[str]:
        return [a.describe() for a in self.attempts]

    @property
    def message(self) -> str:
        return "all sources failed: " + "; ".join(self.entries)

    def __len__(self) -> int:
        return len(self.attempts)


class SourceError(Exception):
    """
    适配器内部使用；在 QuoteSource.fetch_quote 边界统一转成 Failure，
    不会抛到故障转移流程里。
    """
    kind = FailureKind.PARSE

    def to_failure(self, source: str) -> Failure:
        return Failure(kind=self.kind, message=str(self), source=source)


class TransportError(SourceError):
    kind = FailureKind.TRANSPORT


class ParseError(SourceError):
    kind = FailureKind.PARSE


class NotFoundError(SourceError):
    kind = FailureKind.NOT_FOUND
