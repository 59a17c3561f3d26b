# services/provider_registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import constants


@dataclass(frozen=True)
class ProviderInfo:
    id: str
    display_name: str
    priority: int  # 越小越先尝试，不允许重复
    description: str = ""
    has_scale: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "description": self.description,
            "hasScale": self.has_scale,
        }


class ProviderRegistry:
    """
    数据源静态表（不可变）：id -> 展示名 / 优先级 / 描述
    作为参数传给故障转移服务，测试里可以换成自造的数据源集合。
    """

    def __init__(self, providers: Iterable[ProviderInfo]) -> None:
        items = tuple(providers)
        ids = [p.id for p in items]
        if len(set(ids)) != len(ids):
            raise ValueError(f"ProviderRegistry: duplicate provider id in {ids}")
        ranks = [p.priority for p in items]
        if len(set(ranks)) != len(ranks):
            raise ValueError(f"ProviderRegistry: priority ranks must be unique, got {ranks}")

        self._by_priority: Tuple[ProviderInfo, ...] = tuple(sorted(items, key=lambda p: p.priority))
        self._by_id: Dict[str, ProviderInfo] = {p.id: p for p in items}

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_priority)

    def get(self, provider_id: str) -> Optional[ProviderInfo]:
        return self._by_id.get(provider_id)

    def display_name(self, provider_id: str) -> str:
        info = self._by_id.get(provider_id)
        return info.display_name if info else provider_id

    def ordered_providers(self, preferred: Optional[str] = None) -> List[str]:
        """
        按优先级升序返回全部 id；preferred 是已注册的 id 时挪到最前，其余顺序不变
        """
        ids = [p.id for p in self._by_priority]
        if preferred and preferred in self._by_id:
            ids.remove(preferred)
            ids.insert(0, preferred)
        return ids

    def list_providers(self) -> List[ProviderInfo]:
        return list(self._by_priority)


def default_registry() -> ProviderRegistry:
    names = constants.SOURCE_DISPLAY_NAMES
    return ProviderRegistry(
        [
            ProviderInfo(constants.SOURCE_TIANTIAN, names[constants.SOURCE_TIANTIAN], 1, "实时估值"),
            ProviderInfo(constants.SOURCE_EASTMONEY_MOBILE, names[constants.SOURCE_EASTMONEY_MOBILE], 2, "移动端API"),
            ProviderInfo(constants.SOURCE_EASTMONEY_LSJZ, names[constants.SOURCE_EASTMONEY_LSJZ], 3, "历史净值API"),
            ProviderInfo(constants.SOURCE_DANJUAN, names[constants.SOURCE_DANJUAN], 4, "蛋卷投资"),
            ProviderInfo(constants.SOURCE_EASTMONEY_F10, names[constants.SOURCE_EASTMONEY_F10], 5, "F10数据接口"),
        ]
    )
