from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

import pandas as pd


class Order(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    UNSORTED = "unsorted"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Order"]:
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return None


@dataclass(frozen=True)
class Importance:
    """
    单个特征的重要性记录。

    - raw_idx: 在原始 importance 向量中的位置（稳定标识）
    - rank: 按 score 降序排列后的位置，从 0 开始；无论输出顺序如何，始终相对降序计算
    - name: 特征列名；元数据中找不到对应 idx 时为 None
    - score: 原始重要性数值（通常在 0-1 之间，不做归一化）
    """

    raw_idx: int
    rank: int
    name: Optional[str]
    score: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "raw_idx": self.raw_idx,
            "rank": self.rank,
            "name": self.name,
            "score": self.score,
        }

    def __str__(self) -> str:
        return f"Importance [rank={self.rank}, score={self.score}, name={self.name}]"


def top_k(importances: Iterable[Importance], k: int) -> List[Importance]:
    k = int(k)
    if k <= 0:
        return []
    return sorted(importances, key=lambda imp: imp.rank)[:k]


def to_frame(importances: Iterable[Importance]) -> pd.DataFrame:
    items = list(importances)
    # name 列固定为 object dtype，缺失名字读回仍为 None
    return pd.DataFrame(
        {
            "raw_idx": [imp.raw_idx for imp in items],
            "rank": [imp.rank for imp in items],
            "name": pd.Series([imp.name for imp in items], dtype=object),
            "score": [imp.score for imp in items],
        },
        columns=["raw_idx", "rank", "name", "score"],
    )
