"""
Link feature importances of a fitted tree model to the column names recorded
in the feature vector's ``ml_attr`` metadata.

Usage::

    model = FeatureModel.from_pipeline(pipeline, features_col="features")
    importances = FeatureImportance(model, schema, sort=Order.DESCENDING).get_result()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

import numpy as np

from .errors import InvalidConfiguration
from .importance import Importance, Order
from .models import FeatureModel, as_feature_model
from .schema import ATTRIBUTE_FAMILIES, FeatureSchema, feature_attrs

logger = logging.getLogger(__name__)


def index_name_map(attrs: Mapping[str, Any]) -> Dict[int, str]:
    """
    idx -> name 查找表。

    按 nominal, numeric, binary 的固定顺序遍历属性族；同一 idx 出现在多个族时，
    后处理的族覆盖先前的名字（last-write-wins）。
    """
    lookup: Dict[int, str] = {}
    for family in ATTRIBUTE_FAMILIES:
        for entry in attrs.get(family) or ():
            name = entry.get("name")
            if name is None:
                continue
            lookup[int(entry["idx"])] = str(name)
    return lookup


def _score_key(score: float) -> Tuple[bool, float, bool]:
    # NaN 大于一切数值，-0.0 小于 0.0（与 Java Double.compare 的全序一致）
    if math.isnan(score):
        return (True, 0.0, False)
    return (False, score, math.copysign(1.0, score) > 0)


def rank_importances(
    scores: Iterable[float],
    names: Mapping[int, str],
    sort: Union[Order, str] = Order.DESCENDING,
) -> List[Importance]:
    sort = Order(sort)
    vec = np.asarray(list(scores), dtype=float).ravel()

    # pass 1: stable descending order -> rank of every slot
    order = np.asarray(sorted(range(vec.size), key=lambda i: _score_key(float(vec[i])), reverse=True), dtype=int)
    ranks = np.empty(vec.size, dtype=int)
    ranks[order] = np.arange(vec.size)

    # pass 2: records in vector order, rank already fixed
    records = [
        Importance(raw_idx=i, rank=int(ranks[i]), name=names.get(i), score=float(vec[i]))
        for i in range(vec.size)
    ]

    if sort is Order.UNSORTED:
        return records
    desc = [records[i] for i in order]
    if sort is Order.DESCENDING:
        return desc
    return sorted(desc, key=lambda imp: _score_key(imp.score))


@dataclass(frozen=True)
class FeatureImportance:
    """
    特征重要性与列名关联器。

    - model: FeatureModel，或六种支持的 sklearn 树模型之一（默认特征列名 "features"）
    - schema: FeatureSchema，或其 JSON 形式（Spark StructType.jsonValue() 布局）
    - sort: 输出顺序，默认 DESCENDING；rank 始终按降序计算
    """

    model: Any
    schema: Any
    sort: Union[Order, str] = Order.DESCENDING

    def __post_init__(self) -> None:
        if self.model is None or self.schema is None:
            raise InvalidConfiguration("both model and schema are required")
        object.__setattr__(self, "model", as_feature_model(self.model))
        if not isinstance(self.schema, FeatureSchema):
            object.__setattr__(self, "schema", FeatureSchema.from_json(self.schema))
        try:
            object.__setattr__(self, "sort", Order(self.sort))
        except ValueError as e:
            raise InvalidConfiguration(f"unknown sort order: {self.sort!r}") from e

    def get_result(self) -> List[Importance]:
        model: FeatureModel = self.model
        scores = model.feature_importances()
        attrs = feature_attrs(self.schema.field(model.features_col))
        names = index_name_map(attrs)

        unresolved = sum(1 for i in range(scores.size) if i not in names)
        logger.debug(
            "%s: %d importances, %d named slots in %r, %d unresolved",
            model.kind.value,
            scores.size,
            len(names),
            model.features_col,
            unresolved,
        )
        return rank_importances(scores, names, self.sort)

    resolve = get_result


def feature_importances(
    model: Any,
    schema: Any,
    sort: Union[Order, str] = Order.DESCENDING,
) -> List[Importance]:
    return FeatureImportance(model, schema, sort=sort).get_result()
