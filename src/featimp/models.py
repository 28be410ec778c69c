from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

import numpy as np
from sklearn.ensemble import (
    GradientBoostingClassifier,
    GradientBoostingRegressor,
    RandomForestClassifier,
    RandomForestRegressor,
)
from sklearn.pipeline import Pipeline
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from .errors import UnsupportedModelType

DEFAULT_FEATURES_COL = "features"


class ModelKind(str, Enum):
    GBT_REGRESSOR = "GradientBoostingRegressor"
    GBT_CLASSIFIER = "GradientBoostingClassifier"
    RANDOM_FOREST_REGRESSOR = "RandomForestRegressor"
    RANDOM_FOREST_CLASSIFIER = "RandomForestClassifier"
    DECISION_TREE_REGRESSOR = "DecisionTreeRegressor"
    DECISION_TREE_CLASSIFIER = "DecisionTreeClassifier"


# 唯一的类型 -> 变体映射；新增支持的模型只需改这里
_KIND_BY_CLASS: Dict[type, ModelKind] = {
    GradientBoostingRegressor: ModelKind.GBT_REGRESSOR,
    GradientBoostingClassifier: ModelKind.GBT_CLASSIFIER,
    RandomForestRegressor: ModelKind.RANDOM_FOREST_REGRESSOR,
    RandomForestClassifier: ModelKind.RANDOM_FOREST_CLASSIFIER,
    DecisionTreeRegressor: ModelKind.DECISION_TREE_REGRESSOR,
    DecisionTreeClassifier: ModelKind.DECISION_TREE_CLASSIFIER,
}


def model_kind(estimator: object) -> ModelKind:
    for cls in type(estimator).__mro__:
        kind = _KIND_BY_CLASS.get(cls)
        if kind is not None:
            return kind
    supported = ",".join(k.value for k in ModelKind)
    raise UnsupportedModelType(
        f"{estimator!r} doesn't have feature importances. "
        f"You should specify an instance of {supported}"
    )


@dataclass(frozen=True)
class FeatureModel:
    """
    已训练树模型 + 其输入特征向量列名。

    - estimator: 六种支持 feature_importances_ 的 sklearn 树模型之一
    - features_col: schema 中特征向量列的名字（对应其 ml_attr 元数据）
    """

    estimator: object
    features_col: str = DEFAULT_FEATURES_COL

    @property
    def kind(self) -> ModelKind:
        return model_kind(self.estimator)

    def feature_importances(self) -> np.ndarray:
        # 六种模型都通过 feature_importances_ 暴露；先校验类型，再取值
        model_kind(self.estimator)
        return np.asarray(self.estimator.feature_importances_, dtype=float).ravel()

    @classmethod
    def from_pipeline(
        cls,
        pipeline: Pipeline,
        step: Union[int, str] = -1,
        features_col: str = DEFAULT_FEATURES_COL,
    ) -> "FeatureModel":
        estimator = pipeline.named_steps[step] if isinstance(step, str) else pipeline.steps[step][1]
        return cls(estimator, features_col=features_col)


def as_feature_model(model: object) -> FeatureModel:
    if isinstance(model, FeatureModel):
        return model
    return FeatureModel(model)
