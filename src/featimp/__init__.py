"""
featimp: 将树模型的 feature importance 与特征向量元数据中的列名关联并排序。
"""

from .errors import (
    ColumnNotFound,
    FeatureImportanceError,
    InvalidConfiguration,
    MissingAttributeMetadata,
    UnsupportedModelType,
)
from .importance import Importance, Order, to_frame, top_k
from .models import FeatureModel, ModelKind, as_feature_model, model_kind
from .resolver import FeatureImportance, feature_importances, index_name_map, rank_importances
from .schema import (
    FeatureSchema,
    StructField,
    assemble_schema,
    attrs_metadata,
    feature_attrs,
    schema_from_frame,
)

__all__ = [
    "ColumnNotFound",
    "FeatureImportance",
    "FeatureImportanceError",
    "FeatureModel",
    "FeatureSchema",
    "Importance",
    "InvalidConfiguration",
    "MissingAttributeMetadata",
    "ModelKind",
    "Order",
    "StructField",
    "UnsupportedModelType",
    "as_feature_model",
    "assemble_schema",
    "attrs_metadata",
    "feature_attrs",
    "feature_importances",
    "index_name_map",
    "model_kind",
    "rank_importances",
    "schema_from_frame",
    "to_frame",
    "top_k",
]
