from __future__ import annotations


class FeatureImportanceError(Exception):
    """featimp 所有异常的基类。"""


class InvalidConfiguration(FeatureImportanceError, ValueError):
    """model 或 schema 缺失（构造时立即失败）。"""


class UnsupportedModelType(FeatureImportanceError, TypeError):
    """模型不属于支持 feature importance 的六种树模型之一。"""


class ColumnNotFound(FeatureImportanceError, LookupError):
    """模型声明的特征列在 schema 中不存在（model 与 schema 不配套）。"""


class MissingAttributeMetadata(FeatureImportanceError, LookupError):
    """特征列缺少 ml_attr.attrs 元数据（不是由标准特征组装步骤产生的）。"""
