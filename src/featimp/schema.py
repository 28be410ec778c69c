from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from .errors import ColumnNotFound, MissingAttributeMetadata

ATTRIBUTE_FAMILIES = ("nominal", "numeric", "binary")


@dataclass(frozen=True)
class StructField:
    name: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    data_type: Any = "vector"
    nullable: bool = True

    def json_value(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.data_type,
            "nullable": self.nullable,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class FeatureSchema:
    """
    数据集结构描述（列名 + 每列元数据）。

    布局与 Spark StructType.jsonValue() 一致，因此可以直接读入
    Spark 产出的 schema JSON，而不依赖 Spark 本身。
    """

    fields: Sequence[StructField]

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def __contains__(self, name: object) -> bool:
        return any(f.name == name for f in self.fields)

    def field(self, name: str) -> StructField:
        for f in self.fields:
            if f.name == name:
                return f
        raise ColumnNotFound(f"column {name!r} not found in schema; available: {self.field_names}")

    def json_value(self) -> Dict[str, Any]:
        return {"type": "struct", "fields": [f.json_value() for f in self.fields]}

    @classmethod
    def from_json(cls, obj: Any) -> "FeatureSchema":
        if hasattr(obj, "jsonValue"):
            obj = obj.jsonValue()
        fields = [
            StructField(
                name=str(f["name"]),
                metadata=dict(f.get("metadata") or {}),
                data_type=f.get("type", "vector"),
                nullable=bool(f.get("nullable", True)),
            )
            for f in obj.get("fields", [])
        ]
        return cls(fields)


def feature_attrs(struct_field: StructField) -> Mapping[str, Any]:
    ml_attr = struct_field.metadata.get("ml_attr")
    if not isinstance(ml_attr, Mapping) or not isinstance(ml_attr.get("attrs"), Mapping):
        raise MissingAttributeMetadata(
            f"column {struct_field.name!r} has no ml_attr.attrs metadata; "
            "it was not produced by a feature assembly step"
        )
    return ml_attr["attrs"]


def attrs_metadata(
    feature_names: Iterable[str],
    *,
    nominal: Iterable[str] = (),
    binary: Iterable[str] = (),
    nominal_values: Optional[Mapping[str, Sequence[str]]] = None,
) -> Dict[str, Any]:
    """
    按特征向量的槽位顺序生成 ml_attr 元数据：
    - nominal / binary 中列出的名字归入对应族
    - 其余均为 numeric
    - nominal_values 可选地为 nominal 特征附带类别值（vals）
    """
    names = list(feature_names)
    nominal_set, binary_set = set(nominal), set(binary)
    attrs: Dict[str, List[Dict[str, Any]]] = {}
    for idx, name in enumerate(names):
        if name in nominal_set:
            family = "nominal"
        elif name in binary_set:
            family = "binary"
        else:
            family = "numeric"
        entry: Dict[str, Any] = {"idx": idx, "name": name}
        if family == "nominal" and nominal_values and name in nominal_values:
            entry["vals"] = [str(v) for v in nominal_values[name]]
        attrs.setdefault(family, []).append(entry)
    return {"ml_attr": {"attrs": attrs, "num_attrs": len(names)}}


def assemble_schema(
    feature_names: Iterable[str],
    features_col: str = "features",
    *,
    nominal: Iterable[str] = (),
    binary: Iterable[str] = (),
) -> FeatureSchema:
    metadata = attrs_metadata(feature_names, nominal=nominal, binary=binary)
    return FeatureSchema([StructField(features_col, metadata)])


def schema_from_frame(frame: pd.DataFrame, features_col: str = "features") -> FeatureSchema:
    # 按 dtype 推断属性族：bool -> binary，非数值 -> nominal，其余 -> numeric
    names = [str(c) for c in frame.columns]
    nominal: List[str] = []
    binary: List[str] = []
    values: Dict[str, List[str]] = {}
    for name, col in zip(names, frame.columns):
        dtype = frame[col].dtype
        if is_bool_dtype(dtype):
            binary.append(name)
        elif not is_numeric_dtype(dtype):
            nominal.append(name)
            if isinstance(dtype, pd.CategoricalDtype):
                values[name] = [str(v) for v in dtype.categories]
            else:
                values[name] = sorted(str(v) for v in frame[col].dropna().unique())
    metadata = attrs_metadata(names, nominal=nominal, binary=binary, nominal_values=values)
    return FeatureSchema([StructField(features_col, metadata)])
