"""Tests for schema lookup and ml_attr metadata assembly."""

from __future__ import annotations

import pandas as pd
import pytest

from featimp import (
    ColumnNotFound,
    FeatureSchema,
    MissingAttributeMetadata,
    StructField,
    assemble_schema,
    attrs_metadata,
    feature_attrs,
    schema_from_frame,
)


class TestFeatureSchema:
    def test_field_lookup(self):
        schema = FeatureSchema([StructField("label"), StructField("features", {"k": 1})])

        assert schema.field_names == ["label", "features"]
        assert "features" in schema
        assert "missing" not in schema
        assert schema.field("features").metadata == {"k": 1}

    def test_field_not_found(self):
        with pytest.raises(ColumnNotFound, match="'features'"):
            FeatureSchema([StructField("label")]).field("features")

    def test_json_value_round_trip(self):
        schema = assemble_schema(["a", "b"], "vec")
        assert FeatureSchema.from_json(schema.json_value()) == schema

    def test_from_object_with_json_value(self):
        class _SparkLikeSchema:
            def jsonValue(self):
                return {"type": "struct", "fields": [{"name": "features", "type": "vector", "nullable": False}]}

        schema = FeatureSchema.from_json(_SparkLikeSchema())
        assert schema.field("features").nullable is False
        assert schema.field("features").metadata == {}


class TestFeatureAttrs:
    def test_returns_attrs(self):
        field = assemble_schema(["a"]).field("features")
        assert feature_attrs(field) == {"numeric": [{"idx": 0, "name": "a"}]}

    @pytest.mark.parametrize("metadata", [{}, {"ml_attr": None}, {"ml_attr": {"num_attrs": 1}}, {"ml_attr": {"attrs": []}}])
    def test_missing(self, metadata):
        with pytest.raises(MissingAttributeMetadata):
            feature_attrs(StructField("features", metadata))


class TestAttrsMetadata:
    def test_families_and_slot_indices(self):
        meta = attrs_metadata(
            ["color", "age", "is_vip", "income"],
            nominal=["color"],
            binary=["is_vip"],
            nominal_values={"color": ["red", "blue"]},
        )

        assert meta["ml_attr"]["num_attrs"] == 4
        attrs = meta["ml_attr"]["attrs"]
        assert attrs["nominal"] == [{"idx": 0, "name": "color", "vals": ["red", "blue"]}]
        assert attrs["numeric"] == [{"idx": 1, "name": "age"}, {"idx": 3, "name": "income"}]
        assert attrs["binary"] == [{"idx": 2, "name": "is_vip"}]

    def test_empty_families_omitted(self):
        attrs = attrs_metadata(["x", "y"])["ml_attr"]["attrs"]
        assert set(attrs) == {"numeric"}


class TestSchemaFromFrame:
    def test_dtype_families(self):
        df = pd.DataFrame(
            {
                "age": [31, 45, 22],
                "region": pd.Categorical(["north", "south", "north"], categories=["north", "south", "east"]),
                "member": [True, False, True],
                "city": ["b", "a", None],
                "income": [1.5, 2.5, 3.5],
            }
        )
        attrs = feature_attrs(schema_from_frame(df, "vec").field("vec"))

        assert attrs["numeric"] == [{"idx": 0, "name": "age"}, {"idx": 4, "name": "income"}]
        assert attrs["nominal"] == [
            {"idx": 1, "name": "region", "vals": ["north", "south", "east"]},
            {"idx": 3, "name": "city", "vals": ["a", "b"]},
        ]
        assert attrs["binary"] == [{"idx": 2, "name": "member"}]
