"""Pytest 设定：把 src 加入 import 路径，使未安装时也能 `import featimp`。"""

from __future__ import annotations

import os
import sys

import numpy as np
import pytest
from sklearn.tree import DecisionTreeRegressor


def _add_src_to_path() -> None:
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    src = os.path.join(root, "src")
    if src not in sys.path:
        sys.path.insert(0, src)


_add_src_to_path()


class FixedImportanceTree(DecisionTreeRegressor):
    """DecisionTreeRegressor whose importances are given instead of learned."""

    def __init__(self, importances=None):
        super().__init__()
        self.importances = importances

    @property
    def feature_importances_(self):
        return np.asarray(self.importances, dtype=float)


@pytest.fixture
def fixed_tree():
    return FixedImportanceTree


@pytest.fixture
def age_income_zip():
    """The three-feature example: scores [0.5, 0.2, 0.3], all slots named."""
    from featimp import FeatureModel, assemble_schema

    model = FeatureModel(FixedImportanceTree([0.5, 0.2, 0.3]), features_col="features")
    schema = assemble_schema(["age", "income", "zip"], "features")
    return model, schema
