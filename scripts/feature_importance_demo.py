from __future__ import annotations

import argparse
import logging

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.datasets import make_classification, make_regression
from sklearn.ensemble import (
    GradientBoostingClassifier,
    GradientBoostingRegressor,
    RandomForestClassifier,
    RandomForestRegressor,
)
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from featimp import FeatureImportance, FeatureModel, Order, assemble_schema, to_frame, top_k

MODELS = {
    "gbt_regressor": GradientBoostingRegressor,
    "gbt_classifier": GradientBoostingClassifier,
    "rf_regressor": RandomForestRegressor,
    "rf_classifier": RandomForestClassifier,
    "dt_regressor": DecisionTreeRegressor,
    "dt_classifier": DecisionTreeClassifier,
}


def _make_frame(task: str, n_samples: int, n_features: int, seed: int):
    if task == "classification":
        X, y = make_classification(
            n_samples=n_samples,
            n_features=n_features,
            n_informative=max(2, n_features // 2),
            n_redundant=0,
            random_state=seed,
        )
    else:
        X, y = make_regression(n_samples=n_samples, n_features=n_features, n_informative=max(2, n_features // 2), random_state=seed)
    df = pd.DataFrame(X, columns=[f"x{i}" for i in range(n_features)])
    rng = np.random.default_rng(seed)
    # 一个类别特征 + 一个二值特征，演示 nominal / binary 族
    df["region"] = rng.choice(["north", "south", "east"], size=n_samples)
    df["is_member"] = (df["x0"] > 0).astype(int)
    return df, y


def main() -> int:
    ap = argparse.ArgumentParser(description="Rank tree-model feature importances by column name.")
    ap.add_argument("--model", choices=sorted(MODELS), default="rf_classifier")
    ap.add_argument("--sort", choices=[o.value for o in Order], default=Order.DESCENDING.value)
    ap.add_argument("--n-samples", type=int, default=2000)
    ap.add_argument("--n-features", type=int, default=8)
    ap.add_argument("--top", type=int, default=0, help="only print the top-k rows (0 = all)")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    task = "classification" if args.model.endswith("classifier") else "regression"
    df, y = _make_frame(task, args.n_samples, args.n_features, args.seed)
    numeric_cols = [c for c in df.columns if c.startswith("x")]

    pre = ColumnTransformer(
        [
            ("cat", OneHotEncoder(handle_unknown="ignore", sparse_output=False), ["region"]),
            ("bin", "passthrough", ["is_member"]),
            ("num", "passthrough", numeric_cols),
        ],
        verbose_feature_names_out=False,
    )
    pipeline = Pipeline([("pre", pre), ("model", MODELS[args.model](random_state=args.seed))])
    pipeline.fit(df, y)

    # 组装后的槽位名：one-hot 展开的每个类别值各占一个槽位
    slot_names = [str(n) for n in pipeline.named_steps["pre"].get_feature_names_out()]
    onehot = [n for n in slot_names if n.startswith("region_")]
    schema = assemble_schema(slot_names, "features", nominal=onehot, binary=["is_member"])

    model = FeatureModel.from_pipeline(pipeline, "model", features_col="features")
    importances = FeatureImportance(model, schema, sort=args.sort).get_result()
    if args.top > 0:
        importances = top_k(importances, args.top)

    print(f"=== Feature importance ({model.kind.value}, sort={args.sort}) ===")
    print(to_frame(importances).to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
