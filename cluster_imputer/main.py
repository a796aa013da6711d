# cluster_imputer/main.py
import logging
import sys

import numpy as np
import pandas as pd
from sklearn.experimental import enable_iterative_imputer  # noqa: F401
from sklearn.impute import KNNImputer, IterativeImputer

from .clustering.centroids import CentroidRequest, Variant
from .config import CFG
from .correlation import correlation_table
from .data import load_numeric_dataset, make_missingness, scale_data
from .diagnostics import Diagnostics
from .evaluate import evaluate_imputation
from .impute import impute_missing


def print_correlations(df, kind):
    diagnostics = Diagnostics()
    table = correlation_table(df, correlation_kind=kind, diagnostics=diagnostics)
    print(f"\nCorrelation table ({kind}):")
    for name, pairs in table.items():
        partners = [(other, coef) for other, coef in pairs if other != name][:3]
        partners = ", ".join(f"{other}={coef:+.3f}" for other, coef in partners)
        print(f"  {name}: {partners}")
    for record in diagnostics:
        print(f"  warning: {record.message} {list(record.columns)}")


def main(cfg=None):
    cfg = dict(CFG, **(cfg or {}))
    if len(sys.argv) > 1:
        cfg["csv_path"] = sys.argv[1]
    logging.basicConfig(level=cfg["log_level"],
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    np.random.seed(cfg["seed"])

    # Load dataset
    df = load_numeric_dataset(cfg["csv_path"])
    feature_names = df.columns.tolist()
    X = df.values.astype(float)
    print_correlations(df, cfg["correlation_kind"])

    # Create missingness and scale; the scaler ignores NaN
    X_missing, mask_obs = make_missingness(X, cfg["missing_rate"], cfg["seed"])
    X_scaled, scaler = scale_data(X_missing)
    dataset = pd.DataFrame(X_scaled, columns=feature_names)

    request = CentroidRequest(variant=Variant(cfg["variant"]), k=cfg["k"],
                              max_iterations=cfg["max_iterations"], max_k=cfg["max_k"],
                              seed=cfg["seed"])
    imputed_scaled = impute_missing(dataset, request=request, n_jobs=cfg["n_jobs"])
    centroid_imputed = scaler.inverse_transform(imputed_scaled.to_numpy(dtype=float))

    # Baselines
    knn_imp = KNNImputer(n_neighbors=cfg["knn_neighbors"]).fit_transform(X_scaled)
    iter_imp = IterativeImputer(random_state=cfg["seed"],
                                max_iter=cfg["iterative_max_iter"]).fit_transform(X_scaled)
    knn_imp = scaler.inverse_transform(knn_imp)
    iter_imp = scaler.inverse_transform(iter_imp)

    # Evaluation
    methods = {
        f"Centroid means ({request.variant.value})": centroid_imputed,
        "KNNImputer": knn_imp,
        "IterativeImputer": iter_imp,
    }

    print("\nEvaluation (only at originally-missing entries):")
    results = {}
    for name, imp in methods.items():
        rmse, mae, r2, per_feat, unresolved = evaluate_imputation(imp, X, mask_obs, feature_names)
        results[name] = (rmse, mae, r2, per_feat)
        print(f"\n{name}:")
        print(f"  RMSE = {rmse:.6f}")
        print(f"  MAE  = {mae:.6f}")
        print(f"  R2   = {r2:.6f}")
        if unresolved:
            print(f"  Unresolved cells = {unresolved}")
        print("  Per-feature RMSE:")
        for f, v in per_feat.items():
            print(f"    {f}: {v}")

    print("\nSummary (RMSE / MAE / R2):")
    for name, (rmse, mae, r2, _) in results.items():
        print(f"  {name}: RMSE={rmse:.6f}  MAE={mae:.6f}  R2={r2:.6f}")

    print("\nDone.")


if __name__ == "__main__":
    main()
