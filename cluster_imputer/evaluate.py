# cluster_imputer/evaluate.py
import math

import numpy as np
from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score


def evaluate_imputation(imputed, ground_truth, mask_observed, feature_names):
    """Score imputed values at the originally-missing cells.

    Cells the imputer left as NaN are skipped and counted in `unresolved`.
    """
    imputed = np.asarray(imputed, dtype=float)
    ground_truth = np.asarray(ground_truth, dtype=float)
    missing = ~mask_observed
    scored = missing & ~np.isnan(imputed)
    unresolved = int((missing & np.isnan(imputed)).sum())
    y_true = ground_truth[scored]
    y_pred = imputed[scored]
    if y_true.size == 0:
        return float("nan"), float("nan"), float("nan"), {}, unresolved
    rmse = math.sqrt(mean_squared_error(y_true, y_pred))
    mae = mean_absolute_error(y_true, y_pred)
    r2 = r2_score(y_true, y_pred) if y_true.size > 1 else float("nan")
    per_feat = {}
    for j, name in enumerate(feature_names):
        idx = scored[:, j]
        if idx.sum() > 0:
            per_feat[name] = math.sqrt(mean_squared_error(ground_truth[idx, j], imputed[idx, j]))
        else:
            per_feat[name] = None
    return rmse, mae, r2, per_feat, unresolved
