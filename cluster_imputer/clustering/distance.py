# cluster_imputer/clustering/distance.py
import numpy as np


def nan_squared_distances(rows, centroids):
    """Missing-tolerant squared distances, shape (n_rows, n_centroids).

    Only coordinates present in both vectors contribute, and the partial sum
    is scaled by n_features / n_present. Pairs sharing no present coordinate
    get +inf so they never win a nearest-centroid search.
    """
    rows = np.atleast_2d(np.asarray(rows, dtype=np.float64))
    centroids = np.atleast_2d(np.asarray(centroids, dtype=np.float64))
    n_features = rows.shape[1]
    # differences are taken directly; the dot-product expansion loses
    # precision on large-magnitude features
    diff = rows[:, None, :] - centroids[None, :, :]
    present = ~np.isnan(diff)
    n_present = present.sum(axis=2)
    sums = np.where(present, diff * diff, 0.0).sum(axis=2)
    with np.errstate(divide="ignore", invalid="ignore"):
        dists = sums * n_features / n_present
    dists[n_present == 0] = np.inf
    return dists


def nan_squared_distance(lhs, rhs):
    return float(nan_squared_distances(lhs, rhs)[0, 0])
