# cluster_imputer/clustering/means.py
from dataclasses import dataclass, field
from typing import Dict

import numpy as np

from ..layout import to_column_major, transpose
from ..parallel import parallel_chunks
from .grouping import group_rows_by_nearest_centroid


@dataclass
class MeanBundle:
    """Per-centroid and whole-dataset column means; NaN where nothing was observed."""
    centroid_means: Dict[int, np.ndarray] = field(default_factory=dict)
    global_means: np.ndarray = field(default_factory=lambda: np.empty(0))


def nan_aware_mean(values):
    values = np.asarray(values, dtype=np.float64)
    present = values[~np.isnan(values)]
    if present.size == 0:
        return np.nan
    return present.sum() / present.size


def column_means(column_major, n_jobs=None):
    n_cols = column_major.shape[0]
    retval = np.empty(n_cols, dtype=np.float64)

    def fill(start, stop):
        for col_idx in range(start, stop):
            retval[col_idx] = nan_aware_mean(column_major[col_idx])

    parallel_chunks(n_cols, fill, n_jobs)
    return retval


def centroid_and_global_means(dataset, centroids, n_jobs=None):
    groupings = group_rows_by_nearest_centroid(dataset, centroids, False, n_jobs=n_jobs)
    centroid_means = {}
    for centroid_idx, grouping in groupings.items():
        row_major = np.vstack([record.row_data for record in grouping])
        centroid_means[centroid_idx] = column_means(transpose(row_major, n_jobs=n_jobs), n_jobs)
    global_means = column_means(to_column_major(dataset, False), n_jobs)
    return MeanBundle(centroid_means=centroid_means, global_means=global_means)
