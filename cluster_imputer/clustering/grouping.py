# cluster_imputer/clustering/grouping.py
from typing import NamedTuple

import numpy as np

from ..exceptions import EmptyCentroidSetError, ShapeMismatchError
from ..layout import to_row_major
from ..parallel import parallel_chunks
from .distance import nan_squared_distances


class RowRecord(NamedTuple):
    row_idx: int
    row_data: np.ndarray
    centroid_idx: int


def as_centroid_array(centroids, n_columns):
    centroids = np.asarray(centroids, dtype=np.float64)
    if centroids.size == 0:
        raise EmptyCentroidSetError()
    centroids = np.atleast_2d(centroids)
    if centroids.ndim != 2:
        raise ValueError(f"Centroids must be a 2-D array, got shape {centroids.shape}")
    if centroids.shape[1] != n_columns:
        raise ShapeMismatchError(centroids.shape[1], n_columns)
    return centroids


def nearest_centroid_indexes(row_major, centroids, n_jobs=None):
    """Index of the nearest centroid for every row of a row-major matrix.

    Ties go to the lowest centroid index: a later centroid only wins when its
    distance is strictly smaller.
    """
    n_rows = row_major.shape[0]
    retval = np.empty(n_rows, dtype=np.intp)

    def assign(start, stop):
        dists = nan_squared_distances(row_major[start:stop], centroids)
        # argmin returns the first minimum
        retval[start:stop] = np.argmin(dists, axis=1)

    parallel_chunks(n_rows, assign, n_jobs)
    return retval


def row_assignments(dataset, centroids, error_on_missing=False, n_jobs=None):
    n_columns = len(dataset.columns)
    centroids = as_centroid_array(centroids, n_columns)
    row_major = to_row_major(dataset, error_on_missing, n_jobs=n_jobs)
    return row_major, nearest_centroid_indexes(row_major, centroids, n_jobs=n_jobs)


def group_rows_by_nearest_centroid(dataset, centroids, error_on_missing=False, n_jobs=None):
    """Partition dataset rows by nearest centroid.

    Returns {centroid_idx: [RowRecord, ...]} in ascending centroid order;
    centroids that attract no row are absent.
    """
    row_major, assigned = row_assignments(dataset, centroids, error_on_missing, n_jobs)
    groups = {}
    for row_idx, centroid_idx in enumerate(assigned):
        centroid_idx = int(centroid_idx)
        groups.setdefault(centroid_idx, []).append(
            RowRecord(row_idx, row_major[row_idx], centroid_idx))
    return dict(sorted(groups.items()))
