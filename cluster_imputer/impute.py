# cluster_imputer/impute.py
import logging

import numpy as np

from .clustering.centroids import CentroidRequest, SklearnCentroidProvider, Variant
from .clustering.grouping import group_rows_by_nearest_centroid
from .clustering.means import centroid_and_global_means
from .data import (CATEGORICAL_KEY, column_metadata, columns_with_missing, ensure_no_missing,
                   new_column, to_double_array, update_column)
from .exceptions import ConsistencyError
from .layout import to_row_major
from .parallel import parallel_chunks

logger = logging.getLogger(__name__)


def row_owners(groupings, n_rows):
    """Flatten {centroid_idx: [RowRecord]} into row -> centroid index (-1 if unowned)."""
    owners = np.full(n_rows, -1, dtype=np.intp)
    claims = np.zeros(n_rows, dtype=np.intp)
    for centroid_idx, grouping in groupings.items():
        for record in grouping:
            owners[record.row_idx] = centroid_idx
            claims[record.row_idx] += 1
    multiple = np.flatnonzero(claims > 1)
    if multiple.size:
        row_idx = int(multiple[0])
        raise ConsistencyError(row_idx, int(claims[row_idx]))
    return owners


def _group_mean_table(centroid_means, n_groups, n_cols):
    """Dense (n_groups + 1, n_cols) table of group means.

    Groups missing from centroid_means stay all-NaN so their rows fall back
    to the global means; the extra last row serves unowned rows (index -1).
    """
    n_groups = max(n_groups, max(centroid_means, default=-1) + 1)
    table = np.full((n_groups + 1, n_cols), np.nan)
    for centroid_idx, means in centroid_means.items():
        table[centroid_idx] = means
    return table


def impute_missing_by_centroid_averages(dataset, centroids, means, n_jobs=None):
    """Fill missing cells from the owning centroid group's column mean.

    When the group mean is NaN the global column mean is used; when that is
    NaN too the cell stays NaN. Repaired columns come back as float64.
    Returns a new dataset, or the input itself when nothing is missing.
    """
    missing = columns_with_missing(dataset)
    if not missing:
        return dataset

    groupings = group_rows_by_nearest_centroid(dataset, centroids, False, n_jobs=n_jobs)
    n_rows = len(dataset.index)
    n_cols = len(dataset.columns)
    owners = row_owners(groupings, n_rows)
    n_groups = max(len(centroids), int(owners.max(initial=-1)) + 1)
    group_means = _group_mean_table(means.centroid_means, n_groups, n_cols)
    global_means = np.asarray(means.global_means, dtype=np.float64)

    for name in missing:
        col_idx = dataset.columns.get_loc(name)
        src = to_double_array(dataset[name], False)
        dst = np.empty(n_rows, dtype=np.float64)

        def fill(start, stop, src=src, dst=dst, col_idx=col_idx):
            values = src[start:stop]
            candidate = group_means[owners[start:stop], col_idx]
            fallback = np.where(np.isnan(candidate), global_means[col_idx], candidate)
            dst[start:stop] = np.where(np.isnan(values), fallback, values)

        parallel_chunks(n_rows, fill, n_jobs)
        unresolved = int(np.isnan(dst).sum())
        if unresolved:
            logger.info("%d cells of column %s could not be imputed", unresolved, name)

        metadata = column_metadata(dataset, name)
        metadata.pop(CATEGORICAL_KEY, None)
        dataset = update_column(dataset, name,
                                lambda old, dst=dst: new_column(old, dst, "float64"),
                                metadata=metadata)
    return dataset


def impute_missing(dataset, request=None, provider=None, n_jobs=None):
    """Cluster the dataset, then impute its missing cells from the clusters."""
    request = request or CentroidRequest()
    provider = provider or SklearnCentroidProvider()
    variant = Variant(request.variant)
    if not variant.allows_missing:
        ensure_no_missing(dataset, f"{variant.value} - dataset cannot have missing values")
    centroids = provider.generate_centroids(to_row_major(dataset, False, n_jobs=n_jobs), request)
    logger.info("generated %d centroids with %s", len(centroids), variant.value)
    means = centroid_and_global_means(dataset, centroids, n_jobs=n_jobs)
    return impute_missing_by_centroid_averages(dataset, centroids, means, n_jobs=n_jobs)
