# cluster_imputer/layout.py
import numpy as np

from .data import column_names, to_double_array
from .parallel import parallel_chunks


def to_column_major(dataset, error_on_missing=False):
    """One float64 row per column. Missing cells are NaN unless error_on_missing."""
    n_rows = len(dataset.index)
    cols = [to_double_array(dataset[name], error_on_missing) for name in column_names(dataset)]
    if not cols:
        return np.empty((0, n_rows), dtype=np.float64)
    return np.vstack(cols)


def to_row_major(dataset, error_on_missing=False, n_jobs=None):
    return transpose(to_column_major(dataset, error_on_missing), n_jobs=n_jobs)


def transpose(matrix, n_jobs=None):
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a rectangular 2-D matrix, got shape {matrix.shape}")
    n_in_rows, n_out_rows = matrix.shape
    retval = np.empty((n_out_rows, n_in_rows), dtype=np.float64)

    def fill(start, stop):
        # each task owns output rows [start, stop)
        retval[start:stop, :] = matrix[:, start:stop].T

    parallel_chunks(n_out_rows, fill, n_jobs)
    return retval
