# cluster_imputer/data.py
import copy

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

from .exceptions import InvalidSelectionError, MissingValuesError, NonNumericColumnError

METADATA_KEY = "column_metadata"
CATEGORICAL_KEY = "categorical"


def load_dataset(csv_path):
    return pd.read_csv(csv_path)


def load_numeric_dataset(csv_path):
    df = load_dataset(csv_path)
    df_num = df.select_dtypes(include=[np.number]).dropna().reset_index(drop=True)
    return df_num


def make_missingness(X, rate, seed):
    rng = np.random.default_rng(seed)
    mask_obs = np.ones_like(X, dtype=bool)
    positions = rng.uniform(size=X.shape) < rate
    mask_obs[positions] = False
    X_masked = X.astype(float)
    X_masked[~mask_obs] = np.nan
    return X_masked, mask_obs


def scale_data(X):
    # StandardScaler ignores NaN when fitting and keeps it when transforming
    scaler = StandardScaler()
    Xs = scaler.fit_transform(X)
    return Xs, scaler


def column_names(dataset):
    return list(dataset.columns)


def column(dataset, name):
    if name not in dataset.columns:
        raise InvalidSelectionError("Unknown columns", [name])
    return dataset[name]


def is_numeric_column(col):
    dtype = col.dtype
    return pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_bool_dtype(dtype)


def non_numeric_columns(dataset):
    return [name for name in dataset.columns if not is_numeric_column(dataset[name])]


def missing_rows(col):
    return np.flatnonzero(col.isna().to_numpy())


def columns_with_missing(dataset):
    return [name for name in dataset.columns if dataset[name].isna().any()]


def to_double_array(col, error_on_missing=False):
    if not is_numeric_column(col):
        raise NonNumericColumnError([col.name])
    if error_on_missing and col.isna().any():
        raise MissingValuesError("Column has missing values", [col.name])
    return col.to_numpy(dtype=np.float64, na_value=np.nan)


def ensure_no_missing(dataset, message):
    missing = columns_with_missing(dataset)
    if missing:
        raise MissingValuesError(message, missing)


def column_metadata(dataset, name):
    """Per-column metadata, kept in dataset.attrs since a frame drops Series.attrs."""
    return dict(dataset.attrs.get(METADATA_KEY, {}).get(name, {}))


def with_column_metadata(dataset, name, metadata):
    updated = dataset.copy()
    attrs = copy.deepcopy(dataset.attrs)
    attrs.setdefault(METADATA_KEY, {})[name] = dict(metadata)
    updated.attrs = attrs
    return updated


def new_column(old_col, values, datatype="float64"):
    return pd.Series(np.asarray(values), index=old_col.index, name=old_col.name, dtype=datatype)


def update_column(dataset, name, fn, metadata=None):
    """Return a new dataset with column `name` replaced by fn(old column).

    When metadata is given it replaces the column's stored metadata.
    """
    updated = dataset.copy()
    updated[name] = fn(column(dataset, name))
    attrs = copy.deepcopy(dataset.attrs)
    if metadata is not None:
        attrs.setdefault(METADATA_KEY, {})[name] = dict(metadata)
    updated.attrs = attrs
    return updated
