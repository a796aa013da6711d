# cluster_imputer/correlation.py
from enum import Enum

import numpy as np

from .data import column_names, columns_with_missing, non_numeric_columns
from .diagnostics import DROPPED_PAIR, EXCLUDED_MISSING, EXCLUDED_NON_NUMERIC, Diagnostics
from .exceptions import InvalidSelectionError


class CorrelationKind(str, Enum):
    PEARSON = "pearson"
    SPEARMAN = "spearman"
    KENDALL = "kendall"


def correlation_table(dataset, correlation_kind=CorrelationKind.PEARSON, colname_seq=None,
                      diagnostics=None):
    """Return {colname: [(other_colname, coefficient), ...]}.

    Each list is sorted by descending absolute coefficient, so a column's
    entry against itself (1.0) comes first. Columns with missing values and
    non-numeric columns are left out with a warning; naming one of them in
    colname_seq is an error. Pairs whose coefficient is not finite are
    dropped with a warning.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    kind = CorrelationKind(correlation_kind or CorrelationKind.PEARSON)

    missing = columns_with_missing(dataset)
    if missing:
        diagnostics.warn(EXCLUDED_MISSING, "excluding columns with missing values", missing)
    non_numeric = non_numeric_columns(dataset)
    if non_numeric:
        diagnostics.warn(EXCLUDED_NON_NUMERIC, "excluding non-numeric columns", non_numeric)

    requested = list(colname_seq or [])
    unknown = [name for name in requested if name not in dataset.columns]
    if unknown:
        raise InvalidSelectionError("Selected columns do not exist", unknown)
    excluded = set(missing) | set(non_numeric)
    selected_excluded = [name for name in requested if name in excluded]
    if selected_excluded:
        raise InvalidSelectionError(
            "Selected columns are non-numeric or have missing values", selected_excluded)

    survivors = [name for name in column_names(dataset) if name not in excluded]
    frame = dataset[survivors].astype(np.float64)
    coefficients = frame.corr(method=kind.value)

    lhs_names = requested or survivors
    retval = {}
    for lhs in lhs_names:
        pairs = []
        for rhs in survivors:
            corr = float(coefficients.at[lhs, rhs])
            if np.isfinite(corr):
                pairs.append((rhs, corr))
            else:
                diagnostics.warn(DROPPED_PAIR, f"Correlation failed: {lhs}-{rhs}", (lhs, rhs))
        # sorted is stable, ties keep right-hand column order
        retval[lhs] = sorted(pairs, key=lambda pair: abs(pair[1]), reverse=True)
    return retval
