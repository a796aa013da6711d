import numpy as np
import pandas as pd
import pytest

from cluster_imputer.data import (column, column_metadata, columns_with_missing, ensure_no_missing,
                                  is_numeric_column, make_missingness, missing_rows, new_column,
                                  non_numeric_columns, scale_data, to_double_array, update_column,
                                  with_column_metadata)
from cluster_imputer.exceptions import (InvalidSelectionError, MissingValuesError,
                                        NonNumericColumnError)


@pytest.fixture
def frame():
    return pd.DataFrame({
        "num": [1.0, np.nan, 3.0, np.nan],
        "int": [1, 2, 3, 4],
        "flag": [True, False, True, False],
        "name": ["a", "b", None, "d"],
        "cat": pd.Categorical(["x", "y", "x", "y"]),
    })


def test_datatype_classification(frame):
    assert is_numeric_column(frame["num"])
    assert is_numeric_column(frame["int"])
    assert not is_numeric_column(frame["flag"])
    assert non_numeric_columns(frame) == ["flag", "name", "cat"]


def test_missing_bookkeeping(frame):
    np.testing.assert_array_equal(missing_rows(frame["num"]), [1, 3])
    assert missing_rows(frame["int"]).size == 0
    assert columns_with_missing(frame) == ["num", "name"]
    with pytest.raises(MissingValuesError) as err:
        ensure_no_missing(frame, "nope")
    assert err.value.columns == ["num", "name"]


def test_to_double_array(frame):
    values = to_double_array(frame["num"])
    assert values.dtype == np.float64
    assert np.isnan(values[1])
    with pytest.raises(MissingValuesError):
        to_double_array(frame["num"], error_on_missing=True)
    with pytest.raises(NonNumericColumnError):
        to_double_array(frame["name"])


def test_unknown_column(frame):
    with pytest.raises(InvalidSelectionError):
        column(frame, "missing")


def test_update_column_returns_new_dataset(frame):
    frame = with_column_metadata(frame, "int", {"unit": "s"})
    updated = update_column(frame, "int", lambda col: new_column(col, col * 2.0))
    assert updated is not frame
    np.testing.assert_array_equal(updated["int"], [2.0, 4.0, 6.0, 8.0])
    np.testing.assert_array_equal(frame["int"], [1, 2, 3, 4])
    assert column_metadata(updated, "int") == {"unit": "s"}


def test_make_missingness_marks_nan_cells():
    X = np.arange(200, dtype=float).reshape(50, 4)
    X_masked, mask_obs = make_missingness(X, 0.3, seed=0)
    assert np.isnan(X_masked[~mask_obs]).all()
    np.testing.assert_array_equal(X_masked[mask_obs], X[mask_obs])
    assert 0 < (~mask_obs).sum() < X.size


def test_scale_data_keeps_missing_cells():
    X = np.array([[1.0, 10.0], [np.nan, 20.0], [3.0, 30.0]])
    Xs, scaler = scale_data(X)
    assert np.isnan(Xs[1, 0])
    np.testing.assert_allclose(scaler.inverse_transform(Xs)[[0, 2]], X[[0, 2]])
