import numpy as np
import pandas as pd
import pytest

from cluster_imputer.exceptions import MissingValuesError, NonNumericColumnError
from cluster_imputer.layout import to_column_major, to_row_major, transpose


@pytest.mark.parametrize("shape", [(1, 5), (5, 1), (3, 4), (7, 2), (1, 1), (0, 3)])
@pytest.mark.parametrize("n_jobs", [1, 4])
def test_transpose_is_its_own_inverse(shape, n_jobs):
    matrix = np.arange(np.prod(shape), dtype=float).reshape(shape)
    flipped = transpose(matrix, n_jobs=n_jobs)
    assert flipped.shape == shape[::-1]
    assert np.array_equal(transpose(flipped, n_jobs=n_jobs), matrix)


def test_transpose_reads_coordinate_from_every_row():
    matrix = np.array([[1.0, 2.0, 3.0], [4.0, np.nan, 6.0]])
    flipped = transpose(matrix, n_jobs=3)
    for r in range(3):
        np.testing.assert_array_equal(flipped[r], matrix[:, r])


def test_transpose_rejects_ragged_input():
    with pytest.raises(ValueError):
        transpose([[1.0, 2.0], [3.0]])


def test_column_major_substitutes_nan_for_missing():
    ds = pd.DataFrame({"a": [1, 2, 3], "b": [1.5, None, 2.5]})
    cm = to_column_major(ds)
    assert cm.shape == (2, 3)
    assert cm.dtype == np.float64
    np.testing.assert_array_equal(cm[0], [1.0, 2.0, 3.0])
    assert np.isnan(cm[1, 1])


def test_column_major_handles_nullable_integers():
    ds = pd.DataFrame({"a": pd.array([1, None, 3], dtype="Int64")})
    cm = to_column_major(ds)
    assert cm[0, 0] == 1.0
    assert np.isnan(cm[0, 1])


def test_error_on_missing_fails():
    ds = pd.DataFrame({"a": [1.0, np.nan]})
    with pytest.raises(MissingValuesError) as err:
        to_column_major(ds, error_on_missing=True)
    assert err.value.columns == ["a"]
    with pytest.raises(MissingValuesError):
        to_row_major(ds, error_on_missing=True)


def test_row_major_is_transposed_column_major():
    ds = pd.DataFrame({"a": [1.0, 2.0], "b": [3.0, 4.0], "c": [5.0, 6.0]})
    rm = to_row_major(ds)
    np.testing.assert_array_equal(rm, [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]])


def test_non_numeric_column_cannot_be_converted():
    ds = pd.DataFrame({"a": [1.0, 2.0], "name": ["x", "y"]})
    with pytest.raises(NonNumericColumnError):
        to_row_major(ds)
