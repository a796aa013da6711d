import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def two_cluster_dataset():
    # rows 0-2 sit near (1, 1), rows 3-5 near (11, 21); row 3 is missing b
    return pd.DataFrame({
        "a": [0.0, 1.0, 2.0, 10.0, 11.0, 12.0],
        "b": [0.0, 1.0, 2.0, np.nan, 21.0, 22.0],
    })


@pytest.fixture
def two_centroids():
    return np.array([[1.0, 1.0], [11.0, 21.0]])


@pytest.fixture
def blobs():
    rng = np.random.default_rng(0)
    centers = np.array([[0.0, 0.0], [100.0, 100.0], [-100.0, 100.0]])
    points = np.vstack([rng.normal(c, 1.0, size=(60, 2)) for c in centers])
    return pd.DataFrame(points, columns=["x", "y"])
