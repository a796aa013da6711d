from .clustering import (CentroidRequest, MeanBundle, SklearnCentroidProvider, Variant,
                         centroid_and_global_means, generate_centroids,
                         group_rows_by_nearest_centroid)
from .correlation import CorrelationKind, correlation_table
from .diagnostics import Diagnostics
from .impute import impute_missing, impute_missing_by_centroid_averages
from .layout import to_column_major, to_row_major, transpose

__version__ = "0.1.0"
