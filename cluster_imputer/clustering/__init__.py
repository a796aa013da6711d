from .centroids import (CentroidProvider, CentroidRequest, SklearnCentroidProvider, Variant,
                        g_means, generate_centroids, k_means, x_means)
from .distance import nan_squared_distance, nan_squared_distances
from .grouping import RowRecord, group_rows_by_nearest_centroid, row_assignments
from .means import MeanBundle, centroid_and_global_means, nan_aware_mean
