# cluster_imputer/exceptions.py


class ClusterImputerError(Exception):
    """Base class for every error raised by cluster_imputer."""


class InvalidSelectionError(ClusterImputerError):
    def __init__(self, message, columns):
        super().__init__(f"{message}: {list(columns)}")
        self.columns = list(columns)


class NonNumericColumnError(ClusterImputerError):
    def __init__(self, columns):
        super().__init__(f"Columns are not numeric: {list(columns)}")
        self.columns = list(columns)


class MissingValuesError(ClusterImputerError):
    def __init__(self, message, columns):
        super().__init__(f"{message}: {list(columns)}")
        self.columns = list(columns)


class ShapeMismatchError(ClusterImputerError):
    def __init__(self, centroid_cols, dataset_cols):
        super().__init__(
            f"Centroid/Dataset column count mismatch - {centroid_cols} vs {dataset_cols}")
        self.centroid_cols = centroid_cols
        self.dataset_cols = dataset_cols


class EmptyCentroidSetError(ClusterImputerError):
    def __init__(self):
        super().__init__("No centroids passed in.")


class ConsistencyError(ClusterImputerError):
    """A row was claimed by more than one centroid group."""

    def __init__(self, row_idx, count):
        super().__init__(
            f"Row {row_idx} belongs to {count} centroid groups; grouping is not a partition")
        self.row_idx = row_idx
        self.count = count
