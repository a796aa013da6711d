# cluster_imputer/config.py
CFG = {
    "csv_path": "datasets/air_quality.csv",
    "seed": 42,
    "variant": "kmeans",
    "k": 5,
    "max_iterations": 100,
    "max_k": 8,
    "correlation_kind": "pearson",
    "missing_rate": 0.20,
    "n_jobs": 4,
    "knn_neighbors": 5,
    "iterative_max_iter": 10,
    "log_level": "INFO",
}
