# cluster_imputer/clustering/centroids.py
"""Centroid generation.

The clustering itself is delegated to scikit-learn; this module only picks
k for the auto-k variants and enforces each variant's input preconditions.
Anything implementing CentroidProvider can be swapped in.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import numpy as np
from scipy import stats
from sklearn.cluster import KMeans
from sklearn.impute import SimpleImputer

from ..data import ensure_no_missing
from ..exceptions import MissingValuesError
from ..layout import to_row_major

logger = logging.getLogger(__name__)

# G-means needs enough points in a cluster for the normality test to mean anything
GMEANS_MIN_POINTS = 8
GMEANS_ALPHA = 1e-4


class Variant(str, Enum):
    KMEANS = "kmeans"
    GMEANS = "gmeans"
    XMEANS = "xmeans"

    @property
    def allows_missing(self):
        return self is Variant.KMEANS


@dataclass(frozen=True)
class CentroidRequest:
    variant: Variant = Variant.KMEANS
    k: int = 5
    max_iterations: int = 100
    max_k: int = 5
    num_runs: int = 1
    seed: Optional[int] = None


class CentroidProvider(Protocol):
    def generate_centroids(self, row_major: np.ndarray, request: CentroidRequest) -> np.ndarray:
        ...


def _fit_kmeans(X, k, request):
    km = KMeans(
        n_clusters=k,
        max_iter=request.max_iterations,
        n_init=request.num_runs,
        random_state=request.seed,
    )
    labels = km.fit_predict(X)
    return km, labels


def _bic(X, labels, centers):
    """Bayesian information criterion of a spherical-Gaussian k-means model."""
    n, d = X.shape
    k = centers.shape[0]
    if n <= k:
        return -np.inf
    sse = float(((X - centers[labels]) ** 2).sum())
    if sse == 0.0:
        return np.inf
    variance = sse / (d * (n - k))
    counts = np.bincount(labels, minlength=k)
    counts = counts[counts > 0]
    loglik = (float((counts * np.log(counts / n)).sum())
              - n * d / 2.0 * np.log(2.0 * np.pi * variance)
              - (n - k) * d / 2.0)
    n_params = k * (d + 1)
    return loglik - n_params / 2.0 * np.log(n)


def _is_gaussian(points):
    child = KMeans(n_clusters=2, n_init=1, random_state=0).fit(points)
    axis = child.cluster_centers_[0] - child.cluster_centers_[1]
    norm = float(axis @ axis)
    if norm == 0.0:
        return True
    projected = points @ axis / norm
    if np.ptp(projected) == 0.0:
        return True
    return stats.shapiro(projected).pvalue >= GMEANS_ALPHA


class SklearnCentroidProvider:

    def generate_centroids(self, row_major, request):
        X = np.asarray(row_major, dtype=np.float64)
        variant = Variant(request.variant)
        if not variant.allows_missing and np.isnan(X).any():
            bad = np.flatnonzero(np.isnan(X).any(axis=0)).tolist()
            raise MissingValuesError(
                f"{variant.value} - matrix cannot have missing values, column indexes", bad)
        if variant is Variant.KMEANS:
            return self.k_means(X, request)
        if variant is Variant.GMEANS:
            return self.g_means(X, request)
        return self.x_means(X, request)

    def k_means(self, X, request):
        if np.isnan(X).any():
            X = SimpleImputer(strategy="mean", keep_empty_features=True).fit_transform(X)
        km, _ = _fit_kmeans(X, request.k, request)
        return km.cluster_centers_

    def x_means(self, X, request):
        k_max = max(1, min(request.max_k, X.shape[0]))
        best_km, best_score = None, -np.inf
        for k in range(1, k_max + 1):
            km, labels = _fit_kmeans(X, k, request)
            score = _bic(X, labels, km.cluster_centers_)
            logger.debug("x-means k=%d bic=%.4f", k, score)
            if best_km is None or score > best_score:
                best_km, best_score = km, score
        logger.info("x-means selected k=%d", best_km.n_clusters)
        return best_km.cluster_centers_

    def g_means(self, X, request):
        k_max = max(1, min(request.max_k, X.shape[0]))
        km, labels = _fit_kmeans(X, 1, request)
        centers = km.cluster_centers_
        while len(centers) < k_max:
            new_centers = []
            for idx, center in enumerate(centers):
                points = X[labels == idx]
                room = len(centers) + (len(new_centers) - idx) < k_max
                if room and len(points) >= GMEANS_MIN_POINTS and not _is_gaussian(points):
                    child = KMeans(n_clusters=2, n_init=1, random_state=0).fit(points)
                    new_centers.extend(child.cluster_centers_)
                else:
                    new_centers.append(center)
            if len(new_centers) == len(centers):
                break
            km = KMeans(n_clusters=len(new_centers), init=np.asarray(new_centers),
                        n_init=1, max_iter=request.max_iterations).fit(X)
            centers, labels = km.cluster_centers_, km.labels_
        logger.info("g-means selected k=%d", len(centers))
        return centers


def generate_centroids(row_major, k=5, max_iterations=100, variant=Variant.KMEANS,
                       max_k=5, num_runs=1, seed=None, provider=None):
    request = CentroidRequest(variant=Variant(variant), k=k, max_iterations=max_iterations,
                              max_k=max_k, num_runs=num_runs, seed=seed)
    provider = provider or SklearnCentroidProvider()
    return provider.generate_centroids(row_major, request)


def k_means(dataset, k=5, max_iterations=100, num_runs=1, error_on_missing=False, seed=None):
    """NaN-tolerant k-means over a dataset. Returns row-major centroids."""
    return generate_centroids(to_row_major(dataset, error_on_missing), k=k,
                              max_iterations=max_iterations, variant=Variant.KMEANS,
                              num_runs=num_runs, seed=seed)


def g_means(dataset, max_k=5, error_on_missing=False, seed=None):
    ensure_no_missing(dataset, "G-Means - dataset cannot have missing values")
    return generate_centroids(to_row_major(dataset, error_on_missing), max_k=max_k,
                              variant=Variant.GMEANS, seed=seed)


def x_means(dataset, max_k=5, error_on_missing=False, seed=None):
    ensure_no_missing(dataset, "X-Means - dataset cannot have missing values")
    return generate_centroids(to_row_major(dataset, error_on_missing), max_k=max_k,
                              variant=Variant.XMEANS, seed=seed)
