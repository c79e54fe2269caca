"""
K-means palette clustering.

Lloyd's algorithm over the sampled RGB pixels with centroids seeded by
uniform random draws (with replacement) from the pixels themselves. The
random source is an injected seed so runs can be reproduced; leaving the
seed unset draws fresh OS entropy on every call.
"""

from typing import List, Optional

import numpy as np
from loguru import logger

from colorweaver.config import config
from colorweaver.schemas import ExtractedColor
from .entries import build_extracted_color, sort_by_percentage

# Cluster size at which confidence saturates to 1.0
CONFIDENCE_SATURATION = 100

# Upper bound on point-centroid pairs held in memory per assignment chunk
ASSIGNMENT_CHUNK_PAIRS = 1 << 20


def squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Squared Euclidean RGB distance from every point to every centroid.

    Broadcasting: (N, 1, 3) - (1, k, 3) -> (N, k, 3) -> (N, k).
    Ranking by squared distance is equivalent to ranking by ``color_distance``.
    """
    deltas = points[:, None, :] - centroids[None, :, :]
    return np.einsum("nkc,nkc->nk", deltas, deltas)


def nearest_centroids(points: np.ndarray, centroids: np.ndarray,
                      chunk_pairs: int = ASSIGNMENT_CHUNK_PAIRS) -> np.ndarray:
    """
    Index of the nearest centroid for every point, lowest index on ties.

    Points are processed in chunks so memory stays bounded by
    ``chunk_pairs`` distances however many centroids there are.
    """
    chunk = max(1, chunk_pairs // max(1, len(centroids)))
    nearest = np.empty(len(points), dtype=np.intp)
    for start in range(0, len(points), chunk):
        stop = start + chunk
        nearest[start:stop] = squared_distances(points[start:stop], centroids).argmin(axis=1)
    return nearest


class KMeansClusterer:
    """K-means clusterer with an injectable random seed."""

    def __init__(self, max_iterations: int = None, seed: Optional[int] = None):
        if max_iterations is None:
            max_iterations = config.KMEANS_MAX_ITERATIONS
        self.max_iterations = max_iterations
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        self.seed = seed

    def cluster(self, pixels: np.ndarray, k: int) -> List[ExtractedColor]:
        """
        Cluster pixels into at most ``k`` colors.

        Args:
            pixels: (N, 3) uint8 RGB pixels
            k: Number of centroids

        Returns:
            Palette entries sorted by percentage, descending. Clusters that end
            up with no pixels are omitted, so fewer than ``k`` may be returned.
        """
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")

        points = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)
        n = len(points)
        if n == 0:
            return []

        rng = np.random.default_rng(self.seed)
        centroids = points[rng.integers(0, n, size=k)].copy()
        assignments = np.full(n, -1, dtype=np.intp)

        iterations = 0
        for iterations in range(1, self.max_iterations + 1):
            # argmin keeps the lowest centroid index on ties
            nearest = nearest_centroids(points, centroids)
            if np.array_equal(nearest, assignments):
                break
            assignments = nearest

            counts = np.bincount(assignments, minlength=k)
            sums = np.stack(
                [np.bincount(assignments, weights=points[:, c], minlength=k) for c in range(3)],
                axis=1
            )
            occupied = counts > 0
            # Empty clusters keep their previous centroid
            centroids[occupied] = sums[occupied] / counts[occupied, None]

        counts = np.bincount(assignments, minlength=k)
        logger.debug(f"K-means finished after {iterations} iterations: "
                     f"{int(np.count_nonzero(counts))}/{k} clusters populated")

        colors = [
            build_extracted_color(centroids[j], int(counts[j]), n, CONFIDENCE_SATURATION)
            for j in range(k)
            if counts[j] > 0
        ]
        return sort_by_percentage(colors)
