"""
Clusterer selection.

Maps a ClusterAlgorithm to a concrete clusterer once, at the orchestrator
boundary. Every clusterer exposes ``cluster(pixels, k) -> List[ExtractedColor]``.
"""

from typing import List, Optional, Protocol, Union

import numpy as np

from colorweaver.schemas import ClusterAlgorithm, ExtractedColor
from .kmeans import KMeansClusterer
from .median_cut import MedianCutQuantizer


class Clusterer(Protocol):
    def cluster(self, pixels: np.ndarray, k: int) -> List[ExtractedColor]:
        ...


def build_clusterer(algorithm: Union[ClusterAlgorithm, str],
                    seed: Optional[int] = None,
                    max_iterations: Optional[int] = None) -> Clusterer:
    """
    Build the clusterer for ``algorithm``.

    Args:
        algorithm: ClusterAlgorithm member or its string value
        seed: Random seed for k-means (ignored by median cut)
        max_iterations: K-means iteration cap (ignored by median cut)

    Raises:
        ValueError: If the algorithm is unknown
    """
    algorithm = ClusterAlgorithm(algorithm)
    if algorithm is ClusterAlgorithm.KMEANS:
        return KMeansClusterer(max_iterations=max_iterations, seed=seed)
    return MedianCutQuantizer()
