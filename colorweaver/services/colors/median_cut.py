"""
Median-cut palette quantization.

Deterministic alternative to k-means: the largest bucket is repeatedly split
at its median along the channel with the widest range. No randomness and no
convergence loop, so identical input always yields identical output.
"""

from typing import List

import numpy as np
from loguru import logger

from colorweaver.schemas import ExtractedColor
from .entries import build_extracted_color, sort_by_percentage

# Bucket size at which confidence saturates to 1.0
CONFIDENCE_SATURATION = 50


def widest_channel(bucket: np.ndarray) -> int:
    """Index of the channel with the largest max-min range (R wins ties, then G)."""
    ranges = bucket.max(axis=0).astype(np.int32) - bucket.min(axis=0).astype(np.int32)
    return int(np.argmax(ranges))


def split_bucket(bucket: np.ndarray):
    """Sort a bucket along its widest channel and cut it at the median index."""
    channel = widest_channel(bucket)
    order = np.argsort(bucket[:, channel], kind="stable")
    ordered = bucket[order]
    mid = len(ordered) // 2
    return ordered[:mid].copy(), ordered[mid:].copy()


class MedianCutQuantizer:
    """Median-cut quantizer."""

    def quantize(self, pixels: np.ndarray, target_colors: int) -> List[ExtractedColor]:
        """
        Reduce pixels to at most ``target_colors`` bucket means.

        Splitting stops once there are ``target_colors`` buckets or the
        largest remaining bucket holds a single pixel.
        """
        if target_colors < 1:
            raise ValueError(f"target_colors must be >= 1, got {target_colors}")

        pixels = np.asarray(pixels, dtype=np.uint8).reshape(-1, 3)
        total = len(pixels)
        if total == 0:
            return []

        buckets = [pixels.copy()]
        while len(buckets) < target_colors:
            # max() returns the first bucket among equally sized ones
            largest = max(range(len(buckets)), key=lambda i: len(buckets[i]))
            if len(buckets[largest]) <= 1:
                break
            lower, upper = split_bucket(buckets[largest])
            buckets[largest] = lower
            buckets.append(upper)

        logger.debug(f"Median cut produced {len(buckets)} buckets from {total} pixels")

        colors = [
            build_extracted_color(bucket.mean(axis=0), len(bucket), total, CONFIDENCE_SATURATION)
            for bucket in buckets
        ]
        return sort_by_percentage(colors)

    def cluster(self, pixels: np.ndarray, k: int) -> List[ExtractedColor]:
        """Clusterer interface; same as ``quantize``."""
        return self.quantize(pixels, k)
