"""
ColorWeaver Colors Module

Provides pixel sampling, color-space conversion, k-means and median-cut
clustering, post-filtering and palette analysis for raster images.
"""

__version__ = "1.0.0"
