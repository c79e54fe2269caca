"""
ColorWeaver Configuration
Manages environment variables and defaults for the palette extraction engine.
"""
import os
from typing import Literal, Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Configuration class for ColorWeaver extraction services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("COLORWEAVER_LOG_LEVEL", "INFO")

    # Sampling
    SAMPLE_TARGET: int = int(os.environ.get("COLORWEAVER_SAMPLE_TARGET", "10000"))
    ALPHA_THRESHOLD: int = int(os.environ.get("COLORWEAVER_ALPHA_THRESHOLD", "128"))

    # Clustering
    KMEANS_MAX_ITERATIONS: int = int(os.environ.get("COLORWEAVER_KMEANS_MAX_ITERATIONS", "50"))
    KMEANS_SEED: Optional[int] = _optional_int("COLORWEAVER_KMEANS_SEED")

    # Filtering
    NEUTRAL_THRESHOLD: float = float(os.environ.get("COLORWEAVER_NEUTRAL_THRESHOLD", "30"))

    # Extraction option defaults
    DEFAULT_ALGORITHM: Literal["kmeans", "median_cut"] = os.environ.get(
        "COLORWEAVER_DEFAULT_ALGORITHM", "kmeans"
    )
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("COLORWEAVER_DEFAULT_COLOR_COUNT", "5"))
    DEFAULT_MIN_COLOR_PERCENTAGE: float = float(
        os.environ.get("COLORWEAVER_DEFAULT_MIN_COLOR_PERCENTAGE", "0.05")
    )
    DEFAULT_SENSITIVITY: float = float(os.environ.get("COLORWEAVER_DEFAULT_SENSITIVITY", "0.5"))

    # Supported clustering algorithms
    SUPPORTED_ALGORITHMS = ["kmeans", "median_cut"]

    @classmethod
    def validate_algorithm(cls, algorithm: str) -> bool:
        """Validate algorithm name."""
        return algorithm in cls.SUPPORTED_ALGORITHMS

    @classmethod
    def validate_color_count(cls, color_count: int) -> bool:
        """Validate requested palette size."""
        return color_count >= 1

    @classmethod
    def validate_unit_interval(cls, value: float) -> bool:
        """Validate a ratio-like parameter."""
        return 0.0 <= value <= 1.0

    @classmethod
    def validate_sample_target(cls, sample_target: int) -> bool:
        """Validate sampling budget."""
        return sample_target >= 1


# Global config instance
config = Config()
