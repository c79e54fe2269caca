"""
ColorWeaver

Palette extraction engine: reduces a raster image's pixels to a small,
ranked palette with k-means or median-cut clustering.
"""

from loguru import logger

from colorweaver.errors import (
    ColorExtractionError,
    EmptyPixelSetError,
    InvalidOptionsError,
    InvalidRasterError,
)
from colorweaver.schemas import (
    ClusterAlgorithm,
    Color,
    ExtractedColor,
    ExtractionOptions,
    ExtractionReport,
    ExtractionStage,
)
from colorweaver.services.colors.extraction import PaletteExtractor, extract_palette, validate_options
from colorweaver.services.colors.sampling import RasterBuffer
from colorweaver.utils.logging import configure_logging

logger.disable("colorweaver")

__version__ = "1.0.0"

__all__ = [
    "ClusterAlgorithm",
    "Color",
    "ColorExtractionError",
    "EmptyPixelSetError",
    "ExtractedColor",
    "ExtractionOptions",
    "ExtractionReport",
    "ExtractionStage",
    "InvalidOptionsError",
    "InvalidRasterError",
    "PaletteExtractor",
    "RasterBuffer",
    "configure_logging",
    "extract_palette",
    "validate_options",
]
