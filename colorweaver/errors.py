"""
ColorWeaver Error Taxonomy
Typed failures surfaced by the extraction pipeline to its caller.
"""
from typing import Optional


class ColorExtractionError(Exception):
    """Base class for extraction failures."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class EmptyPixelSetError(ColorExtractionError, RuntimeError):
    """No pixel survived alpha filtering (transparent or empty image)."""
    pass


class InvalidOptionsError(ColorExtractionError, ValueError):
    """Extraction options rejected before any processing begins."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message, stage="validation")
        self.errors = errors or []


class InvalidRasterError(ColorExtractionError, ValueError):
    """Raster dimensions do not describe the supplied RGBA buffer."""

    def __init__(self, message: str):
        super().__init__(message, stage="sampling")
