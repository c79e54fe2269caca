"""
Pixel sampling for palette extraction.

Reduces an interleaved RGBA raster to a bounded working set of opaque RGB
pixels. Sampling is a fixed stride over the pixel grid so the clusterers see
at most roughly ``target_samples`` pixels regardless of image resolution.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np
from loguru import logger

from colorweaver.config import config
from colorweaver.errors import EmptyPixelSetError, InvalidRasterError

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


@dataclass(frozen=True)
class RasterBuffer:
    """Decoded image handed over by the image-loading layer."""
    width: int
    height: int
    pixels: BufferLike  # interleaved RGBA bytes, width * height * 4 long


def compute_sample_rate(width: int, height: int, target_samples: int) -> int:
    """Stride (in pixels) that keeps roughly ``target_samples`` samples."""
    return max(1, (width * height) // target_samples)


def _as_rgba_array(pixels: BufferLike, width: int, height: int) -> np.ndarray:
    """View the raw buffer as an (N, 4) uint8 array, validating its size."""
    if width < 0 or height < 0:
        raise InvalidRasterError(f"Negative raster dimensions: {width}x{height}")

    if isinstance(pixels, np.ndarray):
        flat = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(pixels, dtype=np.uint8)

    expected = width * height * 4
    if flat.size != expected:
        raise InvalidRasterError(
            f"RGBA buffer length mismatch: expected {expected} bytes "
            f"for {width}x{height}, got {flat.size}"
        )
    return flat.reshape(-1, 4)


def sample_pixels(pixels: BufferLike,
                  width: int,
                  height: int,
                  target_samples: int = None,
                  alpha_threshold: int = None) -> np.ndarray:
    """
    Sample opaque pixels from an RGBA buffer.

    Args:
        pixels: Interleaved RGBA bytes of length width * height * 4
        width: Raster width in pixels
        height: Raster height in pixels
        target_samples: Approximate upper bound on samples (Config.SAMPLE_TARGET)
        alpha_threshold: Pixels with alpha below this are discarded

    Returns:
        Newly allocated (N, 3) uint8 array of RGB pixels

    Raises:
        InvalidRasterError: If the buffer does not match the dimensions
        EmptyPixelSetError: If no pixel survives the alpha filter
    """
    if target_samples is None:
        target_samples = config.SAMPLE_TARGET
    if alpha_threshold is None:
        alpha_threshold = config.ALPHA_THRESHOLD
    if not config.validate_sample_target(target_samples):
        raise ValueError(f"target_samples must be >= 1, got {target_samples}")

    rgba = _as_rgba_array(pixels, width, height)
    sample_rate = compute_sample_rate(width, height, target_samples)

    strided = rgba[::sample_rate]
    opaque = strided[strided[:, 3] >= alpha_threshold]

    logger.debug(f"Sampled {len(strided)} of {len(rgba)} pixels (rate={sample_rate}), "
                 f"{len(opaque)} opaque")

    if len(opaque) == 0:
        raise EmptyPixelSetError(
            "No opaque pixels found in image (fully transparent or empty)",
            stage="sampling"
        )

    return np.ascontiguousarray(opaque[:, :3])


def sample_raster(raster: RasterBuffer,
                  target_samples: int = None,
                  alpha_threshold: int = None) -> np.ndarray:
    """Sample a RasterBuffer; see ``sample_pixels``."""
    return sample_pixels(raster.pixels, raster.width, raster.height,
                         target_samples=target_samples,
                         alpha_threshold=alpha_threshold)
