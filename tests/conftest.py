"""
Test configuration and fixtures for ColorWeaver extraction tests.
"""
import numpy as np
import pytest

from colorweaver.services.colors.sampling import RasterBuffer


def solid_rgba(width: int, height: int, rgb, alpha: int = 255) -> np.ndarray:
    """Create an (H, W, 4) RGBA image filled with one color."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[..., :3] = rgb
    image[..., 3] = alpha
    return image


def to_raster(image: np.ndarray) -> RasterBuffer:
    """Wrap an (H, W, 4) RGBA image as the engine's input boundary type."""
    height, width = image.shape[:2]
    return RasterBuffer(width=width, height=height, pixels=image.tobytes())


@pytest.fixture
def red_raster():
    """All-red opaque 100x100 image."""
    return to_raster(solid_rgba(100, 100, (255, 0, 0)))


@pytest.fixture
def red_blue_raster():
    """100x100 image: top half pure red, bottom half pure blue."""
    image = solid_rgba(100, 100, (255, 0, 0))
    image[50:, :, :3] = (0, 0, 255)
    return to_raster(image)


@pytest.fixture
def transparent_raster():
    """Fully transparent 50x50 image."""
    return to_raster(solid_rgba(50, 50, (200, 30, 30), alpha=0))


@pytest.fixture
def grayscale_raster():
    """100x100 horizontal gray ramp from black to white."""
    image = solid_rgba(100, 100, (0, 0, 0))
    ramp = np.linspace(0, 255, 100).astype(np.uint8)
    image[..., 0] = ramp[None, :]
    image[..., 1] = ramp[None, :]
    image[..., 2] = ramp[None, :]
    return to_raster(image)


@pytest.fixture
def noisy_raster():
    """120x80 image of uniformly random opaque colors (fixed seed)."""
    rng = np.random.default_rng(1234)
    image = rng.integers(0, 256, size=(80, 120, 4), dtype=np.uint8)
    image[..., 3] = 255
    return to_raster(image)


@pytest.fixture
def four_color_pixels():
    """25 pixels each of red, green, blue and white as an (N, 3) array."""
    return np.vstack([
        np.full((25, 3), [255, 0, 0], dtype=np.uint8),
        np.full((25, 3), [0, 255, 0], dtype=np.uint8),
        np.full((25, 3), [0, 0, 255], dtype=np.uint8),
        np.full((25, 3), [255, 255, 255], dtype=np.uint8),
    ])
