"""
Palette extraction orchestrator.

This module wires the extraction pipeline together: pixel sampling,
clustering, post-filtering and truncation. A run moves linearly through
SAMPLING -> CLUSTERING -> FILTERING and ends in DONE; any failure aborts the
run without returning partial results.
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from pydantic import ValidationError

from colorweaver.config import config
from colorweaver.errors import ColorExtractionError, InvalidOptionsError
from colorweaver.schemas import ExtractedColor, ExtractionOptions, ExtractionReport, ExtractionStage
from colorweaver.utils.ids import generate_extraction_id
from colorweaver.utils.logging import get_logger
from .clusterer import build_clusterer
from .postfilter import apply_post_filters
from .sampling import BufferLike, RasterBuffer, sample_raster

OptionsLike = Union[ExtractionOptions, Mapping[str, Any], None]


def validate_options(options: OptionsLike = None) -> ExtractionOptions:
    """
    Validate caller-supplied options before any processing begins.

    Args:
        options: ExtractionOptions, a mapping of snake_case or camelCase keys,
            or None for the configured defaults

    Raises:
        InvalidOptionsError: On unknown algorithm, color_count < 1, or a
            ratio outside [0, 1]
    """
    if options is None:
        return ExtractionOptions()
    if isinstance(options, ExtractionOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(
            f"Extraction options must be a mapping or ExtractionOptions, got {type(options).__name__}"
        )

    try:
        return ExtractionOptions.model_validate(dict(options))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidOptionsError(f"Invalid extraction options: {details}", errors=e.errors()) from e


@contextmanager
def stage_timer(durations: Dict[str, float], stage: ExtractionStage) -> Iterator[None]:
    """Record the wall-clock duration of a stage in milliseconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        durations[stage.value] = (time.perf_counter() - start) * 1000


class PaletteExtractor:
    """
    Runs the extraction pipeline for one set of options.

    Instances hold configuration only; every ``run`` allocates its own
    working data, so one extractor may serve concurrent callers.
    """

    def __init__(self,
                 options: OptionsLike = None,
                 seed: Optional[int] = None,
                 target_samples: Optional[int] = None,
                 max_iterations: Optional[int] = None):
        self.options = validate_options(options)
        self.seed = seed if seed is not None else config.KMEANS_SEED
        if target_samples is None:
            target_samples = config.SAMPLE_TARGET
        if not config.validate_sample_target(target_samples):
            raise ValueError(f"target_samples must be >= 1, got {target_samples}")
        self.target_samples = target_samples
        self.clusterer = build_clusterer(
            self.options.algorithm, seed=self.seed, max_iterations=max_iterations
        )

    def run(self, raster: RasterBuffer) -> ExtractionReport:
        """
        Extract a ranked palette and describe how the run went.

        Raises:
            EmptyPixelSetError: If the raster has no opaque pixels
            InvalidRasterError: If the buffer does not match its dimensions
        """
        extraction_id = generate_extraction_id()
        log = get_logger().bind(extraction_id=extraction_id,
                                algorithm=self.options.algorithm.value)
        durations: Dict[str, float] = {}
        stage = ExtractionStage.SAMPLING

        log.info("Starting palette extraction", extra={
            "width": raster.width,
            "height": raster.height,
            "color_count": self.options.color_count,
        })

        try:
            with stage_timer(durations, ExtractionStage.SAMPLING):
                pixels = sample_raster(raster, target_samples=self.target_samples)
            log.debug(f"Sampling complete: {len(pixels)} pixels",
                      extra={"ms": durations["sampling"]})

            stage = ExtractionStage.CLUSTERING
            with stage_timer(durations, ExtractionStage.CLUSTERING):
                raw_colors = self.clusterer.cluster(pixels, self.options.color_count)
            log.debug(f"Clustering complete: {len(raw_colors)} colors",
                      extra={"ms": durations["clustering"]})

            stage = ExtractionStage.FILTERING
            with stage_timer(durations, ExtractionStage.FILTERING):
                palette = apply_post_filters(raw_colors, self.options)

        except Exception as e:
            if isinstance(e, ColorExtractionError) and e.stage is None:
                e.stage = stage.value
            log.error(f"Palette extraction failed during {stage.value}: {e}", extra={
                "stage": ExtractionStage.FAILED.value,
                "error_type": type(e).__name__,
            })
            raise

        log.info(f"Palette extraction complete: {len(palette)} colors", extra={
            "sampled_pixels": len(pixels),
            "raw_color_count": len(raw_colors),
            "durations_ms": durations,
        })

        return ExtractionReport(
            extraction_id=extraction_id,
            algorithm=self.options.algorithm,
            stage=ExtractionStage.DONE,
            palette=palette,
            sampled_pixels=len(pixels),
            raw_color_count=len(raw_colors),
            durations_ms=durations,
        )

    def extract(self, raster: RasterBuffer) -> List[ExtractedColor]:
        """Extract the ranked palette only."""
        return self.run(raster).palette


def extract_palette(pixels: BufferLike,
                    width: int,
                    height: int,
                    options: OptionsLike = None,
                    seed: Optional[int] = None) -> List[ExtractedColor]:
    """
    Extract a ranked palette from an interleaved RGBA buffer in one call.

    Args:
        pixels: RGBA bytes of length width * height * 4
        width: Raster width in pixels
        height: Raster height in pixels
        options: Extraction options (validated before any work starts)
        seed: K-means seed for reproducible runs

    Returns:
        At most ``options.color_count`` colors, sorted by percentage descending
    """
    extractor = PaletteExtractor(options, seed=seed)
    return extractor.extract(RasterBuffer(width=width, height=height, pixels=pixels))
