"""
Post-filtering of raw clusterer output.

Steps run strictly in order: percentage threshold, neutral exclusion,
similarity dedup, truncation. Every step returns a new list; inputs are
never mutated.
"""

from typing import List

from loguru import logger

from colorweaver.config import config
from colorweaver.schemas import ExtractedColor, ExtractionOptions
from .colorspace import color_distance, is_neutral


def filter_by_percentage(colors: List[ExtractedColor], min_percentage: float) -> List[ExtractedColor]:
    """Drop colors covering less than ``min_percentage`` of the samples."""
    return [color for color in colors if color.percentage >= min_percentage]


def exclude_neutral_colors(colors: List[ExtractedColor],
                           threshold: float = None) -> List[ExtractedColor]:
    """Drop grays and near-grays."""
    if threshold is None:
        threshold = config.NEUTRAL_THRESHOLD
    return [color for color in colors if not is_neutral(color.rgb.as_tuple(), threshold)]


def deduplicate_similar(colors: List[ExtractedColor], min_distance: float) -> List[ExtractedColor]:
    """
    Greedy dedup over a percentage-sorted list.

    A color is kept only if it is at least ``min_distance`` away from every
    color kept before it, so the more dominant of two close colors survives.
    """
    kept: List[ExtractedColor] = []
    for color in colors:
        rgb = color.rgb.as_tuple()
        if all(color_distance(rgb, existing.rgb.as_tuple()) >= min_distance for existing in kept):
            kept.append(color)
    return kept


def truncate(colors: List[ExtractedColor], color_count: int) -> List[ExtractedColor]:
    return list(colors[:color_count])


def apply_post_filters(colors: List[ExtractedColor], options: ExtractionOptions) -> List[ExtractedColor]:
    """
    Run the full post-filter pipeline.

    Note that ``sensitivity`` sets the dedup distance as
    ``(1 - sensitivity) * 100``: raising it shrinks the distance at which two
    colors count as duplicates.

    Args:
        colors: Raw clusterer output, sorted by percentage descending
        options: Validated extraction options

    Returns:
        Filtered palette, still sorted, at most ``options.color_count`` long
    """
    initial = len(colors)

    filtered = filter_by_percentage(colors, options.min_color_percentage)
    after_threshold = len(filtered)

    if not options.include_neutral:
        filtered = exclude_neutral_colors(filtered)
    after_neutral = len(filtered)

    if options.exclude_similar:
        filtered = deduplicate_similar(filtered, options.similarity_distance)
    after_dedup = len(filtered)

    filtered = truncate(filtered, options.color_count)

    logger.debug(f"Post-filter: {initial} -> threshold {after_threshold} -> "
                 f"neutral {after_neutral} -> dedup {after_dedup} -> final {len(filtered)}")
    return filtered
