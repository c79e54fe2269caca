"""
Palette entry construction shared by the clusterers.
"""

from typing import List, Sequence

from colorweaver.schemas import ExtractedColor
from .colorspace import build_color


def build_extracted_color(mean_rgb: Sequence[float],
                          member_count: int,
                          total_count: int,
                          confidence_saturation: int) -> ExtractedColor:
    """
    Turn a cluster (or bucket) summary into a palette entry.

    Args:
        mean_rgb: Unrounded centroid / bucket mean as (r, g, b)
        member_count: Pixels assigned to this cluster
        total_count: Pixels fed to the clusterer
        confidence_saturation: Member count at which confidence reaches 1.0
    """
    color = build_color(*mean_rgb)
    percentage = member_count / total_count
    return ExtractedColor(
        hex=color.hex,
        rgb=color.rgb,
        hsl=color.hsl,
        percentage=percentage,
        dominance=percentage * 100.0,
        cluster=[float(channel) for channel in mean_rgb],
        confidence=min(1.0, member_count / confidence_saturation),
    )


def sort_by_percentage(colors: List[ExtractedColor]) -> List[ExtractedColor]:
    """Stable descending sort on percentage; equal shares keep their order."""
    return sorted(colors, key=lambda color: color.percentage, reverse=True)
