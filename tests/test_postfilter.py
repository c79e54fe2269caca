"""
Unit tests for the post-filter pipeline.
"""

import pytest

from colorweaver.schemas import ExtractionOptions
from colorweaver.services.colors.entries import build_extracted_color
from colorweaver.services.colors.postfilter import (
    apply_post_filters, deduplicate_similar, exclude_neutral_colors,
    filter_by_percentage, truncate
)


def entry(rgb, percentage):
    """Palette entry covering ``percentage`` of 1000 samples."""
    return build_extracted_color(rgb, int(round(percentage * 1000)), 1000, 100)


@pytest.fixture
def raw_palette():
    """Sorted raw clusterer output with a gray, two near-reds and a blue."""
    return [
        entry((128, 128, 128), 0.40),
        entry((255, 0, 0), 0.30),
        entry((250, 10, 0), 0.15),
        entry((0, 0, 255), 0.12),
        entry((0, 255, 0), 0.03),
    ]


def hexes(colors):
    return [color.hex for color in colors]


class TestIndividualSteps:
    """Test each filter step in isolation"""

    def test_filter_by_percentage_keeps_boundary(self, raw_palette):
        kept = filter_by_percentage(raw_palette, 0.12)
        assert hexes(kept) == ["#808080", "#ff0000", "#fa0a00", "#0000ff"]

    def test_exclude_neutral_colors(self, raw_palette):
        kept = exclude_neutral_colors(raw_palette)
        assert "#808080" not in hexes(kept)
        assert len(kept) == 4

    def test_exclude_neutral_custom_threshold(self):
        colors = [entry((150, 120, 120), 0.5), entry((140, 120, 120), 0.5)]
        assert hexes(exclude_neutral_colors(colors, threshold=25)) == ["#967878"]

    def test_deduplicate_keeps_more_dominant(self, raw_palette):
        kept = deduplicate_similar(raw_palette, 50)
        assert "#ff0000" in hexes(kept)
        assert "#fa0a00" not in hexes(kept)

    def test_deduplicate_distance_is_inclusive(self):
        colors = [entry((0, 0, 0), 0.5), entry((30, 40, 0), 0.5)]
        assert len(deduplicate_similar(colors, 50)) == 2
        assert len(deduplicate_similar(colors, 50.01)) == 1

    def test_truncate(self, raw_palette):
        assert hexes(truncate(raw_palette, 2)) == ["#808080", "#ff0000"]
        assert len(truncate(raw_palette, 10)) == 5


class TestApplyPostFilters:
    """Test the full ordered pipeline"""

    def test_default_like_options(self, raw_palette):
        options = ExtractionOptions(min_color_percentage=0.05, include_neutral=True,
                                    exclude_similar=True, sensitivity=0.5, color_count=5)
        assert hexes(apply_post_filters(raw_palette, options)) == ["#808080", "#ff0000", "#0000ff"]

    def test_all_steps_disabled(self, raw_palette):
        options = ExtractionOptions(min_color_percentage=0.0, include_neutral=True,
                                    exclude_similar=False, color_count=10)
        assert hexes(apply_post_filters(raw_palette, options)) == hexes(raw_palette)

    def test_count_bound(self, raw_palette):
        for count in range(1, 7):
            options = ExtractionOptions(min_color_percentage=0.0, exclude_similar=False,
                                        color_count=count)
            assert len(apply_post_filters(raw_palette, options)) <= count

    def test_higher_sensitivity_keeps_closer_colors(self, raw_palette):
        """Dedup distance is (1 - sensitivity) * 100"""
        strict = ExtractionOptions(min_color_percentage=0.0, sensitivity=0.5, color_count=10)
        loose = ExtractionOptions(min_color_percentage=0.0, sensitivity=0.95, color_count=10)
        assert "#fa0a00" not in hexes(apply_post_filters(raw_palette, strict))
        assert "#fa0a00" in hexes(apply_post_filters(raw_palette, loose))

    def test_full_sensitivity_keeps_exact_duplicates(self):
        colors = [entry((9, 9, 200), 0.5), entry((9, 9, 200), 0.5)]
        options = ExtractionOptions(min_color_percentage=0.0, sensitivity=1.0, color_count=5)
        assert len(apply_post_filters(colors, options)) == 2

    def test_neutral_exclusion_runs_before_dedup(self):
        """A gray removed as neutral cannot shadow a similar tinted color"""
        colors = [entry((128, 128, 128), 0.6), entry((160, 128, 128), 0.4)]
        options = ExtractionOptions(min_color_percentage=0.0, include_neutral=False,
                                    exclude_similar=True, sensitivity=0.5, color_count=5)
        assert hexes(apply_post_filters(colors, options)) == ["#a08080"]

    def test_threshold_runs_before_truncation(self, raw_palette):
        options = ExtractionOptions(min_color_percentage=0.35, exclude_similar=False,
                                    color_count=3)
        assert hexes(apply_post_filters(raw_palette, options)) == ["#808080"]

    def test_idempotent(self, raw_palette):
        for options in [
            ExtractionOptions(),
            ExtractionOptions(include_neutral=False, sensitivity=0.2, color_count=2),
            ExtractionOptions(min_color_percentage=0.13, exclude_similar=False),
        ]:
            once = apply_post_filters(raw_palette, options)
            twice = apply_post_filters(once, options)
            assert hexes(once) == hexes(twice)

    def test_input_is_not_mutated(self, raw_palette):
        before = hexes(raw_palette)
        apply_post_filters(raw_palette, ExtractionOptions(include_neutral=False, color_count=1))
        assert hexes(raw_palette) == before

    def test_empty_input(self):
        assert apply_post_filters([], ExtractionOptions()) == []
