"""
Palette Analysis Module

Summarizes an extracted palette (brightness, saturation, warmth, style tags),
applies global look adjustments, and checks WCAG contrast between two colors.
"""

from typing import List, Literal, Sequence

from loguru import logger

from colorweaver.schemas import Color, PaletteAnalysis, PaletteColor
from .colorspace import build_color, hex_to_rgb, hsl_to_rgb, rgb_to_hsl, round_half_up

# Slider range exposed to callers maps onto this many degrees / percent points
ADJUSTMENT_SLIDER_MAX = 50
ADJUSTMENT_SPAN = 30

# Style tag rules: (tag, predicate on rounded averages)
STYLE_TAG_RULES = [
    ("bright", lambda hue, sat, light: light >= 70),
    ("vibrant", lambda hue, sat, light: sat >= 60),
    ("green", lambda hue, sat, light: 80 <= hue <= 160),
    ("warm", lambda hue, sat, light: 20 <= hue <= 60),
    ("calm", lambda hue, sat, light: 200 <= hue <= 260),
]
DEFAULT_STYLE_TAG = "natural"

# Variants generated from a single base color: (name, role, lightness, saturation, hue) offsets
BASE_COLOR_VARIANTS = [
    ("Base", "primary", 0, 0, 0),
    ("Light", "secondary", 15, -5, 0),
    ("Dark", "accent", -15, 5, 0),
    ("Accent", "success", 5, 10, 10),
    ("Muted", "warning", -5, -10, -10),
]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _rounded_hsl(color: Color):
    return (round_half_up(color.hsl.h), round_half_up(color.hsl.s),
            round_half_up(color.hsl.l))


def analyze_palette(colors: Sequence[Color]) -> PaletteAnalysis:
    """
    Describe the overall look of a palette.

    Averages use rounded HSL components. Warmth is the share of hues in the
    red-to-yellow band (h <= 60 or h >= 300). Hue is averaged arithmetically,
    so reds near 0 and 359 do not wrap.
    """
    if not colors:
        return PaletteAnalysis(brightness=0, saturation=0, warmth=0, avg_hue=0, style_tags=[])

    hsls = [_rounded_hsl(color) for color in colors]
    count = len(hsls)
    avg_hue = round_half_up(sum(h for h, _, _ in hsls) / count)
    saturation = round_half_up(sum(s for _, s, _ in hsls) / count)
    brightness = round_half_up(sum(l for _, _, l in hsls) / count)
    warm_count = sum(1 for h, _, _ in hsls if h <= 60 or h >= 300)
    warmth = round_half_up(warm_count / count * 100)

    style_tags = [tag for tag, rule in STYLE_TAG_RULES if rule(avg_hue, saturation, brightness)]
    if not style_tags:
        style_tags.append(DEFAULT_STYLE_TAG)

    logger.debug(f"Palette analysis: hue={avg_hue} sat={saturation} light={brightness} "
                 f"warmth={warmth} tags={style_tags}")

    return PaletteAnalysis(
        brightness=brightness,
        saturation=saturation,
        warmth=warmth,
        avg_hue=avg_hue,
        style_tags=style_tags,
    )


def adjust_palette(colors: Sequence[Color],
                   brightness: float = 0,
                   saturation: float = 0,
                   warmth: float = 0) -> List[Color]:
    """
    Shift every color's hue, saturation and lightness.

    Each slider runs from -50 to +50 and maps onto +/-30 hue degrees or
    percentage points. Lightness is kept within [5, 95] to avoid pure black
    and white.
    """
    adjusted = []
    for color in colors:
        h, s, l = _rounded_hsl(color)
        new_h = (h + warmth / ADJUSTMENT_SLIDER_MAX * ADJUSTMENT_SPAN + 360) % 360
        new_s = _clamp(s + saturation / ADJUSTMENT_SLIDER_MAX * ADJUSTMENT_SPAN, 0, 100)
        new_l = _clamp(l + brightness / ADJUSTMENT_SLIDER_MAX * ADJUSTMENT_SPAN, 5, 95)
        adjusted.append(build_color(*hsl_to_rgb(new_h, new_s, new_l)))
    return adjusted


def relative_luminance(hex_color: str) -> float:
    """WCAG 2.x relative luminance of an sRGB color."""
    channels = []
    for value in hex_to_rgb(hex_color):
        v = value / 255.0
        channels.append(v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4)
    return 0.2126 * channels[0] + 0.7152 * channels[1] + 0.0722 * channels[2]


def contrast_ratio(foreground_hex: str, background_hex: str) -> float:
    """WCAG contrast ratio, rounded to two decimals (1.0 - 21.0)."""
    l1 = relative_luminance(foreground_hex)
    l2 = relative_luminance(background_hex)
    light, dark = max(l1, l2), min(l1, l2)
    return round_half_up((light + 0.05) / (dark + 0.05) * 100) / 100


def wcag_level(foreground_hex: str,
               background_hex: str,
               font_size_px: int = 16) -> Literal["AAA", "AA", "Fail"]:
    """Highest WCAG level met; text of 24px and up counts as large."""
    ratio = contrast_ratio(foreground_hex, background_hex)
    is_large = font_size_px >= 24
    if (is_large and ratio >= 4.5) or (not is_large and ratio >= 7):
        return "AAA"
    if (is_large and ratio >= 3) or (not is_large and ratio >= 4.5):
        return "AA"
    return "Fail"



def generate_variants(base_hex: str) -> List[PaletteColor]:
    """
    Build a five-color palette around one base color.

    The base is followed by lighter, darker, accent and muted variants, each
    an offset of the base's rounded HSL with saturation and lightness clamped
    to [0, 100].

    Raises:
        ValueError: If ``base_hex`` is not a six-digit hex color
    """
    r, g, b = hex_to_rgb(base_hex)
    h, s, l = (round_half_up(component) for component in rgb_to_hsl(r, g, b))
    palette = []
    for name, role, d_light, d_sat, d_hue in BASE_COLOR_VARIANTS:
        rgb = hsl_to_rgb((h + d_hue + 360) % 360, _clamp(s + d_sat, 0, 100), _clamp(l + d_light, 0, 100))
        color = build_color(*rgb)
        palette.append(PaletteColor(name=name, role=role, **color.model_dump()))
    return palette
