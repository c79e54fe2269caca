"""
Color Space Conversion Utilities

Pure, stateless conversions between RGB, HSL and hex representations, plus
the distance and neutrality tests used by the clusterers and post-filters.

Distances are plain Euclidean distances in raw RGB space. This is not
perceptually uniform; it is only used for relative comparisons (nearest
centroid, duplicate detection), never as absolute color science.
"""

import math
import re
from typing import Sequence, Tuple

from colorweaver.schemas import Color, HSL, RGB

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


def round_half_up(value: float) -> int:
    """Round like a UI would: 0.5 always goes up."""
    return int(math.floor(value + 0.5))


def _to_byte(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert RGB channels (0-255) to HSL.

    Returns:
        (h, s, l) with h in [0, 360) degrees, s and l in [0, 100] percent.
        Achromatic inputs yield h = s = 0.
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    l = (c_max + c_min) / 2.0

    if c_max == c_min:
        return 0.0, 0.0, l * 100.0

    d = c_max - c_min
    s = d / (2.0 - c_max - c_min) if l > 0.5 else d / (c_max + c_min)

    if c_max == r:
        h = (g - b) / d + (6.0 if g < b else 0.0)
    elif c_max == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0
    h = (h / 6.0 * 360.0) % 360.0

    return h, min(s * 100.0, 100.0), l * 100.0


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL (degrees, percent, percent) to rounded RGB bytes."""
    h = (h % 360.0) / 360.0
    s = s / 100.0
    l = l / 100.0

    if s == 0:
        gray = _to_byte(l * 255.0)
        return gray, gray, gray

    def hue_to_channel(p: float, q: float, t: float) -> float:
        if t < 0:
            t += 1
        if t > 1:
            t -= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return (
        _to_byte(hue_to_channel(p, q, h + 1 / 3) * 255.0),
        _to_byte(hue_to_channel(p, q, h) * 255.0),
        _to_byte(hue_to_channel(p, q, h - 1 / 3) * 255.0),
    )


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert RGB channels to a lowercase ``#rrggbb`` string."""
    return "#" + "".join(f"{_to_byte(channel):02x}" for channel in (r, g, b))


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert ``#rrggbb`` (or ``rrggbb``) to an RGB tuple."""
    match = _HEX_PATTERN.match(hex_color.strip())
    if match is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL straight to a hex string."""
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def color_distance(c1: Sequence[float], c2: Sequence[float]) -> float:
    """Euclidean distance between two RGB triples, in [0, ~441.67]."""
    dr = float(c1[0]) - float(c2[0])
    dg = float(c1[1]) - float(c2[1])
    db = float(c1[2]) - float(c2[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def is_neutral(rgb: Sequence[float], threshold: float = 30) -> bool:
    """True for grays and near-grays: channel spread below ``threshold``."""
    r, g, b = rgb[0], rgb[1], rgb[2]
    return (max(r, g, b) - min(r, g, b)) < threshold


def build_color(r: float, g: float, b: float) -> Color:
    """Build a Color whose hex and HSL are derived from the rounded RGB."""
    rgb = (_to_byte(r), _to_byte(g), _to_byte(b))
    h, s, l = rgb_to_hsl(*rgb)
    return Color(
        hex=rgb_to_hex(*rgb),
        rgb=RGB(r=rgb[0], g=rgb[1], b=rgb[2]),
        hsl=HSL(h=h, s=s, l=l),
    )
