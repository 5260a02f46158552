"""Perceptual color math used to judge terminal color legibility.

Purpose
-------
Provide the color-space conversions and distance/contrast metrics that decide
whether a color is readable on both light and dark terminal backgrounds and
far enough away from the colors reserved for warnings and errors.

Contents
--------
* :func:`rgb_to_hsl` / :func:`hsl_to_rgb` - HSL round trips (hue in degrees).
* :func:`rgb_to_lab` - sRGB → linear RGB → CIEXYZ (D65) → CIELAB.
* :func:`ciede2000` - full CIEDE2000 colour difference (kL = kC = kH = 1).
* :func:`relative_luminance` / :func:`contrast_ratio` - WCAG 2 contrast.
* :class:`ReadabilityReport` and :func:`readability_of` - the four
  thresholds evaluated together.

System Role
-----------
Pure functions consumed by :mod:`lib_log_spans.domain.hash_colors` at runtime
and by :mod:`lib_log_spans.domain.palettes` when deriving the curated
256-color palettes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Lab = Tuple[float, float, float]

MIN_DISTANCE_TO_RED = 30.0
MIN_DISTANCE_TO_YELLOW = 30.0
MIN_CONTRAST_ON_WHITE = 2.12
MIN_CONTRAST_ON_BLACK = 3.1

REFERENCE_RED: tuple[int, int, int] = (128, 0, 0)
REFERENCE_YELLOW: tuple[int, int, int] = (128, 128, 0)

_POW_25_7 = 6103515625.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    :func:`round` uses banker's rounding which shifts channel values on exact
    halves; color conversions need the conventional rule.

    Examples
    --------
    >>> round_half_up(2.5), round_half_up(-2.5), round_half_up(2.4)
    (3, -3, 2)
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 8-bit RGB to ``(hue°, saturation, lightness)``.

    Examples
    --------
    >>> rgb_to_hsl(255, 0, 0)
    (0.0, 1.0, 0.5)
    >>> rgb_to_hsl(128, 128, 128)[:2]
    (0.0, 0.0)
    """
    rf, gf, bf = r / 255, g / 255, b / 255
    max_c = max(rf, gf, bf)
    min_c = min(rf, gf, bf)
    delta = max_c - min_c

    hue = 0.0
    saturation = 0.0
    lightness = (max_c + min_c) / 2

    if delta != 0:
        saturation = delta / (2 - max_c - min_c) if lightness > 0.5 else delta / (max_c + min_c)
        if max_c == rf:
            hue = (gf - bf) / delta + (6 if gf < bf else 0)
        elif max_c == gf:
            hue = (bf - rf) / delta + 2
        else:
            hue = (rf - gf) / delta + 4
        hue *= 60

    return (float(hue), float(saturation), float(lightness))


def _hue_to_channel(p: float, q: float, t: float) -> float:
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


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert ``(hue°, saturation, lightness)`` back to 8-bit RGB.

    Examples
    --------
    >>> hsl_to_rgb(120.0, 1.0, 0.5)
    (0, 255, 0)
    >>> hsl_to_rgb(0.0, 0.0, 0.5)
    (128, 128, 128)
    """
    if saturation == 0:
        grey = round_half_up(lightness * 255)
        return (grey, grey, grey)

    q = lightness * (1 + saturation) if lightness < 0.5 else lightness + saturation - lightness * saturation
    p = 2 * lightness - q
    h = hue / 360

    def channel(t: float) -> int:
        return int(_clamp(round_half_up(_hue_to_channel(p, q, t) * 255), 0, 255))

    return (channel(h + 1 / 3), channel(h), channel(h - 1 / 3))


def rgb_to_lab(r: int, g: int, b: int) -> Lab:
    """Convert 8-bit sRGB to CIELAB under the D65 illuminant (2° observer)."""

    def pivot_rgb(component: int) -> float:
        value = component / 255.0
        return ((value + 0.055) / 1.055) ** 2.4 if value > 0.04045 else value / 12.92

    r_lin = pivot_rgb(r) * 100
    g_lin = pivot_rgb(g) * 100
    b_lin = pivot_rgb(b) * 100

    x = r_lin * 0.4124564 + g_lin * 0.3575761 + b_lin * 0.1804375
    y = r_lin * 0.2126729 + g_lin * 0.7151522 + b_lin * 0.0721750
    z = r_lin * 0.0193339 + g_lin * 0.1191920 + b_lin * 0.9503041

    def pivot_xyz(value: float) -> float:
        return value ** (1.0 / 3.0) if value > 0.008856 else 7.787 * value + 16.0 / 116.0

    x_p = pivot_xyz(x / 95.047)
    y_p = pivot_xyz(y / 100.000)
    z_p = pivot_xyz(z / 108.883)

    return (116.0 * y_p - 16.0, 500.0 * (x_p - y_p), 200.0 * (y_p - z_p))


def ciede2000(lab1: Lab, lab2: Lab) -> float:
    """Return the CIEDE2000 difference between two CIELAB colors.

    Implements the full formula: the chroma-dependent ``a*`` correction, the
    hue rotation term ``R_T`` and the lightness/chroma/hue weighting
    functions, with unit parametric factors.

    Examples
    --------
    >>> ciede2000((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485))  # doctest: +ELLIPSIS
    2.04...
    >>> ciede2000((50.0, 10.0, 10.0), (50.0, 10.0, 10.0))
    0.0
    """
    l1, a1, b1 = lab1
    l2, a2, b2 = lab2

    c1 = math.sqrt(a1 * a1 + b1 * b1)
    c2 = math.sqrt(a2 * a2 + b2 * b2)
    c_bar = (c1 + c2) / 2
    c_bar7 = c_bar**7
    g = 0.5 * (1 - math.sqrt(c_bar7 / (c_bar7 + _POW_25_7)))

    a1_p = a1 * (1 + g)
    a2_p = a2 * (1 + g)
    c1_p = math.sqrt(a1_p * a1_p + b1 * b1)
    c2_p = math.sqrt(a2_p * a2_p + b2 * b2)

    h1_p = math.degrees(math.atan2(b1, a1_p))
    if h1_p < 0:
        h1_p += 360
    h2_p = math.degrees(math.atan2(b2, a2_p))
    if h2_p < 0:
        h2_p += 360

    delta_l_p = l2 - l1
    delta_c_p = c2_p - c1_p

    if c1_p * c2_p == 0:
        delta_h_p = 0.0
    else:
        diff = h2_p - h1_p
        if abs(diff) <= 180:
            delta_h_p = diff
        elif diff > 180:
            delta_h_p = diff - 360
        else:
            delta_h_p = diff + 360

    delta_big_h_p = 2 * math.sqrt(c1_p * c2_p) * math.sin(math.radians(delta_h_p / 2))
    l_bar_p = (l1 + l2) / 2
    c_bar_p = (c1_p + c2_p) / 2

    if c1_p * c2_p == 0:
        h_bar_p = h1_p + h2_p
    elif abs(h1_p - h2_p) <= 180:
        h_bar_p = (h1_p + h2_p) / 2
    elif h1_p + h2_p < 360:
        h_bar_p = (h1_p + h2_p + 360) / 2
    else:
        h_bar_p = (h1_p + h2_p - 360) / 2

    t = (
        1
        - 0.17 * math.cos(math.radians(h_bar_p - 30))
        + 0.24 * math.cos(math.radians(2 * h_bar_p))
        + 0.32 * math.cos(math.radians(3 * h_bar_p + 6))
        - 0.20 * math.cos(math.radians(4 * h_bar_p - 63))
    )
    delta_theta = 30 * math.exp(-(((h_bar_p - 275) / 25) ** 2))
    c_bar_p7 = c_bar_p**7
    r_c = 2 * math.sqrt(c_bar_p7 / (c_bar_p7 + _POW_25_7))

    l_offset_sq = (l_bar_p - 50) ** 2
    s_l = 1 + (0.015 * l_offset_sq) / math.sqrt(20 + l_offset_sq)
    s_c = 1 + 0.045 * c_bar_p
    s_h = 1 + 0.015 * c_bar_p * t
    r_t = -math.sin(math.radians(2 * delta_theta)) * r_c

    d_l = delta_l_p / s_l
    d_c = delta_c_p / s_c
    d_h = delta_big_h_p / s_h

    return math.sqrt(d_l * d_l + d_c * d_c + d_h * d_h + r_t * d_c * d_h)


def color_distance(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int]) -> float:
    """CIEDE2000 distance between two RGB triples."""
    return ciede2000(rgb_to_lab(*rgb1), rgb_to_lab(*rgb2))


def relative_luminance(r: int, g: int, b: int) -> float:
    """WCAG 2 relative luminance in ``[0, 1]``."""

    def linearize(component: int) -> float:
        value = component / 255
        return value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def contrast_ratio(luminance1: float, luminance2: float) -> float:
    """WCAG contrast ratio between two relative luminances (``1.0`` to ``21.0``).

    Examples
    --------
    >>> round(contrast_ratio(1.0, 0.0), 2)
    21.0
    """
    lighter = max(luminance1, luminance2)
    darker = min(luminance1, luminance2)
    return (lighter + 0.05) / (darker + 0.05)


_RED_LAB = rgb_to_lab(*REFERENCE_RED)
_YELLOW_LAB = rgb_to_lab(*REFERENCE_YELLOW)


@dataclass(slots=True, frozen=True)
class ReadabilityReport:
    """Readability metrics of one RGB color.

    Attributes
    ----------
    distance_to_red / distance_to_yellow:
        CIEDE2000 distance to the reserved error/warning reference colors.
    contrast_on_white / contrast_on_black:
        WCAG contrast ratio against pure white and pure black backgrounds.
    """

    rgb: tuple[int, int, int]
    distance_to_red: float
    distance_to_yellow: float
    contrast_on_white: float
    contrast_on_black: float

    @property
    def is_readable(self) -> bool:
        return not self.failure_reasons

    @property
    def failure_reasons(self) -> tuple[str, ...]:
        """Names of the thresholds this color misses (empty when readable)."""
        reasons: list[str] = []
        if self.distance_to_red <= MIN_DISTANCE_TO_RED:
            reasons.append("red")
        if self.distance_to_yellow <= MIN_DISTANCE_TO_YELLOW:
            reasons.append("yellow")
        if self.contrast_on_white < MIN_CONTRAST_ON_WHITE:
            reasons.append("white")
        if self.contrast_on_black < MIN_CONTRAST_ON_BLACK:
            reasons.append("black")
        return tuple(reasons)


def readability_of(r: int, g: int, b: int) -> ReadabilityReport:
    """Evaluate all four readability thresholds for ``(r, g, b)``."""
    luminance = relative_luminance(r, g, b)
    lab = rgb_to_lab(r, g, b)
    return ReadabilityReport(
        rgb=(r, g, b),
        distance_to_red=ciede2000(lab, _RED_LAB),
        distance_to_yellow=ciede2000(lab, _YELLOW_LAB),
        contrast_on_white=contrast_ratio(luminance, 1.0),
        contrast_on_black=contrast_ratio(luminance, 0.0),
    )


def is_color_readable(r: int, g: int, b: int) -> bool:
    """Return ``True`` when ``(r, g, b)`` passes every readability threshold.

    Contrast is checked first since it avoids the Lab conversion for colors
    that are plainly too light or too dark.
    """
    luminance = relative_luminance(r, g, b)
    if contrast_ratio(luminance, 1.0) < MIN_CONTRAST_ON_WHITE:
        return False
    if contrast_ratio(luminance, 0.0) < MIN_CONTRAST_ON_BLACK:
        return False
    lab = rgb_to_lab(r, g, b)
    if ciede2000(lab, _RED_LAB) <= MIN_DISTANCE_TO_RED:
        return False
    return ciede2000(lab, _YELLOW_LAB) > MIN_DISTANCE_TO_YELLOW


__all__ = [
    "Lab",
    "MIN_CONTRAST_ON_BLACK",
    "MIN_CONTRAST_ON_WHITE",
    "MIN_DISTANCE_TO_RED",
    "MIN_DISTANCE_TO_YELLOW",
    "REFERENCE_RED",
    "REFERENCE_YELLOW",
    "ReadabilityReport",
    "ciede2000",
    "color_distance",
    "contrast_ratio",
    "hsl_to_rgb",
    "is_color_readable",
    "readability_of",
    "relative_luminance",
    "rgb_to_hsl",
    "rgb_to_lab",
    "round_half_up",
]
