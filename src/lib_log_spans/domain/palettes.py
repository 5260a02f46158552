"""Curated readable color palettes derived from the xterm 256-color table.

Purpose
-------
Select the xterm colors that are legible on light and dark backgrounds and
stay clear of the red/yellow hues reserved for errors and warnings, then
bucket them into low, medium and high saturation bands.

Contents
--------
* :class:`ColorAnalysis` - per-color HSL values, distances and flags.
* :class:`ReadablePalettes` - the three saturation bands.
* :func:`analyze_color` / :func:`generate_readable_palettes`.
* ``READABLE_COLORS_*`` constants computed once at import.

System Role
-----------
Offline-style companion of :mod:`lib_log_spans.domain.hash_colors`: the hash
color selection indexes into these palettes and trusts them to be readable
without a runtime check. The CLI ``palette`` command prints the analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .colors import XTERM_256, IndexedColor
from .perceptual import (
    MIN_CONTRAST_ON_BLACK,
    MIN_CONTRAST_ON_WHITE,
    MIN_DISTANCE_TO_RED,
    MIN_DISTANCE_TO_YELLOW,
    REFERENCE_RED,
    REFERENCE_YELLOW,
    color_distance,
    contrast_ratio,
    relative_luminance,
    rgb_to_hsl,
    round_half_up,
)

GREY_SATURATION_LIMIT = 0.16

_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)


class SaturationGroup(Enum):
    """Saturation band of a base color, by rounded saturation percent."""

    GREY = "grey"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_saturation(cls, saturation: float) -> "SaturationGroup":
        """Classify ``saturation`` (``0.0-1.0``).

        Examples
        --------
        >>> SaturationGroup.from_saturation(0.33).name
        'LOW'
        >>> SaturationGroup.from_saturation(0.61).name
        'HIGH'
        """
        percent = round_half_up(saturation * 100)
        if percent == 0:
            return cls.GREY
        if percent <= 33:
            return cls.LOW
        if percent <= 60:
            return cls.MEDIUM
        return cls.HIGH


@dataclass(slots=True, frozen=True)
class ColorAnalysis:
    """Readability analysis of one base color."""

    color: IndexedColor
    hue: float
    saturation: float
    lightness: float
    distance_to_red: float
    distance_to_yellow: float
    distance_to_white: float
    distance_to_black: float
    contrast_on_white: float
    contrast_on_black: float

    @property
    def is_grey(self) -> bool:
        return self.saturation < GREY_SATURATION_LIMIT

    @property
    def is_reddish(self) -> bool:
        return self.distance_to_red <= MIN_DISTANCE_TO_RED

    @property
    def is_yellowish(self) -> bool:
        return self.distance_to_yellow <= MIN_DISTANCE_TO_YELLOW

    @property
    def is_too_light(self) -> bool:
        return self.contrast_on_white < MIN_CONTRAST_ON_WHITE

    @property
    def is_too_dark(self) -> bool:
        return self.contrast_on_black < MIN_CONTRAST_ON_BLACK

    @property
    def saturation_group(self) -> SaturationGroup:
        return SaturationGroup.from_saturation(self.saturation)

    @property
    def is_valid(self) -> bool:
        return not (self.is_grey or self.is_reddish or self.is_yellowish or self.is_too_light or self.is_too_dark)

    @property
    def rejection(self) -> str | None:
        """First failed criterion, ``None`` for valid colors."""
        if self.is_grey:
            return "grey"
        if self.is_reddish:
            return "red"
        if self.is_yellowish:
            return "yellow"
        if self.is_too_light:
            return "too light"
        if self.is_too_dark:
            return "too dark"
        return None


def analyze_color(color: IndexedColor) -> ColorAnalysis:
    """Compute HSL, distances and contrast for ``color``."""
    rgb = color.rgb
    hue, saturation, lightness = rgb_to_hsl(*rgb)
    luminance = relative_luminance(*rgb)
    return ColorAnalysis(
        color=color,
        hue=hue,
        saturation=saturation,
        lightness=lightness,
        distance_to_red=color_distance(rgb, REFERENCE_RED),
        distance_to_yellow=color_distance(rgb, REFERENCE_YELLOW),
        distance_to_white=color_distance(rgb, _WHITE),
        distance_to_black=color_distance(rgb, _BLACK),
        contrast_on_white=contrast_ratio(luminance, 1.0),
        contrast_on_black=contrast_ratio(luminance, 0.0),
    )


@dataclass(slots=True, frozen=True)
class ReadablePalettes:
    """Readable colors split by saturation band, each ordered by hue (descending)."""

    low: tuple[IndexedColor, ...]
    medium: tuple[IndexedColor, ...]
    high: tuple[IndexedColor, ...]

    @property
    def combined(self) -> tuple[IndexedColor, ...]:
        return self.low + self.medium + self.high


def generate_readable_palettes(base: Iterable[IndexedColor] = XTERM_256) -> ReadablePalettes:
    """Filter ``base`` down to readable colors and bucket them by saturation.

    Why
        Hash colors must be legible everywhere; vetting the palette once lets
        the 256-color path pick entries without any per-call checks.

    What
        Discards greys (saturation below 16%), colors within CIEDE2000 30 of
        the red/yellow references and colors failing either contrast
        threshold. Survivors are grouped into low (<= 33%), medium (<= 60%)
        and high saturation, each sorted by hue from high to low.
    """
    groups: dict[SaturationGroup, list[ColorAnalysis]] = {
        SaturationGroup.LOW: [],
        SaturationGroup.MEDIUM: [],
        SaturationGroup.HIGH: [],
    }
    for analysis in map(analyze_color, base):
        if analysis.is_valid:
            groups[analysis.saturation_group].append(analysis)

    def ordered(group: SaturationGroup) -> tuple[IndexedColor, ...]:
        entries = sorted(groups[group], key=lambda entry: entry.hue, reverse=True)
        return tuple(entry.color for entry in entries)

    return ReadablePalettes(
        low=ordered(SaturationGroup.LOW),
        medium=ordered(SaturationGroup.MEDIUM),
        high=ordered(SaturationGroup.HIGH),
    )


_PALETTES = generate_readable_palettes()

READABLE_COLORS_LOW: tuple[IndexedColor, ...] = _PALETTES.low
READABLE_COLORS_MEDIUM: tuple[IndexedColor, ...] = _PALETTES.medium
READABLE_COLORS_HIGH: tuple[IndexedColor, ...] = _PALETTES.high
READABLE_COLORS: tuple[IndexedColor, ...] = _PALETTES.combined


__all__ = [
    "ColorAnalysis",
    "GREY_SATURATION_LIMIT",
    "READABLE_COLORS",
    "READABLE_COLORS_HIGH",
    "READABLE_COLORS_LOW",
    "READABLE_COLORS_MEDIUM",
    "ReadablePalettes",
    "SaturationGroup",
    "analyze_color",
    "generate_readable_palettes",
]
