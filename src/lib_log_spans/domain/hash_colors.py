"""Deterministic, readable colors for arbitrary identities.

Purpose
-------
Map a logger name, class, or instance to a terminal color that is stable
for equal inputs, legible on light and dark backgrounds and distinct from
the red/yellow hues that signal errors and warnings.

Contents
--------
* :class:`ColorSaturation` - palette selector.
* :func:`stable_hash` - process-independent hash of common identity types.
* :func:`color_for_hash` - capability-tier dispatch.
* :func:`hash_color_ansi16`, :func:`hash_color_ansi256`,
  :func:`hash_color_truecolor` - per-tier selection.

System Role
-----------
Stateless domain service used by the rainbow formatter. Any caching of
per-identity colors belongs to the caller.
"""

from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Sequence

from .color_support import TerminalColorSupport
from .colors import Ansi16, ConsoleColor, DefaultColor, IndexedColor, RgbColor
from .identity import InstanceHandle
from .palettes import READABLE_COLORS_HIGH, READABLE_COLORS_LOW, READABLE_COLORS_MEDIUM
from .perceptual import hsl_to_rgb, is_color_readable, rgb_to_hsl

logger = logging.getLogger(__name__)

TRUECOLOR_ATTEMPTS = 4
SATURATION_RANGE = (0.10, 0.95)
LIGHTNESS_RANGE = (0.42, 0.62)

_ANSI16_CHOICES: tuple[IndexedColor, ...] = (
    Ansi16.GREEN,
    Ansi16.BLUE,
    Ansi16.MAGENTA,
    Ansi16.CYAN,
    Ansi16.BRIGHT_GREEN,
    Ansi16.BRIGHT_BLUE,
    Ansi16.BRIGHT_MAGENTA,
    Ansi16.BRIGHT_CYAN,
)
# Black, white and the red/yellow families are excluded.


class ColorSaturation(Enum):
    """Which curated palette a hash color is drawn from."""

    HIGH = "high"
    MID = "mid"
    LOW = "low"


def palette_for(saturation: ColorSaturation | None) -> tuple[IndexedColor, ...]:
    """Return the curated palette for ``saturation``; ``None`` combines low and medium."""
    if saturation is None:
        return READABLE_COLORS_LOW + READABLE_COLORS_MEDIUM
    match saturation:
        case ColorSaturation.LOW:
            return READABLE_COLORS_LOW
        case ColorSaturation.MID:
            return READABLE_COLORS_MEDIUM
        case ColorSaturation.HIGH:
            return READABLE_COLORS_HIGH


def stable_hash(obj: object) -> int:
    """Return a hash of ``obj`` that is identical across interpreter runs.

    Strings and bytes hash through a 32-bit BLAKE2b digest because the
    built-in :func:`hash` is salted per process. Integers hash to
    themselves, ``None`` to zero and :class:`InstanceHandle` to its value.
    Other objects fall back to :func:`hash`.

    Examples
    --------
    >>> stable_hash("user-42") == stable_hash("user-42")
    True
    >>> stable_hash(7), stable_hash(None)
    (7, 0)
    """
    if obj is None:
        return 0
    if isinstance(obj, InstanceHandle):
        return obj.value
    if isinstance(obj, int):
        return int(obj)
    if isinstance(obj, str):
        obj = obj.encode("utf-8")
    if isinstance(obj, (bytes, bytearray, memoryview)):
        digest = hashlib.blake2b(bytes(obj), digest_size=4).digest()
        return int.from_bytes(digest, "big")
    return hash(obj)


def color_for_hash(
    obj: object,
    saturation: ColorSaturation | None = None,
    color_support: TerminalColorSupport = TerminalColorSupport.ANSI256,
) -> ConsoleColor:
    """Pick a deterministic, readable color for ``obj``.

    Why
        Distinct loggers, classes and instances become easy to tell apart
        when each gets its own color, but the colors must never be confused
        with error/warning highlighting or vanish on a light background.

    Parameters
    ----------
    obj:
        Identity to color; hashed with :func:`stable_hash`.
    saturation:
        Curated palette to draw from (``None`` mixes low and medium).
    color_support:
        Capability of the target terminal.

    Returns
    -------
    ConsoleColor
        :class:`DefaultColor` without color support, an :class:`IndexedColor`
        for 16/256 colors, an :class:`RgbColor` for truecolor.

    Examples
    --------
    >>> color_for_hash("user-42", color_support=TerminalColorSupport.NONE)
    DefaultColor()
    >>> color_for_hash("db", ColorSaturation.MID) == color_for_hash("db", ColorSaturation.MID)
    True
    """
    match color_support:
        case TerminalColorSupport.NONE:
            return DefaultColor()
        case TerminalColorSupport.ANSI16:
            return hash_color_ansi16(obj)
        case TerminalColorSupport.ANSI256:
            return hash_color_ansi256(obj, palette_for(saturation))
        case TerminalColorSupport.TRUECOLOR:
            return hash_color_truecolor(obj, palette_for(saturation))
    raise ValueError(f"Unsupported color support: {color_support!r}")


def hash_color_ansi16(obj: object) -> IndexedColor:
    return _ANSI16_CHOICES[abs(stable_hash(obj)) % len(_ANSI16_CHOICES)]


def hash_color_ansi256(obj: object, colors: Sequence[IndexedColor]) -> IndexedColor:
    """Select ``colors[hash % len(colors)]``."""
    if not colors:
        raise ValueError("colors must not be empty")
    return colors[abs(stable_hash(obj)) % len(colors)]


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    return max(bounds[0], min(bounds[1], value))


def hash_color_truecolor(obj: object, colors: Sequence[IndexedColor]) -> RgbColor:
    """Perturb a palette color in HSL space using bit slices of the hash.

    Saturation and lightness each move by up to ten percentage points
    (bits 8+ and 16+ of the hash), then get clamped into
    :data:`SATURATION_RANGE` and :data:`LIGHTNESS_RANGE`. A candidate that
    fails the readability check is retried with ``(hash + 1) * 31`` up to
    :data:`TRUECOLOR_ATTEMPTS` times in total. When every attempt fails the
    clamped base color is returned unchecked.
    """
    if not colors:
        raise ValueError("colors must not be empty")

    original = abs(stable_hash(obj))
    current = original
    for _ in range(TRUECOLOR_ATTEMPTS):
        base = colors[current % len(colors)]
        hue, saturation, lightness = rgb_to_hsl(*base.rgb)
        saturation_shift = ((current >> 8) % 21 - 10) / 100
        lightness_shift = ((current >> 16) % 21 - 10) / 100
        r, g, b = hsl_to_rgb(
            hue,
            _clamp(saturation + saturation_shift, SATURATION_RANGE),
            _clamp(lightness + lightness_shift, LIGHTNESS_RANGE),
        )
        if is_color_readable(r, g, b):
            return RgbColor(r, g, b)
        current = (current + 1) * 31

    base = colors[original % len(colors)]
    hue, saturation, lightness = rgb_to_hsl(*base.rgb)
    fallback = RgbColor(*hsl_to_rgb(hue, _clamp(saturation, SATURATION_RANGE), _clamp(lightness, LIGHTNESS_RANGE)))
    logger.debug("truecolor hash color fell back to clamped base %s for hash %d", fallback, original)
    return fallback


__all__ = [
    "ColorSaturation",
    "LIGHTNESS_RANGE",
    "SATURATION_RANGE",
    "TRUECOLOR_ATTEMPTS",
    "color_for_hash",
    "hash_color_ansi16",
    "hash_color_ansi256",
    "hash_color_truecolor",
    "palette_for",
    "stable_hash",
]
