"""Concrete span-based formatters."""

from __future__ import annotations

from .compact import CompactFormatter, compact_label
from .rainbow import DataPresentation, RainbowFormatOptions, RainbowFormatter, dimmed, level_color, strip_class_prefix
from .simple import SimpleFormatter

__all__ = [
    "CompactFormatter",
    "DataPresentation",
    "RainbowFormatOptions",
    "RainbowFormatter",
    "SimpleFormatter",
    "compact_label",
    "dimmed",
    "level_color",
    "strip_class_prefix",
]
