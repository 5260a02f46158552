"""Domain values and algorithms: colors, records, buffer and span model."""

from __future__ import annotations

from .buffer import ConsoleMessageBuffer, TextStyle, strip_ansi_codes, visible_length_of
from .color_support import TerminalColorSupport
from .colors import XTERM_256, Ansi16, ConsoleColor, DefaultColor, IndexedColor, RgbColor
from .hash_colors import ColorSaturation, color_for_hash, stable_hash
from .identity import InstanceHandle, InstanceRegistry
from .levels import LogLevel
from .records import FormatOptions, LogRecord, TimeDisplay

__all__ = [
    "Ansi16",
    "ColorSaturation",
    "ConsoleColor",
    "ConsoleMessageBuffer",
    "DefaultColor",
    "FormatOptions",
    "IndexedColor",
    "InstanceHandle",
    "InstanceRegistry",
    "LogLevel",
    "LogRecord",
    "RgbColor",
    "TerminalColorSupport",
    "TextStyle",
    "TimeDisplay",
    "XTERM_256",
    "color_for_hash",
    "stable_hash",
    "strip_ansi_codes",
    "visible_length_of",
]
