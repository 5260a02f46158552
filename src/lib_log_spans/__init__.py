"""Span-based console log formatting with deterministic perceptual hash colors.

Formatters describe each log line as a tree of immutable spans, optional
transformers edit that tree, and a message buffer renders it with ANSI
styling for the terminal's color capability. Loggers, classes and instances
receive stable, readable hash colors.
"""

from __future__ import annotations

from .adapters import RichConsoleAdapter
from .application import (
    CompactFormatter,
    ConsoleMessageFormatter,
    ConsolePort,
    DataPresentation,
    RainbowFormatOptions,
    RainbowFormatter,
    SimpleFormatter,
    SpanBasedFormatter,
    SpanFormatOptions,
    SpanTransformer,
)
from .domain import (
    Ansi16,
    ColorSaturation,
    ConsoleColor,
    ConsoleMessageBuffer,
    DefaultColor,
    IndexedColor,
    InstanceHandle,
    InstanceRegistry,
    LogLevel,
    LogRecord,
    RgbColor,
    TerminalColorSupport,
    TimeDisplay,
    color_for_hash,
)
from .domain.spans import LogSpan, SpanNode, SpanTree
from .lib_log_spans import create_console_adapter, format_record

__all__ = [
    "Ansi16",
    "ColorSaturation",
    "CompactFormatter",
    "ConsoleColor",
    "ConsoleMessageBuffer",
    "ConsoleMessageFormatter",
    "ConsolePort",
    "DataPresentation",
    "DefaultColor",
    "IndexedColor",
    "InstanceHandle",
    "InstanceRegistry",
    "LogLevel",
    "LogRecord",
    "LogSpan",
    "RainbowFormatOptions",
    "RainbowFormatter",
    "RgbColor",
    "RichConsoleAdapter",
    "SimpleFormatter",
    "SpanBasedFormatter",
    "SpanFormatOptions",
    "SpanNode",
    "SpanTransformer",
    "SpanTree",
    "TerminalColorSupport",
    "TimeDisplay",
    "color_for_hash",
    "create_console_adapter",
    "format_record",
]
