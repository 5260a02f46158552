"""Application layer: formatter contracts, concrete formatters and ports."""

from __future__ import annotations

from .formatters import CompactFormatter, DataPresentation, RainbowFormatOptions, RainbowFormatter, SimpleFormatter
from .formatting import ConsoleMessageFormatter, SpanBasedFormatter, SpanFormatOptions, SpanTransformer
from .ports import ConsolePort

__all__ = [
    "CompactFormatter",
    "ConsoleMessageFormatter",
    "ConsolePort",
    "DataPresentation",
    "RainbowFormatOptions",
    "RainbowFormatter",
    "SimpleFormatter",
    "SpanBasedFormatter",
    "SpanFormatOptions",
    "SpanTransformer",
]
