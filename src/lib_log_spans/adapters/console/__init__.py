"""Console adapters."""

from __future__ import annotations

from .rich_console import RichConsoleAdapter, color_support_of

__all__ = ["RichConsoleAdapter", "color_support_of"]
