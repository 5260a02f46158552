"""Adapters connecting the formatting pipeline to concrete consoles."""

from __future__ import annotations

from .console import RichConsoleAdapter, color_support_of

__all__ = ["RichConsoleAdapter", "color_support_of"]
