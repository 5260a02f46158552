"""Ports exposed by the application layer."""

from __future__ import annotations

from .console import ConsolePort

__all__ = ["ConsolePort"]
