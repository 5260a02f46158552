"""Convenience façade wiring formatters, color detection and the Rich console.

Purpose
-------
Offer the two calls most host applications need: build a ready-to-use
console adapter with the right color capability, and format a single record
to a string.

Contents
--------
* :func:`create_console_adapter` - :class:`RichConsoleAdapter` with the
  capability resolved from arguments, environment and terminal.
* :func:`format_record` - format one record without a console.

System Role
-----------
Composition point at the edge of the package; everything it does is also
reachable through the layered modules directly.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from .adapters.console.rich_console import RichConsoleAdapter
from .application.formatters import RainbowFormatter
from .application.formatting import SpanBasedFormatter
from .config import resolve_color_support
from .domain.color_support import TerminalColorSupport
from .domain.records import LogRecord


def create_console_adapter(
    *,
    formatter: SpanBasedFormatter | None = None,
    color: TerminalColorSupport | str | None = None,
    console: Console | None = None,
    env: Mapping[str, str] | None = None,
) -> RichConsoleAdapter:
    """Return a console adapter for ``console`` (a new Rich console by default).

    ``color`` may name a tier (``"ansi256"``) or be ``"auto"``/``None`` to
    consult the environment and then the console.

    Examples
    --------
    >>> from io import StringIO
    >>> adapter = create_console_adapter(color="none", console=Console(file=StringIO()))
    >>> adapter.color_support
    <TerminalColorSupport.NONE: 0>
    """
    target = console if console is not None else Console()
    support = resolve_color_support(color, env=env, console=target)
    return RichConsoleAdapter(console=target, formatter=formatter or RainbowFormatter(), color_support=support)


def format_record(
    record: LogRecord,
    formatter: SpanBasedFormatter | None = None,
    color_support: TerminalColorSupport = TerminalColorSupport.NONE,
) -> str:
    """Format ``record`` with ``formatter`` (rainbow by default) into text."""
    return (formatter or RainbowFormatter()).format_to_string(record, color_support)


__all__ = ["create_console_adapter", "format_record"]
