"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that print formatted log records to an
interactive console, letting callers depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` - runtime-checkable protocol with a single ``emit``.

System Role
-----------
Boundary between the formatting pipeline and concrete consoles such as
:class:`lib_log_spans.adapters.console.rich_console.RichConsoleAdapter`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_spans.domain.records import LogRecord


@runtime_checkable
class ConsolePort(Protocol):
    """Render a log record to an interactive console."""

    def emit(self, record: LogRecord) -> None:
        """Format ``record`` and write it out."""


__all__ = ["ConsolePort"]
