"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Print span-formatted log records through a Rich console so output honours
Rich's terminal detection, recording and ``NO_COLOR``/``FORCE_COLOR``
handling.

Contents
--------
* :data:`_COLOR_SYSTEM_MAP` - Rich color systems to capability tiers.
* :func:`color_support_of` - capability tier of a Rich console.
* :class:`RichConsoleAdapter` - formats a record and prints it.

System Role
-----------
Primary human-facing sink. Formatters emit ANSI text; the adapter hands it to
Rich via :meth:`rich.text.Text.from_ansi` so Rich can re-render or strip the
escapes for its own target.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.text import Text

from lib_log_spans.application.formatters import RainbowFormatter
from lib_log_spans.application.formatting import ConsoleMessageFormatter
from lib_log_spans.application.ports.console import ConsolePort
from lib_log_spans.domain.buffer import ConsoleMessageBuffer
from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.records import LogRecord

_COLOR_SYSTEM_MAP: Mapping[str, TerminalColorSupport] = {
    "standard": TerminalColorSupport.ANSI16,
    "windows": TerminalColorSupport.ANSI16,
    "256": TerminalColorSupport.ANSI256,
    "truecolor": TerminalColorSupport.TRUECOLOR,
}


def color_support_of(console: Console) -> TerminalColorSupport:
    """Return the capability tier Rich detected for ``console``.

    Examples
    --------
    >>> from io import StringIO
    >>> color_support_of(Console(file=StringIO()))
    <TerminalColorSupport.NONE: 0>
    >>> color_support_of(Console(file=StringIO(), force_terminal=True, color_system="256"))
    <TerminalColorSupport.ANSI256: 2>
    """
    system = console.color_system
    if system is None:
        return TerminalColorSupport.NONE
    return _COLOR_SYSTEM_MAP.get(system, TerminalColorSupport.ANSI16)


class RichConsoleAdapter(ConsolePort):
    """Format log records with a span formatter and print them through Rich."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        formatter: ConsoleMessageFormatter | None = None,
        color_support: TerminalColorSupport | None = None,
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        """Configure the console, the formatter and the color capability.

        An explicit ``color_support`` wins; otherwise the tier Rich detected
        for the console is used. ``no_color`` forces plain output.
        """
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._formatter: ConsoleMessageFormatter = formatter if formatter is not None else RainbowFormatter()
        self._force_color = force_color
        self._no_color = no_color
        if no_color:
            self._color_support = TerminalColorSupport.NONE
        elif color_support is not None:
            self._color_support = color_support
        else:
            self._color_support = color_support_of(self._console)

    @property
    def console(self) -> Console:
        return self._console

    @property
    def formatter(self) -> ConsoleMessageFormatter:
        return self._formatter

    @property
    def color_support(self) -> TerminalColorSupport:
        return self._color_support

    def render(self, record: LogRecord) -> str:
        """Return the formatted text of ``record`` without printing it."""
        buffer = ConsoleMessageBuffer(self._color_support)
        self._formatter.format(record, buffer)
        return buffer.text

    def emit(self, record: LogRecord) -> None:
        """Print ``record`` on the console.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.emit(LogRecord("msg", datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)))
        >>> 'msg' in console.export_text()
        True
        """
        text = self.render(record)
        if self._color_support.supports_colors:
            renderable = Text.from_ansi(text)
        else:
            renderable = Text(text)
        self._console.print(renderable, highlight=False, soft_wrap=True)


__all__ = ["RichConsoleAdapter", "color_support_of"]
