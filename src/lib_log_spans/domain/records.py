"""Immutable log record consumed by the span formatters.

Purpose
-------
Carry everything a formatter may display about one log call: message,
timing, severity, error details, structured data, caller and instance
identity, and per-call format hints.

Contents
--------
* :class:`LogRecord` frozen dataclass.
* :class:`FormatOptions` marker base for per-call formatter hints.
* :class:`TimeDisplay` enum shared by formatter options.
* ``_ensure_aware`` timestamp validation helper.

System Role
-----------
Input of every formatter. Records are produced by the host logger (outside
this package) and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import TracebackType
from typing import Any, Mapping

from .identity import InstanceHandle
from .levels import LogLevel


def _ensure_aware(ts: datetime, name: str) -> datetime:
    """Validate that ``ts`` is timezone-aware."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError(f"{name} must be timezone-aware")
    return ts


class TimeDisplay(Enum):
    """Which clock(s) a formatter shows.

    ``CLOCK`` is the (possibly mocked) logging clock, ``WALL_CLOCK`` the real
    system time. ``AUTO`` shows the clock and appends the wall clock only
    when the two differ by more than a second.
    """

    CLOCK = "clock"
    WALL_CLOCK = "wall_clock"
    BOTH = "both"
    AUTO = "auto"
    OFF = "off"


class FormatOptions:
    """Base class for per-record formatter hints.

    Formatters look for their own subclass in :attr:`LogRecord.format_options`
    and ignore everything else.
    """

    __slots__ = ()


@dataclass(slots=True, frozen=True)
class LogRecord:
    """One log call as seen by formatters.

    Attributes
    ----------
    message:
        Message object; formatters render ``str(message)``.
    timestamp:
        Timezone-aware time from the logging clock.
    level:
        :class:`LogLevel` of the call.
    wall_clock:
        Real system time; defaults to ``timestamp``.
    logger_name:
        Name of the emitting logger, if any.
    error / stack_trace:
        Optional exception and its traceback (string or traceback object).
    data:
        Shallow copy of structured key/value pairs.
    instance / instance_hash:
        Object the call was made on and its identity handle or hash.
    class_name / method_name / file_name / line:
        Caller information resolved by the host logger.
    format_options:
        Per-call :class:`FormatOptions` hints.
    """

    message: Any
    timestamp: datetime
    level: LogLevel = LogLevel.INFO
    wall_clock: datetime | None = None
    logger_name: str | None = None
    error: object | None = None
    stack_trace: str | TracebackType | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    instance: object | None = None
    instance_hash: InstanceHandle | int | None = None
    class_name: str | None = None
    method_name: str | None = None
    file_name: str | None = None
    line: int | None = None
    format_options: tuple[FormatOptions, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp, "timestamp"))
        if self.wall_clock is None:
            object.__setattr__(self, "wall_clock", self.timestamp)
        else:
            object.__setattr__(self, "wall_clock", _ensure_aware(self.wall_clock, "wall_clock"))
        object.__setattr__(self, "data", dict(self.data))
        object.__setattr__(self, "format_options", tuple(self.format_options))

    @property
    def resolved_class_name(self) -> str | None:
        """``class_name`` or, failing that, the type name of ``instance``."""
        if self.class_name is not None:
            return self.class_name
        if self.instance is not None:
            return type(self.instance).__name__
        return None

    def options_of(self, kind: type) -> list[Any]:
        """Return every format option that is an instance of ``kind``."""
        return [option for option in self.format_options if isinstance(option, kind)]

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["FormatOptions", "LogRecord", "TimeDisplay"]
