"""Shared fixtures for the lib_log_spans test suite."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from lib_log_spans.domain.levels import LogLevel
from lib_log_spans.domain.records import LogRecord

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

FIXED_TIME = datetime(2025, 9, 23, 12, 34, 56, 789000, tzinfo=timezone.utc)


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI SGR sequences."""

    return ANSI_RE.sub("", text)


@pytest.fixture
def record_console() -> Console:
    """Rich console writing into memory with recording enabled."""

    return Console(file=StringIO(), record=True, width=200)


@pytest.fixture
def fixed_time() -> datetime:
    return FIXED_TIME


@pytest.fixture
def sample_record() -> LogRecord:
    """An INFO record with logger, caller information and data."""

    return LogRecord(
        "hello world",
        FIXED_TIME,
        LogLevel.INFO,
        logger_name="app.http",
        data={"user": "alice", "attempt": 2},
        class_name="Handler",
        method_name="Handler.serve",
        file_name="server.py",
        line=42,
    )


@pytest.fixture(autouse=True)
def _neutral_color_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host color variables from leaking into Rich's terminal detection."""

    for name in ("FORCE_COLOR", "NO_COLOR", "COLORTERM", "LOG_SPANS_COLOR", "LOG_SPANS_USE_DOTENV"):
        monkeypatch.delenv(name, raising=False)
