from __future__ import annotations

import logging

import pytest

from lib_log_spans.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        (" Warning ", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("CRITICAL", LogLevel.CRITICAL),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("verbose")


@pytest.mark.parametrize("number", [-5, 5, 15, 25, 35, 45, 55])
def test_from_numeric_rejects_non_standard_levels(number: int) -> None:
    with pytest.raises(ValueError, match="Unsupported log level numeric"):
        LogLevel.from_numeric(number)


@pytest.mark.parametrize("level", LogLevel)
def test_python_level_round_trips(level: LogLevel) -> None:
    assert level.to_python_level() == getattr(logging, level.name)
    assert LogLevel.from_python_level(level.to_python_level()) is level


@pytest.mark.parametrize(
    "level, code, severity",
    [
        (LogLevel.DEBUG, "DEBG", "debug"),
        (LogLevel.INFO, "INFO", "info"),
        (LogLevel.WARNING, "WARN", "warning"),
        (LogLevel.ERROR, "ERRO", "error"),
        (LogLevel.CRITICAL, "CRIT", "critical"),
    ],
)
def test_level_codes_are_four_letters_and_severity_lowercase(level: LogLevel, code: str, severity: str) -> None:
    assert level.code == code
    assert len(level.code) == 4
    assert level.severity == severity


def test_critical_icon() -> None:
    assert LogLevel.CRITICAL.icon == "☠"
