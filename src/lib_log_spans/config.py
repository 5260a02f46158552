"""Environment-driven configuration: ``.env`` loading and color capability.

Purpose
-------
Collect the small amount of process configuration the toolkit reads from
the outside world so the domain and application layers stay free of
environment access.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle that opts into ``.env`` loading.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - python-dotenv wiring.
* :func:`color_support_from_env` / :func:`resolve_color_support` - pick the
  terminal capability tier from explicit values, environment variables or a
  Rich console.

System Role
-----------
Consumed by :mod:`lib_log_spans.cli` and by host applications that build a
:class:`~lib_log_spans.adapters.console.rich_console.RichConsoleAdapter`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from .adapters.console.rich_console import color_support_of
from .domain.color_support import TerminalColorSupport

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_SPANS_USE_DOTENV"
COLOR_ENV_VAR = "LOG_SPANS_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED = False
_DOTENV_PATH: Path | None = None


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """
    if explicit is not None:
        return explicit
    return bool(_parse_bool(env_value))


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` once, never overriding existing variables.

    Returns the loaded file, or ``None`` when no ``.env`` was found.
    """
    global _DOTENV_LOADED, _DOTENV_PATH
    if _DOTENV_LOADED:
        return _DOTENV_PATH

    if search_from is not None:
        candidate = _find_upwards(search_from.resolve())
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None

    _DOTENV_LOADED = True
    if candidate is None:
        logger.debug("no .env file found")
        return None

    load_dotenv(candidate, override=False)
    _DOTENV_PATH = candidate
    logger.debug("loaded environment from %s", candidate)
    return candidate


def _find_upwards(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_PATH
    _DOTENV_LOADED = False
    _DOTENV_PATH = None


def color_support_from_env(env: Mapping[str, str] | None = None) -> TerminalColorSupport | None:
    """Return the capability tier the environment asks for, if any.

    ``LOG_SPANS_COLOR`` names a tier directly. ``NO_COLOR`` (any non-empty
    value) disables colors. ``FORCE_COLOR`` selects a tier by level
    (``0``/``false`` none, ``1`` 16 colors, ``2`` 256 colors, ``3``/``true``
    truecolor). ``COLORTERM`` reports truecolor or 256-color terminals.
    ``None`` means "no opinion, ask the console".

    Examples
    --------
    >>> color_support_from_env({"NO_COLOR": "1", "COLORTERM": "truecolor"})
    <TerminalColorSupport.NONE: 0>
    >>> color_support_from_env({"FORCE_COLOR": "2"})
    <TerminalColorSupport.ANSI256: 2>
    >>> color_support_from_env({"COLORTERM": "24bit"})
    <TerminalColorSupport.TRUECOLOR: 3>
    >>> color_support_from_env({}) is None
    True
    """
    env = os.environ if env is None else env

    explicit = env.get(COLOR_ENV_VAR, "").strip()
    if explicit and explicit.lower() != "auto":
        return TerminalColorSupport.from_name(explicit)

    if env.get("NO_COLOR"):
        return TerminalColorSupport.NONE

    forced = env.get("FORCE_COLOR")
    if forced is not None:
        level = forced.strip().lower()
        if level in {"0", "false"}:
            return TerminalColorSupport.NONE
        if level == "1":
            return TerminalColorSupport.ANSI16
        if level == "2":
            return TerminalColorSupport.ANSI256
        if level in {"", "3", "true"}:
            return TerminalColorSupport.TRUECOLOR
        logger.debug("ignoring unrecognised FORCE_COLOR=%r", forced)

    colorterm = env.get("COLORTERM", "").strip().lower()
    if colorterm in {"truecolor", "24bit"}:
        return TerminalColorSupport.TRUECOLOR
    if colorterm in {"256color", "ansi256"}:
        return TerminalColorSupport.ANSI256
    if colorterm == "ansi":
        return TerminalColorSupport.ANSI16
    return None


def resolve_color_support(
    explicit: TerminalColorSupport | str | None = None,
    env: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> TerminalColorSupport:
    """Pick the capability tier: explicit value, then environment, then console.

    ``explicit`` may be a tier or its name; ``"auto"`` counts as unset.

    Examples
    --------
    >>> resolve_color_support("ansi256", env={"NO_COLOR": "1"})
    <TerminalColorSupport.ANSI256: 2>
    >>> resolve_color_support("auto", env={"NO_COLOR": "1"})
    <TerminalColorSupport.NONE: 0>
    """
    if isinstance(explicit, str):
        explicit = None if explicit.strip().lower() == "auto" else TerminalColorSupport.from_name(explicit)
    if explicit is not None:
        return explicit

    from_env = color_support_from_env(env)
    if from_env is not None:
        return from_env

    return color_support_of(console if console is not None else Console())


__all__ = [
    "COLOR_ENV_VAR",
    "DOTENV_ENV_VAR",
    "color_support_from_env",
    "enable_dotenv",
    "resolve_color_support",
    "should_use_dotenv",
]
