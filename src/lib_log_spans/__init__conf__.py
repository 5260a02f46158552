"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from importlib import metadata as _metadata

name = "lib_log_spans"
title = "Span-based console log formatting with deterministic perceptual hash colors"
homepage = "https://github.com/bitranox/lib_log_spans"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_spans"


def _resolve_version() -> str:
    try:
        return _metadata.version(name)
    except _metadata.PackageNotFoundError:
        return "0.0.0.dev0"


version = _resolve_version()


def summary_info() -> str:
    """Return the metadata banner printed by ``lib_log_spans info``.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_spans:'
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"


def print_info() -> None:
    """Print the metadata banner to stdout."""
    print(summary_info(), end="")
