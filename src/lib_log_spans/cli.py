"""Command line interface for inspecting formatters and hash colors.

Purpose
-------
Give a terminal-side view of the toolkit: the metadata banner, a demo of
every formatter, the curated readable palettes and the hash color chosen for
arbitrary names.

Contents
--------
* :func:`cli` - Click group with global ``--traceback``, ``--use-dotenv``
  and ``--color`` options.
* Commands ``info``, ``demo``, ``palette`` and ``color``.
* :func:`main` - entry point delegating to :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Outer shell; wires :mod:`lib_log_spans.config`, the rich console adapter and
the formatters together without adding behaviour of its own.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __init__conf__
from . import config as config_module
from .adapters.console.rich_console import RichConsoleAdapter
from .application.formatters import CompactFormatter, DataPresentation, RainbowFormatOptions, RainbowFormatter, SimpleFormatter
from .application.formatting import SpanBasedFormatter
from .domain.color_support import TerminalColorSupport
from .domain.colors import IndexedColor, RgbColor
from .domain.hash_colors import ColorSaturation, color_for_hash, stable_hash
from .domain.levels import LogLevel
from .domain.palettes import generate_readable_palettes
from .domain.records import LogRecord
from .domain.spans import Bordered, BoxBorderStyle, LoggerName, SpanNode

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_COLOR_CHOICES = ["auto", "none", "ansi16", "ansi256", "truecolor"]
_SATURATION_CHOICES = [member.value for member in ColorSaturation]


def _color_support(ctx: click.Context) -> TerminalColorSupport:
    obj = ctx.ensure_object(dict)
    return obj.get("color_support", TerminalColorSupport.NONE)


_RICH_COLOR_SYSTEMS = {
    TerminalColorSupport.ANSI16: "standard",
    TerminalColorSupport.ANSI256: "256",
    TerminalColorSupport.TRUECOLOR: "truecolor",
}


def _console_for(support: TerminalColorSupport) -> Console:
    # The resolved tier already accounts for NO_COLOR; Rich must not re-apply it.
    if support.supports_colors:
        return Console(force_terminal=True, color_system=_RICH_COLOR_SYSTEMS[support], no_color=False, highlight=False)  # type: ignore[arg-type]
    return Console(no_color=True, force_terminal=False, highlight=False)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from the nearest .env (defaults to ${config_module.DOTENV_ENV_VAR}).",
)
@click.option(
    "--color",
    "color",
    type=click.Choice(_COLOR_CHOICES, case_sensitive=False),
    default="auto",
    show_default=True,
    help="Terminal color capability; 'auto' consults LOG_SPANS_COLOR, NO_COLOR, FORCE_COLOR, COLORTERM and the terminal.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None, color: str) -> None:
    """Root command storing global flags and the resolved color capability."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    ctx.ensure_object(dict)
    ctx.obj["color_support"] = config_module.resolve_color_support(color)

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


class _DemoWorker:
    """Stand-in object whose instance hash shows up in the demo."""


def _demo_records(now: datetime) -> list[LogRecord]:
    worker = _DemoWorker()
    try:
        raise ConnectionError("upstream closed the connection")
    except ConnectionError as exc:
        failure = exc

    return [
        LogRecord("service started", now, LogLevel.INFO, logger_name="app", file_name="main.py", line=12),
        LogRecord(
            "request handled",
            now,
            LogLevel.DEBUG,
            logger_name="app.http",
            data={"path": "/health", "status": 200},
            instance=worker,
            instance_hash=stable_hash(f"{type(worker).__name__}-1"),
            method_name="_DemoWorker.handle",
            file_name="http.py",
            line=88,
        ),
        LogRecord(
            "cache is slow",
            now,
            LogLevel.WARNING,
            wall_clock=now + timedelta(seconds=5),
            logger_name="app.cache",
            data={"latency_ms": 950, "keys": ["user", "session"]},
        ),
        LogRecord("fetch failed", now, LogLevel.ERROR, logger_name="app.http", error=failure, file_name="http.py", line=120),
        LogRecord("giving up", now, LogLevel.CRITICAL, logger_name="app"),
    ]


def _box_root(node: SpanNode, record: LogRecord) -> None:
    if record.level is LogLevel.CRITICAL:
        node.wrap(lambda span: Bordered(span, style=BoxBorderStyle.ROUNDED))


def _emphasize_logger(node: SpanNode, record: LogRecord) -> None:
    target = node.find_first(LoggerName)
    if target is not None:
        target.replace_span(LoggerName(target.span.name.upper()))  # type: ignore[attr-defined]


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--multiline-data/--inline-data",
    default=False,
    help="Render structured data as YAML lines instead of inline pairs.",
)
@click.option(
    "--transform/--no-transform",
    default=False,
    help="Apply sample span transformers (boxed critical lines, upper-case logger names).",
)
@click.pass_context
def cli_demo(ctx: click.Context, multiline_data: bool, transform: bool) -> None:
    """Render sample records through every bundled formatter."""

    support = _color_support(ctx)
    transformers = (_box_root, _emphasize_logger) if transform else ()
    options = RainbowFormatOptions(data=DataPresentation.MULTILINE if multiline_data else DataPresentation.INLINE)
    formatters: list[tuple[str, SpanBasedFormatter]] = [
        ("rainbow", RainbowFormatter(options, span_transformers=transformers)),
        ("simple", SimpleFormatter(span_transformers=transformers)),
        ("compact", CompactFormatter(span_transformers=transformers)),
    ]

    console = _console_for(support)
    records = _demo_records(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
    for title, formatter in formatters:
        console.print(Text(f"=== Formatter: {title} ({support.name.lower()}) ===", style="bold"))
        adapter = RichConsoleAdapter(console=console, formatter=formatter, color_support=support)
        for record in records:
            adapter.emit(record)
        console.print()


@cli.command("palette", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_palette() -> None:
    """Show the readable 256-color palettes used for hash colors."""

    palettes = generate_readable_palettes()
    console = Console(highlight=False)
    table = Table(title="Readable hash color palettes")
    table.add_column("Saturation")
    table.add_column("Colors", justify="right")
    table.add_column("Codes")
    for label, colors in (("low", palettes.low), ("medium", palettes.medium), ("high", palettes.high)):
        swatches = Text()
        for color in colors:
            swatches.append(f"{color.code:>3} ", style=f"color({color.code})")
        table.add_row(label, str(len(colors)), swatches)
    table.add_row("combined", str(len(palettes.combined)), "")
    console.print(table)


def _describe(color: object) -> str:
    if isinstance(color, IndexedColor):
        return f"color {color.code} (#{color.r:02x}{color.g:02x}{color.b:02x})"
    if isinstance(color, RgbColor):
        return f"rgb #{color.r:02x}{color.g:02x}{color.b:02x}"
    return "default"


@cli.command("color", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--saturation",
    type=click.Choice(_SATURATION_CHOICES, case_sensitive=False),
    default=None,
    help="Palette to draw from; defaults to low and medium combined.",
)
@click.pass_context
def cli_color(ctx: click.Context, names: tuple[str, ...], saturation: str | None) -> None:
    """Print the hash color each NAME receives."""

    support = _color_support(ctx)
    band = ColorSaturation(saturation.lower()) if saturation else None
    console = _console_for(support)
    for name in names:
        color = color_for_hash(name, band, support)
        line = Text(name, style=f"#{color.r:02x}{color.g:02x}{color.b:02x}" if support.supports_colors else "")
        line.append(f"  {_describe(color)}")
        console.print(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and restore traceback preferences afterwards.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Exit code reported by :func:`lib_cli_exit_tools.run_cli`.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
