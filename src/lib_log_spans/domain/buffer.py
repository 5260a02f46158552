"""Text accumulator that encodes styles for a given terminal capability.

Purpose
-------
Collect rendered log output while tracking a stack of active styles, so
nested spans can color their content and closing an inner style restores
the outer one instead of resetting the terminal.

Contents
--------
* :class:`TextStyle` - one style stack entry.
* :class:`ConsoleMessageBuffer` - the sink spans render into.
* :func:`strip_ansi_codes` / :func:`visible_length_of` - width helpers.
* :func:`color_escape` - SGR encoding of a color per capability tier.

System Role
-----------
Render target of :func:`lib_log_spans.domain.spans.render_span`. One buffer
is created per render call (plus one per nested child buffer) and then
discarded; buffers are not shared between threads.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .color_support import TerminalColorSupport
from .colors import ConsoleColor, DefaultColor, IndexedColor
from .perceptual import round_half_up

RESET = "\x1b[0m"

_ANSI_PATTERNS = (
    re.compile(r"\x1b\[[0-9;]*m"),
    re.compile(r"\x1b\[[0-9;?]*[A-LN-Za-z]"),
    re.compile(r"\x1b\][^\x07]*\x07"),
    re.compile(r"\x1b\][^\x1b]*\x1b\\"),
    re.compile(r"\x1b[78]"),
)
# SGR, CSI, OSC terminated by BEL, OSC terminated by ST, save/restore cursor.


def strip_ansi_codes(text: str) -> str:
    """Remove terminal escape sequences from ``text``.

    Examples
    --------
    >>> strip_ansi_codes("\\x1b[31mred\\x1b[0m \\x1b]0;title\\x07ok")
    'red ok'
    """
    for pattern in _ANSI_PATTERNS:
        text = pattern.sub("", text)
    return text


def visible_length_of(text: str) -> int:
    """Return the number of characters ``text`` shows on screen."""
    return len(strip_ansi_codes(text))


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Map RGB to the nearest xterm cube or grayscale code.

    Examples
    --------
    >>> rgb_to_ansi256(255, 0, 0), rgb_to_ansi256(128, 128, 128)
    (196, 244)
    """
    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round_half_up((r - 8) / 247 * 24) + 232
    ri = round_half_up(r / 255 * 5)
    gi = round_half_up(g / 255 * 5)
    bi = round_half_up(b / 255 * 5)
    return 16 + 36 * ri + 6 * gi + bi


def ansi16_offset(color: ConsoleColor) -> int:
    """Return the offset added to 30/40 for the nearest 16-color code.

    Bright colors map to ``60..67`` so the final code lands on 90-97/100-107.
    """
    if isinstance(color, IndexedColor) and color.code < 16:
        return color.code if color.code < 8 else color.code - 8 + 60

    r, g, b = color.rgb
    if r == g == b:
        if r < 64:
            return 0
        if r < 192:
            return 60
        return 7

    bright = 60 if (r >= 192 or g >= 192 or b >= 192) else 0
    return bright + (r >= 128) * 1 + (g >= 128) * 2 + (b >= 128) * 4


def color_escape(color: ConsoleColor, support: TerminalColorSupport, *, foreground: bool = True) -> str:
    """Return the SGR sequence selecting ``color`` on a ``support`` terminal.

    Examples
    --------
    >>> color_escape(IndexedColor(1), TerminalColorSupport.ANSI16)
    '\\x1b[31m'
    >>> color_escape(IndexedColor(110), TerminalColorSupport.ANSI256, foreground=False)
    '\\x1b[48;5;110m'
    """
    if isinstance(color, DefaultColor):
        return "\x1b[39m" if foreground else "\x1b[49m"
    match support:
        case TerminalColorSupport.NONE:
            return ""
        case TerminalColorSupport.ANSI16:
            return f"\x1b[{(30 if foreground else 40) + ansi16_offset(color)}m"
        case TerminalColorSupport.ANSI256:
            base = 38 if foreground else 48
            code = color.code if isinstance(color, IndexedColor) else rgb_to_ansi256(*color.rgb)
            return f"\x1b[{base};5;{code}m"
        case TerminalColorSupport.TRUECOLOR:
            base = 38 if foreground else 48
            return f"\x1b[{base};2;{color.r};{color.g};{color.b}m"
    raise ValueError(f"Unsupported color support: {support!r}")


@dataclass(slots=True, frozen=True)
class TextStyle:
    """Style stack entry. ``bold`` wins over ``dim`` when both are set."""

    foreground: ConsoleColor | None = None
    background: ConsoleColor | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False

    def escape(self, support: TerminalColorSupport) -> str:
        if not support.supports_colors:
            return ""
        parts: list[str] = []
        if self.bold:
            parts.append("\x1b[1m")
        elif self.dim:
            parts.append("\x1b[2m")
        if self.italic:
            parts.append("\x1b[3m")
        if self.underline:
            parts.append("\x1b[4m")
        if self.strikethrough:
            parts.append("\x1b[9m")
        if self.foreground is not None:
            parts.append(color_escape(self.foreground, support, foreground=True))
        if self.background is not None:
            parts.append(color_escape(self.background, support, foreground=False))
        return "".join(parts)


class ConsoleMessageBuffer:
    """Accumulate styled text for one render pass.

    The style stack is LIFO. Pushing writes the new style's codes on top of
    the ones already in effect. Popping resets and replays every style still
    on the stack, inherited ones included, from the bottom up. A balanced
    push/pop sequence therefore leaves the terminal in the state it had
    before, including attributes set by outer levels. Popping an empty stack
    is ignored.

    Child buffers (:meth:`create_child_buffer`) start with the parent's
    active styles as an inherited base. Their text stays in the child until
    the caller writes it into the parent.

    Examples
    --------
    >>> buffer = ConsoleMessageBuffer(TerminalColorSupport.ANSI16)
    >>> buffer.write("A")
    >>> buffer.push_color(IndexedColor(1))
    >>> buffer.write("B")
    >>> buffer.pop_color()
    >>> buffer.write("C")
    >>> buffer.text
    'A\\x1b[31mB\\x1b[0mC'
    """

    def __init__(
        self,
        color_support: TerminalColorSupport = TerminalColorSupport.NONE,
        *,
        parent: "ConsoleMessageBuffer | None" = None,
    ) -> None:
        self.color_support = color_support
        self.parent = parent
        self._inherited: tuple[TextStyle, ...] = tuple(parent._styles()) if parent is not None else ()
        self._stack: list[TextStyle] = []
        self._parts: list[str] = []

    def _styles(self) -> list[TextStyle]:
        return [*self._inherited, *self._stack]

    @property
    def active_style(self) -> TextStyle | None:
        """Style currently in effect, ``None`` when nothing is pushed."""
        if self._stack:
            return self._stack[-1]
        return self._inherited[-1] if self._inherited else None

    @property
    def depth(self) -> int:
        """Number of styles pushed on this buffer (inherited ones excluded)."""
        return len(self._stack)

    def push_style(
        self,
        foreground: ConsoleColor | None = None,
        background: ConsoleColor | None = None,
        *,
        bold: bool = False,
        dim: bool = False,
        italic: bool = False,
        underline: bool = False,
        strikethrough: bool = False,
    ) -> None:
        """Push a style and emit its escape codes."""
        style = TextStyle(foreground, background, bold, dim, italic, underline, strikethrough)
        self._stack.append(style)
        self._parts.append(style.escape(self.color_support))

    def pop_style(self) -> None:
        """Pop the innermost style and restore every style below it."""
        if not self._stack:
            return
        self._stack.pop()
        if not self.color_support.supports_colors:
            return
        self._parts.append(RESET)
        self._parts.append(self._cumulative_escape())

    def _cumulative_escape(self) -> str:
        return "".join(style.escape(self.color_support) for style in self._styles())

    def push_color(self, foreground: ConsoleColor | None = None, background: ConsoleColor | None = None) -> None:
        self.push_style(foreground, background)

    def pop_color(self) -> None:
        self.pop_style()

    def write(
        self,
        value: object,
        foreground: ConsoleColor | None = None,
        background: ConsoleColor | None = None,
    ) -> None:
        """Append ``value``; optional colors apply to this value only.

        Under an active style, the styles in effect are re-applied after every newline
        since some terminals and CI log viewers drop it at line breaks.
        """
        text = str(value)
        supports_colors = self.color_support.supports_colors
        if supports_colors and (foreground is not None or background is not None):
            self.push_style(foreground, background)
            self._write_reapplying(text)
            self.pop_style()
            return
        if supports_colors and self.active_style is not None:
            self._write_reapplying(text)
        else:
            self._parts.append(text)

    def _write_reapplying(self, text: str) -> None:
        lines = text.split("\n")
        for index, line in enumerate(lines):
            self._parts.append(line)
            if index < len(lines) - 1:
                self._parts.append("\n")
                self._parts.append(self._cumulative_escape())

    def write_raw(self, text: str) -> None:
        """Append pre-encoded ``text`` (e.g. a child buffer's output) untouched."""
        self._parts.append(text)

    def create_child_buffer(self) -> "ConsoleMessageBuffer":
        """Return an empty buffer with the same capability for pre-rendering."""
        return ConsoleMessageBuffer(self.color_support, parent=self)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def visible_length(self) -> int:
        return visible_length_of(self.text)

    visible_length_of = staticmethod(visible_length_of)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"ConsoleMessageBuffer(color_support={self.color_support.name}, depth={self.depth})"


__all__ = [
    "ConsoleMessageBuffer",
    "RESET",
    "TextStyle",
    "ansi16_offset",
    "color_escape",
    "rgb_to_ansi256",
    "strip_ansi_codes",
    "visible_length_of",
]
