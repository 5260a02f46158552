"""Terminal color values shared by the buffer, spans, and hash colors.

Purpose
-------
Describe console colors as small immutable values that always resolve to an
RGB triple, independent of how (or whether) a terminal can display them.

Contents
--------
* :class:`ConsoleColor` abstract base with RGB accessors.
* :class:`IndexedColor`, :class:`RgbColor`, :class:`DefaultColor` variants.
* :class:`Ansi16` namespace holding the sixteen standard colors.
* :data:`XTERM_256` tuple of every indexed color (palette generator input).

System Role
-----------
Lowest domain layer. The message buffer translates these values into escape
codes for a given capability tier; the perceptual engine reads their RGB
components.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

_ANSI16_RGB: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)
# Standard xterm values for codes 0-15.


def _cube_level(step: int) -> int:
    return 0 if step == 0 else 55 + step * 40


def _indexed_to_rgb(code: int) -> tuple[int, int, int]:
    """Resolve an xterm 256-color code to its RGB triple.

    Examples
    --------
    >>> _indexed_to_rgb(196)
    (255, 0, 0)
    >>> _indexed_to_rgb(244)
    (128, 128, 128)
    """
    if code < 16:
        return _ANSI16_RGB[code]
    if code < 232:
        index = code - 16
        return (
            _cube_level(index // 36),
            _cube_level((index % 36) // 6),
            _cube_level(index % 6),
        )
    level = 8 + (code - 232) * 10
    return (level, level, level)


class ConsoleColor(ABC):
    """Base class of every terminal color.

    Subclasses expose ``r``, ``g`` and ``b`` in ``0..255``. The set of
    variants is closed: :class:`IndexedColor`, :class:`RgbColor` and
    :class:`DefaultColor`.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def r(self) -> int:
        """Red component."""

    @property
    @abstractmethod
    def g(self) -> int:
        """Green component."""

    @property
    @abstractmethod
    def b(self) -> int:
        """Blue component."""

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Return ``(r, g, b)``."""

        return (self.r, self.g, self.b)


def _check_component(name: str, value: int, upper: int = 255) -> None:
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be between 0 and {upper}, got {value}")


@dataclass(slots=True, frozen=True)
class IndexedColor(ConsoleColor):
    """One of the 256 xterm palette entries.

    Codes ``0-15`` map through the standard table, ``16-231`` through the
    6x6x6 cube and ``232-255`` through the grayscale ramp.
    """

    code: int

    def __post_init__(self) -> None:
        _check_component("code", self.code)

    @property
    def r(self) -> int:
        return _indexed_to_rgb(self.code)[0]

    @property
    def g(self) -> int:
        return _indexed_to_rgb(self.code)[1]

    @property
    def b(self) -> int:
        return _indexed_to_rgb(self.code)[2]

    @property
    def rgb(self) -> tuple[int, int, int]:
        return _indexed_to_rgb(self.code)


@dataclass(slots=True, frozen=True)
class RgbColor(ConsoleColor):
    """24-bit color."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        _check_component("red", self.red)
        _check_component("green", self.green)
        _check_component("blue", self.blue)

    @classmethod
    def from_hex(cls, value: int) -> "RgbColor":
        """Build a color from ``0xRRGGBB``.

        Examples
        --------
        >>> RgbColor.from_hex(0x336699)
        RgbColor(red=51, green=102, blue=153)
        """
        _check_component("hex value", value, 0xFFFFFF)
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @property
    def r(self) -> int:
        return self.red

    @property
    def g(self) -> int:
        return self.green

    @property
    def b(self) -> int:
        return self.blue


class DefaultColor(ConsoleColor):
    """The terminal's own default color.

    Renderers emit the SGR "default" codes (39/49) instead of a concrete
    color. The RGB accessors return a neutral grey placeholder. Only one
    instance ever exists.
    """

    __slots__ = ()
    _instance: "DefaultColor | None" = None

    def __new__(cls) -> "DefaultColor":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def r(self) -> int:
        return 128

    @property
    def g(self) -> int:
        return 128

    @property
    def b(self) -> int:
        return 128

    def __repr__(self) -> str:
        return "DefaultColor()"

    def __reduce__(self) -> tuple[type, tuple[()]]:
        return (DefaultColor, ())


class Ansi16:
    """The sixteen standard ANSI colors as :class:`IndexedColor` values."""

    BLACK = IndexedColor(0)
    RED = IndexedColor(1)
    GREEN = IndexedColor(2)
    YELLOW = IndexedColor(3)
    BLUE = IndexedColor(4)
    MAGENTA = IndexedColor(5)
    CYAN = IndexedColor(6)
    WHITE = IndexedColor(7)
    BRIGHT_BLACK = IndexedColor(8)
    BRIGHT_RED = IndexedColor(9)
    BRIGHT_GREEN = IndexedColor(10)
    BRIGHT_YELLOW = IndexedColor(11)
    BRIGHT_BLUE = IndexedColor(12)
    BRIGHT_MAGENTA = IndexedColor(13)
    BRIGHT_CYAN = IndexedColor(14)
    BRIGHT_WHITE = IndexedColor(15)
    GRAY = BRIGHT_BLACK
    GREY = BRIGHT_BLACK

    @classmethod
    def values(cls) -> tuple[IndexedColor, ...]:
        """Return the sixteen colors ordered by code."""

        return tuple(IndexedColor(code) for code in range(16))


XTERM_256: tuple[IndexedColor, ...] = tuple(IndexedColor(code) for code in range(256))


__all__ = [
    "Ansi16",
    "ConsoleColor",
    "DefaultColor",
    "IndexedColor",
    "RgbColor",
    "XTERM_256",
]
