"""Terminal color capability tiers."""

from __future__ import annotations

from enum import Enum


class TerminalColorSupport(Enum):
    """Color depth a terminal can display, ordered from none to truecolor."""

    NONE = 0
    ANSI16 = 1
    ANSI256 = 2
    TRUECOLOR = 3

    @property
    def supports_colors(self) -> bool:
        return self is not TerminalColorSupport.NONE

    @property
    def supports_256(self) -> bool:
        return self.value >= TerminalColorSupport.ANSI256.value

    @property
    def supports_truecolor(self) -> bool:
        return self is TerminalColorSupport.TRUECOLOR

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TerminalColorSupport):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, TerminalColorSupport):
            return NotImplemented
        return self.value <= other.value

    @classmethod
    def from_name(cls, name: str) -> "TerminalColorSupport":
        """Parse a tier name such as ``"ansi256"`` (case-insensitive)."""
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown color support: {name!r}") from exc


__all__ = ["TerminalColorSupport"]
