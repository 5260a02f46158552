"""YAML-flavoured rendering of structured log data."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

_KEY_SPECIALS = (" ", ":", "#", "\n", "\t")


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


def format_yaml_key(key: object) -> str:
    """Return ``key`` as text, quoted when it contains whitespace, ``:`` or ``#``.

    Examples
    --------
    >>> format_yaml_key("user_id"), format_yaml_key("user id")
    ('user_id', '"user id"')
    """
    text = str(key)
    if any(special in text for special in _KEY_SPECIALS):
        return f'"{_escape(text)}"'
    return text


def format_yaml_value(value: object) -> str:
    """Return a scalar as YAML text; strings are always quoted.

    Examples
    --------
    >>> format_yaml_value("a\\nb"), format_yaml_value(None), format_yaml_value(True), format_yaml_value(3)
    ('"a\\\\nb"', 'null', 'true', '3')
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_collection(value: object) -> bool:
    return isinstance(value, Mapping) or (isinstance(value, Sequence) and not isinstance(value, (str, bytes)))


def _empty_literal(value: Any) -> str:
    return "{}" if isinstance(value, Mapping) else "[]"


def format_as_yaml(value: object, indent: int = 0) -> list[str]:
    """Render ``value`` as YAML lines, nested collections indented by two spaces.

    Examples
    --------
    >>> format_as_yaml({"user": {"id": 7, "tags": ["a"]}})
    ['user:', '  id: 7', '  tags:', '    - "a"']
    """
    pad = "  " * indent
    if value is None:
        return [f"{pad}null"]

    if isinstance(value, Mapping):
        if not value:
            return [f"{pad}{{}}"]
        lines: list[str] = []
        for key, item in value.items():
            label = format_yaml_key(key)
            if _is_collection(item):
                if not item:
                    lines.append(f"{pad}{label}: {_empty_literal(item)}")
                else:
                    lines.append(f"{pad}{label}:")
                    lines.extend(format_as_yaml(item, indent + 1))
            else:
                lines.append(f"{pad}{label}: {format_yaml_value(item)}")
        return lines

    if _is_collection(value):
        if not value:  # type: ignore[truthy-bool]
            return [f"{pad}[]"]
        lines = []
        for item in value:  # type: ignore[attr-defined]
            if _is_collection(item):
                if not item:
                    lines.append(f"{pad}- {_empty_literal(item)}")
                else:
                    lines.append(f"{pad}-")
                    lines.extend(format_as_yaml(item, indent + 1))
            else:
                lines.append(f"{pad}- {format_yaml_value(item)}")
        return lines

    return [f"{pad}{format_yaml_value(value)}"]


__all__ = ["format_as_yaml", "format_yaml_key", "format_yaml_value"]
