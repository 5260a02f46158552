"""Side table mapping live objects to opaque, stable identity handles.

Purpose
-------
Give log records a stable per-instance identity (used for ``Class@hash``
labels and hash colors) without relying on weak references or finalizers.

Contents
--------
* :class:`InstanceHandle` - opaque handle value.
* :class:`InstanceRegistry` - register/lookup/release with caller-managed
  lifecycle.

System Role
-----------
Owned by whoever produces log records. The color engine stays stateless and
only ever sees the handle value.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class InstanceHandle:
    """Opaque identity of a registered object.

    Two handles are equal only when issued by the same registration.
    """

    value: int

    @classmethod
    def of(cls, value: "InstanceHandle | int") -> "InstanceHandle":
        """Return ``value`` as a handle; plain integers lose their sign.

        Examples
        --------
        >>> InstanceHandle.of(-0x2a).hex()
        '002a'
        """
        if isinstance(value, InstanceHandle):
            return value
        return cls(abs(value))

    def hex(self, length: int = 4) -> str:
        """Return the last ``length`` hex digits, as shown in ``Class@hash``.

        Examples
        --------
        >>> InstanceHandle(0x1a2b3c).hex()
        '2b3c'
        """
        return format(self.value, "x").rjust(length, "0")[-length:]


class InstanceRegistry:
    """Map objects to :class:`InstanceHandle` values until released.

    The registry holds a strong reference to every registered object, so the
    identity can never be recycled for another object while the handle is
    alive. Callers must :meth:`release` handles they no longer need.

    Examples
    --------
    >>> registry = InstanceRegistry()
    >>> target = object()
    >>> handle = registry.register(target)
    >>> registry.register(target) == handle
    True
    >>> registry.release(handle)
    True
    >>> registry.handle_of(target) is None
    True
    """

    def __init__(self, *, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._by_identity: dict[int, tuple[InstanceHandle, Any]] = {}
        self._by_handle: dict[InstanceHandle, int] = {}
        self._lock = threading.Lock()

    def register(self, obj: Any) -> InstanceHandle:
        """Return the handle for ``obj``, issuing a new one on first use."""
        with self._lock:
            existing = self._by_identity.get(id(obj))
            if existing is not None:
                return existing[0]
            handle = InstanceHandle(next(self._counter))
            self._by_identity[id(obj)] = (handle, obj)
            self._by_handle[handle] = id(obj)
            return handle

    def handle_of(self, obj: Any) -> InstanceHandle | None:
        entry = self._by_identity.get(id(obj))
        return entry[0] if entry is not None else None

    def resolve(self, handle: InstanceHandle) -> Any | None:
        """Return the object registered under ``handle`` (``None`` once released)."""
        key = self._by_handle.get(handle)
        if key is None:
            return None
        return self._by_identity[key][1]

    def release(self, handle: InstanceHandle) -> bool:
        """Forget ``handle``; returns ``False`` when it was not registered."""
        with self._lock:
            key = self._by_handle.pop(handle, None)
            if key is None:
                return False
            del self._by_identity[key]
            return True

    def clear(self) -> None:
        with self._lock:
            self._by_identity.clear()
            self._by_handle.clear()

    def __len__(self) -> int:
        return len(self._by_handle)

    def __contains__(self, obj: object) -> bool:
        if isinstance(obj, InstanceHandle):
            return obj in self._by_handle
        return id(obj) in self._by_identity


__all__ = ["InstanceHandle", "InstanceRegistry"]
