"""Lexical scope frames mapping identifiers to statically known values."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .values import UNRESOLVED

__all__ = ["Scope"]


class Scope:
    """One lexical region's bindings chained to its enclosing region.

    A frame only ever writes to its own bindings. Children read through to
    their ancestors and are dropped once their region has been traversed.

    Example:
        >>> module = Scope()
        >>> module.define("EVENTS", {"CLOSE": "close"})
        >>> body = module.child()
        >>> body.define("EVENTS", "shadowed")
        >>> module.lookup("EVENTS"), body.lookup("EVENTS")
        ({'CLOSE': 'close'}, 'shadowed')
    """

    __slots__ = ("_bindings", "parent")

    def __init__(self, parent: Scope | None = None) -> None:
        self.parent = parent
        self._bindings: dict[str, Any] = {}

    @property
    def bindings(self) -> Mapping[str, Any]:
        """Read-only view of this frame's own bindings."""

        return MappingProxyType(self._bindings)

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def child(self) -> Scope:
        return Scope(parent=self)

    def define(self, name: str, value: Any) -> None:
        self._bindings[name] = value

    def frames(self) -> Iterator[Scope]:
        """Yield this frame and its ancestors, innermost first."""

        frame: Scope | None = self
        while frame is not None:
            yield frame
            frame = frame.parent

    def resolves(self, name: str) -> bool:
        return any(name in frame._bindings for frame in self.frames())

    def lookup(self, name: str) -> Any:
        """Return the value bound to ``name`` or ``UNRESOLVED``."""

        for frame in self.frames():
            if name in frame._bindings:
                return frame._bindings[name]
        return UNRESOLVED

    def __repr__(self) -> str:
        names = ", ".join(self._bindings)
        return f"Scope(depth={self.depth}, bindings=[{names}])"
