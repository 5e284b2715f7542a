"""Append-only emission channel observed by the extraction driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from .entries import Entry, EntryKind

__all__ = ["Diagnostic", "EmissionChannel", "Message"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable problem reported while extraction continues."""

    message: str
    line: int | None = None
    kind: EntryKind | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line})"


Message = Entry | Diagnostic
Listener = Callable[[Message], None]


class EmissionChannel:
    """Ordered stream of entries and diagnostics.

    Pushing with ``unique=True`` goes through an ordered ``(kind, name)``
    guard: the first entry wins and later ones with the same key are dropped.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._keys: dict[tuple[EntryKind, str], int] = {}
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def push_entry(self, entry: Entry, *, unique: bool = False) -> bool:
        """Append ``entry``; return ``False`` when the guard suppressed it."""

        key = (entry.kind, entry.name)
        if unique and key in self._keys:
            return False
        self._keys.setdefault(key, len(self._messages))
        self._publish(entry)
        return True

    def push_diagnostic(self, diagnostic: Diagnostic) -> None:
        self._publish(diagnostic)

    def has_entry(self, kind: EntryKind, name: str) -> bool:
        return (kind, name) in self._keys

    def _publish(self, message: Message) -> None:
        self._messages.append(message)
        for listener in self._listeners:
            listener(message)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(item for item in self._messages if isinstance(item, Entry))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(
            item for item in self._messages if isinstance(item, Diagnostic)
        )

    def entries_of(self, kind: EntryKind | str) -> list[Entry]:
        wanted = EntryKind(kind)
        return [entry for entry in self.entries if entry.kind == wanted]

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)
