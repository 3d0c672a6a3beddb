"""
Shortcode data model
====================
Value objects produced by the parser and handlers.  All of them are
immutable and owned by the single expansion call that created them.

Invocation:   one parsed occurrence of a shortcode in a content string
Arguments:    ordered (key, value) pairs; duplicate keys are kept in order
TextSegment:  literal text between invocations, copied verbatim
Fragment:     one piece of a handler's output, optionally flagged for rescan
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional, Union

_TRUTHY = ("on", "1", "true", "yes")


class Argument(NamedTuple):
    key: str
    value: Optional[str]    # None for a bare flag


class Arguments:
    """
    Ordered, read-only view over the arguments of one invocation.

    Lookup is last-wins for convenience; handlers that care about repeated
    keys use ``get_all``.
    """

    __slots__ = ("_items",)

    def __init__(self, items=()) -> None:
        self._items: tuple[Argument, ...] = tuple(Argument(k, v) for k, v in items)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Argument:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Arguments):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == tuple(tuple(i) for i in other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Arguments({list(self._items)!r})"

    def has(self, key: str) -> bool:
        return any(arg.key == key for arg in self._items)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for arg in reversed(self._items):
            if arg.key == key:
                return arg.value
        return default

    def get_all(self, key: str) -> list[Optional[str]]:
        return [arg.value for arg in self._items if arg.key == key]

    def flag(self, key: str) -> bool:
        """True for a bare ``key`` or a truthy ``key="on"``."""
        if not self.has(key):
            return False
        value = self.get(key)
        return value is None or value.lower() in _TRUTHY

    def keys(self) -> list[str]:
        return [arg.key for arg in self._items]

    def as_dict(self) -> dict[str, Optional[str]]:
        return {arg.key: arg.value for arg in self._items}


@dataclass(frozen=True)
class Invocation:
    """
    A located shortcode occurrence.

    ``start``/``end`` index the text that was parsed; ``origin`` is where that
    text begins in the document, so ``offset`` is usable in diagnostics even
    for nested bodies and rescanned fragments.
    """

    name: str
    arguments: Arguments
    body: Optional[str]
    start: int
    end: int
    body_start: Optional[int] = None
    origin: int = 0

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end

    @property
    def offset(self) -> int:
        return self.origin + self.start

    @property
    def is_block(self) -> bool:
        return self.body is not None

    @property
    def body_offset(self) -> Optional[int]:
        if self.body_start is None:
            return None
        return self.origin + self.body_start

    def origin_of(self, text: str) -> int:
        """Document offset to report for *text* produced by this invocation."""
        if self.body_start is not None and text == self.body:
            return self.origin + self.body_start
        return self.offset


@dataclass(frozen=True)
class TextSegment:
    text: str
    start: int
    end: int


Segment = Union[TextSegment, Invocation]


@dataclass(frozen=True)
class ParsedContent:
    source: str
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def invocations(self) -> list[Invocation]:
        return [s for s in self.segments if isinstance(s, Invocation)]

    @property
    def has_invocations(self) -> bool:
        return any(isinstance(s, Invocation) for s in self.segments)


@dataclass(frozen=True)
class Fragment:
    text: str
    rescan: bool = False
