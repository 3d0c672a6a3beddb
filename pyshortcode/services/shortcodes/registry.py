"""
ShortcodeRegistry: maps shortcode names to handlers.

Handlers can be classes or plain functions, synchronous or async:

    class Info(BaseShortcode):
        name = "info"
        async def execute(self, args, body, ctx):
            return [Fragment("<p>"), Fragment(body, rescan=True), Fragment("</p>")]

    @registry.shortcode("year")
    def year(args, body, ctx):
        return "2026"

A handler returns a ``str``, a ``Fragment``, or an iterable of either.

The registry is filled once at startup and then frozen; the engine freezes
the registry it is given, so no handler can be added once a build begins.
Names are case-sensitive.  Registering a name twice raises DuplicateName
unless overwriting is requested explicitly.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Mapping, Optional,
    Protocol, Union, runtime_checkable,
)

from .errors import DuplicateName, RegistryFrozen
from .models import Arguments, Fragment
from .parser import NAME_RE

if TYPE_CHECKING:
    from .context import ShortcodeContext

logger = logging.getLogger(__name__)


HandlerResult = Union[str, Fragment, Iterable[Union[str, Fragment]]]
HandlerFunction = Callable[..., Union[HandlerResult, Awaitable[HandlerResult]]]


@runtime_checkable
class ShortcodeHandler(Protocol):
    def execute(
        self, args: Arguments, body: Optional[str], ctx: "ShortcodeContext",
    ) -> Union[HandlerResult, Awaitable[HandlerResult]]:
        ...


class BaseShortcode(ABC):
    """Convenience base for class-based handlers."""

    name: str = ""

    @abstractmethod
    async def execute(self, args: Arguments, body: Optional[str], ctx: "ShortcodeContext") -> HandlerResult:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class FunctionHandler:
    """Adapts a plain function ``fn(args, body, ctx)`` to the handler interface."""

    def __init__(self, fn: HandlerFunction) -> None:
        self.fn = fn

    def execute(self, args, body, ctx):
        return self.fn(args, body, ctx)

    def __repr__(self) -> str:
        return f"<FunctionHandler {getattr(self.fn, '__qualname__', self.fn)!r}>"


class ShortcodeRegistry:
    def __init__(self) -> None:
        self._handlers: dict[str, ShortcodeHandler] = {}
        self._frozen = False

    # ---------------------------------------------------------------- register

    def register(self, name: str, handler: Any, *, overwrite: bool = False) -> ShortcodeHandler:
        """Bind *name* to *handler*; plain callables are wrapped."""
        if self._frozen:
            raise RegistryFrozen("registry is read-only once a build has started", name=name)
        if not isinstance(name, str) or not NAME_RE.fullmatch(name):
            raise ValueError(f"invalid shortcode name: {name!r}")
        if name in self._handlers and not overwrite:
            raise DuplicateName("shortcode already registered", name=name)

        if not isinstance(handler, ShortcodeHandler):
            if not callable(handler):
                raise TypeError(f"handler for {name!r} must define execute() or be callable")
            handler = FunctionHandler(handler)

        self._handlers[name] = handler
        logger.debug("Registered shortcode: %s -> %r", name, handler)
        return handler

    def load(self, bindings: Union[Mapping[str, Any], Iterable[tuple[str, Any]]], *, overwrite: bool = False) -> None:
        """Bulk registration; pass ``overwrite=True`` to allow replacing bindings."""
        items = bindings.items() if isinstance(bindings, Mapping) else bindings
        for name, handler in items:
            self.register(name, handler, overwrite=overwrite)

    def shortcode(self, name: str, *, overwrite: bool = False):
        """
        Decorator that registers a function as a shortcode handler.

        Usage::

            @registry.shortcode("br")
            def br(args, body, ctx):
                return "<br />"
        """
        def decorator(fn: HandlerFunction) -> HandlerFunction:
            self.register(name, FunctionHandler(fn), overwrite=overwrite)
            return fn
        return decorator

    def freeze(self) -> None:
        if not self._frozen:
            logger.debug("Registry frozen with %d shortcode(s)", len(self._handlers))
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------ lookup

    def resolve(self, name: str) -> Optional[ShortcodeHandler]:
        return self._handlers.get(name)

    # ---------------------------------------------------------- introspection

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
