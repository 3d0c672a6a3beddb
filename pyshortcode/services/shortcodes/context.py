"""
ShortcodeContext: the read-only view a handler gets of the expansion in
progress.

``document`` is whatever handle the host passed to ``ShortcodeEngine.expand``;
the engine never looks inside it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Optional

from pyshortcode.core.config import Settings

from .errors import ShortcodeError
from .models import Invocation


ExpandFn = Callable[[str, "ShortcodeContext", int], Awaitable[str]]


@dataclass(frozen=True)
class ShortcodeContext:
    document: Any
    settings: Settings
    depth: int = 0
    invocation: Optional[Invocation] = None
    cancel_event: Optional[asyncio.Event] = None
    _expand_fn: Optional[ExpandFn] = field(default=None, repr=False, compare=False)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def for_invocation(self, invocation: Invocation) -> "ShortcodeContext":
        return replace(self, invocation=invocation)

    def descend(self, invocation: Optional[Invocation] = None) -> "ShortcodeContext":
        """Context for text produced by *invocation*, one level deeper."""
        return replace(self, depth=self.depth + 1, invocation=invocation or self.invocation)

    async def expand(self, text: str) -> str:
        """
        Expand shortcodes in *text* (typically the handler's own body).

        Block bodies are never expanded by the engine on its own; a handler
        that wants nested shortcodes processed calls this, or returns its body
        in a ``Fragment(..., rescan=True)``.
        """
        if self._expand_fn is None:
            raise RuntimeError("context is not bound to an engine")
        origin = self.invocation.origin_of(text) if self.invocation is not None else 0
        try:
            return await self._expand_fn(text, self.descend(), origin)
        except ShortcodeError as exc:
            exc.from_expansion = True
            raise
