"""
ShortcodeEngine
===============
The expansion entry point.  Parses a document, runs every top-level
invocation through the executor, and splices the results back into a fresh
buffer, left to right.

Literal text is copied verbatim; only invocation spans are rewritten.
Fragments flagged ``rescan`` go through the whole pipeline again before they
are spliced in.  A depth limit stops handlers that (directly or through a
cycle) keep producing shortcodes.

Any error aborts the document: the caller gets either fully expanded content
or an exception, never partial output.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from pyshortcode.core.config import Settings, get_settings

from .context import ShortcodeContext
from .errors import ExpansionCancelled, ExpansionDepthExceeded
from .executor import ShortcodeExecutor
from .models import Invocation, TextSegment
from .parser import InvocationParser
from .registry import ShortcodeRegistry

logger = logging.getLogger(__name__)


class ShortcodeEngine:
    """
    Expand all shortcodes embedded in a document.

    Usage::

        engine = ShortcodeEngine(create_default_registry())
        html = await engine.expand(content, document=page)
    """

    def __init__(self, registry: ShortcodeRegistry, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._registry = registry
        self._registry.freeze()
        self._parser = InvocationParser(
            self._settings.open_delimiter, self._settings.close_delimiter,
        )
        self._executor = ShortcodeExecutor(registry, self._settings)

    @property
    def registry(self) -> ShortcodeRegistry:
        return self._registry

    @property
    def parser(self) -> InvocationParser:
        return self._parser

    @property
    def settings(self) -> Settings:
        return self._settings

    # ----------------------------------------------------------------- public

    async def expand(
        self,
        content: str,
        document: Any = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Return *content* with every shortcode replaced by its output."""
        if not content:
            return content

        ctx = ShortcodeContext(
            document=document,
            settings=self._settings,
            cancel_event=cancel_event,
            _expand_fn=self._expand,
        )
        result = await self._expand(content, ctx, 0)
        logger.debug("Expanded document %r (%d -> %d chars)", document, len(content), len(result))
        return result

    # ----------------------------------------------------------------- private

    async def _expand(self, text: str, ctx: ShortcodeContext, origin: int) -> str:
        """Run one Parser -> Executor -> Substitution pass over *text*."""
        if ctx.cancelled:
            raise ExpansionCancelled("expansion cancelled by host", offset=origin)
        if not self._parser.contains_markers(text):
            return text
        if ctx.depth > self._settings.max_depth:
            trigger: Optional[Invocation] = ctx.invocation
            raise ExpansionDepthExceeded(
                f"maximum expansion depth ({self._settings.max_depth}) exceeded",
                name=trigger.name if trigger else None,
                offset=origin,
            )

        parsed = self._parser.parse(text, origin)
        if not parsed.has_invocations:
            return text

        results = iter(await self._executor.execute_all(parsed.invocations, ctx))

        parts: list[str] = []
        for segment in parsed.segments:
            if isinstance(segment, TextSegment):
                parts.append(segment.text)
                continue
            for fragment in next(results):
                if fragment.rescan:
                    parts.append(await self._expand(
                        fragment.text, ctx.descend(segment), segment.origin_of(fragment.text),
                    ))
                else:
                    parts.append(fragment.text)

        return "".join(parts)
