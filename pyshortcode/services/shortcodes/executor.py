"""
ShortcodeExecutor
=================
Resolves invocations against the registry and runs their handlers.

Every invocation of one text runs as its own asyncio task (bounded by
``max_concurrency``); results are always returned in span order, whatever
order the handlers finish in.  The first failure cancels the remaining
tasks.  Handler errors, including a ShortcodeError the handler raises itself,
are wrapped in HandlerExecutionFailed and never retried here.  Errors that
come out of a nested ctx.expand() are passed through unchanged.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Optional, Sequence

from pyshortcode.core.config import Settings

from .context import ShortcodeContext
from .errors import ExpansionCancelled, HandlerExecutionFailed, ShortcodeError, UnknownShortcode
from .models import Fragment, Invocation
from .registry import ShortcodeRegistry

logger = logging.getLogger(__name__)


class ShortcodeExecutor:
    def __init__(self, registry: ShortcodeRegistry, settings: Settings) -> None:
        self._registry = registry
        self._settings = settings

    # ----------------------------------------------------------------- public

    async def execute(self, invocation: Invocation, ctx: ShortcodeContext) -> tuple[Fragment, ...]:
        """Run the handler for a single invocation."""
        handler = self._registry.resolve(invocation.name)
        if handler is None:
            raise UnknownShortcode(
                "no handler registered", name=invocation.name, offset=invocation.offset,
            )

        call_ctx = ctx.for_invocation(invocation)
        timeout = self._settings.handler_timeout
        try:
            result = handler.execute(invocation.arguments, invocation.body, call_ctx)
            if inspect.isawaitable(result):
                if timeout is not None:
                    result = await asyncio.wait_for(result, timeout)
                else:
                    result = await result
            # generators are drained here so their errors are wrapped too
            return self._normalise(result)
        except ShortcodeError as exc:
            if exc.from_expansion or isinstance(exc, ExpansionCancelled):
                raise   # already structured by the nested expansion
            raise HandlerExecutionFailed(
                f"handler raised {type(exc).__name__}: {exc.message}",
                name=invocation.name, offset=invocation.offset,
            ) from exc
        except Exception as exc:
            logger.exception("Shortcode %s at offset %d raised an error", invocation.name, invocation.offset)
            raise HandlerExecutionFailed(
                f"handler raised {type(exc).__name__}: {exc}",
                name=invocation.name, offset=invocation.offset,
            ) from exc

    async def execute_all(
        self,
        invocations: Sequence[Invocation],
        ctx: ShortcodeContext,
    ) -> list[tuple[Fragment, ...]]:
        """Run all invocations concurrently; results come back in span order."""
        if not invocations:
            return []
        if ctx.cancelled:
            raise ExpansionCancelled("expansion cancelled by host", offset=invocations[0].offset)

        limit = self._settings.max_concurrency
        semaphore: Optional[asyncio.Semaphore] = asyncio.Semaphore(limit) if limit else None

        async def run(invocation: Invocation) -> tuple[Fragment, ...]:
            if semaphore is None:
                return await self.execute(invocation, ctx)
            async with semaphore:
                if ctx.cancelled:
                    raise ExpansionCancelled("expansion cancelled by host", offset=invocation.offset)
                return await self.execute(invocation, ctx)

        tasks = [
            asyncio.create_task(run(inv), name=f"shortcode:{inv.name}@{inv.offset}")
            for inv in invocations
        ]
        cancel_waiter: Optional[asyncio.Task] = None
        if ctx.cancel_event is not None:
            cancel_waiter = asyncio.create_task(ctx.cancel_event.wait())

        try:
            outstanding = set(tasks)
            while outstanding:
                wait_on = outstanding | {cancel_waiter} if cancel_waiter else outstanding
                done, _ = await asyncio.wait(wait_on, return_when=asyncio.FIRST_COMPLETED)
                outstanding -= done

                if cancel_waiter is not None and cancel_waiter in done:
                    raise ExpansionCancelled("expansion cancelled by host", offset=invocations[0].offset)

                failed = [t for t in tasks if t.done() and not t.cancelled() and t.exception() is not None]
                if failed:
                    raise failed[0].exception()

            if ctx.cancelled:
                raise ExpansionCancelled("expansion cancelled by host", offset=invocations[0].offset)
            return [t.result() for t in tasks]
        finally:
            leftovers = [t for t in tasks if not t.done()]
            if cancel_waiter is not None:
                leftovers.append(cancel_waiter)
            for task in leftovers:
                task.cancel()
            # reap so no task outlives this expansion
            await asyncio.gather(*tasks, *([cancel_waiter] if cancel_waiter else []), return_exceptions=True)

    # ----------------------------------------------------------------- private

    @staticmethod
    def _normalise(result) -> tuple[Fragment, ...]:
        if isinstance(result, str):
            return (Fragment(result),)
        if isinstance(result, Fragment):
            return (result,)

        iterator = None
        if result is not None and not isinstance(result, (bytes, bytearray)):
            try:
                iterator = iter(result)
            except TypeError:
                pass
        if iterator is not None:
            items = list(iterator)
            if all(isinstance(i, (str, Fragment)) for i in items):
                return tuple(Fragment(i) if isinstance(i, str) else i for i in items)

        raise TypeError(f"unsupported handler result type: {type(result).__name__}")
