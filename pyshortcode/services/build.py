#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Build pipeline
==============
Host-side driver that runs the shortcode engine over a set of documents.

Documents are expanded independently and concurrently (bounded by
``max_parallel_documents``).  What happens when one of them fails is the
host's call, configured through ``on_error``:

  abort: cancel every outstanding document and re-raise the failure of the
         earliest failing document (in input order)
  skip:  log the failure, record it in the report, and leave that document
         out of the output

``cancel()`` stops every build running on the pipeline: documents that have
not finished are reported as cancelled and never produce output.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from pyshortcode.core.config import Settings
from pyshortcode.services.shortcodes.engine import ShortcodeEngine
from pyshortcode.services.shortcodes.errors import ExpansionCancelled, ShortcodeError

logger = logging.getLogger(__name__)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class Document:
    """A document handed to the engine; ``metadata`` is exposed read-only."""

    source: str
    content: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class DocumentFailure:
    source: str
    error: ShortcodeError


@dataclass
class BuildReport:
    rendered: dict[str, str] = field(default_factory=dict)
    failures: list[DocumentFailure] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures and not self.cancelled


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pipeline
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BuildPipeline:
    """
    Usage::

        pipeline = BuildPipeline(ShortcodeEngine(create_default_registry()))
        report = await pipeline.run(documents)
    """

    def __init__(self, engine: ShortcodeEngine, settings: Optional[Settings] = None) -> None:
        self._engine = engine
        self._settings = settings or engine.settings
        self._active: set[asyncio.Event] = set()

    def cancel(self) -> None:
        """Ask every build currently running on this pipeline to stop."""
        if self._active:
            logger.info("Build cancellation requested for %d run(s)", len(self._active))
        for event in self._active:
            event.set()

    async def run(self, documents: Iterable[Document]) -> BuildReport:
        documents = list(documents)
        cancel_event = asyncio.Event()
        semaphore = asyncio.Semaphore(self._settings.max_parallel_documents)

        async def render(doc: Document) -> str:
            async with semaphore:
                return await self._engine.expand(doc.content, doc, cancel_event=cancel_event)

        tasks = [asyncio.create_task(render(doc), name=f"document:{doc.source}") for doc in documents]
        self._active.add(cancel_event)
        try:
            if self._settings.on_error == "abort":
                await self._abort_on_first_failure(documents, tasks, cancel_event)
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            self._active.discard(cancel_event)
            for task in tasks:
                if not task.done():
                    task.cancel()

        report = BuildReport()
        for doc, outcome in zip(documents, outcomes):
            if isinstance(outcome, ExpansionCancelled):
                report.cancelled.append(doc.source)
            elif isinstance(outcome, ShortcodeError):
                logger.warning("Skipping document %s: %s", doc.source, outcome)
                report.failures.append(DocumentFailure(doc.source, outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                report.rendered[doc.source] = outcome

        logger.info(
            "Build finished: %d rendered, %d failed, %d cancelled",
            len(report.rendered), len(report.failures), len(report.cancelled),
        )
        return report

    # ----------------------------------------------------------------- private

    async def _abort_on_first_failure(
        self,
        documents: list[Document],
        tasks: list[asyncio.Task],
        cancel_event: asyncio.Event,
    ) -> None:
        pending = set(tasks)
        while pending:
            _, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for doc, task in zip(documents, tasks):
                if not task.done() or task.cancelled():
                    continue
                error = task.exception()
                if isinstance(error, ShortcodeError) and not isinstance(error, ExpansionCancelled):
                    logger.error("Build aborted by document %s: %s", doc.source, error)
                    cancel_event.set()
                    await asyncio.gather(*tasks, return_exceptions=True)
                    raise error
