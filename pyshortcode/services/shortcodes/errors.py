"""
Shortcode errors
================
Every failure the engine can surface to its host.  Each error carries the
shortcode ``name`` and the ``offset`` into the document where the problem
was found (either may be ``None`` when it does not apply).

Parser:        MalformedInvocation, MismatchedInvocation, MalformedArgument
Execution:     UnknownShortcode, HandlerExecutionFailed
Expansion:     ExpansionDepthExceeded, ExpansionCancelled
Registration:  DuplicateName, RegistryFrozen
"""

from __future__ import annotations

from typing import Optional


class ShortcodeError(Exception):
    """Base class for all shortcode engine failures."""

    #: set once the error has passed out of a handler's ctx.expand()
    from_expansion = False

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        offset: Optional[int] = None,
    ) -> None:
        self.message = message
        self.name = name
        self.offset = offset
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.name is not None:
            where.append(f"shortcode {self.name!r}")
        if self.offset is not None:
            where.append(f"offset {self.offset}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


# ── Parser ──────────────────────────────────────────────────────────────────

class MalformedInvocation(ShortcodeError):
    pass


class MismatchedInvocation(ShortcodeError):
    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        offset: Optional[int] = None,
        expected: Optional[str] = None,
    ) -> None:
        self.expected = expected
        super().__init__(message, name=name, offset=offset)


class MalformedArgument(ShortcodeError):
    pass


# ── Execution ───────────────────────────────────────────────────────────────

class UnknownShortcode(ShortcodeError):
    pass


class HandlerExecutionFailed(ShortcodeError):
    """A handler raised.  The original exception is chained as ``__cause__``."""

    @property
    def original(self) -> Optional[BaseException]:
        return self.__cause__


# ── Expansion ───────────────────────────────────────────────────────────────

class ExpansionDepthExceeded(ShortcodeError):
    pass


class ExpansionCancelled(ShortcodeError):
    pass


# ── Registration ────────────────────────────────────────────────────────────

class DuplicateName(ShortcodeError):
    pass


class RegistryFrozen(ShortcodeError):
    pass
