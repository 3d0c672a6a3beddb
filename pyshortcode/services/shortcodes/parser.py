"""
InvocationParser
================
Locates shortcode invocations inside a content string.

Syntax (default delimiters)::

    <%name key="value" flag %>body<%/name%>     block form
    <%name key="value" /%>                      self-closing form

Only top-level invocations are returned.  A block body is captured as an
opaque raw substring: tags inside it are tracked on a stack purely for
bracket matching, and their arguments are not parsed until (and unless) that
body is expanded later.  The returned segments cover the input exactly, so
joining literal text with each invocation's source reproduces the original.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .errors import MalformedInvocation, MismatchedInvocation
from .models import Arguments, Invocation, ParsedContent, Segment, TextSegment
from .params import parse_arguments

logger = logging.getLogger(__name__)

NAME_PATTERN = r'[A-Za-z0-9_][A-Za-z0-9_-]*'
NAME_RE = re.compile(NAME_PATTERN)

DEFAULT_OPEN = "<%"
DEFAULT_CLOSE = "%>"


@dataclass(frozen=True)
class _Tag:
    kind: str                   # "open" | "close" | "self"
    name: str
    start: int
    end: int
    arguments: Optional[Arguments] = None


class InvocationParser:
    """
    Scan text for shortcode markers.

    Usage::

        parser = InvocationParser()
        parsed = parser.parse('A<%info text="x" /%>B')
        parsed.invocations[0].name   # "info"
    """

    def __init__(self, open_delimiter: str = DEFAULT_OPEN, close_delimiter: str = DEFAULT_CLOSE) -> None:
        self.open_delimiter = open_delimiter
        self.close_delimiter = close_delimiter

    # ----------------------------------------------------------------- public

    def contains_markers(self, content: str) -> bool:
        return self.open_delimiter in content

    def parse(self, content: str, origin: int = 0) -> ParsedContent:
        """
        Split *content* into literal text and top-level invocations.

        *origin* is the document offset of ``content[0]``; it only affects
        reported offsets, never the spans used for substitution.
        """
        segments: list[Segment] = []
        stack: list[_Tag] = []
        emitted = 0
        cursor = 0

        while True:
            idx = content.find(self.open_delimiter, cursor)
            if idx < 0:
                break

            tag = self._read_tag(content, idx, origin, parse_args=not stack)
            cursor = tag.end

            if tag.kind == "open":
                stack.append(tag)
                continue

            if tag.kind == "close":
                if not stack:
                    raise MismatchedInvocation(
                        "closing tag without a matching opening tag",
                        name=tag.name, offset=origin + tag.start,
                    )
                if stack[-1].name != tag.name:
                    raise MismatchedInvocation(
                        f"closing tag does not match open block {stack[-1].name!r}",
                        name=tag.name, offset=origin + tag.start,
                        expected=stack[-1].name,
                    )
                opened = stack.pop()
                if stack:
                    continue
                invocation = Invocation(
                    name=opened.name,
                    arguments=opened.arguments,
                    body=content[opened.end:tag.start],
                    start=opened.start,
                    end=tag.end,
                    body_start=opened.end,
                    origin=origin,
                )
            else:
                if stack:
                    continue
                invocation = Invocation(
                    name=tag.name,
                    arguments=tag.arguments,
                    body=None,
                    start=tag.start,
                    end=tag.end,
                    origin=origin,
                )

            if invocation.start > emitted:
                segments.append(TextSegment(content[emitted:invocation.start], emitted, invocation.start))
            segments.append(invocation)
            emitted = invocation.end

        if stack:
            unclosed = stack[-1]
            raise MalformedInvocation(
                "unterminated block: no matching closing tag",
                name=unclosed.name, offset=origin + unclosed.start,
            )

        if emitted < len(content):
            segments.append(TextSegment(content[emitted:], emitted, len(content)))

        logger.debug("Parsed %d segment(s) at origin %d", len(segments), origin)
        return ParsedContent(source=content, segments=tuple(segments))

    # ----------------------------------------------------------------- private

    def _read_tag(self, content: str, idx: int, origin: int, parse_args: bool) -> _Tag:
        """Read the marker that starts at *idx*."""
        inner_start = idx + len(self.open_delimiter)
        close_at = self._find_close(content, inner_start)
        if close_at < 0:
            raise MalformedInvocation(
                f"unterminated tag: missing {self.close_delimiter!r}",
                offset=origin + idx,
            )
        end = close_at + len(self.close_delimiter)
        inner = content[inner_start:close_at]
        stripped = inner.lstrip()
        lead = len(inner) - len(stripped)

        if stripped.startswith("/"):
            name = stripped[1:].strip()
            if not NAME_RE.fullmatch(name):
                raise MalformedInvocation(
                    f"invalid closing tag {inner!r}", offset=origin + idx,
                )
            return _Tag("close", name, idx, end)

        m = NAME_RE.match(stripped)
        if not m:
            raise MalformedInvocation(
                "missing or invalid shortcode name after delimiter",
                offset=origin + idx,
            )
        name = m.group(0)
        rest = stripped[m.end():]
        if rest and not (rest[0].isspace() or rest[0] == "/"):
            raise MalformedInvocation(
                f"invalid character {rest[0]!r} in shortcode name",
                name=name, offset=origin + inner_start + lead + m.end(),
            )

        raw_args = rest.rstrip()
        kind = "open"
        if raw_args.endswith("/"):
            raw_args = raw_args[:-1]
            kind = "self"

        arguments = None
        if parse_args:
            arguments = parse_arguments(
                raw_args, name=name, offset=origin + inner_start + lead + m.end(),
            )
        return _Tag(kind, name, idx, end, arguments)

    def _find_close(self, content: str, pos: int) -> int:
        """Index of the closing delimiter, ignoring any inside quoted values."""
        close = self.close_delimiter
        quote = None
        length = len(content)
        while pos < length:
            ch = content[pos]
            if quote:
                if ch == quote:
                    quote = None
            elif ch == '"' or ch == "'":
                quote = ch
            elif content.startswith(close, pos):
                return pos
            pos += 1
        return -1
