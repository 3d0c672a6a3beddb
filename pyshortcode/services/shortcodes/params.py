"""
Argument parser
===============
Parses the argument text of a start marker, i.e. everything between the
shortcode name and the closing delimiter.

Supported forms
---------------
  key="value"     → Argument("key", "value")
  key='value'     → Argument("key", "value")
  flag            → Argument("flag", None)

Values are raw: no escape processing, a value simply cannot contain its own
quote character.  Order and duplicates are preserved.

  <%info title="Heads up" level='2' collapsed /%>
  → [("title", "Heads up"), ("level", "2"), ("collapsed", None)]

Anything else (``key=bare``, a stray quote, ``key=`` with no value) is a
MalformedArgument.
"""

from __future__ import annotations

import re
from typing import Optional

from .errors import MalformedArgument
from .models import Argument, Arguments

_KEY = r'[A-Za-z0-9_][A-Za-z0-9_.:-]*'

_KV_DOUBLE = re.compile(r'(' + _KEY + r')="([^"]*)"')
_KV_SINGLE = re.compile(r"(" + _KEY + r")='([^']*)'")
_KV_OPEN   = re.compile(r'(' + _KEY + r')=')
_FLAG      = re.compile(_KEY)
_SPACE     = re.compile(r'\s+')


def parse_arguments(
    raw: str,
    *,
    name: Optional[str] = None,
    offset: int = 0,
) -> Arguments:
    """
    Parse an argument string into an ordered ``Arguments`` value.

    Parameters
    ----------
    raw : str
        Argument text, e.g. ``title="x" open``.
    name : str, optional
        Owning shortcode, used in error reports.
    offset : int
        Document offset of ``raw[0]``, used in error reports.
    """
    items: list[Argument] = []
    pos = 0
    length = len(raw)

    while pos < length:
        m = _SPACE.match(raw, pos)
        if m:
            pos = m.end()
            continue

        m = _KV_DOUBLE.match(raw, pos) or _KV_SINGLE.match(raw, pos)
        if m:
            items.append(Argument(m.group(1), m.group(2)))
            pos = _expect_separator(raw, m.end(), name, offset)
            continue

        m = _KV_OPEN.match(raw, pos)
        if m:
            key = m.group(1)
            rest = raw[m.end():m.end() + 1]
            if rest in ('"', "'"):
                raise MalformedArgument(
                    f"unterminated quoted value for argument {key!r}",
                    name=name, offset=offset + m.end(),
                )
            raise MalformedArgument(
                f"value of argument {key!r} must be quoted",
                name=name, offset=offset + m.end(),
            )

        m = _FLAG.match(raw, pos)
        if m:
            items.append(Argument(m.group(0), None))
            pos = _expect_separator(raw, m.end(), name, offset)
            continue

        raise MalformedArgument(
            f"unexpected character {raw[pos]!r} in arguments",
            name=name, offset=offset + pos,
        )

    return Arguments(items)


def _expect_separator(raw: str, pos: int, name: Optional[str], offset: int) -> int:
    """Arguments must be separated by whitespace."""
    if pos < len(raw) and not raw[pos].isspace():
        raise MalformedArgument(
            f"expected whitespace after argument, found {raw[pos]!r}",
            name=name, offset=offset + pos,
        )
    return pos
