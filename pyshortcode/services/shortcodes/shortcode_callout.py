"""
Callout shortcodes
------------------
<%info%>Something worth knowing.<%/info%>
<%info title="Note"%>Body with <%raw%>nested<%/raw%> shortcodes.<%/info%>
<%tick text="All tests pass" /%>

Both render a ``<blockquote class="info-block">`` with an icon to the left
of the content.  The body is emitted as a rescan fragment, so shortcodes
nested inside it are expanded.
"""

from __future__ import annotations

import html
from typing import Optional

from .models import Arguments, Fragment
from .registry import BaseShortcode, ShortcodeRegistry

_INFO_ICON = """\
<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler icon-tabler-info-circle" width="44" height="44" viewBox="0 0 24 24" stroke-width="1.5" stroke="#00abfb" fill="none" stroke-linecap="round" stroke-linejoin="round">
    <path stroke="none" d="M0 0h24v24H0z" fill="none" />
    <circle cx="12" cy="12" r="9" />
    <line x1="12" y1="8" x2="12.01" y2="8" />
    <polyline points="11 12 12 12 12 16 13 16" />
</svg>"""

_TICK_ICON = """\
<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler icon-tabler-circle-check" width="44" height="44" viewBox="0 0 24 24" stroke-width="2" stroke="#7bc62d" fill="none" stroke-linecap="round" stroke-linejoin="round">
    <path stroke="none" d="M0 0h24v24H0z" fill="none" />
    <circle cx="12" cy="12" r="9" />
    <path d="M9 12l2 2l4 -4" />
</svg>"""

_ICON_STYLE = "width: 5%; float: left; vertical-align: middle; padding-right: 60px;"


def callout(css_class: str, icon: str, content: str, title: Optional[str] = None) -> list[Fragment]:
    """Fragments for a callout block; *content* is marked for rescan."""
    header = ""
    if title:
        header = f'<div class="callout-title">{html.escape(title)}</div>\n'
    opening = (
        f'<blockquote class="{css_class}">\n'
        f"<div>\n"
        f'<div style="{_ICON_STYLE}">\n{icon}\n</div>\n'
        f"<div>\n{header}<p>"
    )
    closing = "</p>\n</div>\n</div>\n</blockquote>"
    return [Fragment(opening), Fragment(content, rescan=True), Fragment(closing)]


class InfoBlock(BaseShortcode):
    name = "info"
    css_class = "info-block"
    icon = _INFO_ICON

    async def execute(self, args: Arguments, body: Optional[str], ctx) -> list[Fragment]:
        content = body if body is not None else args.get("text", "")
        return callout(self.css_class, self.icon, content, args.get("title"))


class TickBlock(InfoBlock):
    name = "tick"
    icon = _TICK_ICON


def register(registry: ShortcodeRegistry) -> None:
    registry.register(InfoBlock.name, InfoBlock())
    registry.register(TickBlock.name, TickBlock())
