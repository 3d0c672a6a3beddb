"""
RAW shortcode
-------------
<%raw%>Write <%info text="x" /%> to get an info box.<%/raw%>

Emits its body verbatim and never rescans it, so shortcode syntax can be
shown literally.  Tags inside the body must still be balanced.
"""

from __future__ import annotations

from .models import Fragment
from .registry import ShortcodeRegistry


def register(registry: ShortcodeRegistry) -> None:

    @registry.shortcode("raw")
    def raw_shortcode(args, body, ctx):
        return Fragment(body or "")
