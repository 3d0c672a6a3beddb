"""
DAILY-DROP shortcode
--------------------
<%daily-drop%>#42: Collection expressions<%/daily-drop%>

Header callout for a "Daily Drop" post.  The body becomes part of the
heading ("Daily Drop #42: ...") and is rescanned; the blurb under it is
fixed, or replaced with ``blurb="..."``.
"""

from __future__ import annotations

import html

from .models import Fragment
from .registry import ShortcodeRegistry

_BULB_ICON = """\
<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler icon-tabler-bulb" width="50" height="50" viewBox="0 0 24 24" stroke-width="1.5" stroke="#ffec00" fill="none" stroke-linecap="round" stroke-linejoin="round">
    <path stroke="none" d="M0 0h24v24H0z" fill="none"/>
    <path d="M3 12h1m8 -9v1m8 8h1m-15.4 -6.4l.7 .7m12.1 -.7l-.7 .7" />
    <path d="M9 16a5 5 0 1 1 6 0a3.5 3.5 0 0 0 -1 3a2 2 0 0 1 -4 0a3.5 3.5 0 0 0 -1 -3" />
    <line x1="9.7" y1="17" x2="14.3" y2="17" />
</svg>"""

DEFAULT_BLURB = (
    "The Daily Drop is a record of these pieces of knowledge - writing about and "
    "summarizing them helps re-enforce the information for myself, as well as "
    "potentially helps others learn something new as well."
)


def register(registry: ShortcodeRegistry) -> None:

    @registry.shortcode("daily-drop")
    def daily_drop(args, body, ctx) -> list[Fragment]:
        blurb = args.get("blurb") or DEFAULT_BLURB
        return [
            Fragment(
                '<blockquote class="daily-drop">\n<div>\n'
                '<div style="width: 5%; float: left; vertical-align: middle; padding-right: 60px;">\n'
                f"{_BULB_ICON}\n</div>\n"
                '<div class="drop-header">\nDaily Drop '
            ),
            Fragment(body or "", rescan=True),
            Fragment(
                f"\n</div>\n<div>\n{html.escape(blurb)}\n</div>\n</div>\n</blockquote>"
            ),
        ]
