"""
Built-in Shortcode Tests
========================
  - info / tick callouts (block and self-closing, nested content, titles)
  - daily-drop header
  - raw passthrough
  - default registry contents
"""

from __future__ import annotations

import pytest

from pyshortcode.services.shortcodes import (
    DuplicateName,
    ShortcodeEngine,
    ShortcodeRegistry,
    create_default_registry,
    register_all_builtins,
)


@pytest.fixture
def engine(settings) -> ShortcodeEngine:
    return ShortcodeEngine(create_default_registry(), settings)


class TestDefaultRegistry:
    def test_builtin_names(self):
        assert create_default_registry().names() == ["daily-drop", "info", "raw", "tick"]

    def test_registries_are_independent(self):
        first, second = create_default_registry(), create_default_registry()
        first.freeze()
        second.register("extra", lambda args, body, ctx: "")
        assert "extra" not in first

    def test_register_all_builtins_twice_fails(self):
        reg = ShortcodeRegistry()
        register_all_builtins(reg)
        with pytest.raises(DuplicateName):
            register_all_builtins(reg)


class TestCallouts:
    async def test_info_block(self, engine):
        result = await engine.expand("before\n<%info%>Remember this.<%/info%>\nafter")
        assert result.startswith("before\n<blockquote class=\"info-block\">")
        assert result.endswith("</blockquote>\nafter")
        assert "<p>Remember this.</p>" in result
        assert "icon-tabler-info-circle" in result

    async def test_tick_block(self, engine):
        result = await engine.expand("<%tick%>Done<%/tick%>")
        assert "icon-tabler-circle-check" in result
        assert "<p>Done</p>" in result

    async def test_self_closing_text(self, engine):
        result = await engine.expand('<%tick text="All green" /%>')
        assert "<p>All green</p>" in result

    async def test_title_is_escaped(self, engine):
        result = await engine.expand('<%info title="A <b> & C"%>x<%/info%>')
        assert "A &lt;b&gt; &amp; C" in result
        assert "<b>" not in result

    async def test_body_is_not_escaped(self, engine):
        result = await engine.expand("<%info%><em>raw html</em><%/info%>")
        assert "<p><em>raw html</em></p>" in result

    async def test_nested_callouts_expand(self, engine):
        result = await engine.expand("<%info%>outer <%tick%>inner<%/tick%><%/info%>")
        assert result.count("<blockquote") == 2
        assert "<p>inner</p>" in result
        assert "<%" not in result


class TestDailyDrop:
    async def test_header_contains_body(self, engine):
        result = await engine.expand("<%daily-drop%>#42: Collection expressions<%/daily-drop%>")
        assert 'class="daily-drop"' in result
        assert "Daily Drop #42: Collection expressions" in result
        assert "The Daily Drop is a record" in result

    async def test_custom_blurb(self, engine):
        result = await engine.expand('<%daily-drop blurb="Short & sweet"%>#1<%/daily-drop%>')
        assert "Short &amp; sweet" in result
        assert "The Daily Drop is a record" not in result


class TestRaw:
    async def test_raw_is_verbatim(self, engine):
        result = await engine.expand('Use <%raw%><%info text="x" /%><%/raw%> for notes.')
        assert result == 'Use <%info text="x" /%> for notes.'

    async def test_raw_inside_callout_is_not_rescanned(self, engine):
        result = await engine.expand("<%info%>Syntax: <%raw%><%tick/%><%/raw%><%/info%>")
        assert "<p>Syntax: <%tick/%></p>" in result
        assert result.count("<blockquote") == 1

    async def test_raw_body_with_unknown_names(self, engine):
        result = await engine.expand("<%raw%><%whatever a=unquoted /%><%/raw%>")
        assert result == "<%whatever a=unquoted /%>"
