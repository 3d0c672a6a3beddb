"""
Configuration Tests
===================
  - defaults and environment overrides
  - delimiter validation
  - engines built with custom delimiters
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyshortcode.core.config import Settings, get_settings
from pyshortcode.services.shortcodes import Fragment, ShortcodeEngine


class TestSettings:
    def test_defaults(self, settings):
        assert settings.open_delimiter == "<%"
        assert settings.close_delimiter == "%>"
        assert settings.max_depth == 20
        assert settings.max_concurrency == 16
        assert settings.handler_timeout is None
        assert settings.on_error == "abort"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SHORTCODE_MAX_DEPTH", "5")
        monkeypatch.setenv("SHORTCODE_ON_ERROR", "skip")
        monkeypatch.setenv("SHORTCODE_OPEN_DELIMITER", "{{<")
        monkeypatch.setenv("SHORTCODE_CLOSE_DELIMITER", ">}}")
        settings = Settings(_env_file=None)
        assert settings.max_depth == 5
        assert settings.on_error == "skip"
        assert settings.open_delimiter == "{{<"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("overrides", [
        {"open_delimiter": ""},
        {"close_delimiter": ""},
        {"open_delimiter": "<% "},
        {"open_delimiter": '<"'},
        {"close_delimiter": "/>"},
        {"open_delimiter": "%%", "close_delimiter": "%%"},
        {"on_error": "retry"},
        {"max_depth": 0},
        {"max_concurrency": -1},
        {"handler_timeout": 0},
    ])
    def test_invalid_values(self, make_settings, overrides):
        with pytest.raises(ValidationError):
            make_settings(**overrides)


class TestCustomDelimiters:
    async def test_engine_uses_configured_delimiters(self, registry, make_settings):
        @registry.shortcode("note")
        def note(args, body, ctx):
            return [Fragment("<aside>"), Fragment(body, rescan=True), Fragment("</aside>")]

        @registry.shortcode("v")
        def v(args, body, ctx):
            return args.get("x")

        engine = ShortcodeEngine(registry, make_settings(open_delimiter="{{<", close_delimiter=">}}"))
        content = '{{< note >}}x={{< v x="1" />}} <%v x="2" /%>{{</ note >}}'
        assert await engine.expand(content) == '<aside>x=1 <%v x="2" /%></aside>'
