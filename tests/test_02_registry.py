"""
Registry Test Suite
===================
  - register / resolve, class-based and function handlers
  - DuplicateName policy and explicit overwrite
  - bulk load
  - freezing (no registration once an engine has been built)
"""

from __future__ import annotations

import pytest

from pyshortcode.services.shortcodes import (
    BaseShortcode,
    DuplicateName,
    FunctionHandler,
    RegistryFrozen,
    ShortcodeEngine,
    ShortcodeHandler,
    ShortcodeRegistry,
)


class Hello(BaseShortcode):
    name = "hello"

    async def execute(self, args, body, ctx):
        return "hi"


class TestShortcodeRegistry:
    def setup_method(self):
        self.reg = ShortcodeRegistry()

    def test_register_and_resolve_class_handler(self):
        handler = Hello()
        self.reg.register("hello", handler)
        assert self.reg.resolve("hello") is handler
        assert "hello" in self.reg
        assert len(self.reg) == 1

    def test_plain_callable_is_wrapped(self):
        def year(args, body, ctx):
            return "2026"

        stored = self.reg.register("year", year)
        assert isinstance(stored, FunctionHandler)
        assert isinstance(stored, ShortcodeHandler)
        assert stored.fn is year

    def test_decorator(self):
        @self.reg.shortcode("br")
        def br(args, body, ctx):
            return "<br />"

        assert isinstance(self.reg.resolve("br"), FunctionHandler)
        assert br(None, None, None) == "<br />"

    def test_resolve_unknown_returns_none(self):
        assert self.reg.resolve("missing") is None

    def test_names_are_case_sensitive(self):
        self.reg.register("Info", Hello())
        assert self.reg.resolve("info") is None
        assert self.reg.resolve("Info") is not None

    def test_duplicate_name_rejected(self):
        self.reg.register("hello", Hello())
        with pytest.raises(DuplicateName) as exc:
            self.reg.register("hello", Hello())
        assert exc.value.name == "hello"

    def test_explicit_overwrite(self):
        first, second = Hello(), Hello()
        self.reg.register("hello", first)
        self.reg.register("hello", second, overwrite=True)
        assert self.reg.resolve("hello") is second

    def test_invalid_name(self):
        for bad in ("", "has space", "dot.name", "-x", "x!"):
            with pytest.raises(ValueError):
                self.reg.register(bad, Hello())

    def test_non_callable_handler(self):
        with pytest.raises(TypeError):
            self.reg.register("bad", 42)

    def test_bulk_load(self):
        self.reg.load({"a": Hello(), "b": lambda args, body, ctx: "b"})
        assert self.reg.names() == ["a", "b"]

    def test_bulk_load_duplicate_fails_by_default(self):
        self.reg.register("a", Hello())
        with pytest.raises(DuplicateName):
            self.reg.load([("a", Hello())])

    def test_bulk_load_overwrite(self):
        self.reg.register("a", Hello())
        replacement = Hello()
        self.reg.load([("a", replacement)], overwrite=True)
        assert self.reg.resolve("a") is replacement

    def test_freeze_blocks_registration(self):
        self.reg.register("a", Hello())
        self.reg.freeze()
        assert self.reg.frozen
        with pytest.raises(RegistryFrozen):
            self.reg.register("b", Hello())
        assert self.reg.resolve("a") is not None

    def test_engine_freezes_registry(self, settings):
        ShortcodeEngine(self.reg, settings)
        with pytest.raises(RegistryFrozen):
            self.reg.register("late", Hello())

    def test_names_sorted(self):
        for name in ("zeta", "alpha", "mid"):
            self.reg.register(name, Hello())
        assert self.reg.names() == ["alpha", "mid", "zeta"]
