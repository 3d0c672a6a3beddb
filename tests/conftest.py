#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
Every test builds its own registry and engine so nothing leaks between
tests; the engine freezes the registry it is given.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from typing import Callable

import pytest

# ── Keep developer .env / environment out of the test settings ────────────────
for _key in [k for k in os.environ if k.startswith("SHORTCODE_")]:
    del os.environ[_key]

from pyshortcode.core.config import Settings
from pyshortcode.services.shortcodes import ShortcodeEngine, ShortcodeRegistry


# -----------------------------------------------------------------------------

def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


@pytest.fixture
def settings() -> Settings:
    return _settings()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    return _settings


@pytest.fixture
def registry() -> ShortcodeRegistry:
    return ShortcodeRegistry()


@pytest.fixture
def make_engine(registry: ShortcodeRegistry) -> Callable[..., ShortcodeEngine]:
    """Build an engine over the test's registry, optionally overriding settings."""
    def _make(**overrides) -> ShortcodeEngine:
        return ShortcodeEngine(registry, _settings(**overrides))
    return _make


# -----------------------------------------------------------------------------
