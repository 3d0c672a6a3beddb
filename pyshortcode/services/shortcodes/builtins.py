"""
Built-in shortcode registrations.
Call register_all_builtins() once at startup, before the engine is built.
"""

from .registry import ShortcodeRegistry
from . import (
    shortcode_callout,
    shortcode_daily_drop,
    shortcode_raw,
)


def register_all_builtins(registry: ShortcodeRegistry) -> None:
    """Register every built-in shortcode with *registry*."""
    shortcode_callout.register(registry)
    shortcode_daily_drop.register(registry)
    shortcode_raw.register(registry)


def create_default_registry() -> ShortcodeRegistry:
    """A fresh registry holding the built-in shortcodes."""
    registry = ShortcodeRegistry()
    register_all_builtins(registry)
    return registry
