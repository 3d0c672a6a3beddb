"""
pyshortcode: shortcode expansion engine for static documents.
"""

from .core.config import Settings, get_settings
from .services.shortcodes import (
    ShortcodeEngine,
    ShortcodeRegistry,
    BaseShortcode,
    Fragment,
    create_default_registry,
    ShortcodeError,
)
from .services.build import BuildPipeline, BuildReport, Document

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "ShortcodeEngine",
    "ShortcodeRegistry",
    "BaseShortcode",
    "Fragment",
    "create_default_registry",
    "ShortcodeError",
    "BuildPipeline",
    "BuildReport",
    "Document",
]
