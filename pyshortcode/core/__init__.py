"""
Core settings for the shortcode engine.
"""

from .config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
