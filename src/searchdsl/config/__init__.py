"""Runtime configuration."""

from .runtime import DslSettings, get_settings

__all__ = ["DslSettings", "get_settings"]
