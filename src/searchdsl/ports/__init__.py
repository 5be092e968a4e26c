"""Ports (interfaces) for external collaborators."""

from .transport import SearchTransport

__all__ = ["SearchTransport"]
