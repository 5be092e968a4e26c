"""Errors raised while building or serializing query trees."""

from __future__ import annotations


class PreconditionError(ValueError):
    """A builder call was made with arguments it cannot act on."""


class ShapeConflictError(ValueError):
    """A builder call would switch a node to a different shape."""

    def __init__(self, node: str, current: str, requested: str) -> None:
        self.node = node
        self.current = current
        self.requested = requested
        super().__init__(
            f"{node} already has shape '{current}'; cannot switch to '{requested}'"
        )


class FilterOnlyQueryError(ValueError):
    """A query carries a filter but no query shape to filter."""


class SerializationError(TypeError):
    """A value in the tree has no JSON representation."""
