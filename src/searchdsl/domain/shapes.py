"""Single-shape bookkeeping shared by filter and query nodes."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from ..config.runtime import DslSettings, get_settings
from ..observability import get_logger
from .errors import PreconditionError, ShapeConflictError

_LOGGER = get_logger("shapes")

S = TypeVar("S")


def require_field(name: str, what: str = "field") -> str:
    """Reject blank field names before they reach the wire."""
    if not isinstance(name, str) or not name.strip():
        raise PreconditionError(f"{what} must be a non-empty string, got {name!r}")
    return name


class ShapedNode:
    """A node that carries at most one wire shape at a time.

    Subclasses define the shape classes; each has a ``wire_key`` naming the
    JSON object it renders into. Not safe to build from several threads.
    """

    kind: ClassVar[str] = "node"

    def __init__(self, settings: DslSettings | None = None) -> None:
        self.shape: Any = None
        self._settings = settings

    @property
    def settings(self) -> DslSettings:
        return self._settings or get_settings()

    @property
    def is_empty(self) -> bool:
        return self.shape is None

    def _current(self, shape_type: type[S]) -> S | None:
        if isinstance(self.shape, shape_type):
            return self.shape
        return None

    def _set_shape(self, shape: S) -> S:
        current = self.shape
        if current is not None and type(current) is not type(shape):
            if self.settings.strict_shapes:
                raise ShapeConflictError(self.kind, current.wire_key, shape.wire_key)
            _LOGGER.debug(
                "shape_replaced",
                extra={"kind": self.kind, "previous": current.wire_key, "shape": shape.wire_key},
            )
        self.shape = shape
        return shape

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.shape!r})"
