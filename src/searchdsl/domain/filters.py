"""Filter nodes: non-scoring conditions rendered into the filter DSL.

A ``FilterNode`` holds exactly one shape::

    FilterNode().term("user", "kimchy")
    FilterNode().terms("user", "kimchy", "elasticsearch")
    FilterNode().exists("repository.name")
    range_filter().from_("@timestamp", "2012-12-29T16:52:48+00:00")

Range bounds name their field explicitly; there is no selected-field state.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Union

from ..observability import get_logger
from .clauses import GeoDistanceRange, InnerHits, RangeBounds
from .errors import PreconditionError
from .shapes import ShapedNode, require_field

if TYPE_CHECKING:
    from .query import QueryNode

_LOGGER = get_logger("filters")


@dataclass
class TermFilter:
    wire_key: ClassVar[str] = "term"

    field: str
    value: Any


@dataclass
class TermsFilter:
    """Values per field; repeated calls append."""

    wire_key: ClassVar[str] = "terms"

    values: dict[str, list[Any]] = field(default_factory=dict)


@dataclass
class RangeFilter:
    wire_key: ClassVar[str] = "range"

    fields: dict[str, RangeBounds] = field(default_factory=dict)


@dataclass
class ExistsFilter:
    wire_key: ClassVar[str] = "exists"

    field: str


@dataclass
class MissingFilter:
    wire_key: ClassVar[str] = "missing"

    field: str


@dataclass
class PrefixFilter:
    wire_key: ClassVar[str] = "prefix"

    field: str
    value: str


@dataclass
class RegexpFilter:
    wire_key: ClassVar[str] = "regexp"

    field: str
    pattern: str


@dataclass
class GeoDistanceFilter:
    wire_key: ClassVar[str] = "geo_distance_range"

    geo: GeoDistanceRange


@dataclass
class BoolFilter:
    wire_key: ClassVar[str] = "bool"

    must: list[FilterNode] = field(default_factory=list)
    should: list[FilterNode] = field(default_factory=list)


@dataclass
class NestedFilter:
    """Filter applied inside the nested documents under ``path``."""

    wire_key: ClassVar[str] = "nested"

    path: str
    filter: FilterNode
    inner_hits: InnerHits | None = None


@dataclass
class QueryFilter:
    wire_key: ClassVar[str] = "query"

    query: QueryNode


FilterShape = Union[
    TermFilter,
    TermsFilter,
    RangeFilter,
    ExistsFilter,
    MissingFilter,
    PrefixFilter,
    RegexpFilter,
    GeoDistanceFilter,
    BoolFilter,
    NestedFilter,
    QueryFilter,
]

# Shapes that FilterNode.add() carries over from the other node.
MERGEABLE_SHAPES: tuple[type, ...] = (ExistsFilter, MissingFilter, RangeFilter)


class FilterNode(ShapedNode):
    """Builder for a single filter clause."""

    kind = "filter"

    shape: FilterShape | None

    def term(self, field: str, value: Any) -> FilterNode:
        self._set_shape(TermFilter(require_field(field), value))
        return self

    def terms(self, field: str, *values: Any) -> FilterNode:
        """Match any of ``values``; values accumulate per field across calls."""
        require_field(field)
        if not values:
            raise PreconditionError(f"terms({field!r}) needs at least one value")
        shape = self._current(TermsFilter) or self._set_shape(TermsFilter())
        shape.values.setdefault(field, []).extend(values)
        return self

    # ------------------------------------------------------------------
    # Range bounds
    # ------------------------------------------------------------------

    def range(
        self,
        field: str,
        *,
        from_: Any = None,
        to: Any = None,
        gt: Any = None,
        gte: Any = None,
        lt: Any = None,
        lte: Any = None,
    ) -> FilterNode:
        """Set several bounds on ``field`` at once; ``None`` bounds are skipped."""
        bounds = {"from": from_, "to": to, "gt": gt, "gte": gte, "lt": lt, "lte": lte}
        target = self._range_bounds(field)
        for key, value in bounds.items():
            if value is not None:
                target.set(key, value)
        return self

    def from_(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("from", value)
        return self

    def to(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("to", value)
        return self

    def gt(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("gt", value)
        return self

    def gte(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("gte", value)
        return self

    def lt(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("lt", value)
        return self

    def lte(self, field: str, value: Any) -> FilterNode:
        self._range_bounds(field).set("lte", value)
        return self

    def _range_bounds(self, field: str) -> RangeBounds:
        require_field(field, "range field")
        shape = self._current(RangeFilter) or self._set_shape(RangeFilter())
        return shape.fields.setdefault(field, RangeBounds())

    # ------------------------------------------------------------------
    # Single-field matchers (last call wins)
    # ------------------------------------------------------------------

    def exists(self, field: str) -> FilterNode:
        self._set_shape(ExistsFilter(require_field(field)))
        return self

    def missing(self, field: str) -> FilterNode:
        self._set_shape(MissingFilter(require_field(field)))
        return self

    def prefix(self, field: str, value: str) -> FilterNode:
        self._set_shape(PrefixFilter(require_field(field), value))
        return self

    def regexp(self, field: str, pattern: str) -> FilterNode:
        self._set_shape(RegexpFilter(require_field(field), pattern))
        return self

    def geo_distance_range(
        self,
        from_: str,
        to: str,
        field_name: str,
        distance_type: str,
        lat: float,
        lon: float,
    ) -> FilterNode:
        geo = GeoDistanceRange(
            from_=from_,
            to=to,
            field_name=field_name,
            distance_type=distance_type,
            lat=lat,
            lon=lon,
        )
        self._set_shape(GeoDistanceFilter(geo))
        return self

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def bool(
        self,
        must: list[FilterNode] | None = None,
        should: list[FilterNode] | None = None,
    ) -> FilterNode:
        """Replace the bool shape with the given must/should lists."""
        self._set_shape(BoolFilter(must=list(must or []), should=list(should or [])))
        return self

    def nested(self, path: str, inner: FilterNode, from_: int = 0, size: int = 0) -> FilterNode:
        """Apply ``inner`` to the nested documents at ``path``.

        Inner hits are requested only when ``size`` is positive.
        """
        require_field(path, "nested path")
        inner_hits = InnerHits(from_=from_, size=size) if size > 0 else None
        self._set_shape(NestedFilter(path=path, filter=inner, inner_hits=inner_hits))
        return self

    def query(self, query: QueryNode) -> FilterNode:
        self._set_shape(QueryFilter(query))
        return self

    def add(self, other: FilterNode) -> FilterNode:
        """Take over ``other``'s exists, missing or range shape.

        This is a limited union: the receiver's shape is overwritten when
        ``other`` carries one of those three shapes, and every other shape
        of ``other`` is ignored.
        """
        incoming = other.shape
        if isinstance(incoming, MERGEABLE_SHAPES):
            self.shape = copy.deepcopy(incoming)
        elif incoming is not None:
            _LOGGER.debug("add_ignored", extra={"kind": self.kind, "shape": incoming.wire_key})
        return self


def range_filter() -> FilterNode:
    """Start a filter meant to carry range bounds.

    range_filter().from_("@timestamp", start).to("@timestamp", end)
    """
    return FilterNode()
