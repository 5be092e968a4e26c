"""Render query trees into the wire JSON of the search DSL.

Each node carries one shape object, so rendering is a fold over the tree:
the shape's type picks the wire object, children are rendered recursively,
and unset optional parts are left out.

The one decision that depends on more than a single shape is the filtered
query: a ``QueryNode`` with both a scoring shape and an attached filter is
wrapped as ``{"filtered": {"query": ..., "filter": ...}}``. A filter attached
to a node without a scoring shape is dropped (the legacy output) or rejected,
depending on ``DslSettings.filter_only_query``.
"""

from __future__ import annotations

import json
import math
import time
from datetime import date, datetime, time as dt_time
from enum import Enum
from typing import Any

from pydantic import BaseModel

from ..config.runtime import DslSettings, get_settings
from ..observability import get_logger, log_serialization
from .clauses import GeoDistanceRange, InnerHits, QueryString, RangeBounds
from .errors import FilterOnlyQueryError, SerializationError
from .filter_group import FilterGroup
from .filters import (
    BoolFilter,
    ExistsFilter,
    FilterNode,
    GeoDistanceFilter,
    MissingFilter,
    NestedFilter,
    PrefixFilter,
    QueryFilter,
    RangeFilter,
    RegexpFilter,
    TermFilter,
    TermsFilter,
)
from .query import (
    BoolQuery,
    ConstantScoreQuery,
    FunctionScoreQuery,
    MatchAllQuery,
    PrefixQuery,
    QueryNode,
    QueryStringQuery,
    TermQuery,
    TermsQuery,
    WeightScore,
)
from .sort import SortSpec

_LOGGER = get_logger("serializer")


def serialize(value: Any, settings: DslSettings | None = None) -> Any:
    """Return the JSON-ready rendering of ``value`` (a node, group, sort or plain data)."""
    settings = settings or get_settings()
    kind = getattr(value, "kind", type(value).__name__)
    started = time.perf_counter()
    try:
        result = _render(value, settings)
    except (SerializationError, FilterOnlyQueryError) as exc:
        log_serialization(kind, (time.perf_counter() - started) * 1000, error=str(exc))
        raise
    log_serialization(kind, (time.perf_counter() - started) * 1000)
    return result


def to_json(value: Any, *, indent: int | None = None, settings: DslSettings | None = None) -> str:
    """Serialize to JSON text; compact unless ``indent`` is given."""
    rendered = serialize(value, settings)
    separators = (",", ":") if indent is None else None
    return json.dumps(rendered, indent=indent, separators=separators, ensure_ascii=False)


# ----------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------


def _render(value: Any, settings: DslSettings) -> Any:
    if isinstance(value, FilterNode):
        return _render_filter(value, settings)
    if isinstance(value, QueryNode):
        return _render_query(value, settings)
    if isinstance(value, FilterGroup):
        return _render_group(value, settings)
    if isinstance(value, SortSpec):
        return value.to_wire()
    if isinstance(value, WeightScore):
        rendered: dict[str, Any] = {"weight": value.weight}
        if value.filter is not None:
            rendered["filter"] = _render_filter(value.filter, settings)
        return rendered
    if isinstance(value, (RangeBounds, GeoDistanceRange, InnerHits, QueryString)):
        return _render(value.to_wire(), settings)
    if isinstance(value, BaseModel):
        return _render(value.model_dump(by_alias=True, exclude_none=True), settings)
    if isinstance(value, Enum):
        return _render(value.value, settings)
    if isinstance(value, dict):
        rendered = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(f"Object keys must be strings, got {key!r}")
            rendered[key] = _render(item, settings)
        return rendered
    if isinstance(value, (list, tuple)):
        return [_render(item, settings) for item in value]
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot represent {value!r} in JSON")
        return value
    if value is None or isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, (datetime, date, dt_time)):
        return value.isoformat()
    raise SerializationError(f"Cannot serialize value of type {type(value).__name__}")


def _render_group(group: FilterGroup, settings: DslSettings) -> Any:
    if not group.items:
        return None
    if len(group.items) == 1:
        return _render(group.items[0], settings)
    return {group.operator.value: [_render(item, settings) for item in group.items]}


def _sparse(**parts: Any) -> dict[str, Any]:
    """Keep only parts that are set (not None, not empty)."""
    return {key: value for key, value in parts.items() if value not in (None, [], {})}


# ----------------------------------------------------------------------
# Filters
# ----------------------------------------------------------------------


def _render_filter(node: FilterNode, settings: DslSettings) -> dict[str, Any]:
    shape = node.shape
    if shape is None:
        return {}
    if isinstance(shape, TermFilter):
        body: Any = {shape.field: _render(shape.value, settings)}
    elif isinstance(shape, TermsFilter):
        body = _render(shape.values, settings)
    elif isinstance(shape, RangeFilter):
        body = {name: _render(bounds, settings) for name, bounds in shape.fields.items()}
    elif isinstance(shape, (ExistsFilter, MissingFilter)):
        body = {"field": shape.field}
    elif isinstance(shape, PrefixFilter):
        body = {shape.field: shape.value}
    elif isinstance(shape, RegexpFilter):
        body = {shape.field: shape.pattern}
    elif isinstance(shape, GeoDistanceFilter):
        body = _render(shape.geo, settings)
    elif isinstance(shape, BoolFilter):
        body = _sparse(
            must=[_render_filter(f, settings) for f in shape.must],
            should=[_render_filter(f, settings) for f in shape.should],
        )
    elif isinstance(shape, NestedFilter):
        body = {"filter": _render_filter(shape.filter, settings), "path": shape.path}
        if shape.inner_hits is not None:
            body["inner_hits"] = shape.inner_hits.to_wire()
    elif isinstance(shape, QueryFilter):
        body = _render_query(shape.query, settings)
    else:
        raise SerializationError(f"Unknown filter shape {type(shape).__name__}")
    return {shape.wire_key: body}


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------


def _render_query(node: QueryNode, settings: DslSettings) -> dict[str, Any]:
    query = _render_query_shape(node, settings)
    attached = node.attached_filter
    if attached is None:
        return query
    if node.has_query:
        return {"filtered": {"query": query, "filter": _render(attached, settings)}}

    if settings.filter_only_query == "error":
        raise FilterOnlyQueryError(
            "A filter is attached to a query with no query shape; "
            "add match_all() or a term/bool/query-string clause"
        )
    _LOGGER.warning(
        "filter_dropped",
        extra={"kind": node.kind, "shape": node.shape.wire_key if node.shape else None},
    )
    return query


def _render_query_shape(node: QueryNode, settings: DslSettings) -> dict[str, Any]:
    shape = node.shape
    if shape is None:
        return {}
    if isinstance(shape, MatchAllQuery):
        body: Any = {}
    elif isinstance(shape, (TermQuery, TermsQuery, PrefixQuery)):
        body = _render(shape.values, settings)
    elif isinstance(shape, QueryStringQuery):
        body = shape.qs.to_wire()
    elif isinstance(shape, BoolQuery):
        body = _sparse(
            must=[_render_query(q, settings) for q in shape.must],
            should=[_render_query(q, settings) for q in shape.should],
        )
    elif isinstance(shape, ConstantScoreQuery):
        body = {}
        if shape.filter is not None:
            body["filter"] = _render_filter(shape.filter, settings)
        if shape.boost:
            body["boost"] = shape.boost
    elif isinstance(shape, FunctionScoreQuery):
        body = {
            "functions": [_render(f, settings) for f in shape.functions],
            "score_mode": shape.score_mode,
            "query": _render_query(shape.query, settings) if shape.query is not None else None,
        }
    else:
        raise SerializationError(f"Unknown query shape {type(shape).__name__}")
    return {shape.wire_key: body}
