"""Domain layer: filter/query nodes, clause records and the serializer."""

from .clauses import GeoDistanceRange, InnerHits, QueryString, RangeBounds
from .errors import (
    FilterOnlyQueryError,
    PreconditionError,
    SerializationError,
    ShapeConflictError,
)
from .filter_group import BoolClause, FilterGroup, compound_filter
from .filters import FilterNode, range_filter
from .query import QueryNode, WeightScore
from .serializer import serialize, to_json
from .sort import SortSpec, sort_by

__all__ = [
    "BoolClause",
    "FilterGroup",
    "FilterNode",
    "FilterOnlyQueryError",
    "GeoDistanceRange",
    "InnerHits",
    "PreconditionError",
    "QueryNode",
    "QueryString",
    "RangeBounds",
    "SerializationError",
    "ShapeConflictError",
    "SortSpec",
    "WeightScore",
    "compound_filter",
    "range_filter",
    "serialize",
    "sort_by",
    "to_json",
]
