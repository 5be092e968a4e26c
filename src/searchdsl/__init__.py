"""searchdsl: build search queries and filters and render them to the query DSL."""

from .domain import (
    BoolClause,
    FilterGroup,
    FilterNode,
    QueryNode,
    QueryString,
    SortSpec,
    WeightScore,
    compound_filter,
    range_filter,
    serialize,
    sort_by,
    to_json,
)
from .models import SearchRequest

__version__ = "0.1.0"
__all__ = [
    "BoolClause",
    "FilterGroup",
    "FilterNode",
    "QueryNode",
    "QueryString",
    "SearchRequest",
    "SortSpec",
    "WeightScore",
    "compound_filter",
    "range_filter",
    "serialize",
    "sort_by",
    "to_json",
]
