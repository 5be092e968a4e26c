"""Query nodes: scoring queries, optionally narrowed by an attached filter.

Examples of the shapes produced::

    {"match_all": {}}
    {"term": {"user": "kimchy"}}
    {"filtered": {"query": {"query_string": {...}}, "filter": {"range": {...}}}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config.runtime import DslSettings
from .clauses import QueryString
from .errors import PreconditionError
from .filter_group import FilterGroup
from .filters import FilterNode
from .shapes import ShapedNode, require_field


@dataclass
class MatchAllQuery:
    wire_key: ClassVar[str] = "match_all"


@dataclass
class TermQuery:
    """One value per field; a later term on the same field wins."""

    wire_key: ClassVar[str] = "term"

    values: dict[str, Any] = field(default_factory=dict)


@dataclass
class TermsQuery:
    wire_key: ClassVar[str] = "terms"

    values: dict[str, list[Any]] = field(default_factory=dict)


@dataclass
class PrefixQuery:
    wire_key: ClassVar[str] = "prefix"

    values: dict[str, str] = field(default_factory=dict)


@dataclass
class QueryStringQuery:
    wire_key: ClassVar[str] = "query_string"

    qs: QueryString


@dataclass
class BoolQuery:
    wire_key: ClassVar[str] = "bool"

    must: list[QueryNode] = field(default_factory=list)
    should: list[QueryNode] = field(default_factory=list)


@dataclass
class ConstantScoreQuery:
    wire_key: ClassVar[str] = "constant_score"

    filter: FilterNode | None = None
    boost: float = 0.0


@dataclass
class FunctionScoreQuery:
    """Stored as given; the inner query is not checked against the outer one."""

    wire_key: ClassVar[str] = "function_score"

    score_mode: str
    query: QueryNode | None = None
    functions: list[Any] = field(default_factory=list)


QueryShape = Union[
    MatchAllQuery,
    TermQuery,
    TermsQuery,
    PrefixQuery,
    QueryStringQuery,
    BoolQuery,
    ConstantScoreQuery,
    FunctionScoreQuery,
]

# Shapes that make a node a query a filter can be paired with.
SCORING_SHAPES: tuple[type, ...] = (
    BoolQuery,
    QueryStringQuery,
    TermQuery,
    TermsQuery,
    PrefixQuery,
    MatchAllQuery,
)


class WeightScore(BaseModel):
    """A function-score function that adds ``weight`` to docs matching ``filter``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    weight: int = Field(..., description="Score added when the filter matches")
    filter: FilterNode | None = Field(default=None, description="Documents the weight applies to")


class QueryNode(ShapedNode):
    """Builder for a query, with an optional attached filter."""

    kind = "query"

    shape: QueryShape | None

    def __init__(self, settings: DslSettings | None = None) -> None:
        super().__init__(settings)
        self.filter_node: FilterNode | None = None
        self.filter_group: FilterGroup | None = None

    @property
    def has_query(self) -> bool:
        """True when the node has a shape a filter can be paired with."""
        return isinstance(self.shape, SCORING_SHAPES)

    @property
    def attached_filter(self) -> FilterNode | FilterGroup | None:
        """The filter that will be rendered; a FilterNode beats a FilterGroup."""
        if self.filter_node is not None:
            return self.filter_node
        return self.filter_group

    def match_all(self) -> QueryNode:
        self._set_shape(MatchAllQuery())
        return self

    def term(self, field: str, value: Any) -> QueryNode:
        require_field(field)
        shape = self._current(TermQuery) or self._set_shape(TermQuery())
        shape.values[field] = value
        return self

    def terms(self, field: str, *values: Any) -> QueryNode:
        require_field(field)
        if not values:
            raise PreconditionError(f"terms({field!r}) needs at least one value")
        shape = self._current(TermsQuery) or self._set_shape(TermsQuery())
        shape.values.setdefault(field, []).extend(values)
        return self

    def prefix(self, field: str, value: str) -> QueryNode:
        require_field(field)
        shape = self._current(PrefixQuery) or self._set_shape(PrefixQuery())
        shape.values[field] = value
        return self

    # ------------------------------------------------------------------
    # Free text
    # ------------------------------------------------------------------

    def search(self, text: str) -> QueryNode:
        """Raw Lucene query text over the default field."""
        self._set_shape(QueryStringQuery(QueryString(query=text)))
        return self

    def query_string(self, qs: QueryString) -> QueryNode:
        self._set_shape(QueryStringQuery(qs))
        return self

    def fields(self, fields: str, search: str, exists: str = "", missing: str = "") -> QueryNode:
        """Query text scoped to fields.

            fields("fieldname", "search_for")
            fields("fieldname,field2,field3", "search_for")
            fields("fieldname,field2", "search_for", "field_exists", "")

        One name sets the default field; several set an explicit field list.
        """
        names = [name.strip() for name in fields.split(",")]
        qs = QueryString(query=search, exists=exists, missing=missing)
        if len(names) == 1:
            qs.default_field = names[0]
        else:
            qs.fields = names
        self._set_shape(QueryStringQuery(qs))
        return self

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def bool(
        self,
        must: list[QueryNode] | None = None,
        should: list[QueryNode] | None = None,
    ) -> QueryNode:
        self._set_shape(BoolQuery(must=list(must or []), should=list(should or [])))
        return self

    def constant_score(self, filter: FilterNode | None, boost: float = 0.0) -> QueryNode:
        self._set_shape(ConstantScoreQuery(filter=filter, boost=boost))
        return self

    def function_score(self, mode: str, query: QueryNode | None, *functions: Any) -> QueryNode:
        """Score ``query`` with ``functions`` combined by ``mode`` (e.g. "sum")."""
        self._set_shape(
            FunctionScoreQuery(score_mode=mode, query=query, functions=list(functions))
        )
        return self

    # ------------------------------------------------------------------
    # Attached filters
    # ------------------------------------------------------------------

    def filter(self, f: FilterNode) -> QueryNode:
        self.filter_node = f
        return self

    def filters(self, *items: Any) -> QueryNode:
        """Add items to the attached compound filter (see FilterGroup.add)."""
        if self.filter_group is None:
            self.filter_group = FilterGroup()
        self.filter_group.add(*items)
        return self

    def range(self, f: FilterNode) -> QueryNode:
        """Limit the query by ``f``, merging into an already attached filter."""
        if self.filter_node is None:
            self.filter_node = f
        else:
            self.filter_node.add(f)
        return self
