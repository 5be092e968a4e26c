"""Search request DTO: query, sort and paging for one index."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config.runtime import DslSettings, get_settings
from ..domain.query import QueryNode
from ..domain.serializer import serialize
from ..domain.sort import SortSpec


class SearchRequest(BaseModel):
    """Input DTO for SearchService.search."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    index: str = Field(default="", description="Index to search; empty means the configured default")
    query: QueryNode | None = Field(default=None, description="Query tree to run")
    sort: list[SortSpec] = Field(default_factory=list, description="Sort keys, most significant first")
    from_: int = Field(default=0, alias="from", ge=0, description="Offset of the first hit")
    size: int | None = Field(default=None, ge=0, description="Number of hits to return")
    fields: list[str] = Field(default_factory=list, description="Stored fields to return")

    def resolved_index(self, settings: DslSettings | None = None) -> str:
        settings = settings or get_settings()
        return self.index.strip() or settings.default_index

    def to_body(self, settings: DslSettings | None = None) -> dict[str, Any]:
        """Render the request body; unset parts are omitted."""
        settings = settings or get_settings()
        body: dict[str, Any] = {}
        if self.from_:
            body["from"] = self.from_
        if self.size is not None:
            body["size"] = min(self.size, settings.max_size)
        if self.fields:
            body["fields"] = list(self.fields)
        if self.query is not None:
            body["query"] = serialize(self.query, settings)
        if self.sort:
            body["sort"] = [serialize(spec, settings) for spec in self.sort]
        return body
