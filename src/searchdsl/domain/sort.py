"""Sort descriptors for search requests.

    SearchRequest(sort=[sort_by("last_name").desc(), sort_by("age")])
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# Values of ``missing`` that are put on the wire; anything else is dropped.
MISSING_SENTINELS: frozenset[str] = frozenset({"_first", "_last"})


class SortSpec(BaseModel):
    """One sort key: field, direction and placement of docs without the field."""

    field: str = Field(..., description="Field to sort on")
    descending: bool = Field(default=False, description="Sort high to low")
    missing: str | None = Field(default=None, description="'_first' or '_last'")

    @field_validator("field")
    @classmethod
    def _non_blank_field(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("sort field cannot be blank")
        return v

    def desc(self) -> SortSpec:
        self.descending = True
        return self

    def asc(self) -> SortSpec:
        self.descending = False
        return self

    def missing_first(self) -> SortSpec:
        self.missing = "_first"
        return self

    def missing_last(self) -> SortSpec:
        self.missing = "_last"
        return self

    def to_wire(self) -> dict[str, dict[str, str]]:
        order = {"order": "desc" if self.descending else "asc"}
        if self.missing in MISSING_SENTINELS:
            order["missing"] = self.missing
        return {self.field: order}


def sort_by(field: str) -> SortSpec:
    """Ascending sort on ``field``; chain ``.desc()`` to reverse."""
    return SortSpec(field=field)
