"""Leaf clause records shared by filters and queries.

These hold values only. Which wire shape they end up in is decided by the
node that carries them and by ``domain.serializer``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys a range bound can be stored under, in emitted order.
RANGE_BOUND_KEYS: tuple[str, ...] = ("from", "gt", "gte", "lt", "lte", "to")


class RangeBounds(BaseModel):
    """Bounds for one field of a range filter; unset bounds are omitted."""

    model_config = ConfigDict(populate_by_name=True)

    from_: Any = Field(default=None, alias="from", description="Inclusive lower bound (legacy form)")
    gt: Any = Field(default=None, description="Exclusive lower bound")
    gte: Any = Field(default=None, description="Inclusive lower bound")
    lt: Any = Field(default=None, description="Exclusive upper bound")
    lte: Any = Field(default=None, description="Inclusive upper bound")
    to: Any = Field(default=None, description="Inclusive upper bound (legacy form)")

    def set(self, bound: str, value: Any) -> None:
        if bound not in RANGE_BOUND_KEYS:
            raise ValueError(f"Unknown range bound {bound!r}")
        setattr(self, "from_" if bound == "from" else bound, value)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GeoDistanceRange(BaseModel):
    """Distance band around a point, keyed on the document's geo field."""

    from_: str = Field(..., alias="from", description="Inner distance, e.g. '1km'")
    to: str = Field(..., description="Outer distance, e.g. '5km'")
    field_name: str = Field(..., min_length=1, description="Geo-point field in the document")
    distance_type: str = Field(default="arc", description="'arc', 'plane' or 'sloppy_arc'")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return {
            "from": self.from_,
            "to": self.to,
            self.field_name: {"lat": self.lat, "lon": self.lon},
            "distance_type": self.distance_type,
        }


class InnerHits(BaseModel):
    """Paging for the hits returned from inside a nested document."""

    model_config = ConfigDict(populate_by_name=True)

    from_: int = Field(default=0, alias="from", ge=0)
    size: int = Field(default=0, ge=0)

    def to_wire(self) -> dict[str, Any]:
        return {"from": self.from_, "size": self.size}


class QueryString(BaseModel):
    """Lucene-syntax free-text search, optionally scoped to fields.

    ``exists``/``missing`` are emitted under the ``_exists_``/``_missing_``
    keys. Empty strings and empty lists are left out of the output.
    """

    model_config = ConfigDict(populate_by_name=True)

    default_operator: str = Field(default="", description="'AND' or 'OR'")
    default_field: str = Field(default="", description="Field searched when the query names none")
    query: str = Field(default="", description="The Lucene query text")
    exists: str = Field(default="", alias="_exists_")
    missing: str = Field(default="", alias="_missing_")
    fields: list[str] = Field(default_factory=list, description="Explicit fields to search")

    @field_validator("default_operator")
    @classmethod
    def _upper_operator(cls, v: str) -> str:
        v = v.strip().upper()
        if v and v not in ("AND", "OR"):
            raise ValueError(f"default_operator must be 'AND' or 'OR', got {v!r}")
        return v

    def to_wire(self) -> dict[str, Any]:
        raw = self.model_dump(by_alias=True)
        return {key: value for key, value in raw.items() if value}
