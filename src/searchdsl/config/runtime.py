"""Pydantic-based settings for query building and serialization.

Loads from environment variables (prefix ``SEARCHDSL_``, optional .env file).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DslSettings(BaseSettings):
    """All configuration for the query DSL, validated on load."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCHDSL_", env_file=".env", env_file_encoding="utf-8"
    )

    # --- Shapes ---
    strict_shapes: bool = Field(
        default=True,
        description="Raise when a builder call switches a node to another shape",
    )
    filter_only_query: Literal["drop", "error"] = Field(
        default="drop",
        description="What to do with a filter attached to a query that has no query shape",
    )

    # --- Requests ---
    default_index: str = Field(default="_all", description="Index searched when a request names none")
    max_size: int = Field(default=10_000, description="Upper bound for a request's page size")

    @field_validator("max_size")
    @classmethod
    def _positive_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_size must be >= 1, got {v}")
        return v

    @field_validator("default_index")
    @classmethod
    def _non_blank_index(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_index cannot be blank")
        return v.strip()


@lru_cache(maxsize=1)
def get_settings() -> DslSettings:
    """Return the singleton DslSettings (cached after first call)."""
    return DslSettings()
