"""Request DTOs."""

from .search_request import SearchRequest

__all__ = ["SearchRequest"]
