"""Composition root: the one place a SearchService is assembled."""

from __future__ import annotations

from .config.runtime import DslSettings, get_settings
from .observability import get_logger
from .ports.transport import SearchTransport
from .services.search_service import SearchService


def build_search_service(
    transport: SearchTransport,
    settings: DslSettings | None = None,
) -> SearchService:
    """Construct a SearchService around a caller-supplied transport."""
    settings = settings or get_settings()
    return SearchService(
        transport=transport,
        settings=settings,
        logger=get_logger("service"),
    )
