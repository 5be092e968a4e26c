"""SearchService: render a SearchRequest and hand it to the transport.

The service owns no HTTP code; whatever implements ``SearchTransport`` does.
"""

from __future__ import annotations

import json
import time
from typing import Any

from ..config.runtime import DslSettings, get_settings
from ..models.search_request import SearchRequest
from ..ports.transport import SearchTransport


class SearchService:
    """Serializes requests and forwards them to a SearchTransport."""

    def __init__(
        self,
        transport: SearchTransport,
        settings: DslSettings | None = None,
        logger: Any = None,
    ) -> None:
        self._transport = transport
        self._settings = settings or get_settings()
        self._logger = logger

    def render(self, request: SearchRequest, indent: int | None = None) -> str:
        """Return the JSON body that search() would send."""
        body = request.to_body(self._settings)
        separators = (",", ":") if indent is None else None
        return json.dumps(body, indent=indent, separators=separators, ensure_ascii=False)

    def search(self, request: SearchRequest) -> dict[str, Any]:
        index = request.resolved_index(self._settings)
        started = time.perf_counter()

        # 1. Render; serialization errors surface before anything is sent
        body = request.to_body(self._settings)
        if self._logger:
            self._logger.info(
                "search_start",
                extra={
                    "index": index,
                    "has_query": "query" in body,
                    "sort_keys": len(body.get("sort", [])),
                },
            )

        # 2. Send
        try:
            response = self._transport.search(index, body)
        except Exception as exc:
            if self._logger:
                self._logger.error(
                    "search_failed",
                    extra={"index": index, "error": str(exc)},
                )
            raise

        if self._logger:
            self._logger.info(
                "search_done",
                extra={
                    "index": index,
                    "latency_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response
