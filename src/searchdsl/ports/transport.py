"""Port: transport that delivers a rendered request body to the cluster."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SearchTransport(Protocol):
    """Sends a search body to ``index`` and returns the decoded response."""

    def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]: ...
