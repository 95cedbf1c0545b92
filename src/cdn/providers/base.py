"""Provider contracts for CDN URL construction and signing."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class UpstreamError(RuntimeError):
    """Raised when a CDN client cannot build or sign a URL."""


class UrlClient(Protocol):
    provider_name: str
    # Remote clients do network I/O per URL and may be called from a thread pool.
    remote: bool

    def url_for(self, identifier: str, options: Mapping[str, Any]) -> str:
        raise NotImplementedError
