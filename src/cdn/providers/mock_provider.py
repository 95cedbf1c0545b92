"""Deterministic mock CDN client for local/dev usage."""

from __future__ import annotations

import hashlib
from typing import Any, Mapping

from src.cdn.providers.base import UrlClient
from src.cdn.transformations import encode_transformation


class MockUrlClient(UrlClient):
    provider_name = "mock"
    remote = False

    def __init__(self, *, base_url: str = "https://res.cdn.test/demo/image/upload") -> None:
        self._base_url = base_url.rstrip("/")

    def url_for(self, identifier: str, options: Mapping[str, Any]) -> str:
        transformation = encode_transformation(options)
        path = f"{transformation}/{identifier}" if transformation else identifier
        if options.get("sign_url"):
            seed_source = f"{path}:mock-secret".encode("utf-8")
            signature = hashlib.sha1(seed_source).hexdigest()[:8]
            path = f"s--{signature}--/{path}"
        return f"{self._base_url}/{path}"
