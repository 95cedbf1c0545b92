from __future__ import annotations

from typing import Any, Dict, List, Mapping

import pytest

from src.cdn.providers import reset_url_client_cache
from src.core.config import get_settings
from src.core.metrics import reset_metrics_for_tests
from src.responsive.presets import reset_presets_cache


class FakeUrlClient:
    provider_name = "fake"
    remote = False

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def url_for(self, identifier: str, options: Mapping[str, Any]) -> str:
        self.calls.append({"identifier": identifier, "options": dict(options)})
        return f"https://cdn.test/{identifier}?call={len(self.calls)}&w={options.get('width')}"


@pytest.fixture(autouse=True)
def _reset_caches(monkeypatch):
    monkeypatch.delenv("CDN_PROVIDER", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    get_settings.cache_clear()
    reset_url_client_cache()
    reset_presets_cache()
    reset_metrics_for_tests()
    yield
    get_settings.cache_clear()
    reset_url_client_cache()
    reset_presets_cache()
    reset_metrics_for_tests()


@pytest.fixture
def fake_client() -> FakeUrlClient:
    return FakeUrlClient()
