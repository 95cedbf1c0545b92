"""Factory to resolve the active CDN client."""

from __future__ import annotations

from functools import lru_cache

from src.cdn.providers.base import UrlClient
from src.cdn.providers.cloudinary_provider import CloudinaryUrlClient
from src.cdn.providers.mock_provider import MockUrlClient
from src.cdn.providers.webhook_provider import WebhookUrlClient
from src.core.config import get_settings


@lru_cache(maxsize=1)
def get_url_client() -> UrlClient:
    settings = get_settings()
    provider = settings.cdn_provider.strip().lower()
    if provider == "cloudinary":
        return CloudinaryUrlClient(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=settings.cloudinary_secure,
        )
    if provider == "webhook":
        return WebhookUrlClient(
            webhook_url=settings.signing_webhook_url,
            webhook_token=settings.signing_webhook_token,
            timeout_seconds=settings.signing_webhook_timeout_seconds,
        )
    return MockUrlClient()


def reset_url_client_cache() -> None:
    get_url_client.cache_clear()
