"""CDN URL client integrations."""

from src.cdn.providers.base import UpstreamError, UrlClient
from src.cdn.providers.cloudinary_provider import CloudinaryUrlClient
from src.cdn.providers.factory import get_url_client, reset_url_client_cache
from src.cdn.providers.mock_provider import MockUrlClient
from src.cdn.providers.webhook_provider import WebhookUrlClient

__all__ = [
    "CloudinaryUrlClient",
    "MockUrlClient",
    "UpstreamError",
    "UrlClient",
    "WebhookUrlClient",
    "get_url_client",
    "reset_url_client_cache",
]
