"""Cloudinary SDK-backed CDN client."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from cloudinary.utils import cloudinary_url

from src.cdn.providers.base import UpstreamError, UrlClient


class CloudinaryUrlClient(UrlClient):
    provider_name = "cloudinary"
    remote = False

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str = "",
        api_secret: str = "",
        secure: bool = True,
    ) -> None:
        self._cloud_name = cloud_name.strip()
        self._api_key = api_key.strip()
        self._api_secret = api_secret.strip()
        self._secure = secure

    def _account_options(self) -> Dict[str, Any]:
        return {
            "cloud_name": self._cloud_name,
            "api_key": self._api_key,
            "api_secret": self._api_secret,
            "secure": self._secure,
        }

    def url_for(self, identifier: str, options: Mapping[str, Any]) -> str:
        if not self._cloud_name:
            raise UpstreamError("cloudinary_cloud_name_missing")
        if options.get("sign_url") and not self._api_secret:
            raise UpstreamError("cloudinary_api_secret_missing")

        merged = self._account_options()
        merged.update(options)
        merged["transformation"] = [dict(step) for step in options.get("transformation") or ()]
        try:
            url, _ = cloudinary_url(identifier, **merged)
        except Exception as exc:
            raise UpstreamError(f"cloudinary_url_failed detail={exc}") from exc
        if not url:
            raise UpstreamError("cloudinary_url_empty")
        return url
