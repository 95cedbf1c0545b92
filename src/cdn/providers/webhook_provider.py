"""Webhook-backed CDN client that delegates signing to a remote service."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from src.cdn.providers.base import UpstreamError, UrlClient


class WebhookUrlClient(UrlClient):
    provider_name = "webhook"
    remote = True

    def __init__(
        self,
        *,
        webhook_url: str,
        webhook_token: str = "",
        timeout_seconds: int = 10,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._webhook_url = webhook_url.strip()
        self._webhook_token = webhook_token.strip()
        self._timeout_seconds = max(1, timeout_seconds)
        self._client = client

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._webhook_token:
            headers["Authorization"] = f"Bearer {self._webhook_token}"
        return headers

    def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        try:
            if self._client is not None:
                return self._client.post(self._webhook_url, headers=self._headers(), json=payload)
            with httpx.Client(timeout=self._timeout_seconds) as client:
                return client.post(self._webhook_url, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"signing_webhook_unreachable detail={exc}") from exc

    def url_for(self, identifier: str, options: Mapping[str, Any]) -> str:
        if not self._webhook_url:
            raise UpstreamError("signing_webhook_url_missing")

        payload = {
            "public_id": identifier,
            "options": {
                **dict(options),
                "transformation": [dict(step) for step in options.get("transformation") or ()],
            },
        }
        response = self._post(payload)

        if response.status_code < 200 or response.status_code >= 300:
            detail = response.text.strip()
            if len(detail) > 240:
                detail = detail[:240] + "..."
            raise UpstreamError(f"signing_webhook_failed status={response.status_code} detail={detail}")

        try:
            body: Dict[str, Any] = response.json()
        except Exception as exc:  # pragma: no cover
            raise UpstreamError("signing_webhook_invalid_json_response") from exc

        if not isinstance(body, dict):
            raise UpstreamError("signing_webhook_invalid_payload")
        url = str(body.get("url") or body.get("secure_url") or "").strip()
        if not url:
            raise UpstreamError("signing_webhook_missing_url")
        return url
