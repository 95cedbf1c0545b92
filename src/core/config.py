"""Central runtime configuration for responsive_cdn."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    env: str = "development"
    log_level: str = "INFO"
    app_name: str = "responsive_cdn"
    app_version: str = "0.1.0"
    cdn_provider: str = "mock"
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_secure: bool = True
    signing_webhook_url: str = ""
    signing_webhook_token: str = ""
    signing_webhook_timeout_seconds: int = 10
    url_workers: int = 4
    presets_file_path: str = "config/image_presets.yaml"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def _validate(settings: Settings) -> Settings:
    provider = settings.cdn_provider.strip().lower()
    if provider not in {"mock", "cloudinary", "webhook"}:
        raise ValueError("CDN_PROVIDER must be one of: mock, cloudinary, webhook.")
    is_production = settings.env.lower() in {"prod", "production"}
    if is_production and provider == "cloudinary":
        required_production_values = {
            "CLOUDINARY_CLOUD_NAME": settings.cloudinary_cloud_name,
            "CLOUDINARY_API_KEY": settings.cloudinary_api_key,
            "CLOUDINARY_API_SECRET": settings.cloudinary_api_secret,
        }
        missing = [name for name, value in required_production_values.items() if not str(value).strip()]
        if missing:
            joined = ", ".join(sorted(missing))
            raise ValueError(f"Missing required production secrets/config: {joined}.")
    if is_production and provider == "mock":
        raise ValueError("CDN_PROVIDER=mock is not allowed in production.")
    if provider == "webhook" and not settings.signing_webhook_url.strip():
        raise ValueError("SIGNING_WEBHOOK_URL is required when CDN_PROVIDER=webhook.")
    if settings.signing_webhook_timeout_seconds <= 0:
        raise ValueError("SIGNING_WEBHOOK_TIMEOUT_SECONDS must be positive.")
    if settings.url_workers <= 0:
        raise ValueError("URL_WORKERS must be positive.")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return validated settings as a cached singleton."""

    return _validate(Settings())
