"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from src.core.config import get_settings


_CONFIGURED = False

_IMAGE_CONTEXT_KEYS = ("identifier", "cdn_provider")


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _add_image_context(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    del logger, method_name
    for key in _IMAGE_CONTEXT_KEYS:
        event_dict.setdefault(key, None)
    return event_dict


def configure_logging() -> None:
    """Route structlog events to stdout as JSON lines, once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    settings = get_settings()
    level = _resolve_level(settings.log_level)
    logging.basicConfig(level=level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_image_context,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    configure_logging()
    return structlog.get_logger(name)


def bind_image_context(identifier: str, *, provider: str | None = None) -> None:
    """Tag events emitted while one image's URLs are built."""
    structlog.contextvars.bind_contextvars(identifier=identifier, cdn_provider=provider)


def clear_image_context() -> None:
    # Leave context bound by the caller (request ids and the like) in place.
    structlog.contextvars.unbind_contextvars(*_IMAGE_CONTEXT_KEYS)
