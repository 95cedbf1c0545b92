import structlog

from src.core import metrics
from src.core.logger import bind_image_context, clear_image_context, get_logger


def test_render_prometheus_metrics_includes_counters() -> None:
    metrics.record_url_generated(provider="cloudinary", count=3)
    metrics.record_url_generated(provider="cloudinary", count=0)
    metrics.record_plan_branch(branch="height")
    metrics.record_upstream_error(provider="webhook")
    metrics.record_attributes_skipped()

    body = metrics.render_prometheus_metrics(app_name="responsive_cdn", app_version="0.1.0", env="test")

    assert 'responsive_cdn_build_info{app_name="responsive_cdn",version="0.1.0",env="test"} 1' in body
    assert 'responsive_cdn_urls_generated_total{provider="cloudinary"} 3' in body
    assert 'responsive_cdn_sizes_planned_total{branch="height"} 1' in body
    assert 'responsive_cdn_upstream_errors_total{provider="webhook"} 1' in body
    assert "responsive_cdn_attributes_skipped_total 1" in body


def test_reset_metrics_clears_counters() -> None:
    metrics.record_url_generated(provider="mock")
    metrics.reset_metrics_for_tests()

    assert metrics.snapshot()["urls_generated_total"] == {}


def test_blank_labels_fall_back_to_unknown() -> None:
    metrics.record_upstream_error(provider="  ")

    assert metrics.snapshot()["upstream_errors_total"] == {"unknown": 1}


def test_image_context_is_bound_and_cleared() -> None:
    structlog.contextvars.bind_contextvars(request_id="req-1")
    bind_image_context("folder/pic.jpg", provider="mock")
    context = structlog.contextvars.get_contextvars()
    assert context["identifier"] == "folder/pic.jpg"
    assert context["cdn_provider"] == "mock"

    clear_image_context()
    context = structlog.contextvars.get_contextvars()
    assert "identifier" not in context
    assert "cdn_provider" not in context
    assert context["request_id"] == "req-1"

    structlog.contextvars.clear_contextvars()


def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("responsive_cdn.test")

    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")
