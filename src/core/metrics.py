"""In-process metrics collector with Prometheus text exposition."""

from __future__ import annotations

from collections import defaultdict
from threading import Lock
import time
from typing import Dict


_lock = Lock()
_started_at = time.time()

_urls_generated_total: Dict[str, int] = defaultdict(int)
_sizes_planned_total: Dict[str, int] = defaultdict(int)
_upstream_errors_total: Dict[str, int] = defaultdict(int)
_attributes_skipped_total = 0


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _normalize_label(value: str, *, fallback: str = "unknown") -> str:
    normalized = (value or "").strip()
    return normalized or fallback


def record_url_generated(*, provider: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _urls_generated_total[_normalize_label(provider)] += int(count)


def record_plan_branch(*, branch: str) -> None:
    with _lock:
        _sizes_planned_total[_normalize_label(branch)] += 1


def record_upstream_error(*, provider: str) -> None:
    with _lock:
        _upstream_errors_total[_normalize_label(provider)] += 1


def record_attributes_skipped() -> None:
    global _attributes_skipped_total
    with _lock:
        _attributes_skipped_total += 1


def snapshot() -> Dict[str, Dict[str, int]]:
    with _lock:
        return {
            "urls_generated_total": dict(_urls_generated_total),
            "sizes_planned_total": dict(_sizes_planned_total),
            "upstream_errors_total": dict(_upstream_errors_total),
            "attributes_skipped_total": {"": _attributes_skipped_total},
        }


def render_prometheus_metrics(*, app_name: str, app_version: str, env: str) -> str:
    uptime = max(time.time() - _started_at, 0.0)

    with _lock:
        urls_total = dict(_urls_generated_total)
        planned_total = dict(_sizes_planned_total)
        errors_total = dict(_upstream_errors_total)
        skipped_total = _attributes_skipped_total

    lines = [
        "# HELP responsive_cdn_build_info Build metadata.",
        "# TYPE responsive_cdn_build_info gauge",
        (
            f'responsive_cdn_build_info{{app_name="{_escape_label(app_name)}",'
            f'version="{_escape_label(app_version)}",env="{_escape_label(env)}"}} 1'
        ),
        "# HELP responsive_cdn_process_uptime_seconds Process uptime in seconds.",
        "# TYPE responsive_cdn_process_uptime_seconds gauge",
        f"responsive_cdn_process_uptime_seconds {uptime:.6f}",
        "# HELP responsive_cdn_urls_generated_total Signed CDN URLs generated.",
        "# TYPE responsive_cdn_urls_generated_total counter",
    ]
    for provider, value in sorted(urls_total.items()):
        lines.append(f'responsive_cdn_urls_generated_total{{provider="{_escape_label(provider)}"}} {value}')

    lines.extend(
        [
            "# HELP responsive_cdn_sizes_planned_total Scale-and-crop sizes planned by limiting dimension.",
            "# TYPE responsive_cdn_sizes_planned_total counter",
        ]
    )
    for branch, value in sorted(planned_total.items()):
        lines.append(f'responsive_cdn_sizes_planned_total{{branch="{_escape_label(branch)}"}} {value}')

    lines.extend(
        [
            "# HELP responsive_cdn_upstream_errors_total CDN client failures.",
            "# TYPE responsive_cdn_upstream_errors_total counter",
        ]
    )
    for provider, value in sorted(errors_total.items()):
        lines.append(f'responsive_cdn_upstream_errors_total{{provider="{_escape_label(provider)}"}} {value}')

    lines.extend(
        [
            "# HELP responsive_cdn_attributes_skipped_total Calls skipped because the image had no filename.",
            "# TYPE responsive_cdn_attributes_skipped_total counter",
            f"responsive_cdn_attributes_skipped_total {skipped_total}",
        ]
    )

    lines.append("")
    return "\n".join(lines)


def reset_metrics_for_tests() -> None:
    global _started_at, _attributes_skipped_total
    with _lock:
        _urls_generated_total.clear()
        _sizes_planned_total.clear()
        _upstream_errors_total.clear()
        _attributes_skipped_total = 0
    _started_at = time.time()
