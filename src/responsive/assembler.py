"""Assemble signed CDN URLs and ``srcset`` attributes for an image."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from src.cdn.providers import UpstreamError, UrlClient, get_url_client
from src.core.config import get_settings
from src.core.logger import bind_image_context, clear_image_context, get_logger
from src.core.metrics import (
    record_attributes_skipped,
    record_plan_branch,
    record_upstream_error,
    record_url_generated,
)
from src.responsive.assets import asset_filename, image_from_asset
from src.responsive.models import Image, ImageAttributes, InvalidInputError, SizeSpec
from src.responsive.planner import plan_sizes


SCALE_AND_CROP_OPTION = "scaleAndCrop"
ALT_OPTION = "alt"
SIGN_URL_OPTION = "sign_url"

# Consumed before the CDN call, wherever they appear.
_LOCAL_OPTIONS = (SCALE_AND_CROP_OPTION, ALT_OPTION)

SizeInput = Union[SizeSpec, Mapping[str, Any]]

_LOGGER_NAME = "responsive_cdn.assembler"


def _coerce_sizes(sizes: Iterable[SizeInput]) -> List[SizeSpec]:
    coerced: List[SizeSpec] = []
    for size in sizes:
        if isinstance(size, SizeSpec):
            coerced.append(size)
            continue
        try:
            coerced.append(SizeSpec.model_validate(dict(size)))
        except ValidationError as exc:
            raise InvalidInputError(f"invalid_size detail={exc.errors()[0]['msg']}") from exc
    return coerced


def _coerce_image(image: Any) -> Image:
    try:
        return image_from_asset(image)
    except ValidationError as exc:
        raise InvalidInputError(f"invalid_image detail={exc.errors()[0]['msg']}") from exc


def resolve_identifier(image: Image) -> str:
    """Return the CDN public id, prefixing the folder path when present."""
    filename = image.filename or ""
    if image.folder_path:
        return image.folder_path.replace(" ", "%20") + filename
    return filename


def prepare_options(image: Image, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy caller options and apply the signing and alt-text defaults."""
    prepared = dict(options or {})
    prepared[SIGN_URL_OPTION] = True
    if prepared.get(ALT_OPTION) is None and image.title is not None:
        prepared[ALT_OPTION] = image.title
    return prepared


def _size_request(options: Mapping[str, Any], spec: SizeSpec) -> Dict[str, Any]:
    merged = {**dict(options), **spec.to_options()}
    for key in _LOCAL_OPTIONS:
        merged.pop(key, None)
    merged[SIGN_URL_OPTION] = True
    return merged


def _request_url(client: UrlClient, identifier: str, options: Dict[str, Any]) -> str:
    try:
        url = client.url_for(identifier, options)
    except UpstreamError as exc:
        record_upstream_error(provider=client.provider_name)
        get_logger(_LOGGER_NAME).error("cdn_url_failed", provider=client.provider_name, error=str(exc))
        raise
    record_url_generated(provider=client.provider_name)
    return url


def generate_urls(
    identifier: str,
    sizes: Sequence[SizeInput],
    options: Mapping[str, Any],
    *,
    client: Optional[UrlClient] = None,
) -> Dict[Optional[int], str]:
    """Request one signed URL per size, keyed by the size's width.

    Size options take precedence over the shared ``options``, except that every
    request is signed. A repeated width keeps its first position and the last
    URL requested for it.
    """
    url_client = client or get_url_client()
    specs = _coerce_sizes(sizes)
    requests = [_size_request(options, spec) for spec in specs]

    workers = min(get_settings().url_workers, len(requests))
    if getattr(url_client, "remote", False) and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            urls = list(pool.map(lambda merged: _request_url(url_client, identifier, merged), requests))
    else:
        urls = [_request_url(url_client, identifier, merged) for merged in requests]

    result: Dict[Optional[int], str] = {}
    for spec, url in zip(specs, urls):
        if spec.width in result:
            get_logger(_LOGGER_NAME).warning("duplicate_size_width", width=spec.width)
        result[spec.width] = url
    return result


def generate_srcset(urls: Mapping[Optional[int], str]) -> Optional[str]:
    """Join ``"<url> <width>w"`` candidates, or ``None`` below two candidates."""
    candidates = [(width, url) for width, url in urls.items() if width is not None]
    if len(candidates) < 2:
        return None
    return ",".join(f"{url} {width}w" for width, url in candidates)


def build_image_attributes(
    image: Any,
    sizes: Sequence[SizeInput] = (),
    options: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[UrlClient] = None,
) -> ImageAttributes:
    """Build ``alt``/``src``/``srcset`` for ``image`` at the requested sizes.

    Returns ``ImageAttributes.empty()`` when the image has no filename; callers
    render nothing in that case. Neither ``options`` nor ``sizes`` is mutated.
    """
    if not asset_filename(image):
        record_attributes_skipped()
        get_logger(_LOGGER_NAME).info("image_attributes_skipped", reason="filename_missing")
        return ImageAttributes.empty()

    resolved_image = _coerce_image(image)
    prepared = prepare_options(resolved_image, options)
    specs = _coerce_sizes(sizes)
    if prepared.pop(SCALE_AND_CROP_OPTION, False):
        specs = plan_sizes(resolved_image, specs)
        for spec in specs:
            record_plan_branch(branch="width" if spec.transformation[0].width else "height")
        get_logger(_LOGGER_NAME).debug("sizes_planned", count=len(specs))
    alt = prepared.pop(ALT_OPTION, None)

    identifier = resolve_identifier(resolved_image)
    url_client = client or get_url_client()
    bind_image_context(identifier, provider=url_client.provider_name)
    try:
        urls = generate_urls(identifier, specs, prepared, client=url_client)
        get_logger(_LOGGER_NAME).info("image_urls_generated", count=len(urls))
    finally:
        clear_image_context()

    return ImageAttributes(
        alt=alt,
        src=next(iter(urls.values()), None),
        srcset=generate_srcset(urls),
    )
