"""Read CMS asset records into ``Image`` models."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from src.responsive.models import FocalPoint, Image


_FIELD_ALIASES: Dict[str, tuple[str, ...]] = {
    "filename": ("filename",),
    "width": ("width",),
    "height": ("height",),
    "title": ("title",),
    "folder_path": ("folder_path", "folderPath"),
}


def _read(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _first(record: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        value = _read(record, name)
        if value is not None:
            return value
    return None


def _focal_point(record: Any) -> Optional[FocalPoint]:
    raw: Any = None
    for accessor in ("get_focal_point", "getFocalPoint"):
        method = getattr(record, accessor, None)
        if callable(method):
            raw = method()
            break
    else:
        raw = _first(record, ("focal_point", "focalPoint"))

    if raw is None:
        return None
    if isinstance(raw, FocalPoint):
        return raw
    if isinstance(raw, Mapping):
        return FocalPoint.model_validate(dict(raw))
    return FocalPoint(x=getattr(raw, "x"), y=getattr(raw, "y"))


def asset_filename(record: Any) -> Optional[str]:
    """Read only the filename, without validating the rest of the record."""
    return _first(record, _FIELD_ALIASES["filename"])


def image_from_asset(record: Any) -> Image:
    """Build an ``Image`` from a CMS record, mapping, or ``Image``."""
    if isinstance(record, Image):
        return record

    data: Dict[str, Any] = {}
    for field, names in _FIELD_ALIASES.items():
        value = _first(record, names)
        if value is not None:
            data[field] = value
    focal_point = _focal_point(record)
    if focal_point is not None:
        data["focal_point"] = focal_point
    return Image.model_validate(data)
