"""Cloudinary transformation vocabulary helpers."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


TRANSFORMATION_PARAMS: Dict[str, str] = {
    "angle": "a",
    "background": "b",
    "crop": "c",
    "dpr": "dpr",
    "effect": "e",
    "fetch_format": "f",
    "gravity": "g",
    "height": "h",
    "quality": "q",
    "radius": "r",
    "width": "w",
    "x": "x",
    "y": "y",
    "zoom": "z",
}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_step(params: Mapping[str, Any]) -> str:
    """Encode one transformation step, e.g. ``c_scale,q_100,w_200``."""
    parts = []
    for key, value in params.items():
        short = TRANSFORMATION_PARAMS.get(key)
        if short is None or value is None or value == "":
            continue
        parts.append(f"{short}_{_format_value(value)}")
    return ",".join(sorted(parts))


def encode_transformation(options: Mapping[str, Any]) -> str:
    """Encode chained steps followed by the top-level step."""
    chained: Iterable[Mapping[str, Any]] = options.get("transformation") or ()
    segments = [encode_step(step) for step in chained]
    segments.append(encode_step(options))
    return "/".join(segment for segment in segments if segment)
