"""Named size presets loaded from YAML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from src.cdn.providers import UrlClient
from src.core.config import get_settings
from src.responsive.assembler import build_image_attributes
from src.responsive.models import ImageAttributes, SizeSpec


class PresetNotFoundError(KeyError):
    """Raised when a preset name is not configured."""


class ImagePreset(BaseModel):
    sizes: List[SizeSpec] = Field(min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> Dict[str, Any]:
        if value is None:
            return {}
        return value


def _resolve_presets_path() -> Path:
    settings = get_settings()
    configured = Path(settings.presets_file_path)
    if configured.is_absolute():
        return configured
    return Path.cwd() / configured


@lru_cache(maxsize=1)
def load_presets() -> Dict[str, ImagePreset]:
    path = _resolve_presets_path()
    if not path.exists():
        return {}

    content = path.read_text(encoding="utf-8")
    parsed = yaml.safe_load(content) or {}
    if not isinstance(parsed, dict):
        raise ValueError("Presets file must be a YAML object")

    presets: Dict[str, ImagePreset] = {}
    for name, raw in parsed.items():
        if not isinstance(name, str) or not isinstance(raw, dict):
            raise ValueError(f"Invalid preset entry: {name!r}")
        presets[name] = ImagePreset.model_validate(raw)
    return presets


def reset_presets_cache() -> None:
    load_presets.cache_clear()


def get_preset(name: str) -> ImagePreset:
    presets = load_presets()
    if name not in presets:
        raise PresetNotFoundError(name)
    return presets[name]


def build_preset_attributes(
    image: Any,
    name: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[UrlClient] = None,
) -> ImageAttributes:
    """Render ``image`` with a named preset; caller options win over the preset's."""
    preset = get_preset(name)
    merged = {**preset.options, **dict(options or {})}
    return build_image_attributes(image, preset.sizes, merged, client=client)
