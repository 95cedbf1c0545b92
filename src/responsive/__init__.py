"""Responsive image URL and srcset assembly."""

from src.responsive.assembler import (
    build_image_attributes,
    generate_srcset,
    generate_urls,
    prepare_options,
    resolve_identifier,
)
from src.responsive.assets import asset_filename, image_from_asset
from src.responsive.models import (
    FocalPoint,
    Image,
    ImageAttributes,
    InvalidInputError,
    SizeSpec,
    TransformationStep,
)
from src.responsive.planner import plan_size, plan_sizes
from src.responsive.presets import (
    ImagePreset,
    PresetNotFoundError,
    build_preset_attributes,
    get_preset,
    load_presets,
    reset_presets_cache,
)

__all__ = [
    "FocalPoint",
    "Image",
    "ImageAttributes",
    "ImagePreset",
    "InvalidInputError",
    "PresetNotFoundError",
    "SizeSpec",
    "TransformationStep",
    "asset_filename",
    "build_image_attributes",
    "build_preset_attributes",
    "generate_srcset",
    "generate_urls",
    "get_preset",
    "image_from_asset",
    "load_presets",
    "plan_size",
    "plan_sizes",
    "prepare_options",
    "resolve_identifier",
    "reset_presets_cache",
]
