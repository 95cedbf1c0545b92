"""Scale-then-crop planning.

The CDN can scale or crop, but not scale to cover a box and then crop around
the asset's focal point in one operation. Each requested size is planned as
two chained steps instead: scale along the limiting dimension so the box is
covered, then crop the exact box with its centre on the focal point.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from src.responsive.models import Image, InvalidInputError, SizeSpec, TransformationStep


DEFAULT_QUALITY = 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _require_geometry(image: Image, size: SizeSpec) -> Tuple[int, int, int, int]:
    if not image.width or not image.height:
        raise InvalidInputError("image_dimensions_missing")
    if not size.width or not size.height:
        raise InvalidInputError("size_dimensions_missing")
    return image.width, image.height, size.width, size.height


def plan_size(image: Image, size: SizeSpec) -> SizeSpec:
    """Return a copy of ``size`` carrying its scale and crop steps."""
    image_width, image_height, target_width, target_height = _require_geometry(image, size)

    ratio = image_width / image_height
    quality = size.quality if size.quality is not None else DEFAULT_QUALITY

    # Equal ratios take the height branch.
    if image_width / target_width < image_height / target_height:
        scale = TransformationStep(crop="scale", width=target_width, quality=quality)
        scaled_width: float = target_width
        scaled_height: float = target_width / ratio
    else:
        scale = TransformationStep(crop="scale", height=target_height, quality=quality)
        scaled_width = target_height * ratio
        scaled_height = target_height

    focal_point = image.focal_point
    crop = TransformationStep(
        crop="crop",
        width=target_width,
        height=target_height,
        gravity="xy_center",
        x=str(_round_half_up(focal_point.x * scaled_width)),
        y=str(_round_half_up(focal_point.y * scaled_height)),
        quality=quality,
    )
    return size.model_copy(update={"transformation": (scale, crop)})


def plan_sizes(image: Image, sizes: Sequence[SizeSpec]) -> List[SizeSpec]:
    return [plan_size(image, size) for size in sizes]
