"""Domain models for responsive image requests and planned transformations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


CropMode = Literal["scale", "crop"]


class InvalidInputError(ValueError):
    """Raised when image or size geometry cannot produce valid CDN parameters."""


class FocalPoint(BaseModel):
    """Subject centre as a fraction of each dimension."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.5, ge=0, le=1)
    y: float = Field(default=0.5, ge=0, le=1)


class Image(BaseModel):
    """The slice of a CMS asset record needed to render an ``<img>``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    filename: Optional[str] = None
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    title: Optional[str] = None
    folder_path: Optional[str] = None
    focal_point: FocalPoint = Field(default_factory=FocalPoint)


@dataclass(frozen=True)
class TransformationStep:
    """One CDN operation; steps apply left to right."""

    crop: CropMode
    width: Optional[int] = None
    height: Optional[int] = None
    gravity: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None
    quality: Optional[int] = None

    def to_options(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


class SizeSpec(BaseModel):
    """A requested output box plus any per-size CDN options."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    quality: Optional[int] = Field(default=None, ge=0, le=100)
    transformation: Tuple[TransformationStep, ...] = ()
    extra: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra_options(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = {"width", "height", "quality", "transformation", "extra"}
        collected = dict(data.get("extra") or {})
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            if key in known:
                normalized[key] = value
            else:
                collected[key] = value
        normalized["extra"] = collected
        return normalized

    @model_validator(mode="after")
    def _require_dimension(self) -> "SizeSpec":
        if self.width is None and self.height is None:
            raise ValueError("size requires a width or a height")
        return self

    def to_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = dict(self.extra)
        if self.width is not None:
            options["width"] = self.width
        if self.height is not None:
            options["height"] = self.height
        if self.quality is not None:
            options["quality"] = self.quality
        if self.transformation:
            options["transformation"] = [step.to_options() for step in self.transformation]
        return options


@dataclass(frozen=True)
class ImageAttributes:
    """``alt``/``src``/``srcset`` for an ``<img>`` element."""

    alt: Optional[str] = None
    src: Optional[str] = None
    srcset: Optional[str] = None
    skipped: bool = field(default=False, repr=False)

    @classmethod
    def empty(cls) -> "ImageAttributes":
        """The result for an asset with no file: nothing to render."""
        return cls(skipped=True)

    @property
    def is_empty(self) -> bool:
        return self.skipped

    def as_dict(self) -> Dict[str, Optional[str]]:
        if self.is_empty:
            return {}
        return {"alt": self.alt, "src": self.src, "srcset": self.srcset}
