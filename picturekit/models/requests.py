"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt


class LocalAsset(BaseModel):
    src: str = Field(..., description="URL or path the asset is served from")
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    format: str = Field(..., description="Native encoding of the asset (png, gif, svg, ...)")


class PictureRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    src: LocalAsset | str = Field(..., description="Local asset descriptor or remote URL")
    alt: str | None = Field(default=None, description="Required alternative text; empty for decorative images")
    formats: list[str] | None = Field(default=None, description="Requested <source> encodings, in preference order")
    fallback_format: str | None = Field(default=None, description="Override for the <img> encoding")
    widths: list[PositiveInt] | None = None
    densities: list[PositiveFloat | str] | None = None
    sizes: str | None = None
    width: int | None = None
    height: int | None = None
    quality: int | None = None
    class_: str | None = Field(default=None, alias="class")
    picture_attributes: dict[str, Any] = Field(default_factory=dict)
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra <img> attributes (data-*, loading, ...)",
    )

    def to_props(self) -> dict[str, Any]:
        """Flatten into the property bag build_picture consumes."""
        props: dict[str, Any] = dict(self.attributes)
        props["src"] = self.src.model_dump() if isinstance(self.src, LocalAsset) else self.src
        for key in ("alt", "formats", "fallback_format", "widths", "densities", "sizes", "width", "height", "quality"):
            value = getattr(self, key)
            if value is not None:
                props[key] = value
        if self.class_ is not None:
            props["class"] = self.class_
        props["picture_attributes"] = dict(self.picture_attributes)
        return props
