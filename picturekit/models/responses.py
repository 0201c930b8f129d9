"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from picturekit.engine.attributes import PictureDescriptor


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    formats_supported: int = 0


class FormatsResponse(BaseModel):
    supported: list[str] = Field(default_factory=list)
    default_formats: list[str] = Field(default_factory=list)
    default_fallback: str = ""
    keep_as_fallback: list[str] = Field(default_factory=list)


class SourceModel(BaseModel):
    srcset: str
    type: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class FallbackModel(BaseModel):
    src: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class PictureResponse(BaseModel):
    sources: list[SourceModel] = Field(default_factory=list)
    fallback: FallbackModel
    picture_attributes: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: float = 0.0

    @classmethod
    def from_descriptor(cls, descriptor: PictureDescriptor, processing_time_ms: float = 0.0) -> PictureResponse:
        return cls(
            sources=[
                SourceModel(srcset=s.srcset, type=s.type, attributes=s.attributes)
                for s in descriptor.sources
            ],
            fallback=FallbackModel(
                src=descriptor.fallback.src,
                attributes=descriptor.fallback.attributes,
            ),
            picture_attributes=descriptor.picture_attributes,
            processing_time_ms=processing_time_ms,
        )
