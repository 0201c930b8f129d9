"""FastAPI dependency injection."""

from __future__ import annotations

from picturekit.config import Settings, settings
from picturekit.engine.transform import EndpointTransformService


def get_settings() -> Settings:
    return settings


def get_transform_service() -> EndpointTransformService:
    return EndpointTransformService(
        endpoint=settings.image_endpoint,
        default_quality=settings.default_quality,
    )
