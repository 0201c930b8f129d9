"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from picturekit.engine.constants import (
    DEFAULT_FALLBACK_FORMAT,
    DEFAULT_FORMATS,
    FALLBACK_UNFRIENDLY_FORMATS,
    SUPPORTED_FORMATS,
)
from picturekit.models.responses import FormatsResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        formats_supported=len(SUPPORTED_FORMATS),
    )


@router.get("/formats", response_model=FormatsResponse)
async def formats() -> FormatsResponse:
    return FormatsResponse(
        supported=[f.value for f in SUPPORTED_FORMATS],
        default_formats=[f.value for f in DEFAULT_FORMATS],
        default_fallback=DEFAULT_FALLBACK_FORMAT.value,
        keep_as_fallback=sorted(f.value for f in FALLBACK_UNFRIENDLY_FORMATS),
    )
