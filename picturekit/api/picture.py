"""POST /api/picture — resolve a responsive <picture> descriptor."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from picturekit.dependencies import get_settings, get_transform_service
from picturekit.engine.errors import PictureError
from picturekit.engine.picture import build_picture
from picturekit.engine.transform import TransformService
from picturekit.models.requests import PictureRequest
from picturekit.models.responses import PictureResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/picture", response_model=PictureResponse)
async def picture(
    req: PictureRequest,
    service: TransformService = Depends(get_transform_service),
    settings=Depends(get_settings),
) -> PictureResponse:
    start = time.perf_counter()

    try:
        descriptor = await build_picture(req.to_props(), service, dev=settings.dev_mode)
    except PictureError as e:
        logger.info("Picture request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    return PictureResponse.from_descriptor(descriptor, processing_time_ms=round(elapsed, 1))
