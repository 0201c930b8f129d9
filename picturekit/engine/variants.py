"""Variant generator. Fans transform calls out concurrently and joins in order."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace

from picturekit.engine.constants import Encoding
from picturekit.engine.transform import Rendition, RenditionRequest, TransformService

logger = logging.getLogger(__name__)


async def generate_renditions(
    requests: Sequence[RenditionRequest],
    service: TransformService,
) -> list[Rendition]:
    """Run every request concurrently and return renditions in request order.

    The first failure cancels whatever is still running and is re-raised
    unchanged. No partial results are returned.
    """
    tasks = [asyncio.ensure_future(service.transform(req)) for req in requests]
    for req in requests:
        logger.debug("Dispatched transform for format %s", req.format)
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.warning("Transform batch of %d failed, %d call(s) cancelled", len(tasks), len(pending))
        raise


async def generate_fallback(
    template: RenditionRequest,
    fallback_format: Encoding,
    service: TransformService,
) -> Rendition:
    """One extra rendition for the fallback encoding, same hints as *template*."""
    return await service.transform(replace(template, format=fallback_format))
