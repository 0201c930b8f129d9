"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from picturekit.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.picturekit_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="picturekit",
        description="Responsive image variant resolver: multi-format <picture> descriptors",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from picturekit.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
