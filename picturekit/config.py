"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    picturekit_env: str = "development"
    picturekit_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Image endpoint that serves transformed renditions
    image_endpoint: str = "/_image"
    default_quality: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def dev_mode(self) -> bool:
        return self.picturekit_env.lower() == "development"


settings = Settings()
