"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    shapesight_env: str = "development"
    shapesight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Uploads larger than this are rejected before decoding
    max_image_bytes: int = 10 * 1024 * 1024

    # Optional ground truth JSON for /api/evaluate; built-in gallery truth otherwise
    ground_truth_path: str | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
