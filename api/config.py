"""API configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings, loaded from environment / .env file."""

    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    cache_max_age: int = 86400  # seconds, for rendered SVG responses

    model_config = {
        "env_prefix": "ICONKIT_API_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
