"""Icon resolution settings via Pydantic Settings."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic_settings import BaseSettings

from iconkit.icon_set import BUNDLED_DATA_DIR


class IconSettings(BaseSettings):
    """Settings for icon lookup, loaded from ICONKIT_* env vars / .env file."""

    default_set: str = "lucide"
    vendor_path: str = "vendor/icons"
    root_dir: str = ""  # empty = current working directory at lookup time
    bundled_path: str = str(BUNDLED_DATA_DIR)
    environment: str = "production"
    fallback_to_api: bool | None = None  # None = development only
    api_base_url: str = "https://api.iconify.design"
    api_timeout: float = 5.0

    model_config = {
        "env_prefix": "ICONKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def api_fallback_enabled(self) -> bool:
        if self.fallback_to_api is None:
            return self.is_development
        return self.fallback_to_api

    def vendor_dir(self) -> Path:
        """Absolute vendor directory."""
        path = Path(self.vendor_path)
        if path.is_absolute():
            return path
        base = Path(self.root_dir) if self.root_dir else Path(os.getcwd())
        return base / path
