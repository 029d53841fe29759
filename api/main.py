"""FastAPI application factory for the iconkit API.

Launch:
    uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure the project root is on sys.path so iconkit imports work
PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from dotenv import load_dotenv

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

from api.config import settings
from api.routers import health, icons
from iconkit.config import IconSettings
from iconkit.context import IconContext

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared IconContext on startup, drop it on shutdown."""
    icon_settings = IconSettings()
    context = IconContext(icon_settings)

    if context.api_client is not None:
        logger.info("Iconify API fallback enabled (%s)", icon_settings.api_base_url)
    else:
        logger.info("Iconify API fallback disabled")

    # Attach to app state for dependency injection
    app.state.icons = context
    app.state.start_time = time.time()

    logger.info("iconkit API started (vendor dir: %s)", icon_settings.vendor_dir())
    yield

    context.reset()
    logger.info("iconkit API stopped")


app = FastAPI(
    title="iconkit API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(icons.router)
