"""Health check endpoint."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request

from api.deps import get_icons
from api.schemas.icons import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request, icons=Depends(get_icons)) -> HealthResponse:
    """Return service health information."""
    start_time: float = getattr(request.app.state, "start_time", time.time())
    return HealthResponse(
        status="ok",
        cache_size=icons.cache.size(),
        loaded_sets=icons.resolver.loaded_prefixes(),
        default_set=icons.settings.default_set,
        api_fallback=icons.api_client is not None,
        uptime_seconds=round(time.time() - start_time, 1),
    )
