"""FastAPI dependency injection helpers.

The IconContext is stored on ``app.state`` during startup and retrieved
via these thin dependency functions.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from iconkit.icon_set import is_valid_prefix


def get_icons(request: Request):
    """Return the shared IconContext instance."""
    return request.app.state.icons


def validate_prefix_param(prefix: str) -> str:
    """Validate a user-supplied set prefix and return it, or raise 400."""
    if not is_valid_prefix(prefix):
        raise HTTPException(status_code=400, detail=f"Invalid icon set prefix: {prefix}")
    return prefix
