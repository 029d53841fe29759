"""Pydantic response models for the icon endpoints."""

from __future__ import annotations

from pydantic import BaseModel


# ── Icons ─────────────────────────────────────────────────────────────

class IconData(BaseModel):
    name: str
    prefix: str
    body: str
    width: int | float
    height: int | float


# ── Sets ──────────────────────────────────────────────────────────────

class SetSummary(BaseModel):
    prefix: str
    loaded: bool


class SetList(BaseModel):
    sets: list[SetSummary]


class SetInfo(BaseModel):
    prefix: str
    display_name: str
    icon_count: int
    default_width: int | float
    default_height: int | float


# ── Cache / health ────────────────────────────────────────────────────

class CacheCleared(BaseModel):
    cleared: int


class HealthResponse(BaseModel):
    status: str
    cache_size: int
    loaded_sets: list[str]
    default_set: str
    api_fallback: bool
    uptime_seconds: float
