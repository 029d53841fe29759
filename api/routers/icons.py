"""Icon endpoints: rendered SVG, raw icon data and set listing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from api.config import settings
from api.deps import get_icons, validate_prefix_param
from api.schemas.icons import CacheCleared, IconData, SetInfo, SetList, SetSummary
from iconkit.errors import MalformedDatasetError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/icons", tags=["icons"])


def _resolve_or_404(icons, name: str):
    try:
        record = icons.resolve(name)
    except MalformedDatasetError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    if record is None:
        raise HTTPException(status_code=404, detail=f"Icon not found: {name}")
    return record


@router.get("/sets", response_model=SetList)
async def list_sets(icons=Depends(get_icons)) -> SetList:
    loaded = set(icons.resolver.loaded_prefixes())
    prefixes = sorted(set(icons.vendored_prefixes()) | loaded)
    return SetList(sets=[SetSummary(prefix=p, loaded=p in loaded) for p in prefixes])


@router.get("/sets/{prefix}", response_model=SetInfo)
async def get_set(prefix: str, icons=Depends(get_icons)) -> SetInfo:
    validate_prefix_param(prefix)
    try:
        icon_set = icons.resolver.load_set(prefix)
    except MalformedDatasetError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    if icon_set is None:
        raise HTTPException(status_code=404, detail=f"Icon set not found: {prefix}")
    return SetInfo(
        prefix=icon_set.prefix,
        display_name=icon_set.display_name,
        icon_count=icon_set.icon_count(),
        default_width=icon_set.default_width,
        default_height=icon_set.default_height,
    )


@router.delete("/cache", response_model=CacheCleared)
async def clear_cache(icons=Depends(get_icons)) -> CacheCleared:
    removed = icons.reset()
    logger.info("Icon cache cleared (%d entries)", removed)
    return CacheCleared(cleared=removed)


@router.get("/{name}/data", response_model=IconData)
async def get_icon_data(name: str, icons=Depends(get_icons)) -> IconData:
    record = _resolve_or_404(icons, name)
    prefix, icon_name = icons.resolver.parse_name(name)
    return IconData(
        name=icon_name,
        prefix=prefix,
        body=record.body,
        width=record.width,
        height=record.height,
    )


@router.get("/{name}")
async def get_icon_svg(
    name: str,
    css_class: str | None = Query(None, alias="class"),
    label: str | None = Query(None),
    icons=Depends(get_icons),
) -> Response:
    record = _resolve_or_404(icons, name)
    aria = {"label": label} if label else {}
    svg = icons.render(record, css_class=css_class, aria=aria)
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
    )
