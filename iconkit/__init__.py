"""iconkit: inline SVG rendering of Iconify icon sets.

Public API:
    IconContext(settings) -> context with resolve(), render(), icon_tag()
    IconSet(prefix, data) -> parsed dataset
    IconCache, Resolver
    render(record, css_class, **options) -> str
    sanitize_svg_body(body) -> str
"""

from iconkit.api_client import IconifyApiClient
from iconkit.cache import IconCache
from iconkit.config import IconSettings
from iconkit.context import IconContext
from iconkit.errors import IconError, MalformedDatasetError
from iconkit.icon_set import IconRecord, IconSet
from iconkit.renderer import RenderOptions, render
from iconkit.resolver import Resolver
from iconkit.sanitizer import sanitize_svg_body

__all__ = [
    "IconContext",
    "IconSettings",
    "IconSet",
    "IconRecord",
    "IconCache",
    "Resolver",
    "IconifyApiClient",
    "RenderOptions",
    "render",
    "sanitize_svg_body",
    "IconError",
    "MalformedDatasetError",
]
