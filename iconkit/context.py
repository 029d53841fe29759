"""IconContext: settings, cache and resolver bundled for one process.

Build one at startup and pass it to whatever renders icons.  Tests build
their own, so no state is shared between them.
"""

from __future__ import annotations

import logging
from typing import Any

from iconkit.api_client import IconifyApiClient
from iconkit.cache import IconCache
from iconkit.config import IconSettings
from iconkit.icon_set import IconRecord, IconSet
from iconkit.renderer import escape_attr, render
from iconkit.resolver import FallbackSource, Resolver

logger = logging.getLogger(__name__)


class IconContext:
    """Entry point for resolving and rendering icons."""

    def __init__(
        self,
        settings: IconSettings | None = None,
        api_client: FallbackSource | None = None,
    ):
        self.settings = settings or IconSettings()
        if api_client is None and self.settings.api_fallback_enabled:
            api_client = IconifyApiClient(
                base_url=self.settings.api_base_url,
                timeout=self.settings.api_timeout,
            )
        self.api_client = api_client
        self.cache = IconCache()
        self.resolver = Resolver(self.settings, self.cache, api_client)

    def resolve(self, name: str) -> IconRecord | None:
        return self.resolver.resolve(name)

    def render(self, record: IconRecord, css_class: str | None = None, **options: Any) -> str:
        return render(record, css_class=css_class, **options)

    def icon_tag(self, name: str, **options: Any) -> str:
        """Resolve *name* and render it, or return a not-found placeholder.

        The placeholder is an HTML comment in development and an empty
        string otherwise.
        """
        record = self.resolve(str(name))
        if record is None:
            if self.settings.is_development:
                return f"<!-- iconkit: '{escape_attr(str(name))}' not found -->"
            return ""

        css_class = options.pop("css_class", None)
        return render(record, css_class=css_class, **options)

    def vendored_prefixes(self) -> list[str]:
        return IconSet.list_vendored_prefixes(self.settings.vendor_dir())

    def reset(self) -> int:
        """Clear the cache and the loaded-set registry.

        Returns the number of cache entries removed.
        """
        self.resolver.clear()
        removed = self.cache.clear()
        logger.debug("Icon context reset (%d cached icons dropped)", removed)
        return removed
