"""Resolver: the icon lookup cascade.

Sources are tried in order, stopping at the first hit:

1. in-memory cache
2. an icon set already loaded in this process
3. vendored JSON (``{vendor_dir}/{prefix}.json``)
4. bundled gzip archive shipped with the package
5. the remote API fallback, if one is configured

Successful lookups are cached; misses never are, so a later retry (for
example after vendoring a set) can succeed.  Sets are parsed outside the
registry lock; two threads racing on first access may both parse a set but
only the first registration is kept.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from iconkit.cache import IconCache
from iconkit.icon_set import IconRecord, IconSet, is_valid_prefix

if TYPE_CHECKING:
    from iconkit.config import IconSettings

logger = logging.getLogger(__name__)


class FallbackSource(Protocol):
    def fetch_icon(self, prefix: str, name: str) -> IconRecord | None: ...


class Resolver:
    """Resolves ``prefix:name`` strings to IconRecords."""

    def __init__(
        self,
        settings: IconSettings,
        cache: IconCache,
        fallback: FallbackSource | None = None,
    ):
        self._settings = settings
        self._cache = cache
        self._fallback = fallback
        self._loaded_sets: dict[str, IconSet] = {}
        self._lock = threading.Lock()

    def parse_name(self, name: str) -> tuple[str, str]:
        """Split ``"prefix:name"``; bare names use the configured default set."""
        name = str(name).strip()
        if ":" in name:
            prefix, local_name = name.split(":", 1)
            return prefix, local_name
        return self._settings.default_set, name

    def resolve(self, name: str) -> IconRecord | None:
        prefix, icon_name = self.parse_name(name)

        cached = self._cache.get(prefix, icon_name)
        if cached is not None:
            return cached

        if not icon_name or not is_valid_prefix(prefix):
            logger.debug("Rejected icon name %r", name)
            return None

        icon_set = self.load_set(prefix)
        record = icon_set.icon(icon_name) if icon_set is not None else None

        if record is None and self._fallback is not None:
            record = self._fallback.fetch_icon(prefix, icon_name)

        if record is None:
            return None
        return self._cache.set(prefix, icon_name, record)

    def load_set(self, prefix: str) -> IconSet | None:
        """Return the registered set for *prefix*, loading it on first use.

        Raises MalformedDatasetError if a vendored or bundled file is corrupt.
        """
        with self._lock:
            icon_set = self._loaded_sets.get(prefix)
        if icon_set is not None:
            return icon_set

        icon_set = IconSet.from_vendor_file(prefix, self._settings.vendor_dir())
        if icon_set is None:
            icon_set = IconSet.from_bundled_archive(prefix, self._settings.bundled_path)
        if icon_set is None:
            return None

        with self._lock:
            return self._loaded_sets.setdefault(prefix, icon_set)

    def loaded_prefixes(self) -> list[str]:
        with self._lock:
            return sorted(self._loaded_sets)

    def clear(self) -> None:
        """Forget all loaded sets so they are re-parsed on next access."""
        with self._lock:
            self._loaded_sets.clear()
