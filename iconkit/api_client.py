"""Remote fallback source: single-icon fetches from the Iconify API.

Every failure (timeout, connection error, bad status, malformed body) is
logged and turned into None so it never reaches the Resolver.
"""

from __future__ import annotations

import logging
import time

import requests

from iconkit.icon_set import DEFAULT_SIZE, IconRecord

logger = logging.getLogger(__name__)

API_BASE = "https://api.iconify.design"
TIMEOUT = 5.0


class IconifyApiClient:
    """Fetches one icon at a time from an Iconify-compatible API."""

    def __init__(
        self,
        base_url: str = API_BASE,
        timeout: float = TIMEOUT,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session

    def _get_session(self) -> requests.Session:
        """Lazy-init the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def fetch_icon(self, prefix: str, name: str) -> IconRecord | None:
        """Return the icon record for ``prefix:name``, or None."""
        start = time.monotonic()
        url = f"{self._base_url}/{prefix}.json"

        try:
            response = self._get_session().get(
                url,
                params={"icons": name},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.Timeout:
            logger.warning("API timeout for %s (%ss)", url, self._timeout)
            return None
        except requests.RequestException as exc:
            logger.warning("Network error fetching %s: %s", url, exc)
            return None

        if response.status_code == 404:
            return None
        if not response.ok:
            logger.warning("API returned %s for %s", response.status_code, url)
            return None

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse API response for %s:%s: %s", prefix, name, exc)
            return None

        if not isinstance(data, dict):
            return None
        icons = data.get("icons")
        icon_data = icons.get(name) if isinstance(icons, dict) else None
        if not isinstance(icon_data, dict) or not icon_data.get("body"):
            return None

        elapsed_ms = round((time.monotonic() - start) * 1000)
        logger.debug(
            "Fetched %s:%s from Iconify API (%dms). Vendor the %s set for offline use.",
            prefix, name, elapsed_ms, prefix,
        )

        return IconRecord(
            body=icon_data["body"],
            width=icon_data.get("width") or data.get("width") or DEFAULT_SIZE,
            height=icon_data.get("height") or data.get("height") or DEFAULT_SIZE,
        )
