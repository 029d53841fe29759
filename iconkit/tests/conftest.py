"""Shared fixtures for iconkit tests."""

from __future__ import annotations

import copy
import gzip
import json

import pytest

from iconkit.cache import IconCache
from iconkit.config import IconSettings
from iconkit.context import IconContext
from iconkit.resolver import Resolver

ICON_SET_DATA = {
    "prefix": "test",
    "info": {"name": "Test Icons"},
    "width": 24,
    "height": 24,
    "icons": {
        "check": {"body": '<path d="M20 6L9 17l-5-5" stroke="currentColor" stroke-width="2"/>'},
        "arrow-right": {
            "body": '<path d="M5 12h14M12 5l7 7-7 7" stroke="currentColor" stroke-width="2"/>',
            "width": 24,
            "height": 24,
        },
        "custom-size": {"body": '<circle cx="8" cy="8" r="8"/>', "width": 16, "height": 16},
    },
    "aliases": {
        "checkmark": {"parent": "check"},
        "forward": {"parent": "arrow-right"},
        "flipped": {"parent": "check", "hFlip": True},
        "rotated": {"parent": "check", "rotate": 1},
        "deep-alias": {"parent": "checkmark"},
    },
}


@pytest.fixture
def icon_data():
    """A fresh copy of the test icon set data."""
    return copy.deepcopy(ICON_SET_DATA)


@pytest.fixture
def root_dir(tmp_path):
    """Project root that holds vendor/icons."""
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def vendor_dir(root_dir):
    return root_dir / "vendor" / "icons"


@pytest.fixture
def bundled_dir(tmp_path):
    """Empty bundled-data directory."""
    path = tmp_path / "bundled"
    path.mkdir()
    return path


@pytest.fixture
def write_vendor_set(vendor_dir):
    """Write ``{prefix}.json`` into the vendor directory."""

    def _write(prefix: str, data: dict | None = None):
        vendor_dir.mkdir(parents=True, exist_ok=True)
        path = vendor_dir / f"{prefix}.json"
        path.write_text(json.dumps(data if data is not None else ICON_SET_DATA), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_bundled_set(bundled_dir):
    """Write ``{prefix}.json.gz`` into the bundled-data directory."""

    def _write(prefix: str, data: dict | None = None):
        path = bundled_dir / f"{prefix}.json.gz"
        payload = json.dumps(data if data is not None else ICON_SET_DATA).encode("utf-8")
        path.write_bytes(gzip.compress(payload))
        return path

    return _write


@pytest.fixture
def settings(root_dir, bundled_dir):
    return IconSettings(
        root_dir=str(root_dir),
        bundled_path=str(bundled_dir),
        environment="test",
        fallback_to_api=False,
    )


@pytest.fixture
def cache():
    return IconCache()


@pytest.fixture
def resolver(settings, cache):
    return Resolver(settings, cache)


@pytest.fixture
def context(settings):
    return IconContext(settings)
