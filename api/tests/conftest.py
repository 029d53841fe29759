"""Shared fixtures for API tests."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from iconkit.config import IconSettings
from iconkit.context import IconContext

VENDORED_SET = {
    "prefix": "demo",
    "info": {"name": "Demo Icons"},
    "width": 24,
    "height": 24,
    "icons": {
        "check": {"body": '<path d="M20 6L9 17l-5-5"/>'},
        "dot": {"body": '<circle cx="8" cy="8" r="4"/>', "width": 16, "height": 16},
    },
    "aliases": {"tick": {"parent": "check"}},
}


@pytest.fixture()
def vendor_dir(tmp_path):
    """Vendor directory holding demo.json and a corrupt broken.json."""
    path = tmp_path / "vendor" / "icons"
    path.mkdir(parents=True)
    (path / "demo.json").write_text(json.dumps(VENDORED_SET), encoding="utf-8")
    (path / "broken.json").write_text("{not json", encoding="utf-8")
    return path


@pytest.fixture()
def icons(tmp_path, vendor_dir) -> IconContext:
    """IconContext over the temp vendor dir, API fallback off."""
    settings = IconSettings(root_dir=str(tmp_path), environment="test", fallback_to_api=False)
    return IconContext(settings)


@pytest.fixture()
def client(icons) -> TestClient:
    """TestClient with lifespan started and the test IconContext swapped in."""
    from api.main import app

    with TestClient(app) as c:
        app.state.icons = icons
        yield c
