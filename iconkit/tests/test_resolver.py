"""Tests for the Resolver lookup cascade."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock, patch

import pytest

from iconkit.errors import MalformedDatasetError
from iconkit.icon_set import BUNDLED_DATA_DIR, IconRecord, IconSet
from iconkit.resolver import Resolver


class TestParseName:
    def test_prefixed(self, resolver):
        assert resolver.parse_name("mdi:home") == ("mdi", "home")

    def test_bare_name_uses_default_set(self, resolver):
        assert resolver.parse_name("check") == ("lucide", "check")

    def test_splits_on_first_colon(self, resolver):
        assert resolver.parse_name("a:b:c") == ("a", "b:c")

    def test_strips_whitespace(self, resolver):
        assert resolver.parse_name("  test:check  ") == ("test", "check")


class TestResolve:
    def test_prefixed_name_from_vendor(self, resolver, write_vendor_set):
        write_vendor_set("test")
        record = resolver.resolve("test:check")
        assert record is not None
        assert "stroke" in record.body

    def test_bare_name_uses_default_set(self, resolver, write_vendor_set):
        write_vendor_set("lucide")
        assert resolver.resolve("check") is not None

    def test_missing_icon(self, resolver):
        assert resolver.resolve("nonexistent:missing") is None

    def test_missing_icon_in_existing_set(self, resolver, write_vendor_set, cache):
        write_vendor_set("test")
        assert resolver.resolve("test:nope") is None
        assert cache.size() == 0

    def test_whitespace(self, resolver, write_vendor_set):
        write_vendor_set("test")
        assert resolver.resolve("  test:check  ") is not None

    def test_rejects_path_like_prefix(self, resolver, write_vendor_set):
        write_vendor_set("test")
        assert resolver.resolve("../vendor/icons/test:check") is None

    def test_rejects_empty_name(self, resolver, write_vendor_set):
        write_vendor_set("test")
        assert resolver.resolve("test:") is None

    def test_resolves_from_bundled(self, resolver, write_bundled_set):
        write_bundled_set("test")
        record = resolver.resolve("test:rotated")
        assert record is not None
        assert "rotate(90 12 12)" in record.body

    def test_vendor_takes_priority_over_bundled(self, resolver, write_vendor_set, write_bundled_set, icon_data):
        write_bundled_set("test")
        icon_data["icons"] = {"check": {"body": '<path d="CUSTOM"/>'}}
        write_vendor_set("test", icon_data)
        assert "CUSTOM" in resolver.resolve("test:check").body

    def test_malformed_vendor_file_propagates(self, resolver, vendor_dir):
        vendor_dir.mkdir(parents=True)
        (vendor_dir / "test.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(MalformedDatasetError):
            resolver.resolve("test:check")

    def test_packaged_lucide(self, settings, cache):
        settings.bundled_path = str(BUNDLED_DATA_DIR)
        record = Resolver(settings, cache).resolve("lucide:check")
        assert record is not None
        assert (record.width, record.height) == (24, 24)


class TestCaching:
    def test_second_lookup_hits_cache(self, resolver, write_vendor_set, cache):
        write_vendor_set("test")
        first = resolver.resolve("test:check")

        with patch.object(IconSet, "from_vendor_file") as from_vendor, \
                patch.object(IconSet, "icon") as icon:
            second = resolver.resolve("test:check")

        assert second == first
        from_vendor.assert_not_called()
        icon.assert_not_called()
        assert cache.size() == 1

    def test_set_parsed_once(self, resolver, write_vendor_set):
        write_vendor_set("test")
        with patch.object(IconSet, "from_vendor_file", wraps=IconSet.from_vendor_file) as from_vendor:
            resolver.resolve("test:check")
            resolver.resolve("test:arrow-right")
            resolver.resolve("test:custom-size")
        assert from_vendor.call_count == 1
        assert resolver.loaded_prefixes() == ["test"]

    def test_misses_are_not_cached(self, resolver, write_vendor_set, cache):
        assert resolver.resolve("test:check") is None
        write_vendor_set("test")
        assert resolver.resolve("test:check") is not None
        assert cache.size() == 1

    def test_clear_forces_reload(self, resolver, write_vendor_set):
        write_vendor_set("test")
        resolver.resolve("test:check")
        resolver.clear()
        assert resolver.loaded_prefixes() == []
        assert resolver.resolve("test:arrow-right") is not None
        assert resolver.loaded_prefixes() == ["test"]

    def test_clear_leaves_cache_alone(self, resolver, write_vendor_set, cache):
        write_vendor_set("test")
        resolver.resolve("test:check")
        resolver.clear()
        assert cache.size() == 1

    def test_concurrent_first_access_converges(self, resolver, write_vendor_set):
        write_vendor_set("test")
        results = []

        def worker():
            results.append(resolver.resolve("test:check"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(r == results[0] for r in results)
        assert resolver.loaded_prefixes() == ["test"]


class TestApiFallback:
    def test_used_when_sets_miss(self, settings, cache):
        fallback = MagicMock()
        fallback.fetch_icon.return_value = IconRecord(body="<path/>", width=24, height=24)
        resolver = Resolver(settings, cache, fallback)

        record = resolver.resolve("remote:thing")

        assert record.body == "<path/>"
        fallback.fetch_icon.assert_called_once_with("remote", "thing")
        assert cache.get("remote", "thing") == record
        assert resolver.loaded_prefixes() == []

    def test_used_when_loaded_set_lacks_icon(self, settings, cache, write_vendor_set):
        write_vendor_set("test")
        fallback = MagicMock()
        fallback.fetch_icon.return_value = None
        resolver = Resolver(settings, cache, fallback)

        assert resolver.resolve("test:unknown") is None
        fallback.fetch_icon.assert_called_once_with("test", "unknown")

    def test_not_consulted_on_local_hit(self, settings, cache, write_vendor_set):
        write_vendor_set("test")
        fallback = MagicMock()
        Resolver(settings, cache, fallback).resolve("test:check")
        fallback.fetch_icon.assert_not_called()
