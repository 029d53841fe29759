"""IconSet: one parsed Iconify JSON dataset.

An Iconify set holds a flat map of icon bodies, optional aliases (a parent
reference plus optional rotate/flip/size overrides) and set-level default
dimensions.  Sets come from two places on disk:

- vendored JSON files under the configured vendor directory
- gzip archives bundled inside this package (``iconkit/data``)

Instances are immutable after construction and safe to read from many
threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import gzip
import json
import logging
import os
from pathlib import Path
import re
from typing import Any

from iconkit.errors import MalformedDatasetError

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 24

# Longest alias chain followed before giving up (guards against cycles)
MAX_ALIAS_DEPTH = 5

BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"

_PREFIX_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def is_valid_prefix(prefix: str) -> bool:
    """Return True if *prefix* is a well-formed Iconify set prefix."""
    return bool(prefix) and bool(_PREFIX_RE.match(prefix))


@dataclass(frozen=True)
class IconRecord:
    """A fully resolved icon: inner SVG markup plus its viewBox size."""

    body: str
    width: int
    height: int


class AliasStatus(Enum):
    RESOLVED = "resolved"
    TOO_DEEP = "too_deep"  # chain longer than MAX_ALIAS_DEPTH, or cyclic
    DANGLING = "dangling"


@dataclass(frozen=True)
class AliasResolution:
    status: AliasStatus
    name: str | None = None


def _number(value: Any) -> str:
    """Format a transform argument without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _copy_entries(value: Any) -> dict[str, dict]:
    return {name: dict(entry) for name, entry in _mapping(value).items() if isinstance(entry, dict)}


class IconSet:
    """A parsed icon set for a single prefix."""

    def __init__(self, prefix: str, data: dict[str, Any] | None):
        data = _mapping(data)
        self.prefix = prefix
        self._icons: dict[str, dict] = _copy_entries(data.get("icons"))
        self._aliases: dict[str, dict] = _copy_entries(data.get("aliases"))
        self.default_width = data.get("width") or DEFAULT_SIZE
        self.default_height = data.get("height") or DEFAULT_SIZE
        self._info: dict[str, Any] = _mapping(data.get("info"))

    def __repr__(self) -> str:
        return f"IconSet(prefix={self.prefix!r}, icons={len(self._icons)}, aliases={len(self._aliases)})"

    @property
    def display_name(self) -> str:
        """Human-readable set name from ``info.name``, falling back to the prefix."""
        return self._info.get("name") or self.prefix

    # -- lookup ----------------------------------------------------------------

    def icon(self, name: str) -> IconRecord | None:
        """Look up *name*, following aliases and applying their transforms.

        Only the alias the caller asked for contributes rotate/flip/size
        overrides; intermediate aliases in a longer chain are pass-through.
        Returns None when the name is unknown or the alias chain is broken.
        """
        entry = self._icons.get(name)
        if isinstance(entry, dict):
            return self._build_record(entry)

        resolution = self.resolve_alias(name)
        if resolution.status is not AliasStatus.RESOLVED:
            if name in self._aliases:
                logger.debug("Alias %s:%s not resolved (%s)", self.prefix, name, resolution.status.value)
            return None

        entry = self._icons[resolution.name]
        if not isinstance(entry, dict):
            return None
        return self._build_record(entry, overrides=self._aliases[name])

    def resolve_alias(self, name: str) -> AliasResolution:
        """Follow parent links from alias *name* to a concrete icon name."""
        current = name
        for _ in range(MAX_ALIAS_DEPTH + 1):
            alias_entry = self._aliases.get(current)
            if not isinstance(alias_entry, dict):
                return AliasResolution(AliasStatus.DANGLING)
            parent = alias_entry.get("parent")
            if not isinstance(parent, str):
                return AliasResolution(AliasStatus.DANGLING)
            if parent in self._icons:
                return AliasResolution(AliasStatus.RESOLVED, parent)
            current = parent
        return AliasResolution(AliasStatus.TOO_DEEP)

    def icon_names(self) -> list[str]:
        """All icon names, concrete icons first, then aliases."""
        names = list(self._icons)
        names.extend(a for a in self._aliases if a not in self._icons)
        return names

    def icon_count(self) -> int:
        """Number of concrete icons (aliases excluded)."""
        return len(self._icons)

    # -- record building -------------------------------------------------------

    def _build_record(self, entry: dict, overrides: dict | None = None) -> IconRecord:
        body = entry.get("body") or ""
        width = entry.get("width") or self.default_width
        height = entry.get("height") or self.default_height

        if overrides:
            # Transform origin uses the parent's size, before any size override
            body = self._apply_transforms(body, overrides, width, height)
            width = overrides.get("width") or width
            height = overrides.get("height") or height

        return IconRecord(body=body, width=width, height=height)

    @staticmethod
    def _apply_transforms(body: str, overrides: dict, width, height) -> str:
        parts: list[str] = []

        rotate = overrides.get("rotate")
        if rotate:
            parts.append(f"rotate({_number(rotate * 90)} {_number(width / 2)} {_number(height / 2)})")

        h_flip = bool(overrides.get("hFlip"))
        v_flip = bool(overrides.get("vFlip"))
        if h_flip or v_flip:
            tx = width if h_flip else 0
            ty = height if v_flip else 0
            if tx or ty:
                parts.append(f"translate({_number(tx)} {_number(ty)})")
            parts.append(f"scale({-1 if h_flip else 1} {-1 if v_flip else 1})")

        if not parts:
            return body
        return f'<g transform="{" ".join(parts)}">{body}</g>'

    # -- factories -------------------------------------------------------------

    @classmethod
    def from_vendor_file(cls, prefix: str, vendor_dir: str | os.PathLike) -> IconSet | None:
        """Load ``{vendor_dir}/{prefix}.json``.

        Returns None if the file does not exist.  A file that exists but is
        not valid JSON raises MalformedDatasetError.
        """
        if not is_valid_prefix(prefix):
            return None
        path = Path(vendor_dir) / f"{prefix}.json"
        if not path.is_file():
            return None

        try:
            data = json.loads(path.read_bytes().decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedDatasetError(prefix, str(path), str(exc)) from exc

        logger.info("Loaded vendored icon set %s from %s", prefix, path)
        return cls(prefix, data)

    @classmethod
    def from_bundled_archive(
        cls, prefix: str, bundled_dir: str | os.PathLike = BUNDLED_DATA_DIR
    ) -> IconSet | None:
        """Load ``{bundled_dir}/{prefix}.json.gz``, decompressed in memory.

        Same existence / parse-failure semantics as from_vendor_file.
        """
        if not is_valid_prefix(prefix):
            return None
        path = Path(bundled_dir) / f"{prefix}.json.gz"
        if not path.is_file():
            return None

        try:
            raw = gzip.decompress(path.read_bytes())
            data = json.loads(raw.decode("utf-8"))
        except (OSError, EOFError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedDatasetError(prefix, str(path), str(exc)) from exc

        logger.info("Loaded bundled icon set %s", prefix)
        return cls(prefix, data)

    @staticmethod
    def list_vendored_prefixes(vendor_dir: str | os.PathLike) -> list[str]:
        """Sorted prefixes of every ``*.json`` file in the vendor directory."""
        directory = Path(vendor_dir)
        if not directory.is_dir():
            return []
        return sorted(p.stem for p in directory.glob("*.json") if p.is_file())
