"""Exceptions raised by iconkit."""

from __future__ import annotations


class IconError(Exception):
    """Base class for iconkit errors."""


class MalformedDatasetError(IconError):
    """A vendored or bundled icon set exists but cannot be parsed."""

    def __init__(self, prefix: str, path: str, reason: str):
        super().__init__(f"Malformed icon set '{prefix}' at {path}: {reason}")
        self.prefix = prefix
        self.path = path
        self.reason = reason
