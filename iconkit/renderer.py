"""Inline SVG rendering for resolved icons."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any

from iconkit.icon_set import IconRecord
from iconkit.sanitizer import sanitize_svg_body

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_INVALID_ATTR_NAME_RE = re.compile(r"[\s\"'=<>/\x00-\x1f]")


def escape_attr(value: str) -> str:
    """Escape the four characters that matter inside a quoted attribute."""
    return (
        value.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def _attr_name(key: str) -> str:
    name = str(key).replace("_", "-")
    if not name or _INVALID_ATTR_NAME_RE.search(name):
        raise ValueError(f"Invalid attribute name: {key!r}")
    return name


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class RenderOptions:
    """Caller-supplied attributes for one render call.

    Each mapping is emitted in insertion order: ``data`` as ``data-*``,
    ``aria`` as ``aria-*``, ``attrs`` as plain attributes.  Underscores in
    keys become hyphens.
    """

    css_class: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    aria: dict[str, Any] = field(default_factory=dict)
    attrs: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_kwargs(cls, css_class: str | None = None, **options: Any) -> RenderOptions:
        """Build options from keyword arguments.

        ``data`` and ``aria`` must be mappings; ``class_`` / ``class`` set the
        CSS class; anything else becomes an attribute.
        """
        data = options.pop("data", None) or {}
        aria = options.pop("aria", None) or {}
        for key in ("class_", "class"):
            if key in options:
                value = options.pop(key)
                css_class = css_class or value
        return cls(css_class=css_class, data=dict(data), aria=dict(aria), attrs=options)

    def merged(self, other: RenderOptions) -> RenderOptions:
        """Return a copy with *other* layered on top; its class wins when set."""
        return RenderOptions(
            css_class=other.css_class or self.css_class,
            data={**self.data, **other.data},
            aria={**self.aria, **other.aria},
            attrs={**self.attrs, **other.attrs},
        )


def build_attributes(record: IconRecord, options: RenderOptions) -> dict[str, str]:
    """Ordered attribute map for the outer ``<svg>`` element."""
    attrs = {
        "xmlns": SVG_NAMESPACE,
        "viewBox": f"0 0 {record.width} {record.height}",
        "width": "1em",
        "height": "1em",
        "aria-hidden": "true",
        "fill": "none",
    }

    if options.css_class:
        attrs["class"] = str(options.css_class)

    for key, value in options.data.items():
        if value is not None:
            attrs[f"data-{_attr_name(key)}"] = _attr_value(value)
    for key, value in options.aria.items():
        if value is not None:
            attrs[f"aria-{_attr_name(key)}"] = _attr_value(value)
    for key, value in options.attrs.items():
        if value is not None:
            attrs[_attr_name(key)] = _attr_value(value)

    # A labelled icon is meaningful, not decorative
    if "aria-label" in attrs:
        attrs.pop("aria-hidden", None)
        attrs["role"] = "img"

    return attrs


def render(
    record: IconRecord,
    css_class: str | None = None,
    options: RenderOptions | None = None,
    **kwargs: Any,
) -> str:
    """Render *record* as an inline ``<svg>`` string with a sanitized body.

    Options can be passed as a RenderOptions instance or as keyword
    arguments (``data={...}``, ``aria={...}``, ``role="presentation"``...).
    Keyword arguments passed alongside *options* are merged over it.
    Raises ValueError for attribute names that could break out of the tag.
    """
    extra = RenderOptions.from_kwargs(css_class=css_class, **kwargs)
    options = extra if options is None else options.merged(extra)

    body = sanitize_svg_body(record.body)
    attr_str = " ".join(f'{k}="{escape_attr(v)}"' for k, v in build_attributes(record, options).items())
    return f"<svg {attr_str}>{body}</svg>"
