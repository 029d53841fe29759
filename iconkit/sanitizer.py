"""Sanitizer for untrusted SVG body markup.

Parses the body with BeautifulSoup, removes elements that can run code or
embed foreign documents (with their whole subtree), event-handler
attributes and ``javascript:`` links, then re-serializes what is left.

The HTML parser lowercases names; camelCase SVG element and attribute
names are restored from the same adjustment tables browsers apply to
inline SVG, so gradients, filters and ``viewBox`` survive unchanged.
Childless elements are written self-closing.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

BLOCKED_ELEMENTS = frozenset({"script", "foreignobject", "iframe", "object", "embed"})

_URL_ATTRIBUTES = frozenset({"href", "xlink:href"})

_DROPPED_NODES = (Comment, Declaration, Doctype, ProcessingInstruction)

_TAG_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9._:-]*$")
_ATTR_NAME_RE = re.compile(r"^[A-Za-z_:][A-Za-z0-9._:-]*$")
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20]+")

_SVG_ELEMENT_NAMES = {
    name.lower(): name
    for name in (
        "altGlyph", "altGlyphDef", "altGlyphItem", "animateColor", "animateMotion",
        "animateTransform", "clipPath", "feBlend", "feColorMatrix", "feComponentTransfer",
        "feComposite", "feConvolveMatrix", "feDiffuseLighting", "feDisplacementMap",
        "feDistantLight", "feDropShadow", "feFlood", "feFuncA", "feFuncB", "feFuncG",
        "feFuncR", "feGaussianBlur", "feImage", "feMerge", "feMergeNode", "feMorphology",
        "feOffset", "fePointLight", "feSpecularLighting", "feSpotLight", "feTile",
        "feTurbulence", "foreignObject", "glyphRef", "linearGradient", "radialGradient",
        "textPath",
    )
}

_SVG_ATTRIBUTE_NAMES = {
    name.lower(): name
    for name in (
        "attributeName", "attributeType", "baseFrequency", "baseProfile", "calcMode",
        "clipPathUnits", "diffuseConstant", "edgeMode", "filterUnits", "glyphRef",
        "gradientTransform", "gradientUnits", "kernelMatrix", "kernelUnitLength",
        "keyPoints", "keySplines", "keyTimes", "lengthAdjust", "limitingConeAngle",
        "markerHeight", "markerUnits", "markerWidth", "maskContentUnits", "maskUnits",
        "numOctaves", "pathLength", "patternContentUnits", "patternTransform",
        "patternUnits", "pointsAtX", "pointsAtY", "pointsAtZ", "preserveAlpha",
        "preserveAspectRatio", "primitiveUnits", "refX", "refY", "repeatCount",
        "repeatDur", "requiredExtensions", "requiredFeatures", "specularConstant",
        "specularExponent", "spreadMethod", "startOffset", "stdDeviation", "stitchTiles",
        "surfaceScale", "systemLanguage", "tableValues", "targetX", "targetY",
        "textLength", "viewBox", "viewTarget", "xChannelSelector", "yChannelSelector",
        "zoomAndPan",
    )
}


def _escape_text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(value: str) -> str:
    return _escape_text(value).replace('"', "&quot;")


def _is_javascript_url(value: str) -> bool:
    url = _IGNORED_URL_CHARS_RE.sub("", value)
    return url.lower().startswith("javascript:")


def _is_blocked(tag: Tag) -> bool:
    # Names the parser kept odd characters in are not real SVG elements
    return tag.name.lower() in BLOCKED_ELEMENTS or not _TAG_NAME_RE.match(tag.name)


def _attribute_allowed(name: str, value: str) -> bool:
    lowered = name.lower()
    if not _ATTR_NAME_RE.match(name) or lowered.startswith("on"):
        return False
    if lowered in _URL_ATTRIBUTES and _is_javascript_url(value):
        return False
    return True


def _serialize(node, out: list[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            _serialize_tag(child, out)
        elif isinstance(child, _DROPPED_NODES):
            continue
        elif isinstance(child, NavigableString):
            out.append(_escape_text(str(child)))


def _serialize_tag(tag: Tag, out: list[str]) -> None:
    name = _SVG_ELEMENT_NAMES.get(tag.name, tag.name)
    parts = [name]
    for attr, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        value = "" if value is None else str(value)
        if _attribute_allowed(attr, value):
            parts.append(f'{_SVG_ATTRIBUTE_NAMES.get(attr, attr)}="{_escape_attr(value)}"')

    if not tag.contents:
        out.append(f"<{' '.join(parts)}/>")
        return
    out.append(f"<{' '.join(parts)}>")
    _serialize(tag, out)
    out.append(f"</{name}>")


def sanitize_svg_body(body: str | None) -> str:
    """Return *body* with unsafe elements and attributes removed."""
    if not body:
        return ""
    soup = BeautifulSoup(body, "html.parser", multi_valued_attributes=None)

    # Outermost match first, so nested blocked elements go with their parent
    while True:
        blocked = soup.find(_is_blocked)
        if blocked is None:
            break
        blocked.decompose()

    out: list[str] = []
    _serialize(soup, out)
    return "".join(out)
