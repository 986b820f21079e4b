# src/mrrender/tag.py
from __future__ import annotations

from typing import Any, Mapping

# Attribute names that are rendered bare when true and dropped when false.
_BOOLEAN_ATTRS = frozenset({"selected", "checked", "disabled", "hidden", "required"})


def escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def render_attrs(attrs: Mapping[str, Any] | None) -> str:
    """
    Serialise an attribute bag. None values are skipped; keys are emitted in
    insertion order so output is stable for tests.
    """
    if not attrs:
        return ""
    parts: list[str] = []
    for name, value in attrs.items():
        if value is None:
            continue
        if name in _BOOLEAN_ATTRS:
            if value:
                parts.append(name)
            continue
        parts.append(f'{name}="{escape_html(str(value))}"')
    if not parts:
        return ""
    return " " + " ".join(parts)


def tag(name: str, content: str = "", attrs: Mapping[str, Any] | None = None) -> str:
    """Element with already-rendered (trusted) inner markup."""
    return f"<{name}{render_attrs(attrs)}>{content}</{name}>"


def empty_tag(name: str, attrs: Mapping[str, Any] | None = None) -> str:
    return f"<{name}{render_attrs(attrs)} />"


def link(content: str, href: str, attrs: Mapping[str, Any] | None = None) -> str:
    merged: dict[str, Any] = {"href": href}
    if attrs:
        merged.update(attrs)
    return tag("a", content, merged)


def img(src: str, alt: str, attrs: Mapping[str, Any] | None = None) -> str:
    merged: dict[str, Any] = {"src": src, "alt": alt}
    if attrs:
        merged.update(attrs)
    return empty_tag("img", merged)


def accesshide(text: str) -> str:
    """Text only screen readers see."""
    return tag("span", escape_html(text), {"class": "accesshide"})


def box(content: str, classes: str = "") -> str:
    attrs = {"class": f"box {classes}".strip()}
    return tag("div", content, attrs)
