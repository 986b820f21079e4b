# src/mrrender/renderers/tabs.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from ..context import RenderContext
from ..tag import escape_html, link, tag
from ..widgets import Tab, Tabs


class TabsRenderer:
    kind = "tabs"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Tabs)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        rows = obj.get_rows()
        if not rows:
            return RenderResult(kind="tabs", html="")

        active: list[str] = []
        if (
            len(rows) == 2
            and obj.subtab
            and any(t.id == obj.subtab for t in rows[1])
        ):
            active.append(obj.toptab)
            current = obj.subtab
        else:
            current = obj.toptab

        html = tag(
            "div",
            "".join(_row_html(i, row, current, active) for i, row in enumerate(rows)),
            {"class": "tabtree"},
        )
        return RenderResult(kind="tabs", html=html, meta={"current": current})


def _row_html(index: int, row: list[Tab], current: str | None, active: list[str]) -> str:
    items: list[str] = []
    for t in row:
        label = escape_html(t.label)
        if t.id == current:
            items.append(tag("li", tag("span", label), {"class": "selected"}))
        elif t.id in active:
            items.append(tag("li", link(label, t.url), {"class": "active"}))
        else:
            items.append(tag("li", link(label, t.url)))
    return tag("ul", "".join(items), {"class": f"tabrow{index}"})
