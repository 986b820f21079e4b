# src/mrrender/renderers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

from ..context import RenderContext

WidgetKind = Literal[
    "notify", "tabs", "heading", "filter", "paging", "table", "export", "report"
]


@dataclass(frozen=True, slots=True)
class RenderResult:
    kind: WidgetKind
    html: str
    mime: str = "text/html"
    meta: dict[str, Any] | None = None


class Renderer(Protocol):
    kind: WidgetKind

    def can_render(self, obj: Any) -> bool: ...
    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult: ...
