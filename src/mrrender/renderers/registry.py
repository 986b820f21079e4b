# src/mrrender/renderers/registry.py
from __future__ import annotations

from typing import Any, Union

from .base import Renderer, RenderResult
from ..context import RenderContext
from ..filters import FilterForm
from ..reports import Report
from ..widgets import Export, Heading, Notify, Paging, Table, Tabs

Widget = Union[Notify, Tabs, Heading, FilterForm, Paging, Table, Export, Report]


_RENDERERS: list[Renderer] = []


class UnsupportedWidgetError(TypeError):
    """Raised when no registered renderer accepts a widget."""


def register_renderer(r: Renderer) -> None:
    _RENDERERS.append(r)


def choose_renderer(obj: Any, *, kind_hint: str | None = None) -> Renderer | None:
    """
    Choose the renderer for a widget.

    - If kind_hint provided: try exact kind match first.
    - Reports only ever go to a "report" renderer, even if some other
      renderer claims it can render them.
    - Otherwise: first can_render wins.
    """
    is_report = isinstance(obj, Report)
    if kind_hint and not is_report:
        for r in _RENDERERS:
            if getattr(r, "kind", None) == kind_hint and r.can_render(obj):
                return r

    for r in _RENDERERS:
        if getattr(r, "kind", None) == "report" and r.can_render(obj):
            return r
    if is_report:
        return None

    for r in _RENDERERS:
        if getattr(r, "kind", None) == "report":
            continue
        if r.can_render(obj):
            return r
    return None


def render_any(
    obj: Any, *, ctx: RenderContext | None = None, kind_hint: str | None = None
) -> RenderResult:
    r = choose_renderer(obj, kind_hint=kind_hint)
    if r is None:
        raise UnsupportedWidgetError(
            f"no renderer registered for {type(obj).__name__}"
        )
    return r.render(obj, ctx=ctx or RenderContext())


def render(obj: Widget, *, ctx: RenderContext | None = None) -> str:
    """Render a widget straight to markup."""
    return render_any(obj, ctx=ctx).html
