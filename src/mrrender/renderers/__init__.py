# src/mrrender/renderers/__init__.py
from __future__ import annotations

from .registry import register_renderer, _RENDERERS
from .report import ReportRenderer
from .notify import NotifyRenderer
from .tabs import TabsRenderer
from .heading import HeadingRenderer
from .filter import FilterRenderer
from .paging import PagingRenderer
from .table import TableRenderer
from .export import ExportRenderer


def register_default_renderers() -> None:
    # One renderer per widget type; reports first.
    if _RENDERERS:
        return
    register_renderer(ReportRenderer())
    register_renderer(NotifyRenderer())
    register_renderer(TabsRenderer())
    register_renderer(HeadingRenderer())
    register_renderer(FilterRenderer())
    register_renderer(PagingRenderer())
    register_renderer(TableRenderer())
    register_renderer(ExportRenderer())
