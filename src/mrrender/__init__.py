# src/mrrender/__init__.py
from __future__ import annotations

from .context import AuthorizationContext, RenderContext
from .filters import (
    AutocompleteIdFilter,
    FilterForm,
    HiddenFilter,
    SelectFilter,
    TextFilter,
)
from .renderers import register_default_renderers
from .renderers.registry import render, render_any
from .renderers.table import build_grid
from .reports import Report, table_report
from .urls import PageUrl
from .widgets import (
    Cell,
    Column,
    ColumnConfig,
    Export,
    Grid,
    Heading,
    Notify,
    Paging,
    Row,
    SortState,
    Tab,
    Table,
    Tabs,
)

__all__ = [
    "AuthorizationContext",
    "RenderContext",
    "AutocompleteIdFilter",
    "FilterForm",
    "HiddenFilter",
    "SelectFilter",
    "TextFilter",
    "register_default_renderers",
    "render",
    "render_any",
    "build_grid",
    "Report",
    "table_report",
    "PageUrl",
    "Cell",
    "Column",
    "ColumnConfig",
    "Export",
    "Grid",
    "Heading",
    "Notify",
    "Paging",
    "Row",
    "SortState",
    "Tab",
    "Table",
    "Tabs",
]
