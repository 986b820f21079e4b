# src/mrrender/renderers/report.py
from __future__ import annotations

import pprint
from typing import Any

import bleach

from .base import RenderResult
from .export import ExportRenderer
from .filter import FilterRenderer
from .paging import PagingRenderer
from .table import TableRenderer
from ..context import RenderContext
from ..reports import ExecutedSql, Report
from ..strings import get_string
from ..tag import box, escape_html, tag

# Markup allowed in report descriptions
_DESCRIPTION_TAGS = [
    "a",
    "p",
    "br",
    "strong",
    "em",
    "code",
    "ul",
    "ol",
    "li",
    "span",
]
_DESCRIPTION_ATTRS = {"a": ["href", "title"], "span": ["class"]}


class ReportRenderer:
    """
    Renders a whole report page section.

    Reports always come here; the parts (filter, paging, table, export)
    are handed to their own renderers.
    """

    kind = "report"

    def __init__(self) -> None:
        self._filter = FilterRenderer()
        self._paging = PagingRenderer()
        self._table = TableRenderer()
        self._export = ExportRenderer()

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Report)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        report: Report = obj
        report.table_fill()

        output = ""

        executed = report.get_executedsql()
        if ctx.auth.is_privileged_viewer and executed:
            output += _sql_box(executed)

        description = report.get_description()
        if description:
            clean = bleach.clean(
                description,
                tags=_DESCRIPTION_TAGS,
                attributes=_DESCRIPTION_ATTRS,
                strip=True,
            )
            output += box(clean, "generalbox boxwidthnormal boxaligncenter reportdescription")

        if report.filter is not None:
            output += box(
                self._filter.render(report.filter, ctx=ctx).html,
                "boxwidthwide boxaligncenter mr_html_filter",
            )

        paging = self._paging.render(report.paging, ctx=ctx).html
        output += paging
        output += report.output_wrapper(self._table.render(report.table, ctx=ctx).html)
        output += paging

        if report.export is not None:
            output += self._export.render(report.export, ctx=ctx).html

        return RenderResult(
            kind="report",
            html=output,
            meta={
                "name": report.name,
                "total": report.paging.total,
                "rows": len(report.table.rows),
                "sql_shown": ctx.auth.is_privileged_viewer and bool(executed),
            },
        )


def _sql_box(executed: list[ExecutedSql]) -> str:
    parts: list[str] = []
    for rawsql, params in executed:
        parts.append(escape_html(rawsql.strip()) + "\n\n")
        if params is not None:
            parts.append(escape_html(pprint.pformat(params)) + "\n\n\n")
    sql = "".join(parts).strip()
    inner = tag("h4", escape_html(get_string("reportsql"))) + box(tag("pre", sql))
    return box(inner, "generalbox boxwidthwide boxaligncenter mr_report_sqlbox")
